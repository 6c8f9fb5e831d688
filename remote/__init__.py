"""Track named cloud instances and run lifecycle commands against the active one."""

__version__ = "0.1.0"
