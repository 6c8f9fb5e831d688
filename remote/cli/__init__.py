"""CLI argument parsing and handling."""

from __future__ import annotations

from remote.cli.parsing import parse_port_parameter

__all__ = [
    "parse_port_parameter",
]
