"""Test fake implementations for dependency injection testing."""

from .fake_instance_manager import FakeInstanceManager, FakeProviderFactory
from .profiles import RUNNING_DNS, make_instance_entry

__all__ = ["FakeInstanceManager", "FakeProviderFactory", "RUNNING_DNS", "make_instance_entry"]
