"""Core remote functionality."""

from __future__ import annotations

from remote.core.config import InstanceConfig, ProfileConfig, ProfileStore
from remote.core.interfaces import InstanceManager
from remote.core.models import ConnectionInfo, Instance, InstanceTag, StateChange

__all__ = [
    "InstanceManager",
    "Instance",
    "InstanceTag",
    "StateChange",
    "ConnectionInfo",
    "InstanceConfig",
    "ProfileConfig",
    "ProfileStore",
]
