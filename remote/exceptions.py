"""Domain exceptions for remote.

Everything raised here terminates the current command with a single-line
message on stderr and a non-zero exit code.
"""

from __future__ import annotations


class RemoteError(Exception):
    """Base class for remote's own errors."""


class InstanceNotFoundError(RemoteError):
    """The provider returned no instance for the requested id."""

    def __init__(self, instance_id: str) -> None:
        super().__init__(f"Could not find instance {instance_id}")
        self.instance_id = instance_id


class NoActiveInstanceError(RemoteError):
    """An operation needs the active instance but none is set."""

    def __init__(self) -> None:
        super().__init__(
            "No active instance. Select one with 'remote instance <alias>'"
        )


class DanglingActiveAliasError(RemoteError):
    """The active alias does not match any configured instance."""

    def __init__(self, alias: str) -> None:
        super().__init__(f"Active instance '{alias}' not found in instance list")
        self.alias = alias


class UnknownAliasError(RemoteError):
    """No configured instance has the requested alias."""

    def __init__(self, alias: str) -> None:
        super().__init__(
            f"No instance with alias '{alias}' found, you may need to create it first"
        )
        self.alias = alias


class DuplicateAliasError(RemoteError):
    """An instance with the requested alias is already configured."""

    def __init__(self, alias: str) -> None:
        super().__init__(f"Instance with alias '{alias}' already exists")
        self.alias = alias


class InvalidStateError(RemoteError):
    """The instance is not in the state the operation requires."""

    def __init__(self, instance_id: str, state: str, required: str) -> None:
        super().__init__(
            f"Instance {instance_id} is not {required} (current state: {state})"
        )
        self.instance_id = instance_id
        self.state = state
        self.required = required


class MissingPublicAddressError(RemoteError):
    """The instance has no public DNS name to connect to."""

    def __init__(self, instance_id: str) -> None:
        super().__init__(f"Instance {instance_id} has no public DNS")
        self.instance_id = instance_id


class UnsupportedProviderError(RemoteError):
    """The cloud provider tag is not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(
            f"Unsupported cloud provider: '{name}'. "
            f"Available providers: {', '.join(available) or 'none'}"
        )
        self.name = name
        self.available = available


class ConfigFileError(RemoteError):
    """Reading or writing local files failed (profile store, key files, home)."""


class ExternalCommandError(RemoteError):
    """An external program (ssh, scp) could not be launched."""
