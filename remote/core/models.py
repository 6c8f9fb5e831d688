"""Provider-agnostic value types exchanged between adapters and the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class InstanceTag:
    """A single key/value tag attached to an instance."""

    key: str
    value: str


@dataclass(frozen=True)
class Instance:
    """Observed cloud state of a single instance.

    Records are fetched fresh for every query and never persisted.

    Attributes
    ----------
    instance_type : str
        Provider-defined size identifier (e.g. ``t3.micro``)
    instance_id : str
        Provider-unique identifier
    public_dns : str
        Public DNS name, empty when the instance has none (e.g. stopped)
    state : str
        Provider power-state label (``running``, ``stopped``, ...)
    tags : list[InstanceTag]
        Tags in the order the provider returned them
    """

    instance_type: str
    instance_id: str
    public_dns: str
    state: str
    tags: list[InstanceTag] = field(default_factory=list)

    def format(self) -> str:
        """Render the instance as a human-readable block."""
        tag_string = ", ".join(f'"{tag.key}"="{tag.value}"' for tag in self.tags)
        return (
            f"Instance ID: {self.instance_id}\n"
            f"Type: {self.instance_type}\n"
            f"Tags: {tag_string}\n"
            f"State: {self.state}"
        )

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True)
class StateChange:
    """Before/after power state reported by a start or stop request."""

    previous: str
    current: str


@dataclass(frozen=True)
class ConnectionInfo:
    """Everything ssh/scp need to reach a running instance."""

    user: str
    address: str
    key_path: Path

    @property
    def destination(self) -> str:
        return f"{self.user}@{self.address}"
