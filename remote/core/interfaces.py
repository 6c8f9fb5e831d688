"""Capability interfaces implemented by cloud provider adapters."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from remote.core.models import Instance, StateChange


@runtime_checkable
class InstanceManager(Protocol):
    """Lifecycle operations every cloud provider adapter must support.

    All operations are coroutines because each one performs at least one
    network round trip. Implementations must not cache results and must not
    retry: a failed call surfaces to the caller immediately.

    Implementations raise
    :class:`~remote.exceptions.InstanceNotFoundError` when an id has no match,
    :class:`~remote.providers.exceptions.UpstreamProtocolError` when a
    response is missing a required field, and the other
    :class:`~remote.providers.exceptions.ProviderError` subclasses for
    credential, transport and API failures.
    """

    async def list_instances(self) -> list[Instance]:
        """Return every instance visible to the adapter's credentials."""
        ...

    async def get_instance(self, instance_id: str) -> Instance:
        """Return the instance with the given id.

        If the provider reports several matches the first one is returned.
        """
        ...

    async def start_instance(self, instance_id: str) -> StateChange:
        """Request a start and return the state change the provider reports."""
        ...

    async def stop_instance(self, instance_id: str) -> StateChange:
        """Request a stop and return the state change the provider reports."""
        ...

    async def set_instance_type(self, instance_id: str, instance_type: str) -> None:
        """Change the instance type. Provider state rules are not pre-validated."""
        ...
