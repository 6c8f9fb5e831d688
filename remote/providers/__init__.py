"""Provider registry and management.

This module maps cloud provider tags (as stored in the profile store) to the
constructor of the matching :class:`~remote.core.interfaces.InstanceManager`
implementation. Supporting a new cloud means registering one more entry.
"""

from __future__ import annotations

from collections.abc import Callable

from remote.core.interfaces import InstanceManager
from remote.exceptions import UnsupportedProviderError
from remote.providers.aws import AwsCloud
from remote.providers.exceptions import (
    ProviderAPIError,
    ProviderConnectionError,
    ProviderCredentialsError,
    ProviderError,
    UpstreamProtocolError,
)

InstanceManagerFactory = Callable[[str], InstanceManager]

_PROVIDERS: dict[str, InstanceManagerFactory] = {}


def register_provider(name: str, factory: InstanceManagerFactory) -> None:
    """Register a cloud provider implementation.

    Parameters
    ----------
    name : str
        Provider tag (e.g. 'aws'); stored lowercase
    factory : InstanceManagerFactory
        Callable taking a credential profile name and returning an InstanceManager
    """
    _PROVIDERS[name.lower()] = factory


def list_providers() -> list[str]:
    """List all registered provider names.

    Returns
    -------
    list[str]
        List of provider names
    """
    return list(_PROVIDERS.keys())


def parse_cloud(name: str) -> str:
    """Normalise a user-supplied provider tag.

    Parameters
    ----------
    name : str
        Provider name in any case

    Returns
    -------
    str
        Registered provider tag

    Raises
    ------
    UnsupportedProviderError
        If no provider is registered under that name
    """
    tag = name.strip().lower()
    if tag not in _PROVIDERS:
        raise UnsupportedProviderError(name, list_providers())
    return tag


def get_provider(name: str) -> InstanceManagerFactory:
    """Get a registered provider factory by name.

    Raises
    ------
    UnsupportedProviderError
        If provider is not registered
    """
    return _PROVIDERS[parse_cloud(name)]


def create_instance_manager(cloud: str, profile: str) -> InstanceManager:
    """Build the InstanceManager for a cloud and credential profile."""
    return get_provider(cloud)(profile)


__all__ = [
    "register_provider",
    "get_provider",
    "list_providers",
    "parse_cloud",
    "create_instance_manager",
    "InstanceManagerFactory",
    "ProviderError",
    "ProviderCredentialsError",
    "ProviderAPIError",
    "ProviderConnectionError",
    "UpstreamProtocolError",
]

register_provider("aws", AwsCloud.from_profile)
