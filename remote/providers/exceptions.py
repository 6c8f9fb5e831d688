"""Provider-agnostic exceptions raised by cloud adapters."""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for errors surfaced by a cloud provider adapter."""


class ProviderCredentialsError(ProviderError):
    """Cloud credentials are missing, incomplete, expired or unknown."""


class ProviderConnectionError(ProviderError):
    """The provider endpoint could not be reached or timed out."""


class ProviderAPIError(ProviderError):
    """The provider rejected a request.

    Parameters
    ----------
    message : str
        Human-readable error message
    error_code : str | None
        Provider-specific error code (e.g. ``IncorrectInstanceState``)
    operation : str | None
        Name of the provider operation that failed
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.operation = operation


class UpstreamProtocolError(ProviderError):
    """A provider response is missing a field the adapter requires.

    Parameters
    ----------
    field : str
        Dotted path of the missing field (e.g. ``State.Name``)
    operation : str
        Provider operation whose response was malformed
    """

    def __init__(self, field: str, operation: str) -> None:
        super().__init__(
            f"Malformed {operation} response: missing required field '{field}'"
        )
        self.field = field
        self.operation = operation
