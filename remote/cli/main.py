"""CLI entry point for remote."""

from __future__ import annotations

import os
import sys

import fire

from remote.constants import DEBUG_ENV_VAR, EXIT_ERROR
from remote.exceptions import RemoteError
from remote.logging import configure_logging
from remote.providers import (
    ProviderAPIError,
    ProviderCredentialsError,
    ProviderError,
)
from remote.providers.aws.utils import get_aws_credentials_error_message
from remote.utils import log_and_print_error


def get_remote_class() -> type:
    """Get the Remote command class on demand to avoid circular imports.

    Returns
    -------
    type
        Remote class exposed to Fire
    """
    from remote.__main__ import Remote

    return Remote


def handle_credentials_error(error: ProviderCredentialsError, debug_mode: bool) -> None:
    """Handle provider credentials error.

    Parameters
    ----------
    error : ProviderCredentialsError
        The credentials error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ProviderCredentialsError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(f"Error: {error}\n", file=sys.stderr)
    print(get_aws_credentials_error_message(), file=sys.stderr)
    sys.exit(EXIT_ERROR)


def handle_api_error(error: ProviderAPIError, debug_mode: bool) -> None:
    """Handle provider API error with context-specific messages.

    Parameters
    ----------
    error : ProviderAPIError
        The API error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ProviderAPIError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    error_code = error.error_code
    error_msg = str(error)

    print(f"Error: {error_msg}", file=sys.stderr)

    if error_code == "UnauthorizedOperation":
        print(
            "Your cloud credentials don't have the required permissions "
            "(DescribeInstances, StartInstances, StopInstances, "
            "ModifyInstanceAttribute).",
            file=sys.stderr,
        )
    elif error_code == "IncorrectInstanceState":
        print(
            "The instance is not in a state that allows this operation. "
            "Check it with: remote status",
            file=sys.stderr,
        )
    elif error_code in ("InvalidInstanceID.NotFound", "InvalidInstanceID.Malformed"):
        print(
            "The configured instance ID does not exist for this profile and region.",
            file=sys.stderr,
        )
    elif error_code == "InvalidParameterValue" and "instance type" in error_msg.lower():
        print(
            "Instance type not available in this region, or a typo in its name.",
            file=sys.stderr,
        )

    sys.exit(EXIT_ERROR)


def main() -> None:
    """Entry point for Fire CLI with graceful error handling.

    Fire maps the methods of the Remote class to subcommands. Every error
    that reaches this function is printed as a single line on stderr and the
    process exits with a non-zero status, unless REMOTE_DEBUG=1 is set, in
    which case the original exception propagates.
    """
    debug_mode = os.environ.get(DEBUG_ENV_VAR) == "1"
    configure_logging(debug=debug_mode)

    try:
        fire.Fire(get_remote_class()(), name="remote")
    except ProviderCredentialsError as e:
        handle_credentials_error(e, debug_mode)
    except ProviderAPIError as e:
        handle_api_error(e, debug_mode)
    except (ProviderError, RemoteError) as e:
        if debug_mode:
            raise
        log_and_print_error("%s", e)
        sys.exit(EXIT_ERROR)
    except ValueError as e:
        if debug_mode:
            raise
        log_and_print_error("Invalid argument: %s", e)
        sys.exit(EXIT_ERROR)
    except EOFError:
        if debug_mode:
            raise
        log_and_print_error("Input aborted")
        sys.exit(EXIT_ERROR)
