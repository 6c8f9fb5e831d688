"""Global constants for the remote application.

This module contains application-wide constants that are used across multiple
components. Provider-specific values live next to the provider implementation.
"""

CONFIG_ENV_VAR = "REMOTE_CONFIG"
"""Environment variable that overrides the profile store location.

Primarily used by tests and by users who keep several independent stores.
"""

DEBUG_ENV_VAR = "REMOTE_DEBUG"
"""Environment variable that enables debug mode when set to ``1``.

Debug mode raises log verbosity and re-raises errors instead of printing
a single-line message.
"""

DEFAULT_CONFIG_DIR = "~/.config/remote"
"""Directory holding the profile store, relative to the user's home."""

PROFILES_FILE_NAME = "profiles.yaml"
"""File name of the profile store inside the configuration directory."""

DEFAULT_CLOUD_PROFILE = "default"
"""Credential profile used when the user does not name one."""

MIN_VALID_PORT = 1
"""Lowest TCP port accepted for SSH local forwarding."""

MAX_VALID_PORT = 65535
"""Highest TCP port accepted for SSH local forwarding."""

INSTANCE_SEPARATOR = "---"
"""Separator printed between rendered instance blocks."""

EXIT_SUCCESS = 0
"""Exit code indicating successful program completion."""

EXIT_ERROR = 1
"""Exit code indicating a general application error.

Returned for every propagated error: configuration, cloud API, credentials
or missing external binaries.
"""

RUNNING_STATE = "running"
"""Power state an instance must be in for ssh and file transfer."""
