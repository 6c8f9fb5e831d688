"""Interactive ssh and scp sessions against a running instance.

The commands inherit the terminal's standard streams; remote only builds the
argument vectors and reports the exit status.
"""

import logging
import shlex
import subprocess
from collections.abc import Sequence

from remote.core.models import ConnectionInfo
from remote.exceptions import ExternalCommandError

logger = logging.getLogger(__name__)


def build_ssh_command(info: ConnectionInfo, ports: Sequence[int] = ()) -> list[str]:
    """Build an ssh command with optional local port forwards.

    Parameters
    ----------
    info : ConnectionInfo
        Connection descriptor for a running instance
    ports : Sequence[int]
        Ports forwarded as ``-L port:localhost:port``

    Returns
    -------
    list[str]
        Argument vector for subprocess
    """
    command = ["ssh", "-i", str(info.key_path), info.destination]
    for port in ports:
        command.extend(["-L", f"{port}:localhost:{port}"])
    return command


def build_scp_command(
    info: ConnectionInfo,
    local_path: str,
    remote_path: str,
    upload: bool,
    recursive: bool = False,
) -> list[str]:
    """Build an scp command copying between this machine and the instance.

    Parameters
    ----------
    info : ConnectionInfo
        Connection descriptor for a running instance
    local_path : str
        Path on this machine
    remote_path : str
        Path on the instance
    upload : bool
        True to copy local -> remote, False for remote -> local
    recursive : bool
        Copy directories recursively

    Returns
    -------
    list[str]
        Argument vector for subprocess
    """
    remote_spec = f"{info.destination}:{remote_path}"

    command = ["scp"]
    if recursive:
        command.append("-r")
    command.extend(["-i", str(info.key_path)])

    if upload:
        command.extend([local_path, remote_spec])
    else:
        command.extend([remote_spec, local_path])

    return command


def run_interactive(command: list[str]) -> int:
    """Run a command attached to the current terminal.

    Parameters
    ----------
    command : list[str]
        Argument vector

    Returns
    -------
    int
        Exit code of the command

    Raises
    ------
    ExternalCommandError
        If the executable cannot be found or started
    """
    logger.debug("Running: %s", shlex.join(command))

    try:
        result = subprocess.run(command, check=False)
    except FileNotFoundError as e:
        raise ExternalCommandError(
            f"'{command[0]}' not found. Install an OpenSSH client and retry."
        ) from e
    except OSError as e:
        raise ExternalCommandError(f"Failed to run {command[0]}: {e}") from e

    if result.returncode != 0:
        logger.debug("%s exited with code %d", command[0], result.returncode)

    return result.returncode
