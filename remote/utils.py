"""Utility functions for remote."""

import fcntl
import logging
import sys
from pathlib import Path
from typing import Any

from remote.exceptions import ConfigFileError


def get_home_dir() -> Path:
    """Return the current user's home directory.

    Returns
    -------
    Path
        Home directory

    Raises
    ------
    ConfigFileError
        If the home directory cannot be determined
    """
    try:
        return Path.home()
    except RuntimeError as e:
        raise ConfigFileError("Could not find home directory") from e


def expand_tilde(path: str | Path, home: Path | None = None) -> Path:
    """Expand a leading ``~`` component to the user's home directory.

    Only a bare ``~`` or a ``~/`` prefix is expanded. ``~user`` forms and
    paths without a tilde are returned unchanged.

    Parameters
    ----------
    path : str | Path
        Path as typed by the user
    home : Path | None
        Home directory to expand to. If None, the current user's home is used.

    Returns
    -------
    Path
        Expanded path

    Raises
    ------
    ConfigFileError
        If expansion is needed and the home directory cannot be determined
    """
    raw = str(path)

    if raw != "~" and not raw.startswith("~/"):
        return Path(raw)

    home_dir = home if home is not None else get_home_dir()

    if raw == "~":
        return home_dir

    return home_dir / raw[2:]


def prompt(label: str) -> str:
    """Ask the user for a single line of input.

    Parameters
    ----------
    label : str
        Prompt text, printed followed by a colon

    Returns
    -------
    str
        Input with surrounding whitespace stripped
    """
    return input(f"{label}: ").strip()


def log_and_print_error(message: str, *args: Any) -> None:
    """Log error message and print to stderr.

    Parameters
    ----------
    message : str
        Error message with optional format placeholders
    *args : Any
        Format arguments for message
    """
    logging.getLogger(__name__).debug(message, *args)
    formatted_msg = message % args if args else message
    print(f"Error: {formatted_msg}", file=sys.stderr)


def atomic_file_write(path: Path, content: str) -> None:
    """Write file atomically using temp file and rename with file locking.

    Writes to a temporary file next to the target and renames it over the
    target, so readers never observe a partially written file.

    Parameters
    ----------
    path : Path
        Target file path
    content : str
        File content to write

    Raises
    ------
    OSError
        Propagates any error from the write after removing the temp file
    """
    temp_path = path.with_suffix(".tmp")
    lock_path = path.with_suffix(".lock")

    try:
        with open(lock_path, "w") as lock_file:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
            try:
                with open(temp_path, "w") as f:
                    f.write(content)
                temp_path.replace(path)
            except Exception:
                if temp_path.exists():
                    temp_path.unlink()
                raise
            finally:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)
    finally:
        try:
            lock_path.unlink()
        except OSError:
            pass
