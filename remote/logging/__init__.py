"""Logging setup for the remote CLI."""

from __future__ import annotations

import logging
import sys

from remote.logging.formatters import StreamFormatter, StreamRoutingFilter

QUIET_LOGGERS = ("botocore", "boto3", "urllib3")


def configure_logging(debug: bool = False) -> None:
    """Install stdout/stderr handlers on the root logger.

    Parameters
    ----------
    debug : bool
        Log at DEBUG level instead of INFO
    """
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(StreamFormatter("%(message)s"))
    stdout_handler.addFilter(StreamRoutingFilter("stdout"))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(StreamFormatter("%(message)s"))
    stderr_handler.addFilter(StreamRoutingFilter("stderr"))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        handlers=[stdout_handler, stderr_handler],
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["StreamFormatter", "StreamRoutingFilter", "configure_logging"]
