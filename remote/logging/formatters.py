"""Logging formatters and filters for terminal output."""

import logging


class StreamFormatter(logging.Formatter):
    """Logging formatter that prefixes warnings and debug records.

    Informational records are printed as plain messages so they read like
    regular command output.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with a level prefix where useful.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to format

        Returns
        -------
        str
            Formatted log message
        """
        msg = super().format(record)

        if record.levelno >= logging.ERROR:
            return f"Error: {msg}"
        elif record.levelno >= logging.WARNING:
            return f"Warning: {msg}"
        elif record.levelno <= logging.DEBUG:
            return f"[{record.name}] {msg}"

        return msg


class StreamRoutingFilter(logging.Filter):
    """Route records to stdout or stderr by level.

    Parameters
    ----------
    stream : str
        ``"stdout"`` accepts records below WARNING, ``"stderr"`` the rest
    """

    def __init__(self, stream: str) -> None:
        super().__init__()
        if stream not in ("stdout", "stderr"):
            raise ValueError(f"stream must be 'stdout' or 'stderr', got: {stream}")
        self.stream = stream

    def filter(self, record: logging.LogRecord) -> bool:
        if self.stream == "stdout":
            return record.levelno < logging.WARNING
        return record.levelno >= logging.WARNING
