"""CLI argument parsing and parameter conversion utilities."""

from __future__ import annotations

from remote.constants import MAX_VALID_PORT, MIN_VALID_PORT


def parse_port_parameter(
    port: str | int | list[int] | tuple[int, ...] | None,
) -> list[int]:
    """Parse port parameter into list of integers with validation.

    Parameters
    ----------
    port : str | int | list[int] | tuple[int, ...] | None
        Port specification - can be single value, comma-separated string, list,
        tuple or None for no ports

    Returns
    -------
    list[int]
        List of port numbers as integers

    Raises
    ------
    ValueError
        If any port value is not numeric or outside valid range (1-65535)
    """
    if port is None:
        return []

    if isinstance(port, bool):
        raise ValueError("--ports requires a value, e.g. --ports 8888,6006")

    ports: list[int] = []

    if isinstance(port, (tuple, list)):
        try:
            ports = [int(p) for p in port]
        except (TypeError, ValueError):
            raise ValueError(f"Invalid port value in {list(port)}") from None
    else:
        port_strings = str(port).split(",")
        for port_str in port_strings:
            port_str = port_str.strip()
            if not port_str:
                continue
            try:
                ports.append(int(port_str))
            except ValueError:
                raise ValueError(f"Invalid port value: '{port_str}' is not numeric") from None

    for p in ports:
        if p < MIN_VALID_PORT or p > MAX_VALID_PORT:
            raise ValueError(
                f"Invalid port value: {p}. Port must be between "
                f"{MIN_VALID_PORT} and {MAX_VALID_PORT}"
            )

    return ports
