"""Provider-agnostic services (SSH and file transfer)."""

from __future__ import annotations

from remote.services.ssh import build_scp_command, build_ssh_command, run_interactive

__all__ = [
    "build_ssh_command",
    "build_scp_command",
    "run_interactive",
]
