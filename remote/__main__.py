#!/usr/bin/env python3
"""Remote - simple CLI for managing remote instances."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable
from pathlib import Path

from remote.cli.parsing import parse_port_parameter
from remote.constants import DEFAULT_CLOUD_PROFILE, EXIT_SUCCESS
from remote.core.config import ProfileStore
from remote.core.interfaces import InstanceManager
from remote.lifecycle import LifecycleManager
from remote.providers import create_instance_manager
from remote.services.ssh import run_interactive
from remote.utils import prompt


class Remote:
    """Simple CLI for managing remote instances."""

    def __init__(
        self,
        compute_provider_factory: Callable[[str, str], InstanceManager] | None = None,
        config_path: str | Path | None = None,
        input_func: Callable[[str], str] | None = None,
        command_runner: Callable[[list[str]], int] | None = None,
    ) -> None:
        """Initialize Remote CLI with optional dependency injection."""
        self._profile_store = ProfileStore(config_path)
        self._lifecycle_manager = LifecycleManager(
            profile_store=self._profile_store,
            compute_provider_factory=compute_provider_factory or create_instance_manager,
            input_func=input_func or prompt,
            command_runner=command_runner or run_interactive,
        )

    @staticmethod
    def _exit_with(code: int) -> None:
        if code != EXIT_SUCCESS:
            sys.exit(code)

    def instance(self, alias: str) -> None:
        """Set the active instance.

        Parameters
        ----------
        alias : str
            The alias of the instance as set in "new"
        """
        self._lifecycle_manager.set_active(str(alias))

    def new(self, active: bool = False) -> None:
        """Configure a new instance.

        Parameters
        ----------
        active : bool
            If specified, will set this as the active instance
        """
        asyncio.run(self._lifecycle_manager.new(set_active=active))

    def rm(self, alias: str) -> None:
        """Remove an instance by alias."""
        self._lifecycle_manager.remove(str(alias))

    def start(self) -> None:
        """Start active instance."""
        asyncio.run(self._lifecycle_manager.start())

    def stop(self) -> None:
        """Stop active instance."""
        asyncio.run(self._lifecycle_manager.stop())

    def status(self, all: bool = False) -> None:
        """Get status of active instance.

        Parameters
        ----------
        all : bool
            Optionally show status of all configured instances
        """
        if all:
            asyncio.run(self._lifecycle_manager.status_all())
        else:
            asyncio.run(self._lifecycle_manager.status())

    def ssh(self, ports: str | int | list[int] | tuple[int, ...] | None = None) -> None:
        """SSH into the active instance.

        Parameters
        ----------
        ports : str | int | list[int] | tuple[int, ...] | None
            Optional ports to forward to the remote instance, e.g. 8888,6006
        """
        port_list = parse_port_parameter(ports)
        self._exit_with(asyncio.run(self._lifecycle_manager.ssh(port_list)))

    def upload(self, local_file: str, remote_file: str, recursive: bool = False) -> None:
        """Copy a file to the active instance.

        Parameters
        ----------
        local_file : str
            The path of the local file
        remote_file : str
            The remote path to copy to
        recursive : bool
            Copy directories recursively
        """
        code = asyncio.run(
            self._lifecycle_manager.transfer(
                str(local_file), str(remote_file), upload=True, recursive=recursive
            )
        )
        self._exit_with(code)

    up = upload

    def download(self, remote_file: str, local_file: str, recursive: bool = False) -> None:
        """Copy a file from the active instance.

        Parameters
        ----------
        remote_file : str
            The path of the remote file
        local_file : str
            The local path to copy to
        recursive : bool
            Copy directories recursively
        """
        code = asyncio.run(
            self._lifecycle_manager.transfer(
                str(local_file), str(remote_file), upload=False, recursive=recursive
            )
        )
        self._exit_with(code)

    down = download

    def resize(self, instance_type: str) -> None:
        """Change the type of the active instance.

        Parameters
        ----------
        instance_type : str
            The desired instance type
        """
        asyncio.run(self._lifecycle_manager.resize(str(instance_type)))

    def ls(self, cloud: str | None = None, profile: str = DEFAULT_CLOUD_PROFILE) -> None:
        """List configured instances or available instances for a cloud profile.

        Parameters
        ----------
        cloud : str | None
            The cloud provider to use
        profile : str
            The profile name to use
        """
        if cloud is None:
            self._lifecycle_manager.list_configured()
        else:
            asyncio.run(self._lifecycle_manager.list_cloud(str(cloud), str(profile)))


if __name__ == "__main__":
    from remote.cli.main import main

    main()
