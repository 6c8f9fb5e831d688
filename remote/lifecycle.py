from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Callable, Sequence

from remote.constants import DEFAULT_CLOUD_PROFILE, INSTANCE_SEPARATOR, RUNNING_STATE
from remote.core.config import InstanceConfig, ProfileStore
from remote.core.interfaces import InstanceManager
from remote.core.models import ConnectionInfo, Instance
from remote.exceptions import (
    ConfigFileError,
    DuplicateAliasError,
    InvalidStateError,
    MissingPublicAddressError,
)
from remote.providers import create_instance_manager, parse_cloud
from remote.services.ssh import build_scp_command, build_ssh_command, run_interactive
from remote.utils import expand_tilde, prompt

logger = logging.getLogger(__name__)


class LifecycleManager:
    """Runs remote's commands against the profile store and cloud adapters.

    Parameters
    ----------
    profile_store : ProfileStore
        Store holding configured instances and the active alias
    compute_provider_factory : Callable[[str, str], InstanceManager]
        Builds an InstanceManager from a cloud tag and credential profile
    input_func : Callable[[str], str]
        Reads one answer for the interactive ``new`` flow
    command_runner : Callable[[list[str]], int]
        Runs ssh/scp attached to the terminal and returns the exit code
    """

    def __init__(
        self,
        profile_store: ProfileStore,
        compute_provider_factory: Callable[[str, str], InstanceManager] = create_instance_manager,
        input_func: Callable[[str], str] = prompt,
        command_runner: Callable[[list[str]], int] = run_interactive,
    ) -> None:
        self.profile_store = profile_store
        self.compute_provider_factory = compute_provider_factory
        self.input_func = input_func
        self.command_runner = command_runner

    def _manager_for(self, instance: InstanceConfig) -> InstanceManager:
        return self.compute_provider_factory(instance.cloud, instance.profile)

    def set_active(self, alias: str) -> None:
        """Make an existing alias the active instance.

        Raises
        ------
        UnknownAliasError
            If the alias is not configured; the store is not written
        """
        config = self.profile_store.load()
        config.set_active(alias)
        self.profile_store.save(config)
        print(f"Active instance: {alias}")

    async def new(self, set_active: bool = False) -> InstanceConfig:
        """Interactively configure a new instance.

        The key file must exist and the instance must answer a status query
        before anything is written.

        Parameters
        ----------
        set_active : bool
            Make the new instance the active one

        Returns
        -------
        InstanceConfig
            The stored configuration

        Raises
        ------
        UnsupportedProviderError
            If the cloud provider is not registered
        ConfigFileError
            If the key file does not exist
        DuplicateAliasError
            If the alias is already configured
        """
        config = self.profile_store.load()

        cloud = parse_cloud(self.input_func("Cloud provider"))
        profile = self.input_func(f"Cloud profile [{DEFAULT_CLOUD_PROFILE}]")
        if not profile:
            profile = DEFAULT_CLOUD_PROFILE

        instance_id = self._require_answer("Instance ID")

        key_path = self._require_answer("SSH key path")
        if not expand_tilde(key_path).exists():
            raise ConfigFileError(f"Could not find key file: {key_path}")

        user = self._require_answer("SSH user name")
        alias = self._require_answer("Alias")
        print(INSTANCE_SEPARATOR)

        if config.find(alias) is not None:
            raise DuplicateAliasError(alias)

        instance = InstanceConfig(
            alias=alias,
            instance_id=instance_id,
            key_path=key_path,
            user=user,
            profile=profile,
            cloud=cloud,
        )
        await self._print_status(instance)

        config.add_instance(instance, set_active=set_active)
        self.profile_store.save(config)
        logger.debug("Added instance %s (%s)", alias, instance_id)
        return instance

    def _require_answer(self, label: str) -> str:
        answer = self.input_func(label)
        if not answer:
            raise ValueError(f"{label} cannot be empty")
        return answer

    def remove(self, alias: str) -> None:
        config = self.profile_store.load()
        if not config.remove_instance(alias):
            logger.debug("No instance with alias %s was configured", alias)
        self.profile_store.save(config)
        print(f"Removed instance: {alias}")

    def list_configured(self) -> None:
        config = self.profile_store.load()

        if config.active is not None:
            print(f"Active instance: {config.active}")

        separator = f"\n{INSTANCE_SEPARATOR}\n"
        info = separator.join(instance.format() for instance in config.instances)
        print(f"Configured instances:\n{INSTANCE_SEPARATOR}\n{info}")

    async def list_cloud(self, cloud: str, profile: str = DEFAULT_CLOUD_PROFILE) -> list[Instance]:
        """Print every instance visible to a cloud credential profile."""
        manager = self.compute_provider_factory(parse_cloud(cloud), profile)
        instances = await manager.list_instances()

        separator = f"\n{INSTANCE_SEPARATOR}\n"
        info = separator.join(instance.format() for instance in instances)
        print(f"Instances on {cloud} ({profile}):\n{INSTANCE_SEPARATOR}\n{info}")
        return instances

    async def start(self) -> None:
        instance = self.profile_store.load().active_instance()
        change = await self._manager_for(instance).start_instance(instance.instance_id)
        print(
            f"{instance.alias} ({instance.instance_id}): "
            f"{change.previous} -> {change.current}"
        )

    async def stop(self) -> None:
        instance = self.profile_store.load().active_instance()
        change = await self._manager_for(instance).stop_instance(instance.instance_id)
        print(
            f"{instance.alias} ({instance.instance_id}): "
            f"{change.previous} -> {change.current}"
        )

    async def resize(self, instance_type: str) -> None:
        """Change the active instance's type.

        The success line is only printed once the provider accepted the change.
        """
        instance = self.profile_store.load().active_instance()
        await self._manager_for(instance).set_instance_type(
            instance.instance_id, instance_type
        )
        print(f"Set {instance.alias} ({instance.instance_id}) to {instance_type}")

    async def _print_status(self, instance: InstanceConfig) -> Instance:
        status = await self._manager_for(instance).get_instance(instance.instance_id)
        self._render_status(instance, status)
        return status

    @staticmethod
    def _render_status(instance: InstanceConfig, status: Instance) -> None:
        print(INSTANCE_SEPARATOR)
        print(f"Alias: {instance.alias}")
        print(status.format())

    async def status(self) -> Instance:
        instance = self.profile_store.load().active_instance()
        return await self._print_status(instance)

    async def status_all(self) -> dict[str, Instance | BaseException]:
        """Fetch the status of every configured instance concurrently.

        Failures are collected per alias instead of aborting the other
        fetches. Successful results are printed in configuration order, then
        failed aliases are reported on stderr.

        Returns
        -------
        dict[str, Instance | BaseException]
            Status or raised exception, keyed by alias
        """
        instances = self.profile_store.load().instances

        if not instances:
            print("No configured instances")
            return {}

        results = await asyncio.gather(
            *(self._fetch_status(instance) for instance in instances),
            return_exceptions=True,
        )

        outcome: dict[str, Instance | BaseException] = {}
        failed: list[str] = []

        for instance, result in zip(instances, results):
            outcome[instance.alias] = result
            if isinstance(result, BaseException):
                logger.warning(
                    "Failed to fetch status for %s (%s): %s",
                    instance.alias,
                    instance.instance_id,
                    result,
                )
                failed.append(instance.alias)
                continue
            self._render_status(instance, result)

        if failed:
            print(f"Failed to fetch status for: {', '.join(failed)}", file=sys.stderr)

        return outcome

    async def _fetch_status(self, instance: InstanceConfig) -> Instance:
        return await self._manager_for(instance).get_instance(instance.instance_id)

    async def connection_info(self) -> ConnectionInfo:
        """Resolve the active instance into an ssh/scp connection descriptor.

        Performs exactly one ``get_instance`` call.

        Raises
        ------
        InvalidStateError
            If the instance is not running
        MissingPublicAddressError
            If the instance has no public DNS name
        """
        instance = self.profile_store.load().active_instance()
        status = await self._manager_for(instance).get_instance(instance.instance_id)

        if status.state != RUNNING_STATE:
            raise InvalidStateError(
                instance.instance_id, status.state, RUNNING_STATE
            )

        if not status.public_dns:
            raise MissingPublicAddressError(instance.instance_id)

        return ConnectionInfo(
            user=instance.user,
            address=status.public_dns,
            key_path=expand_tilde(instance.key_path),
        )

    async def ssh(self, ports: Sequence[int] = ()) -> int:
        info = await self.connection_info()
        return self.command_runner(build_ssh_command(info, ports))

    async def transfer(
        self,
        local_path: str,
        remote_path: str,
        upload: bool,
        recursive: bool = False,
    ) -> int:
        """Copy a file or directory to or from the active instance."""
        info = await self.connection_info()
        command = build_scp_command(
            info, local_path, remote_path, upload=upload, recursive=recursive
        )
        return self.command_runner(command)
