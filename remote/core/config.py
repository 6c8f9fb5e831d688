"""Local profile store: configured instances and the active alias.

The store is a single YAML document. Every command loads it fully, mutates
the in-memory :class:`ProfileConfig` and writes the whole document back.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from remote.constants import CONFIG_ENV_VAR, DEFAULT_CONFIG_DIR, PROFILES_FILE_NAME
from remote.exceptions import (
    ConfigFileError,
    DanglingActiveAliasError,
    DuplicateAliasError,
    NoActiveInstanceError,
    UnknownAliasError,
)
from remote.utils import atomic_file_write, expand_tilde

logger = logging.getLogger(__name__)

INSTANCE_FIELDS = ("alias", "instance_id", "key_path", "user", "profile", "cloud")


@dataclass
class InstanceConfig:
    """A user-configured instance, keyed by its alias."""

    alias: str
    instance_id: str
    key_path: str
    user: str
    profile: str
    cloud: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InstanceConfig:
        """Build an InstanceConfig from a stored mapping.

        Raises
        ------
        ConfigFileError
            If a field is missing or empty
        """
        if not isinstance(data, dict):
            raise ConfigFileError(f"Invalid instance entry in profile store: {data!r}")

        missing = [name for name in INSTANCE_FIELDS if data.get(name) in (None, "")]
        if missing:
            label = data.get("alias") or "<unnamed>"
            raise ConfigFileError(
                f"Instance '{label}' in profile store is missing: {', '.join(missing)}"
            )

        values = {name: str(data[name]) for name in INSTANCE_FIELDS}
        values["cloud"] = values["cloud"].lower()
        return cls(**values)

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    def format(self) -> str:
        """Render the configuration as a human-readable block."""
        return (
            f"Alias: {self.alias}\n"
            f"Instance ID: {self.instance_id}\n"
            f"Key Path: {self.key_path}\n"
            f"User: {self.user}\n"
            f"Cloud: {self.cloud}\n"
            f"Profile: {self.profile}"
        )


@dataclass
class ProfileConfig:
    """Every configured instance plus the optional active alias.

    ``active`` is only checked against ``instances`` when it is read through
    :meth:`active_instance`.
    """

    active: str | None = None
    instances: list[InstanceConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProfileConfig:
        active = data.get("active")
        raw_instances = data.get("instances") or []

        if not isinstance(raw_instances, list):
            raise ConfigFileError("'instances' in profile store must be a list")

        return cls(
            active=str(active) if active is not None else None,
            instances=[InstanceConfig.from_dict(item) for item in raw_instances],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "active": self.active,
            "instances": [instance.to_dict() for instance in self.instances],
        }

    def find(self, alias: str) -> InstanceConfig | None:
        for instance in self.instances:
            if instance.alias == alias:
                return instance
        return None

    def add_instance(self, instance: InstanceConfig, set_active: bool = False) -> None:
        """Append an instance, optionally making it the active one.

        Raises
        ------
        DuplicateAliasError
            If an instance with the same alias already exists
        """
        if self.find(instance.alias) is not None:
            raise DuplicateAliasError(instance.alias)

        self.instances.append(instance)

        if set_active:
            self.active = instance.alias

    def remove_instance(self, alias: str) -> bool:
        """Remove the instance with the given alias.

        Clears ``active`` when it pointed at the removed alias.

        Returns
        -------
        bool
            True if an instance was removed
        """
        before = len(self.instances)
        self.instances = [inst for inst in self.instances if inst.alias != alias]

        if self.active == alias:
            self.active = None

        return len(self.instances) != before

    def set_active(self, alias: str) -> None:
        """Select an existing alias as the active instance.

        Raises
        ------
        UnknownAliasError
            If no instance has the alias; ``active`` is left untouched
        """
        if self.find(alias) is None:
            raise UnknownAliasError(alias)
        self.active = alias

    def active_instance(self) -> InstanceConfig:
        """Resolve the active alias to its configuration.

        Raises
        ------
        NoActiveInstanceError
            If no alias is active
        DanglingActiveAliasError
            If the active alias has no matching instance
        """
        if self.active is None:
            raise NoActiveInstanceError()

        instance = self.find(self.active)
        if instance is None:
            raise DanglingActiveAliasError(self.active)

        return instance


def get_config_path() -> Path:
    """Resolve the profile store path.

    Uses ``REMOTE_CONFIG`` when set, otherwise ``~/.config/remote/profiles.yaml``.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return expand_tilde(override)
    return expand_tilde(DEFAULT_CONFIG_DIR) / PROFILES_FILE_NAME


class ProfileStore:
    """Load and persist the :class:`ProfileConfig` YAML document.

    Parameters
    ----------
    path : Path | str | None
        Location of the store. If None, resolved with :func:`get_config_path`
        on every access so environment overrides are honoured.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path is not None else None

    @property
    def path(self) -> Path:
        return self._path if self._path is not None else get_config_path()

    def load(self) -> ProfileConfig:
        """Load the store, creating an empty one on first use.

        Returns
        -------
        ProfileConfig
            Parsed profile configuration

        Raises
        ------
        ConfigFileError
            If the file cannot be read or is not a valid profile document
        """
        path = self.path

        if not path.exists():
            logger.debug("Profile store %s does not exist, creating it", path)
            config = ProfileConfig()
            self.save(config)
            return config

        try:
            cfg = OmegaConf.load(path)
        except yaml.YAMLError as e:
            raise ConfigFileError(f"Invalid YAML in {path}: {e}") from e
        except OSError as e:
            raise ConfigFileError(f"Failed to read profile store {path}: {e}") from e

        if cfg is None:
            return ProfileConfig()

        if not isinstance(cfg, DictConfig):
            raise ConfigFileError(f"Profile store {path} must contain a mapping")

        try:
            data = OmegaConf.to_container(cfg, resolve=True)
        except OmegaConfBaseException as e:
            raise ConfigFileError(f"Failed to resolve profile store {path}: {e}") from e

        return ProfileConfig.from_dict(data)

    def save(self, config: ProfileConfig) -> None:
        """Write the whole store back to disk.

        Raises
        ------
        ConfigFileError
            If the directory cannot be created or the file cannot be written
        """
        path = self.path
        content = yaml.safe_dump(config.to_dict(), sort_keys=False)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            atomic_file_write(path, content)
        except OSError as e:
            raise ConfigFileError(f"Failed to write profile store {path}: {e}") from e

        logger.debug("Saved profile store to %s", path)
