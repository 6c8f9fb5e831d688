"""Tests for the profile store."""

from pathlib import Path

import pytest
import yaml
from fakes import make_instance_entry

from remote.core.config import (
    InstanceConfig,
    ProfileConfig,
    ProfileStore,
    get_config_path,
)
from remote.exceptions import (
    ConfigFileError,
    DanglingActiveAliasError,
    DuplicateAliasError,
    NoActiveInstanceError,
    UnknownAliasError,
)


def _instance(alias: str, instance_id: str = "i-123") -> InstanceConfig:
    return InstanceConfig.from_dict(make_instance_entry(alias, instance_id, "/keys/k.pem"))


class TestConfigPath:
    def test_env_variable_overrides_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REMOTE_CONFIG", str(tmp_path / "custom.yaml"))

        assert get_config_path() == tmp_path / "custom.yaml"

    def test_default_location_under_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("REMOTE_CONFIG", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: Path("/home/u")))

        assert get_config_path() == Path("/home/u/.config/remote/profiles.yaml")

    def test_store_resolves_path_lazily(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        store = ProfileStore()
        monkeypatch.setenv("REMOTE_CONFIG", str(tmp_path / "late.yaml"))

        assert store.path == tmp_path / "late.yaml"


class TestInstanceConfig:
    def test_cloud_is_lowercased(self) -> None:
        entry = make_instance_entry("box1", "i-123", "/k.pem", cloud="AWS")

        assert InstanceConfig.from_dict(entry).cloud == "aws"

    @pytest.mark.parametrize("missing", ["instance_id", "key_path", "user", "profile", "cloud"])
    def test_missing_field_is_rejected(self, missing: str) -> None:
        entry = make_instance_entry("box1", "i-123", "/k.pem")
        del entry[missing]

        with pytest.raises(ConfigFileError, match=missing):
            InstanceConfig.from_dict(entry)

    def test_empty_field_is_rejected(self) -> None:
        entry = make_instance_entry("box1", "i-123", "/k.pem", user="")

        with pytest.raises(ConfigFileError, match="box1"):
            InstanceConfig.from_dict(entry)

    def test_non_mapping_entry_is_rejected(self) -> None:
        with pytest.raises(ConfigFileError):
            InstanceConfig.from_dict("box1")

    def test_format(self) -> None:
        text = _instance("box1").format()

        assert text == (
            "Alias: box1\n"
            "Instance ID: i-123\n"
            "Key Path: /keys/k.pem\n"
            "User: ubuntu\n"
            "Cloud: aws\n"
            "Profile: default"
        )


class TestProfileConfig:
    def test_add_instance_and_set_active(self) -> None:
        config = ProfileConfig()

        config.add_instance(_instance("box1"), set_active=True)

        assert config.active == "box1"
        assert config.active_instance().instance_id == "i-123"

    def test_add_instance_without_active_keeps_previous(self) -> None:
        config = ProfileConfig()
        config.add_instance(_instance("box1"), set_active=True)

        config.add_instance(_instance("box2", "i-456"))

        assert config.active == "box1"

    def test_duplicate_alias_rejected(self) -> None:
        config = ProfileConfig()
        config.add_instance(_instance("box1"))

        with pytest.raises(DuplicateAliasError, match="box1"):
            config.add_instance(_instance("box1", "i-999"))

        assert len(config.instances) == 1

    def test_remove_active_clears_active(self) -> None:
        config = ProfileConfig()
        config.add_instance(_instance("box1"), set_active=True)

        assert config.remove_instance("box1") is True
        assert config.active is None
        assert config.instances == []

    def test_remove_unknown_alias_is_noop(self) -> None:
        config = ProfileConfig()
        config.add_instance(_instance("box1"), set_active=True)

        assert config.remove_instance("nope") is False
        assert config.active == "box1"

    def test_set_active_unknown_alias(self) -> None:
        config = ProfileConfig()
        config.add_instance(_instance("box1"))

        with pytest.raises(UnknownAliasError):
            config.set_active("box2")

        assert config.active is None

    def test_active_instance_none(self) -> None:
        with pytest.raises(NoActiveInstanceError):
            ProfileConfig().active_instance()

    def test_active_instance_dangling(self) -> None:
        config = ProfileConfig(active="ghost", instances=[_instance("box1")])

        with pytest.raises(DanglingActiveAliasError, match="ghost"):
            config.active_instance()

    def test_instances_must_be_list(self) -> None:
        with pytest.raises(ConfigFileError):
            ProfileConfig.from_dict({"active": None, "instances": {"box1": {}}})


class TestProfileStore:
    def test_first_load_creates_empty_store(self, profile_path: Path) -> None:
        config = ProfileStore().load()

        assert config.active is None
        assert config.instances == []
        assert yaml.safe_load(profile_path.read_text()) == {"active": None, "instances": []}

    def test_save_then_load(self, tmp_path: Path) -> None:
        store = ProfileStore(tmp_path / "nested" / "profiles.yaml")
        config = ProfileConfig()
        config.add_instance(_instance("box1"), set_active=True)
        config.add_instance(_instance("box2", "i-456"))

        store.save(config)
        loaded = store.load()

        assert loaded == config

    def test_saved_document_layout(self, tmp_path: Path) -> None:
        path = tmp_path / "profiles.yaml"
        config = ProfileConfig()
        config.add_instance(_instance("box1"), set_active=True)

        ProfileStore(path).save(config)

        stored = yaml.safe_load(path.read_text())
        assert stored == {
            "active": "box1",
            "instances": [make_instance_entry("box1", "i-123", "/keys/k.pem")],
        }
        assert not path.with_suffix(".tmp").exists()

    def test_invalid_yaml(self, profile_path: Path) -> None:
        profile_path.parent.mkdir(parents=True)
        profile_path.write_text("active: [unclosed\n")

        with pytest.raises(ConfigFileError, match="Invalid YAML"):
            ProfileStore().load()

    def test_top_level_list_rejected(self, profile_path: Path) -> None:
        profile_path.parent.mkdir(parents=True)
        profile_path.write_text("- box1\n- box2\n")

        with pytest.raises(ConfigFileError, match="mapping"):
            ProfileStore().load()

    def test_entry_missing_field(self, write_profile, profile_path: Path) -> None:
        entry = make_instance_entry("box1", "i-123", "/k.pem")
        del entry["user"]
        write_profile({"active": "box1", "instances": [entry]})

        with pytest.raises(ConfigFileError, match="user"):
            ProfileStore().load()

    def test_stored_cloud_case_is_normalised(self, write_profile) -> None:
        write_profile(
            {
                "active": None,
                "instances": [make_instance_entry("box1", "i-123", "/k.pem", cloud="Aws")],
            }
        )

        assert ProfileStore().load().instances[0].cloud == "aws"

    def test_unwritable_location(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(ConfigFileError, match="Failed to write"):
            ProfileStore(blocker / "profiles.yaml").save(ProfileConfig())
