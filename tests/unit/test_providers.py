"""Tests for the provider registry."""

from unittest.mock import MagicMock

import pytest

from remote import providers
from remote.exceptions import UnsupportedProviderError
from remote.providers import (
    create_instance_manager,
    get_provider,
    list_providers,
    parse_cloud,
    register_provider,
)
from remote.providers.aws import AwsCloud


@pytest.fixture
def isolated_registry(monkeypatch: pytest.MonkeyPatch) -> dict:
    registry = dict(providers._PROVIDERS)
    monkeypatch.setattr(providers, "_PROVIDERS", registry)
    return registry


class TestRegistry:
    def test_aws_registered_by_default(self) -> None:
        assert "aws" in list_providers()
        assert get_provider("aws") == AwsCloud.from_profile

    @pytest.mark.parametrize("name", ["aws", "AWS", " Aws "])
    def test_parse_cloud_is_case_insensitive(self, name: str) -> None:
        assert parse_cloud(name) == "aws"

    def test_unknown_provider(self) -> None:
        with pytest.raises(UnsupportedProviderError) as exc_info:
            parse_cloud("gcp")

        assert "gcp" in str(exc_info.value)
        assert "aws" in str(exc_info.value)

    def test_register_new_provider(self, isolated_registry) -> None:
        manager = MagicMock()
        factory = MagicMock(return_value=manager)

        register_provider("Azure", factory)

        assert "azure" in list_providers()
        assert create_instance_manager("azure", "work") is manager
        factory.assert_called_once_with("work")

    def test_create_instance_manager_dispatches_on_cloud(self, isolated_registry) -> None:
        factory = MagicMock()
        register_provider("aws", factory)

        create_instance_manager("AWS", "default")

        factory.assert_called_once_with("default")
