"""AWS provider implementation."""

from __future__ import annotations

from remote.providers.aws.compute import AwsCloud

__all__ = ["AwsCloud"]
