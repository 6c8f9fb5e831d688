"""EC2 implementation of the InstanceManager capability interface."""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Callable
from typing import Any

import boto3

from remote.core.models import Instance, StateChange
from remote.exceptions import InstanceNotFoundError
from remote.providers.aws.errors import handle_aws_errors
from remote.providers.aws.utils import decode_state_change, flatten_reservations

logger = logging.getLogger(__name__)


class AwsCloud:
    """Manage EC2 instances through a boto3 client bound to one profile.

    Parameters
    ----------
    ec2_client : Any
        Boto3 EC2 client
    profile : str | None
        Name of the credential profile the client was built from
    region : str | None
        Region the client talks to, for display and logging only
    """

    def __init__(
        self,
        ec2_client: Any,
        profile: str | None = None,
        region: str | None = None,
    ) -> None:
        self.ec2_client = ec2_client
        self.profile = profile
        self.region = region or getattr(
            getattr(ec2_client, "meta", None), "region_name", None
        )

    @classmethod
    def from_profile(
        cls,
        profile: str,
        session_factory: Callable[..., Any] | None = None,
    ) -> AwsCloud:
        """Create an adapter from a named credential profile.

        The region follows boto3's default resolution (environment, then the
        profile's config) and is never hard-coded.

        Parameters
        ----------
        profile : str
            Credential profile name from the shared AWS config files
        session_factory : Callable[..., Any] | None
            Optional factory for boto3 sessions. If None, uses boto3.session.Session

        Returns
        -------
        AwsCloud
            Adapter bound to the profile's credentials and region

        Raises
        ------
        ProviderCredentialsError
            If the profile does not exist or no region can be resolved
        """
        factory = session_factory or boto3.session.Session

        with handle_aws_errors("CreateClient"):
            session = factory(profile_name=profile)
            ec2_client = session.client("ec2")

        logger.debug(
            "Created EC2 client for profile %s in region %s",
            profile,
            session.region_name,
        )
        return cls(ec2_client, profile=profile, region=session.region_name)

    async def _run(self, operation: str, func: Callable[..., Any], **kwargs: Any) -> Any:
        """Run a blocking boto3 call in the default executor."""
        logger.debug("EC2 %s %s", operation, kwargs)
        loop = asyncio.get_running_loop()
        with handle_aws_errors(operation):
            return await loop.run_in_executor(None, functools.partial(func, **kwargs))

    def _describe_pages(self, **kwargs: Any) -> list[dict[str, Any]]:
        paginator = self.ec2_client.get_paginator("describe_instances")
        return list(paginator.paginate(**kwargs))

    async def describe_instances(self, instance_id: str | None = None) -> list[Instance]:
        """Describe instances, optionally filtered server-side by id.

        Parameters
        ----------
        instance_id : str | None
            Instance ID to filter on, or None for every instance

        Returns
        -------
        list[Instance]
            Flattened instances from every reservation
        """
        kwargs: dict[str, Any] = {}
        if instance_id is not None:
            kwargs["Filters"] = [{"Name": "instance-id", "Values": [instance_id]}]

        pages = await self._run("DescribeInstances", self._describe_pages, **kwargs)
        return flatten_reservations(pages)

    async def list_instances(self) -> list[Instance]:
        return await self.describe_instances()

    async def get_instance(self, instance_id: str) -> Instance:
        """Fetch a single instance.

        Raises
        ------
        InstanceNotFoundError
            If no instance matches the id
        """
        instances = await self.describe_instances(instance_id)

        if not instances:
            raise InstanceNotFoundError(instance_id)

        if len(instances) > 1:
            logger.warning(
                "Found %d instances for %s, using the first", len(instances), instance_id
            )

        return instances[0]

    async def start_instance(self, instance_id: str) -> StateChange:
        logger.debug("Starting instance %s...", instance_id)
        response = await self._run(
            "StartInstances",
            self.ec2_client.start_instances,
            InstanceIds=[instance_id],
        )
        return decode_state_change(response, "StartingInstances", "StartInstances")

    async def stop_instance(self, instance_id: str) -> StateChange:
        logger.debug("Stopping instance %s...", instance_id)
        response = await self._run(
            "StopInstances",
            self.ec2_client.stop_instances,
            InstanceIds=[instance_id],
        )
        return decode_state_change(response, "StoppingInstances", "StopInstances")

    async def set_instance_type(self, instance_id: str, instance_type: str) -> None:
        """Change the instance type attribute.

        EC2 only accepts this for stopped instances; its error is forwarded
        as a ProviderAPIError rather than checked locally.
        """
        await self._run(
            "ModifyInstanceAttribute",
            self.ec2_client.modify_instance_attribute,
            InstanceId=instance_id,
            InstanceType={"Value": instance_type},
        )
