"""Decoding of raw EC2 responses into remote's value types.

Every field the adapter depends on is looked up explicitly; an absent or
null value raises :class:`UpstreamProtocolError` naming the field.
"""

from __future__ import annotations

import logging
from typing import Any

from remote.core.models import Instance, InstanceTag, StateChange
from remote.providers.exceptions import UpstreamProtocolError

logger = logging.getLogger(__name__)

_MISSING = object()


def require(data: Any, path: str, operation: str) -> Any:
    """Look up a dotted path in a response mapping.

    Parameters
    ----------
    data : Any
        Response mapping (or nested value) to search
    path : str
        Dotted key path, e.g. ``State.Name``
    operation : str
        Operation name used in the error message

    Returns
    -------
    Any
        The value at ``path``

    Raises
    ------
    UpstreamProtocolError
        If any key along the path is absent or null
    """
    value = data
    for key in path.split("."):
        if not isinstance(value, dict):
            raise UpstreamProtocolError(path, operation)
        value = value.get(key, _MISSING)
        if value is _MISSING or value is None:
            raise UpstreamProtocolError(path, operation)
    return value


def decode_tags(raw_instance: dict[str, Any], operation: str) -> list[InstanceTag]:
    """Map the provider tag list, preserving order.

    EC2 omits ``Tags`` for untagged instances, which decodes to no tags.
    """
    raw_tags = raw_instance.get("Tags")
    if raw_tags is None:
        return []

    return [
        InstanceTag(
            key=require(tag, "Key", operation),
            value=require(tag, "Value", operation),
        )
        for tag in raw_tags
    ]


def decode_public_dns(raw_instance: dict[str, Any], operation: str) -> str:
    """Read the public DNS name of an instance.

    EC2 omits ``PublicDnsName`` for stopped instances, which decodes to an
    empty string. A null or non-string value is still malformed.
    """
    if "PublicDnsName" not in raw_instance:
        return ""

    public_dns = raw_instance["PublicDnsName"]
    if not isinstance(public_dns, str):
        raise UpstreamProtocolError("PublicDnsName", operation)
    return public_dns


def decode_instance(raw_instance: dict[str, Any], operation: str) -> Instance:
    return Instance(
        instance_type=require(raw_instance, "InstanceType", operation),
        instance_id=require(raw_instance, "InstanceId", operation),
        public_dns=decode_public_dns(raw_instance, operation),
        state=require(raw_instance, "State.Name", operation),
        tags=decode_tags(raw_instance, operation),
    )


def flatten_reservations(
    pages: list[dict[str, Any]], operation: str = "DescribeInstances"
) -> list[Instance]:
    """Flatten reservation -> instance nesting of describe_instances pages.

    Parameters
    ----------
    pages : list[dict[str, Any]]
        One or more describe_instances response pages
    operation : str
        Operation name used in error messages

    Returns
    -------
    list[Instance]
        Instances in response order
    """
    instances = []
    for page in pages:
        for reservation in require(page, "Reservations", operation):
            for raw_instance in require(reservation, "Instances", operation):
                instances.append(decode_instance(raw_instance, operation))
    return instances


def decode_state_change(
    response: dict[str, Any], list_key: str, operation: str
) -> StateChange:
    """Extract the single state change from a start/stop response.

    Parameters
    ----------
    response : dict[str, Any]
        start_instances or stop_instances response
    list_key : str
        ``StartingInstances`` or ``StoppingInstances``
    operation : str
        Operation name used in error messages

    Raises
    ------
    UpstreamProtocolError
        If the list is missing or empty, or a state name is absent
    """
    changes = require(response, list_key, operation)
    if not changes:
        raise UpstreamProtocolError(f"{list_key}[0]", operation)

    if len(changes) > 1:
        logger.warning(
            "%s returned %d state changes for a single instance, using the first",
            operation,
            len(changes),
        )

    change = changes[0]
    return StateChange(
        previous=require(change, "PreviousState.Name", operation),
        current=require(change, "CurrentState.Name", operation),
    )


def get_aws_credentials_error_message() -> str:
    """Get standard AWS credentials error message.

    Returns
    -------
    str
        Formatted AWS credentials error message
    """
    return (
        "Cloud credentials not found\n\n"
        "Configure your credentials:\n"
        "  aws configure --profile <name>\n\n"
        "Or set environment variables:\n"
        "  export AWS_ACCESS_KEY_ID=...\n"
        "  export AWS_SECRET_ACCESS_KEY=...\n"
        "  export AWS_DEFAULT_REGION=..."
    )
