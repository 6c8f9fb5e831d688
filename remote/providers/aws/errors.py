"""Translation of boto3/botocore failures into provider exceptions."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    CredentialRetrievalError,
    HTTPClientError,
    NoCredentialsError,
    NoRegionError,
    PartialCredentialsError,
    ProfileNotFound,
    SSOError,
    TokenRetrievalError,
)
from botocore.exceptions import ConnectionError as BotoConnectionError

from remote.providers.exceptions import (
    ProviderAPIError,
    ProviderConnectionError,
    ProviderCredentialsError,
    ProviderError,
)

logger = logging.getLogger(__name__)

CREDENTIAL_ERROR_CODES = frozenset(
    (
        "AuthFailure",
        "ExpiredToken",
        "ExpiredTokenException",
        "InvalidClientTokenId",
        "RequestExpired",
    )
)


@contextmanager
def handle_aws_errors(operation: str | None = None) -> Generator[None, None, None]:
    """Convert botocore exceptions raised in the block into provider errors.

    Parameters
    ----------
    operation : str | None
        EC2 operation name, attached to API errors and used in log messages

    Raises
    ------
    ProviderCredentialsError
        For missing, partial, expired or unknown credentials, failed
        credential or SSO token retrieval, and a missing region
    ProviderConnectionError
        For endpoint connection failures, SSL/proxy errors, dropped
        connections and timeouts
    ProviderAPIError
        For every other error response returned by AWS
    ProviderError
        For any remaining botocore failure
    """
    try:
        yield
    except ProfileNotFound as e:
        raise ProviderCredentialsError(f"AWS profile not found: {e}") from e
    except (NoCredentialsError, PartialCredentialsError) as e:
        raise ProviderCredentialsError(str(e)) from e
    except (TokenRetrievalError, SSOError, CredentialRetrievalError) as e:
        logger.debug("Credential retrieval failed during %s: %s", operation, e)
        raise ProviderCredentialsError(str(e)) from e
    except NoRegionError as e:
        raise ProviderCredentialsError(
            "No AWS region configured. Set a region for the profile "
            "or export AWS_DEFAULT_REGION"
        ) from e
    except (BotoConnectionError, HTTPClientError) as e:
        logger.debug("Connection failure during %s: %s", operation, e)
        raise ProviderConnectionError(str(e)) from e
    except ClientError as e:
        error = e.response.get("Error", {})
        error_code = error.get("Code")
        message = error.get("Message") or str(e)
        logger.debug("AWS %s failed with %s: %s", operation, error_code, message)

        if error_code in CREDENTIAL_ERROR_CODES:
            raise ProviderCredentialsError(message) from e

        raise ProviderAPIError(
            str(e), error_code=error_code, operation=operation
        ) from e
    except BotoCoreError as e:
        logger.debug("AWS %s failed: %s", operation, e)
        raise ProviderError(str(e)) from e
