"""Retrieval of secret bundles from AWS Secrets Manager."""

import logging
from collections.abc import Callable
from functools import cached_property
from typing import TYPE_CHECKING

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from secretenv.errors import SecretFetchError

if TYPE_CHECKING:
    from mypy_boto3_secretsmanager import SecretsManagerClient
else:
    SecretsManagerClient = object

logger = logging.getLogger(__name__)

SecretFetcher = Callable[[str], str | bytes]

KNOWN_ERROR_CODES: dict[str, str] = {
    "DecryptionFailure": "Secrets Manager can't decrypt the protected secret text using the provided KMS key.",
    "InternalServiceError": "An error occurred on the server side.",
    "InvalidParameterException": "A parameter value is invalid.",
    "InvalidRequestException": "A parameter value is not valid for the current state of the resource.",
    "ResourceNotFoundException": "The requested secret could not be found.",
}


class SecretsManagerFetcher:
    """Fetch secret payloads by name from AWS Secrets Manager."""

    def __init__(
        self,
        profile: str | None = None,
        region: str | None = None,
        version_stage: str = "AWSCURRENT",
        client: SecretsManagerClient | None = None,
    ):
        """Create a fetcher.

        Args:
            profile (str | None): The AWS profile to use, or the default chain.
            region (str | None): The AWS region, or the profile/environment default.
            version_stage (str): The secret version stage to read.
            client (SecretsManagerClient | None): A pre-built client to use instead of
                creating one from a session.
        """
        self.profile = profile
        self.region = region
        self.version_stage = version_stage
        if client is not None:
            self.__dict__["client"] = client

    @cached_property
    def client(self) -> SecretsManagerClient:
        """The Secrets Manager client, created on first use."""
        logger.info("Using AWS profile %s", self.profile or "<default>")
        session = boto3.Session(profile_name=self.profile, region_name=self.region)
        return session.client("secretsmanager")

    def __call__(self, ref: str) -> str | bytes:
        """Return the string or binary payload stored under ``ref``."""
        try:
            result = self.client.get_secret_value(
                SecretId=ref, VersionStage=self.version_stage
            )
        except ClientError as e:
            error = e.response.get("Error", {})
            code = error.get("Code", "Unknown")
            message = error.get("Message", str(e))
            if code in KNOWN_ERROR_CODES:
                logger.error("%s: %s %s", code, KNOWN_ERROR_CODES[code], message)
            else:
                logger.error("%s: %s", code, message)
            raise SecretFetchError(ref, code, message) from e
        except BotoCoreError as e:
            logger.error("Transport error fetching %s: %s", ref, e)
            raise SecretFetchError(ref, "TransportError", str(e)) from e

        # Depending on whether the secret is a string or binary, one of these fields will be populated.
        if "SecretString" in result:
            return result["SecretString"]
        if "SecretBinary" in result:
            return result["SecretBinary"]
        msg = "response carried neither SecretString nor SecretBinary"
        raise SecretFetchError(ref, "EmptySecret", msg)
