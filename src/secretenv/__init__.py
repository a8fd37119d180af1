"""Materialize .env files from an existing file and AWS Secrets Manager bundles."""

from secretenv.errors import (
    EnvFileIOError,
    MalformedSecretPayloadError,
    SecretEnvError,
    SecretFetchError,
)
from secretenv.pipeline import Failure, Success, materialize

__all__ = [
    "EnvFileIOError",
    "Failure",
    "MalformedSecretPayloadError",
    "SecretEnvError",
    "SecretFetchError",
    "Success",
    "materialize",
]
