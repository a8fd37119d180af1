"""Error taxonomy for secretenv.

Every error is fatal for a run. The ``kind`` attribute lets callers branch on
the failure category without parsing messages.
"""

from pathlib import Path
from typing import ClassVar, Literal

ErrorKind = Literal["EnvFileIO", "SecretFetch", "MalformedSecretPayload"]


class SecretEnvError(Exception):
    """Base exception for all secretenv errors."""

    kind: ClassVar[ErrorKind]


class EnvFileIOError(SecretEnvError):
    """The env file could not be created, opened, read, or written."""

    kind: ClassVar[ErrorKind] = "EnvFileIO"

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")


class SecretFetchError(SecretEnvError):
    """The secret store could not return a bundle."""

    kind: ClassVar[ErrorKind] = "SecretFetch"

    def __init__(self, ref: str, code: str, message: str) -> None:
        self.ref = ref
        self.code = code
        super().__init__(f"{ref}: [{code}] {message}")


class MalformedSecretPayloadError(SecretEnvError):
    """A fetched bundle is not a flat JSON object of string values."""

    kind: ClassVar[ErrorKind] = "MalformedSecretPayload"

    def __init__(self, ref: str, message: str) -> None:
        self.ref = ref
        super().__init__(f"{ref or '<bundle>'}: {message}")
