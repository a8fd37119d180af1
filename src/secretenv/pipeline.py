"""The load, merge, serialize, and write pipeline."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from secretenv import filestore, merge
from secretenv.errors import ErrorKind, SecretEnvError
from secretenv.filestore import EnvMap
from secretenv.models.configs import MaterializeConfig
from secretenv.secret_store import SecretFetcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Success:
    """A run that completed every stage."""

    path: Path
    env: EnvMap = field(repr=False)
    lines: list[str] = field(repr=False)
    written: bool


@dataclass(frozen=True)
class Failure:
    """A run that stopped at the first failing stage."""

    kind: ErrorKind
    error: SecretEnvError


def materialize(
    config: MaterializeConfig,
    fetch: SecretFetcher,
    *,
    dry_run: bool = False,
) -> Success | Failure:
    """Merge the configured secret bundles into the env file.

    The target file is only rewritten after every bundle has been fetched and
    decoded, so a failed run never leaves a partially merged file behind.

    Args:
        config (MaterializeConfig): The file path and ordered bundle refs.
        fetch (SecretFetcher): Returns the raw payload for a bundle ref.
        dry_run (bool): Skip the final write.

    Returns:
        result (Success | Failure): The merged output, or the tagged error.
    """
    try:
        env = filestore.load(config.file_path)
        merge.run(config.bundle_refs, env, fetch)
        lines = filestore.serialize(env)
        if not dry_run:
            filestore.write(config.file_path, lines)
    except SecretEnvError as e:
        logger.debug("Run failed with %s", e.kind, exc_info=True)
        return Failure(kind=e.kind, error=e)
    return Success(path=config.file_path, env=env, lines=lines, written=not dry_run)
