"""secretenv CLI."""

import logging
import sys
from pathlib import Path

import click
import yaml

from secretenv.models.configs import EnvironmentSettings, MaterializeConfig


def resolve_config(
    manifest: Path | None = None,
    file_path: Path | None = None,
    secrets: tuple[str, ...] = (),
    profile: str | None = None,
    region: str | None = None,
    version_stage: str | None = None,
) -> MaterializeConfig:
    """Build the run configuration: CLI options over manifest over environment.

    Layering is per field, so a manifest only replaces the keys it sets.
    """
    values = EnvironmentSettings().to_config().model_dump()
    if manifest is not None:
        manifest_config = MaterializeConfig.from_manifest(manifest)
        values |= manifest_config.model_dump(exclude_unset=True)

    overrides: dict[str, object] = {}
    if file_path is not None:
        overrides["file_path"] = file_path
    if secrets:
        overrides["bundle_refs"] = list(secrets)
    if profile is not None:
        overrides["profile"] = profile
    if region is not None:
        overrides["region"] = region
    if version_stage is not None:
        overrides["version_stage"] = version_stage
    return MaterializeConfig.model_validate(values | overrides)


@click.group()
def cli():
    """The secretenv CLI.

    Use this to populate a .env file from AWS Secrets Manager before a process starts.
    """
    pass


@cli.command()
@click.option(
    "--manifest",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="A YAML manifest whose keys are layered over the environment settings.",
    required=False,
)
@click.option(
    "--file-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Override the env file to read and overwrite.",
    required=False,
)
@click.option(
    "--secret",
    "-s",
    "secrets",
    multiple=True,
    help="A secret bundle to overlay; repeat for more, later ones win.",
)
@click.option(
    "--profile",
    type=str,
    help="Override the AWS profile used to fetch secrets.",
    required=False,
)
@click.option(
    "--region",
    type=str,
    help="Override the AWS region of the secret store.",
    required=False,
)
@click.option(
    "--version-stage",
    type=str,
    help="Override the secret version stage to fetch.",
    required=False,
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Fetch and merge, but only list the keys instead of writing the file.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="The logging level.",
)
def generate(
    manifest: Path | None = None,
    file_path: Path | None = None,
    secrets: tuple[str, ...] = (),
    profile: str | None = None,
    region: str | None = None,
    version_stage: str | None = None,
    dry_run: bool = False,
    log_level: str = "INFO",
):
    """Merge secret bundles into the env file."""
    from secretenv.pipeline import Failure, materialize
    from secretenv.secret_store import SecretsManagerFetcher

    logging.basicConfig(level=log_level.upper())
    logger = logging.getLogger(__name__)

    config = resolve_config(
        manifest=manifest,
        file_path=file_path,
        secrets=secrets,
        profile=profile,
        region=region,
        version_stage=version_stage,
    )
    fetcher = SecretsManagerFetcher(
        profile=config.profile,
        region=config.region,
        version_stage=config.version_stage,
    )

    result = materialize(config, fetcher, dry_run=dry_run)
    if isinstance(result, Failure):
        logger.error("%s error: %s", result.kind, result.error)
        sys.exit(1)

    if dry_run:
        print(f"Would write {len(result.lines)} variables to {result.path}:")
        for key in result.env:
            if key:
                print(f"  {key}")
    else:
        print(f"{result.path} generated successfully")


@cli.command()
@click.option(
    "--manifest",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="A YAML manifest whose keys are layered over the environment settings.",
    required=False,
)
def show_config(manifest: Path | None = None):
    """Print the resolved configuration as YAML."""
    config = resolve_config(manifest=manifest)
    print(yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False), end="")


if __name__ == "__main__":
    cli()
