"""Configuration models for the secretenv project."""

from pathlib import Path
from typing import Annotated

from pydantic import BeforeValidator, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from secretenv.models.base import BaseConfig


def split_bundle_refs(v: object) -> object:
    """Split a comma separated string of refs, dropping empty entries."""
    if isinstance(v, str):
        v = v.split(",")
    if isinstance(v, list | tuple):
        return [
            s.strip() if isinstance(s, str) else s
            for s in v
            if not isinstance(s, str) or s.strip()
        ]
    return v


BundleRefs = Annotated[list[str], BeforeValidator(split_bundle_refs)]


class MaterializeConfig(BaseConfig):
    """Configuration for materializing one env file."""

    file_path: Path = Field(
        default=Path(".env"),
        description="The env file to read and then overwrite.",
    )
    bundle_refs: BundleRefs = Field(
        default_factory=list,
        description="The secret bundles to overlay, in increasing order of precedence.",
    )
    profile: str | None = Field(
        default=None,
        description="The AWS profile used to fetch secrets; the default credential chain if unset.",
    )
    region: str | None = Field(
        default=None,
        description="The AWS region of the secret store; the profile default if unset.",
    )
    version_stage: str = Field(
        default="AWSCURRENT",
        description="The secret version stage to fetch.",
    )


class EnvironmentSettings(BaseSettings):
    """Settings discovered from the process environment.

    Only the command entry point reads these; the core receives a
    ``MaterializeConfig``.
    """

    model_config = SettingsConfigDict(case_sensitive=True)

    DOTENV_FILE_PATH: str = ".env"
    CI_PROJECT_DIR: str | None = None
    AWS_SECRET_CONFIGS: str = ""
    DOTENV_AWS_PROFILE: str | None = None
    AWS_REGION: str | None = None
    DOTENV_VERSION_STAGE: str = "AWSCURRENT"

    @property
    def target_file_path(self) -> Path:
        """The env file path, prefixed by the CI project directory when set."""
        if self.CI_PROJECT_DIR:
            return Path(f"{self.CI_PROJECT_DIR}/{self.DOTENV_FILE_PATH}")
        return Path(self.DOTENV_FILE_PATH)

    def to_config(self) -> MaterializeConfig:
        """Resolve the environment into an explicit run configuration."""
        return MaterializeConfig(
            file_path=self.target_file_path,
            bundle_refs=self.AWS_SECRET_CONFIGS,
            profile=self.DOTENV_AWS_PROFILE or None,
            region=self.AWS_REGION or None,
            version_stage=self.DOTENV_VERSION_STAGE,
        )
