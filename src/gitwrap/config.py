from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from gitwrap.exceptions import ConfigError
from gitwrap.logging import get_logger

__all__ = [
    "GitwrapConfig",
    "GitConfig",
    "DefaultsConfig",
    "load_config",
    "get_user_config_path",
    "PROJECT_CONFIG_NAME",
]

logger = get_logger(__name__)

PROJECT_CONFIG_NAME = "gitwrap.yaml"


class GitConfig(BaseModel):
    """Settings for the git executable.

    Attributes:
        binary: Name or path of the git executable.
        timeout: Seconds before a git process is terminated. None waits forever.
        env: Extra environment variables passed to every git process.
    """

    binary: str = "git"
    timeout: float | None = Field(default=None, gt=0)
    env: dict[str, str] = Field(default_factory=dict)

    @field_validator("binary")
    @classmethod
    def check_binary_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("git binary cannot be blank")
        return v


class DefaultsConfig(BaseModel):
    """Defaults applied when repository operations omit optional arguments."""

    branch: str = "master"
    max_count: int = Field(default=10, gt=0)


class YamlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from YAML files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                ) from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    message=f"Config file {yaml_file} must contain a mapping",
                    value=loaded,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get value for a specific field from the YAML config."""
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the complete config data."""
        return self._config_data


class GitwrapConfig(BaseSettings):
    """Root configuration object containing all gitwrap settings."""

    model_config = SettingsConfigDict(
        env_prefix="GITWRAP_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    git: GitConfig = Field(default_factory=GitConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    # Explicit project file chosen by load_config(); cwd lookup when None
    project_config_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Init keyword arguments
        2. Environment variables (GITWRAP_*)
        3. Project YAML config (./gitwrap.yaml)
        4. User YAML config (~/.config/gitwrap/config.yaml)
        """
        project_config_path = (
            cls.project_config_path or Path.cwd() / PROJECT_CONFIG_NAME
        )
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/gitwrap/config.yaml
    """
    return Path.home() / ".config" / "gitwrap" / "config.yaml"


def load_config(config_path: Path | None = None) -> GitwrapConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional path to project config file.
            Defaults to ./gitwrap.yaml

    Returns:
        GitwrapConfig instance with merged configuration

    Raises:
        ConfigError: If configuration is invalid, or if an explicit
            config_path does not exist.
    """
    if config_path is not None and not config_path.exists():
        raise ConfigError(
            f"Config file not found: {config_path}",
            value=str(config_path),
        )

    GitwrapConfig.project_config_path = config_path
    try:
        return GitwrapConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        GitwrapConfig.project_config_path = None
