"""
Settings for participant-tracker.

Settings come from an optional ``participant-tracker.yaml`` in the
application root, validated against the bundled JSON schema. The
``LOG_LEVEL`` environment variable overrides the configured log level.
"""

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from jsonschema import ValidationError, validate

from participant_tracker.exceptions import InvalidConfigError
from participant_tracker.util.log import (
    DEFAULT_TIMEZONE,
    LOG_LEVEL_ENV,
    LogConfig,
    LogLevel,
)

ROOT_ENV = "PARTICIPANT_TRACKER_ROOT"
CONFIG_FILENAME = "participant-tracker.yaml"
SCHEMA_FILE = Path(__file__).parent / "schema" / "config.schema.json"


def app_root() -> Path:
    """Return the application root: $PARTICIPANT_TRACKER_ROOT or the working directory."""
    root = os.environ.get(ROOT_ENV)
    return Path(root).expanduser() if root else Path.cwd()


@dataclass
class Settings:
    """Resolved application settings."""

    root: Path = field(default_factory=app_root)
    log_level: str = LogLevel.INFO.name
    timezone: str = DEFAULT_TIMEZONE
    color: bool = True
    cache_file: str = "cache.json"
    env_file: str = ".env"
    token_key: str = "GITHUB_TOKEN"

    @property
    def cache_path(self) -> Path:
        return self.root / self.cache_file

    @property
    def env_path(self) -> Path:
        return self.root / self.env_file

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILENAME

    def log_config(self) -> LogConfig:
        return LogConfig(
            threshold=LogLevel.parse(self.log_level, default=LogLevel.INFO),
            timezone=self.timezone,
            color=self.color,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data.pop("root")
        return data


def _validate_config_schema(config: dict, config_path: Path) -> None:
    """Validate config against the bundled JSON schema."""
    schema = json.loads(SCHEMA_FILE.read_text(encoding="utf-8"))
    try:
        validate(instance=config, schema=schema)
    except ValidationError as e:
        path = ".".join(str(p) for p in e.path)
        details = f"{e.message} (at {path})" if path else e.message
        raise InvalidConfigError(details, str(config_path)) from e


def load_settings(root: str | Path | None = None, environ: dict[str, str] | None = None) -> Settings:
    """
    Load settings for an application root.

    Args:
        root: Application root (default: app_root())
        environ: Environment used for overrides (default: os.environ)

    Returns:
        Settings with file values and environment overrides applied

    Raises:
        InvalidConfigError: If the settings file is not valid YAML or fails validation
    """
    root = Path(root) if root is not None else app_root()
    if environ is None:
        environ = os.environ

    settings = Settings(root=root)
    config_path = settings.config_path

    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidConfigError(f"not valid YAML: {e}", str(config_path)) from e

        # An empty file means defaults
        if config is not None:
            if not isinstance(config, dict):
                raise InvalidConfigError(
                    f"expected a mapping, got {type(config).__name__}", str(config_path)
                )
            _validate_config_schema(config, config_path)
            for key, value in config.items():
                setattr(settings, key, value)

    try:
        ZoneInfo(settings.timezone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidConfigError(f"unknown timezone: {settings.timezone}", str(config_path)) from e

    env_level = environ.get(LOG_LEVEL_ENV)
    if env_level:
        settings.log_level = LogLevel.parse(env_level, default=LogLevel.INFO).name

    return settings


def write_default_settings(root: str | Path) -> Path:
    """Write the default settings file into ``root`` and return its path."""
    settings = Settings(root=Path(root))
    settings.root.mkdir(parents=True, exist_ok=True)
    with open(settings.config_path, "w", encoding="utf-8") as f:
        yaml.dump(settings.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return settings.config_path
