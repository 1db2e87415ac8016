"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (CAPTALLY__SECTION__KEY)
3. Explicit config file (--config), else <corpus>/.captally.yaml
4. Global config (~/.config/captally/config.yaml)
5. Built-in defaults (lowest priority)
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from captally.config.models import (
    AnalysisConfig,
    CaptallyConfig,
    CorpusConfig,
    LoggingConfig,
)
from captally.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/captally/config.yaml").expanduser()
CORPUS_CONFIG_FILENAME = ".captally.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class with instance-based YAML source."""

    class CaptallySettings(BaseSettings):
        """Root config. Env vars: CAPTALLY__LOGGING__LEVEL, CAPTALLY__CORPUS__ROOT, etc."""

        model_config = SettingsConfigDict(
            env_prefix="CAPTALLY__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        corpus: CorpusConfig = CorpusConfig()
        analysis: AnalysisConfig = AnalysisConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return CaptallySettings


CaptallySettings = _make_settings_class({})


def load_config(
    corpus_root: Path | None = None,
    config_path: Path | None = None,
    **kwargs: Any,
) -> CaptallyConfig:
    """Load config: defaults < global < corpus/explicit file < env vars < kwargs.

    Args:
        corpus_root: Corpus directory whose .captally.yaml is read when
                     config_path is not given.
        config_path: Explicit YAML config file. Must exist.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError.parse_error(str(config_path), "file does not exist")
        local_config = _load_yaml(config_path)
    elif corpus_root is not None:
        local_config = _load_yaml(corpus_root / CORPUS_CONFIG_FILENAME)
    else:
        local_config = {}

    yaml_config = _deep_merge(_load_yaml(GLOBAL_CONFIG_PATH), local_config)

    settings_cls = _make_settings_class(yaml_config)
    try:
        return settings_cls(**kwargs)  # type: ignore[return-value]
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
