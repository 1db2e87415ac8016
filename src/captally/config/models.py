"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (CAPTALLY__SECTION__KEY)
3. Explicit --config file, else the corpus-local .captally.yaml
4. Global YAML (~/.config/captally/config.yaml)
5. Built-in defaults (this file)

Examples:
    CAPTALLY__LOGGING__LEVEL=DEBUG
    CAPTALLY__CORPUS__MAX_WORKERS=8
    CAPTALLY__ANALYSIS__DEFAULT_LIMIT=25
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        CAPTALLY__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every file read during a scan.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class CorpusConfig(BaseModel):
    """Where and how the extension corpus is read.

    Env vars:
        CAPTALLY__CORPUS__ROOT: Corpus root directory (default: current directory)
        CAPTALLY__CORPUS__MAX_WORKERS: Parallel extension readers
    """

    root: str | None = Field(
        default=None,
        description="Corpus root. Either a registry checkout with extensions.toml "
        "or a directory whose sub-directories are extensions.",
    )
    registry_file: str = Field(
        default="extensions.toml",
        description="Registry table mapping extension ids to submodule paths.",
    )
    max_workers: int = Field(
        default=1,
        description="Parallel extension readers. Reads are independent; "
        "values above 1 only help on slow filesystems.",
    )
    query_files: list[str] = Field(
        default_factory=lambda: ["highlights.scm"],
        description="Query files per language whose captures count as 'used'.",
    )

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_workers must be >= 1, got {v}")
        return v

    @field_validator("query_files")
    @classmethod
    def validate_query_files(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("query_files must name at least one file")
        return v


class AnalysisConfig(BaseModel):
    """Ranking query defaults.

    Env vars:
        CAPTALLY__ANALYSIS__DEFAULT_LIMIT: Rows returned by ranking queries
    """

    default_limit: int = Field(
        default=10,
        description="Rows returned by ranking queries when --limit is not given. "
        "Zero or a negative value returns every row.",
    )


class CaptallyConfig(BaseModel):
    """Root configuration for captally."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    corpus: CorpusConfig = Field(default_factory=CorpusConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
