"""Config module exports."""

from captally.config.loader import CaptallySettings, load_config
from captally.config.models import (
    AnalysisConfig,
    CaptallyConfig,
    CorpusConfig,
    LoggingConfig,
)

__all__ = [
    "load_config",
    "CaptallyConfig",
    "CaptallySettings",
    "CorpusConfig",
    "AnalysisConfig",
    "LoggingConfig",
]
