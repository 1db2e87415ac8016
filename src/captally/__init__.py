"""captally - capture analysis for editor extension corpora."""

__version__ = "0.1.0"
