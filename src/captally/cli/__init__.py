"""Command-line interface for captally."""
