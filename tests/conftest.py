"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages, and
provides helpers that lay out small extension corpora on disk.
"""

import json
import logging
import os
import sys
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local captally package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

import structlog  # noqa: E402

from captally.config.constants import THEME_SCHEMA_V1_URL, THEME_SCHEMA_V2_URL  # noqa: E402


def theme_family(
    name: str,
    captures: list[str],
    *,
    schema: str | None = THEME_SCHEMA_V2_URL,
    variants: tuple[str, ...] = ("Dark",),
) -> dict[str, Any]:
    """Build a theme family payload styling the given captures."""
    family: dict[str, Any] = {
        "name": name,
        "author": "Test Author",
        "themes": [
            {
                "name": f"{name} {variant}",
                "appearance": variant.lower(),
                "style": {"syntax": {c: {"color": "#ff0000ff"} for c in captures}},
            }
            for variant in variants
        ],
    }
    if schema is not None:
        family["$schema"] = schema
    return family


def highlights(*captures: str) -> str:
    """Build a highlights.scm using each capture once."""
    return "\n".join(f'"kw{i}" @{capture}' for i, capture in enumerate(captures)) + "\n"


class CorpusWriter:
    """Writes extensions into a flat-layout corpus directory."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def manifest(
        self,
        ext_id: str,
        *,
        fmt: str = "toml",
        repository: str | None = "https://github.com/example/ext",
        raw: str | None = None,
        **fields: Any,
    ) -> Path:
        ext_dir = self.root / ext_id
        ext_dir.mkdir(parents=True, exist_ok=True)
        if raw is not None:
            path = ext_dir / ("extension.json" if fmt == "json" else "extension.toml")
            path.write_text(raw)
            return ext_dir

        data: dict[str, Any] = {"id": ext_id, "name": ext_id.title(), "version": "0.1.0"}
        if repository is not None:
            data["repository"] = repository
        data.update(fields)
        if fmt == "json":
            (ext_dir / "extension.json").write_text(json.dumps(data))
        else:
            lines = [f"{key} = {json.dumps(value)}" for key, value in data.items()]
            (ext_dir / "extension.toml").write_text("\n".join(lines) + "\n")
        return ext_dir

    def language(
        self,
        ext_id: str,
        captures: list[str],
        *,
        language_name: str | None = None,
        **manifest: Any,
    ) -> Path:
        ext_dir = self.manifest(ext_id, **manifest)
        lang_dir = ext_dir / "languages" / (language_name or ext_id).lower()
        lang_dir.mkdir(parents=True, exist_ok=True)
        (lang_dir / "config.toml").write_text(f'name = "{language_name or ext_id.title()}"\n')
        (lang_dir / "highlights.scm").write_text(highlights(*captures))
        return ext_dir

    def theme(
        self,
        ext_id: str,
        captures: list[str],
        *,
        schema: str | None = THEME_SCHEMA_V2_URL,
        **manifest: Any,
    ) -> Path:
        ext_dir = self.manifest(ext_id, **manifest)
        themes_dir = ext_dir / "themes"
        themes_dir.mkdir(parents=True, exist_ok=True)
        payload = theme_family(ext_id, captures, schema=schema)
        (themes_dir / f"{ext_id}.json").write_text(json.dumps(payload))
        return ext_dir


@pytest.fixture
def corpus(tmp_path: Path) -> CorpusWriter:
    """Empty flat-layout corpus under tmp_path/corpus."""
    return CorpusWriter(tmp_path / "corpus")


@pytest.fixture
def scenario_corpus(corpus: CorpusWriter) -> CorpusWriter:
    """Two languages and two themes.

    L1 uses keyword and string, L2 uses keyword. T1 styles keyword,
    T2 styles keyword, string and comment.
    """
    corpus.language("l1", ["keyword", "string"])
    corpus.language("l2", ["keyword"])
    corpus.theme("t1", ["keyword"])
    corpus.theme("t2", ["keyword", "string", "comment"], schema=THEME_SCHEMA_V1_URL)
    return corpus


@pytest.fixture(autouse=True)
def isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Keep user config and CAPTALLY env vars out of every test."""
    import captally.config.loader as loader

    for key in [k for k in os.environ if k.startswith("CAPTALLY")]:
        monkeypatch.delenv(key)
    monkeypatch.setattr(loader, "GLOBAL_CONFIG_PATH", tmp_path / "no-global-config.yaml")
    yield
    structlog.reset_defaults()
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
