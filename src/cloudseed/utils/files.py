"""Utility helpers for working with seed source files."""

from __future__ import annotations

from pathlib import Path

from cloudseed.errors import SourceReadError


def resolve_source_path(path: str | Path, base_dir: Path) -> Path:
    """Resolve a document path against the project root unless absolute."""
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    return Path(base_dir) / candidate


def read_source(path: Path) -> str:
    """Read a document source file as UTF-8 text."""
    if not path.exists():
        raise SourceReadError(f"Source file not found: {path}")
    if not path.is_file():
        raise SourceReadError(f"Source is not a regular file: {path}")
    try:
        with path.open(encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"Cannot read source file {path}: {exc}") from exc
