"""File I/O helpers for loading markup and writing exports."""

from __future__ import annotations

import html
import re
from pathlib import Path

_BLANK_LINES_RE = re.compile(r"\n\s*\n")


def resolve_path(file_path: str | Path) -> Path:
    """Resolve and validate a file path."""
    path = Path(file_path).resolve()
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return path


def get_file_extension(file_path: str | Path) -> str:
    """Get normalized file extension."""
    return Path(file_path).suffix.lower()


def is_html(file_path: str | Path) -> bool:
    return get_file_extension(file_path) in {".html", ".htm", ".xhtml"}


def read_markup(file_path: str | Path) -> str:
    """Read an HTML file as a markup fragment.

    Any other file is read as plain text, one paragraph per blank-line
    separated block.
    """
    path = resolve_path(file_path)
    content = path.read_text(encoding="utf-8")
    if is_html(path):
        return content
    blocks = [block.strip() for block in _BLANK_LINES_RE.split(content)]
    return "".join(f"<p>{html.escape(block, quote=False)}</p>" for block in blocks if block)


def write_export(file_path: str | Path, content: str) -> Path:
    """Write exported content, creating parent directories as needed."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
