"""Utility helpers for walking content trees."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

from globfrontmatter.models import SourceDocument

CONTENT_EXTENSIONS = frozenset({".md", ".mdx", ".mdoc"})

# Checked in order; the first one present in a directory wins.
SOURCE_FILENAMES = ("frontmatter.yml", "frontmatter.yaml", "frontmatter.json")

SKIP_DIRS = frozenset({"node_modules", "__pycache__", "site-packages", "venv"})


def is_content_file(name: str) -> bool:
    """Return True when ``name`` ends in a recognized content extension."""
    suffix = Path(name).suffix
    return suffix in CONTENT_EXTENSIONS


def _skip_directory(path: Path) -> bool:
    return path.name.startswith(".") or path.name in SKIP_DIRS


def iter_source_documents(directory: Path) -> Iterator[SourceDocument]:
    """Yield per-directory metadata documents under ``directory``, depth first.

    At most one document is yielded per directory. Hidden and vendor
    directories are not descended into, nor are symlinked
    directories. A directory that cannot be listed yields nothing further.
    """
    directory = Path(directory)
    for name in SOURCE_FILENAMES:
        candidate = directory / name
        if candidate.is_file():
            yield SourceDocument(directory=directory, path=candidate)
            break

    try:
        children = sorted(directory.iterdir())
    except OSError:
        return

    for child in children:
        if child.is_symlink() or not child.is_dir() or _skip_directory(child):
            continue
        yield from iter_source_documents(child)


def iter_content_paths(base: Path, patterns: Iterable[str]) -> Iterator[Path]:
    """Yield content files under ``base`` matching any of ``patterns``, once each."""
    if not base.is_dir():
        return
    seen: set[Path] = set()
    for pattern in patterns:
        for item in sorted(base.glob(pattern)):
            if item in seen or not item.is_file() or not is_content_file(item.name):
                continue
            if any(_skip_directory(part) for part in item.relative_to(base).parents if part.name):
                continue
            seen.add(item)
            yield item

