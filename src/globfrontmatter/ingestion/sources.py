"""Loading of external frontmatter sources.

Two kinds of source feed the authoritative mapping:

* a single centralized file, either nested by directory
  (``guides: {installation.md: {...}}``) or keyed by full relative path
  (``guides/installation.md: {...}``), or a mix of both;
* ``frontmatter.yml`` / ``frontmatter.yaml`` / ``frontmatter.json`` documents
  scattered through the content tree, keyed by file name relative to the
  directory they live in.

Per-directory entries are merged over centralized ones.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from globfrontmatter.utils.files import is_content_file, iter_source_documents
from globfrontmatter.utils.merge import deep_merge, strip_blocked_keys

LOGGER = logging.getLogger(__name__)

Record = Dict[str, Any]
SourceMap = Dict[str, Record]


class SourceParseError(ValueError):
    """Raised when a frontmatter source file exists but cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to parse {path}: {reason}")
        self.path = path
        self.reason = reason


def parse_source_document(path: Path) -> Record:
    """Parse a YAML or JSON frontmatter source.

    A missing file yields an empty record. Files ending in ``.json`` are
    parsed as JSON, everything else as YAML.
    """
    path = Path(path)
    if not path.exists():
        return {}

    content = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SourceParseError(path, str(exc)) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SourceParseError(path, f"expected a mapping, got {type(data).__name__}")
    return data


def parse_central_file(path: Path) -> Record:
    """Parse the centralized frontmatter file, or return ``{}`` if it is absent."""
    return parse_source_document(path)


def flatten_to_map(data: Record, prefix: str = "") -> SourceMap:
    """Flatten a nested or flat centralized document into ``path -> record``.

    Keys ending in a content extension are leaves; any other key is a
    directory segment. Values that are not mappings are ignored, and
    blocked merge keys are dropped from every record.
    """
    mapping: SourceMap = {}
    for raw_key, value in data.items():
        if not isinstance(value, dict):
            continue
        key = str(raw_key)
        full_key = f"{prefix}/{key}" if prefix else key
        if is_content_file(key):
            mapping[full_key] = strip_blocked_keys(value)
        else:
            mapping.update(flatten_to_map(value, full_key))
    return mapping


def _relative_dir(base_path: Path, directory: Path) -> str:
    relative = os.path.relpath(directory, base_path)
    if relative == os.curdir:
        return ""
    return Path(relative).as_posix()


def discover_per_directory(base_path: Path) -> SourceMap:
    """Collect entries from every per-directory document under ``base_path``."""
    base_path = Path(base_path)
    mapping: SourceMap = {}
    for document in iter_source_documents(base_path):
        data = parse_source_document(document.path)
        rel_dir = _relative_dir(base_path, document.directory)
        LOGGER.debug("Loaded %d entries from %s", len(data), document.path)
        for key, value in data.items():
            if not isinstance(value, dict):
                continue
            entry_path = f"{rel_dir}/{key}" if rel_dir else str(key)
            mapping[entry_path] = strip_blocked_keys(value)
    return mapping


def build_authoritative_mapping(
    base_path: Path, central_file: Optional[Path] = None
) -> SourceMap:
    """Combine centralized and per-directory sources into one mapping.

    For paths present in both, the per-directory record is deep-merged over
    the centralized one.
    """
    base_path = Path(base_path)
    central_data = parse_central_file(central_file) if central_file else {}
    central_map = flatten_to_map(central_data)

    per_dir = discover_per_directory(base_path) if base_path.exists() else {}

    merged: SourceMap = dict(central_map)
    for key, local_value in per_dir.items():
        central_value = merged.get(key)
        if central_value is not None:
            merged[key] = deep_merge(central_value, local_value)
        else:
            merged[key] = local_value

    LOGGER.debug(
        "Frontmatter map: %d central, %d per-directory, %d total",
        len(central_map),
        len(per_dir),
        len(merged),
    )
    return merged


def collect_source_document_paths(
    base_path: Path, central_file: Optional[Path] = None
) -> List[Path]:
    """List every frontmatter source file that feeds the mapping."""
    paths: List[Path] = []
    if central_file is not None and Path(central_file).exists():
        paths.append(Path(central_file))
    for document in iter_source_documents(Path(base_path)):
        paths.append(document.path)
    return paths
