"""Plain glob discovery of markdown content files.

This is the discovery collaborator the frontmatter loader delegates to by
default: it finds files, parses their own frontmatter, hands each one to
``context.parse_data`` and writes the result through ``context.store``.
It does no caching and no rendering.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath
from typing import Any, Callable, Dict, List, Optional, Union

import yaml

from globfrontmatter.ingestion.sources import SourceParseError
from globfrontmatter.models import DataEntry, LoaderContext, StoredEntry
from globfrontmatter.utils.files import iter_content_paths
from globfrontmatter.utils.text import split_frontmatter

LOGGER = logging.getLogger(__name__)

GenerateId = Callable[..., str]


def parse_frontmatter(raw: Optional[str], path: Path) -> Dict[str, Any]:
    """Parse a file's own frontmatter block into a record."""
    if raw is None:
        return {}
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise SourceParseError(path, str(exc)) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SourceParseError(path, f"frontmatter must be a mapping, got {type(data).__name__}")
    return data


def default_id(entry: str, data: Dict[str, Any]) -> str:
    """Derive an entry id from an explicit ``slug`` or the extension-less path."""
    slug = data.get("slug")
    if isinstance(slug, str) and slug:
        return slug
    return str(PurePosixPath(entry).with_suffix(""))


class GlobLoader:
    """Discover content files under ``root/base`` matching ``pattern``."""

    name = "glob"

    def __init__(
        self,
        pattern: Union[str, List[str]],
        base: str = ".",
        *,
        generate_id: Optional[GenerateId] = None,
        retain_body: bool = True,
    ) -> None:
        self.patterns = [pattern] if isinstance(pattern, str) else list(pattern)
        self.base = base
        self.generate_id = generate_id
        self.retain_body = retain_body

    async def load(self, context: LoaderContext) -> None:
        root = Path(context.root)
        base_path = Path(os.path.normpath(root / self.base))
        count = 0
        for path in iter_content_paths(base_path, self.patterns):
            await self._load_file(context, root, base_path, path)
            count += 1
        LOGGER.info("Loaded %d entries from %s", count, base_path)

    async def _load_file(
        self, context: LoaderContext, root: Path, base_path: Path, path: Path
    ) -> None:
        entry = path.relative_to(base_path).as_posix()
        text = path.read_text(encoding="utf-8")
        raw, body = split_frontmatter(text)
        data = parse_frontmatter(raw, path)

        if self.generate_id is not None:
            entry_id = self.generate_id(entry=entry, base=base_path, data=data)
        else:
            entry_id = default_id(entry, data)

        file_path = Path(os.path.relpath(path, root)).as_posix()
        LOGGER.debug("Processing: %s (%s)", file_path, entry_id)

        parsed = await context.parse_data(DataEntry(id=entry_id, data=data, file_path=file_path))
        context.store.set(
            StoredEntry(
                id=entry_id,
                data=parsed,
                body=body if self.retain_body else None,
                file_path=file_path,
            )
        )
