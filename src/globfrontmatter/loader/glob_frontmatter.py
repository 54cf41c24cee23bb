"""Glob loader wrapper that layers external frontmatter and heading titles."""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from globfrontmatter.config import LoaderOptions
from globfrontmatter.ingestion.sources import (
    SourceMap,
    build_authoritative_mapping,
    collect_source_document_paths,
)
from globfrontmatter.loader.glob import GlobLoader
from globfrontmatter.models import (
    DataEntry,
    DataStore,
    LoaderContext,
    ParseData,
    RenderedContent,
    StoredEntry,
)
from globfrontmatter.utils.merge import deep_merge
from globfrontmatter.utils.text import (
    extract_leading_heading,
    split_frontmatter,
    strip_rendered_heading,
)

LOGGER = logging.getLogger(__name__)

GlobFactory = Callable[..., Any]
StoreSet = Callable[[StoredEntry], Any]


def relative_entry_path(root: Path, base_path: Path, file_path: str) -> str:
    """Path of ``file_path`` (relative to ``root``) relative to ``base_path``."""
    relative = os.path.relpath(Path(root) / file_path, base_path)
    return Path(relative).as_posix()


def read_content_body(path: Path) -> str:
    """Read a content file and return everything after its frontmatter fence."""
    text = path.read_text(encoding="utf-8")
    _, body = split_frontmatter(text)
    return body


def inject_heading_title(data: Dict[str, Any], content_path: Path) -> Dict[str, Any]:
    """Add a ``title`` taken from the file's leading heading if none is set.

    Only an absent ``title`` key triggers injection. An unreadable file is
    left alone.
    """
    if "title" in data:
        return data
    try:
        body = read_content_body(content_path)
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.debug("Skipping heading title for %s: %s", content_path, exc)
        return data

    extraction = extract_leading_heading(body)
    if extraction is None:
        return data
    return {**data, "title": extraction.title}


def _heading_level(heading: Any) -> Optional[int]:
    if isinstance(heading, dict):
        return heading.get("level", heading.get("depth"))
    return getattr(heading, "level", None)


def strip_leading_heading(entry: StoredEntry) -> StoredEntry:
    """Remove a leading heading from the body, rendered HTML and heading list.

    The rendered output is only touched when the raw body itself starts with
    a level-1 heading.
    """
    if entry.body is None:
        return entry
    extraction = extract_leading_heading(entry.body)
    if extraction is None:
        return entry

    rendered = entry.rendered
    if rendered is not None:
        metadata = rendered.metadata
        headings = rendered.headings
        if headings and _heading_level(headings[0]) == 1:
            metadata = {**metadata, "headings": headings[1:]}
        rendered = RenderedContent(html=strip_rendered_heading(rendered.html), metadata=metadata)

    return replace(entry, body=extraction.body, rendered=rendered)


def wrap_parse_data(
    parse_data: ParseData, fm_map: SourceMap, *, root: Path, base_path: Path
) -> ParseData:
    """Wrap a metadata-parse callback so external frontmatter is merged in first."""

    async def parse_with_frontmatter(entry: DataEntry) -> Dict[str, Any]:
        if not entry.file_path:
            return await parse_data(entry)

        rel_path = relative_entry_path(root, base_path, entry.file_path)
        external = fm_map.get(rel_path, {})
        # In-file data always wins.
        merged = deep_merge(external, entry.data)
        merged = await asyncio.to_thread(
            inject_heading_title, merged, Path(root) / entry.file_path
        )
        return await parse_data(replace(entry, data=merged))

    return parse_with_frontmatter


def wrap_store_set(store_set: StoreSet) -> StoreSet:
    """Wrap a store write so the leading heading is stripped before storage."""

    def set_without_heading(entry: StoredEntry) -> Any:
        return store_set(strip_leading_heading(entry))

    return set_without_heading


class _StoreProxy:
    """Store that routes ``set`` through a wrapper and forwards everything else."""

    def __init__(self, store: DataStore, set_fn: StoreSet) -> None:
        self._store = store
        self.set = set_fn

    def __getattr__(self, name: str) -> Any:
        return getattr(self._store, name)


class GlobFrontmatterLoader:
    """Loads content through a glob collaborator with layered frontmatter."""

    name = "glob-frontmatter"

    def __init__(self, options: LoaderOptions, glob_factory: GlobFactory = GlobLoader) -> None:
        self.options = options
        self.glob_factory = glob_factory

    async def load(self, context: LoaderContext) -> None:
        root = Path(context.root)
        base_path = self.options.resolve_base_path(root)
        central_file = self.options.resolve_frontmatter_path(root)

        fm_map = build_authoritative_mapping(base_path, central_file)
        LOGGER.info("External frontmatter found for %d files", len(fm_map))

        if context.watcher is not None:
            to_watch = collect_source_document_paths(base_path, central_file)
            if to_watch:
                context.watcher.add([str(path) for path in to_watch])

        wrapped_context = replace(
            context,
            parse_data=wrap_parse_data(
                context.parse_data, fm_map, root=root, base_path=base_path
            ),
            store=_StoreProxy(context.store, wrap_store_set(context.store.set)),
        )
        await self.glob_factory(**self.options.glob_options()).load(wrapped_context)


def glob_frontmatter(
    pattern: Union[str, List[str]],
    *,
    base: str = ".",
    frontmatter: Optional[str] = None,
    glob_factory: GlobFactory = GlobLoader,
    **extra: Any,
) -> GlobFrontmatterLoader:
    """Build a frontmatter-aware glob loader.

    Extra keyword arguments are passed through to ``glob_factory``.
    """
    options = LoaderOptions(pattern=pattern, base=base, frontmatter=frontmatter, extra=extra)
    return GlobFrontmatterLoader(options, glob_factory=glob_factory)
