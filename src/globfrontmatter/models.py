"""Core globfrontmatter data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol


@dataclass(slots=True)
class HeadingExtraction:
    """Plain-text title of a leading heading and the body left after removing it."""

    title: str
    body: str


@dataclass(slots=True)
class Heading:
    """One entry of the structural heading list produced by a renderer."""

    level: int
    slug: str
    text: str


@dataclass(slots=True)
class RenderedContent:
    html: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def headings(self) -> Optional[List[Heading]]:
        headings = self.metadata.get("headings")
        return headings if isinstance(headings, list) else None


@dataclass(slots=True)
class DataEntry:
    """Payload of a metadata-parse call made by a discovery collaborator."""

    id: str
    data: Dict[str, Any]
    file_path: Optional[str] = None


@dataclass(slots=True)
class StoredEntry:
    """Payload of a finalize call made before an entry is written to storage."""

    id: str
    data: Dict[str, Any]
    body: Optional[str] = None
    rendered: Optional[RenderedContent] = None
    file_path: Optional[str] = None


@dataclass(slots=True)
class SourceDocument:
    """A per-directory metadata document and the directory it describes."""

    directory: Path
    path: Path


class DataStore(Protocol):
    def set(self, entry: StoredEntry) -> bool: ...


class Watcher(Protocol):
    def add(self, paths: List[str]) -> None: ...


ParseData = Callable[[DataEntry], Awaitable[Dict[str, Any]]]


@dataclass(slots=True)
class LoaderContext:
    """Everything a loader needs from the host pipeline for one load cycle."""

    root: Path
    parse_data: ParseData
    store: DataStore
    watcher: Optional[Watcher] = None
