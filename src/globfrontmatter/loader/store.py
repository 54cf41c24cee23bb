"""In-memory entry store."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from globfrontmatter.models import StoredEntry


class MemoryStore:
    """Keeps the entries produced by one load cycle, keyed by id."""

    def __init__(self) -> None:
        self._entries: Dict[str, StoredEntry] = {}

    def set(self, entry: StoredEntry) -> bool:
        """Store ``entry``; return False if an identical entry was already stored."""
        if self._entries.get(entry.id) == entry:
            return False
        self._entries[entry.id] = entry
        return True

    def get(self, entry_id: str) -> Optional[StoredEntry]:
        return self._entries.get(entry_id)

    def has(self, entry_id: str) -> bool:
        return entry_id in self._entries

    def delete(self, entry_id: str) -> None:
        self._entries.pop(entry_id, None)

    def keys(self) -> List[str]:
        return list(self._entries)

    def entries(self) -> List[StoredEntry]:
        return list(self._entries.values())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[StoredEntry]:
        return iter(self._entries.values())
