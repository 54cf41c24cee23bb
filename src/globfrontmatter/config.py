"""Loader configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

DEFAULT_BASE = "."


@dataclass(slots=True)
class LoaderOptions:
    """Options for the frontmatter-aware glob loader.

    ``pattern``, ``base`` and everything in ``extra`` are handed to the
    discovery collaborator untouched. ``frontmatter`` names the optional
    centralized source file, relative to the project root.
    """

    pattern: Union[str, List[str]]
    base: str = DEFAULT_BASE
    frontmatter: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.base:
            self.base = DEFAULT_BASE
        self.base = str(self.base)

    @property
    def patterns(self) -> List[str]:
        if isinstance(self.pattern, str):
            return [self.pattern]
        return list(self.pattern)

    @property
    def normalized_base(self) -> str:
        return os.path.normpath(self.base)

    def resolve_base_path(self, root: Path) -> Path:
        base = Path(self.normalized_base)
        if base.is_absolute():
            return base
        return Path(os.path.normpath(Path(root) / base))

    def resolve_frontmatter_path(self, root: Path) -> Optional[Path]:
        if self.frontmatter is None:
            return None
        path = Path(self.frontmatter)
        if path.is_absolute():
            return path
        return Path(os.path.normpath(Path(root) / path))

    def glob_options(self) -> Dict[str, Any]:
        """Options for the discovery collaborator, without ``frontmatter``."""
        options: Dict[str, Any] = {"pattern": self.pattern, "base": self.base}
        options.update(self.extra)
        return options
