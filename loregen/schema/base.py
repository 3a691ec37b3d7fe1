"""Structure-file format constants and the scope data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


# File-format constants
COMMENT_MARKER: str = "#"
SCOPE_OPEN: str = "{"
SCOPE_CLOSE: str = "}"
PREFIX_DIRECTIVE: str = "prefix:"
CHILD_INDENT: int = 4
DATA_MARKERS: Tuple[str, ...] = ("=", ",")

# A generated (key, display name) pair
Entry = Tuple[str, str]


@dataclass
class Scope:
    """One open brace-delimited block of the structure file."""
    key: str
    indent: int
    path: List[str]
    theme: Optional[str] = None
    kv_inserts: List[str] = field(default_factory=list)
    prefix: Optional[str] = None
    has_data: bool = False  # Literal content or a closed child
    child_count: int = 0

    @property
    def is_leaf(self) -> bool:
        """A themed scope with no children and no literal content."""
        return self.child_count == 0 and not self.has_data and self.theme is not None

    @property
    def child_indent(self) -> str:
        return " " * (self.indent + CHILD_INDENT)


__all__ = [
    "COMMENT_MARKER",
    "SCOPE_OPEN",
    "SCOPE_CLOSE",
    "PREFIX_DIRECTIVE",
    "CHILD_INDENT",
    "DATA_MARKERS",
    "Entry",
    "Scope",
]
