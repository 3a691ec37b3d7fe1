"""Structure-file format definitions."""

from loregen.schema.base import (
    COMMENT_MARKER,
    SCOPE_OPEN,
    SCOPE_CLOSE,
    PREFIX_DIRECTIVE,
    CHILD_INDENT,
    DATA_MARKERS,
    Entry,
    Scope,
)

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
