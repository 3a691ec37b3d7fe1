"""Input processing: parsing the brace-structured document."""

from loregen.input.structure import (
    StructureParser,
    scope_key,
)

__all__ = [
    "StructureParser",
    "scope_key",
]
