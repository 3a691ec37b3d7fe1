"""Output generation: streamed names, repair, keys and the output documents."""

from loregen.output.assembler import OutputAssembler
from loregen.output.collector import collect_stream
from loregen.output.generator import (
    NameGenerator,
    NamesParseError,
    GenerationError,
    build_names_prompt,
    parse_names,
)
from loregen.output.normalize import sanitize_key, build_key, normalize_entries
from loregen.output.repair import REPAIR_STEPS, repair_buffer

__all__ = [
    # assembler
    "OutputAssembler",
    # collector
    "collect_stream",
    # generator
    "NameGenerator",
    "NamesParseError",
    "GenerationError",
    "build_names_prompt",
    "parse_names",
    # normalize
    "sanitize_key",
    "build_key",
    "normalize_entries",
    # repair
    "REPAIR_STEPS",
    "repair_buffer",
]
