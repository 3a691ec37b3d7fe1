"""Best-effort repair of streamed JSON responses.

A streamed answer can stop anywhere: mid-string, right after a list item,
or before the closing brackets. The steps below run in order over the raw
buffer to give json.loads a fair chance. They balance structure by counting
characters and do not validate the grammar.

Each step is idempotent and can be tested on its own.
"""

import re
from typing import Callable, Tuple


_TRAILING_EMPTY_STRINGS = re.compile(r'(?:\s*,\s*"")+\s*$')
_LEADING_SEPARATOR = re.compile(r'^(\s*),[\s,]*')


def strip_separator_after_last_quote(text: str) -> str:
    """Remove a comma that directly follows the last quote.

    '{"names": ["A", "B",' -> '{"names": ["A", "B"'
    """
    last_quote = text.rfind('"')
    if last_quote == -1:
        return text
    head, tail = text[:last_quote + 1], text[last_quote + 1:]
    return head + _LEADING_SEPARATOR.sub(r'\1', tail, count=1)


def drop_preamble(text: str) -> str:
    """Drop everything before the first opening brace."""
    pos = text.find("{")
    return text[pos:] if pos > 0 else text


def close_open_string(text: str) -> str:
    """Close a truncated string literal (odd number of quotes)."""
    if text.count('"') % 2 != 0:
        return text + '"'
    return text


def drop_trailing_empty_string(text: str) -> str:
    """Remove dangling empty-string elements at the end, e.g. '["A", ""' -> '["A"'."""
    trimmed = text.rstrip()
    if not trimmed.endswith('""'):
        return text
    return _TRAILING_EMPTY_STRINGS.sub("", trimmed)


def balance_brackets(text: str) -> str:
    """Append the missing closing array brackets, then object braces."""
    missing_brackets = text.count("[") - text.count("]")
    if missing_brackets > 0:
        text += "]" * missing_brackets
    missing_braces = text.count("{") - text.count("}")
    if missing_braces > 0:
        text += "}" * missing_braces
    return text


# Order matters: dropping an empty element can expose a new trailing comma
REPAIR_STEPS: Tuple[Callable[[str], str], ...] = (
    strip_separator_after_last_quote,
    drop_preamble,
    close_open_string,
    drop_trailing_empty_string,
    strip_separator_after_last_quote,
    balance_brackets,
)


def repair_buffer(text: str, verbose: bool = False) -> str:
    """Run every repair step over a raw buffer."""
    fixed = text
    for step in REPAIR_STEPS:
        fixed = step(fixed)
    if verbose and fixed != text:
        print(f"[repair] [repair] Adjusted buffer ({len(text)} -> {len(fixed)} chars)")
    return fixed


__all__ = [
    "strip_separator_after_last_quote",
    "drop_preamble",
    "close_open_string",
    "drop_trailing_empty_string",
    "balance_brackets",
    "REPAIR_STEPS",
    "repair_buffer",
]
