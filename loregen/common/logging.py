"""Logging utilities for structure generation.

All output goes through print() with bracketed tags, e.g.::

    [gen] [cache-hit] Using cached names: cache/elves.txt

When setup_scope_prefixed_stdout() is active, each line is additionally
prefixed with the scope currently being processed.
"""

import sys
from typing import List, Optional


# Module-level state
_LOG_CONTEXT: str = ""

# Emoji shown after known status tags
_TAG_EMOJI = {
    "cache-hit": "🎯",
    "cache-miss": "💥",
    "api": "🤖",
    "file": "💾",
    "repair": "🩹",
}


def set_log_context(path: Optional[List[str]] = None) -> None:
    """Set the scope path used to prefix log lines ([main] when empty)."""
    global _LOG_CONTEXT
    _LOG_CONTEXT = ".".join(path) if path else ""


def log_debug(enabled: bool, message: str) -> None:
    """Print a debug message if debugging is enabled."""
    if enabled:
        print(f"[debug] {message}")


def _emoji_for(line: str) -> str:
    """Return the emoji for the first status tag on a line, if any.

    Only the second bracketed tag is checked ("[gen] [cache-hit] ...").
    """
    if not line.startswith("["):
        return ""
    first_end = line.find("]")
    if first_end == -1:
        return ""
    rest = line[first_end + 1:].lstrip()
    if not rest.startswith("["):
        return ""
    end = rest.find("]")
    if end == -1:
        return ""
    return _TAG_EMOJI.get(rest[1:end], "")


class _ScopePrefixedWriter:
    """Wrapper for stdout that adds the scope context to each output line.

    Streamed fragments written without a newline continue the current line
    and are not prefixed again.
    """

    def __init__(self, wrapped):
        self._wrapped = wrapped
        self._at_line_start = True

    def _prefix(self) -> str:
        context = _LOG_CONTEXT or "main"
        return f"[{context}] "

    def write(self, s: str) -> int:
        if not isinstance(s, str):
            return 0
        parts = s.split("\n")
        for i, part in enumerate(parts):
            if part:
                if self._at_line_start:
                    emoji = _emoji_for(part)
                    if emoji:
                        end = part.find("]", part.find("]") + 1)
                        part = part[:end + 1] + " " + emoji + part[end + 1:]
                    self._wrapped.write(self._prefix() + part)
                else:
                    self._wrapped.write(part)
                self._at_line_start = False
            if i < len(parts) - 1:
                self._wrapped.write("\n")
                self._at_line_start = True
        self.flush()
        return len(s)

    def flush(self) -> None:
        try:
            self._wrapped.flush()
        except (AttributeError, ValueError):
            pass

    def isatty(self) -> bool:
        try:
            return bool(self._wrapped.isatty())
        except (AttributeError, ValueError):
            return False


def setup_scope_prefixed_stdout() -> None:
    """Set up the scope-prefixed stdout writer (idempotent)."""
    if isinstance(sys.stdout, _ScopePrefixedWriter):
        return
    try:
        sys.stdout.reconfigure(line_buffering=True)  # type: ignore
    except AttributeError:
        pass
    sys.stdout = _ScopePrefixedWriter(sys.stdout)  # type: ignore
