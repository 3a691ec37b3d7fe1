"""Single-pass parser for brace-structured documents.

The structure file is a tree of blocks:

    # prefix: HUM
    humans = {
        # Human given names
        male = {
        }
    }

Comment lines are consumed and attach metadata to the next block opened:

- `# name = value`  -> literal line inserted right after the opening line
- `# prefix: X`     -> key prefix for generated entries (inherited by children)
- `# anything else` -> theme; an empty themed block is a leaf and gets
                       generated entries before its closing brace

A theme left unclaimed inside an empty block applies to that block when it
closes.

Every other line is copied through unchanged.
"""

from pathlib import Path
from typing import Callable, List, Optional

from loregen.common.cache import get_cache_path
from loregen.common.logging import set_log_context
from loregen.output.assembler import OutputAssembler
from loregen.schema.base import (
    COMMENT_MARKER,
    DATA_MARKERS,
    PREFIX_DIRECTIVE,
    SCOPE_CLOSE,
    SCOPE_OPEN,
    Entry,
    Scope,
)


# generate(theme, prefix, cache_path) -> entries
GenerateFn = Callable[[str, str, Path], List[Entry]]


def scope_key(trimmed: str) -> str:
    """Key of an opening line: text before '=' if present, else the whole line."""
    if "=" in trimmed:
        return trimmed.split("=", 1)[0].strip()
    return trimmed


class StructureParser:
    """Walks the structure file once, driving generation at leaf close."""

    def __init__(
        self,
        generate: GenerateFn,
        assembler: OutputAssembler,
        cache_dir: Path,
        verbose: bool = False,
    ) -> None:
        self.generate = generate
        self.assembler = assembler
        self.cache_dir = cache_dir
        self.verbose = verbose
        self.stack: List[Scope] = []
        self.pending_theme: Optional[str] = None
        self.pending_prefix: Optional[str] = None
        self.pending_kvs: List[str] = []
        # Stack depth at which the pending theme/prefix was read
        self.pending_theme_depth = 0
        self.pending_prefix_depth = 0
        self.leaves_generated = 0

    def parse(self, text: str) -> OutputAssembler:
        """Parse a whole document and return the filled assembler."""
        for raw_line in text.splitlines():
            self.feed_line(raw_line)
        self.finish()
        return self.assembler

    def feed_line(self, raw_line: str) -> None:
        trimmed = raw_line.strip()
        if trimmed.startswith(COMMENT_MARKER):
            self._handle_comment(trimmed[len(COMMENT_MARKER):].strip())
        elif trimmed.endswith(SCOPE_OPEN):
            self._open_scope(raw_line, trimmed)
        elif trimmed == SCOPE_CLOSE:
            self._close_scope(raw_line)
        else:
            self.assembler.add_line(raw_line)
            if self.stack and any(marker in trimmed for marker in DATA_MARKERS):
                self.stack[-1].has_data = True

    def finish(self) -> List[Scope]:
        """Report scopes still open at end of input. They produce no entries."""
        unclosed = list(self.stack)
        for scope in unclosed:
            print(f"[parse] [warning] Scope '{'.'.join(scope.path)}' was never closed")
        set_log_context(None)
        return unclosed

    def _handle_comment(self, comment: str) -> None:
        if not comment:
            return
        if "=" in comment:
            k, v = comment.split("=", 1)
            self.pending_kvs.append(f"{k.strip()} = {v.strip()}")
        elif comment.startswith(PREFIX_DIRECTIVE):
            self.pending_prefix = comment[len(PREFIX_DIRECTIVE):].strip()
            self.pending_prefix_depth = len(self.stack)
        else:
            self.pending_theme = comment
            self.pending_theme_depth = len(self.stack)

    def _open_scope(self, raw_line: str, trimmed: str) -> None:
        key = scope_key(trimmed)
        parent = self.stack[-1] if self.stack else None
        path = (parent.path if parent else []) + [key]

        prefix = self.pending_prefix
        if prefix is None and parent is not None:
            prefix = parent.prefix

        scope = Scope(
            key=key,
            indent=len(raw_line) - len(raw_line.lstrip()),
            path=path,
            theme=self.pending_theme,
            kv_inserts=self.pending_kvs,
            prefix=prefix,
        )
        self.pending_theme = None
        self.pending_prefix = None
        self.pending_kvs = []

        self.assembler.add_line(raw_line)
        for kv in scope.kv_inserts:
            self.assembler.add_line(f"{scope.child_indent}{kv}")
        self.stack.append(scope)
        set_log_context(path)

    def _close_scope(self, raw_line: str) -> None:
        if not self.stack:
            # Unmatched closing brace
            self.assembler.add_line(raw_line)
            return

        scope = self.stack[-1]
        self._claim_trailing_metadata(scope)
        self.stack.pop()
        if scope.is_leaf:
            cache_path = get_cache_path(self.cache_dir, scope.path)
            entries = self.generate(scope.theme, scope.prefix or "", cache_path)
            added = self.assembler.add_entries(scope.child_indent, entries)
            self.leaves_generated += 1
            if self.verbose:
                print(f"[parse] [ok] Inserted {len(entries)} entries ({added} new keys)")
        self.assembler.add_line(raw_line)

        if self.stack:
            parent = self.stack[-1]
            parent.child_count += 1
            parent.has_data = True
            set_log_context(parent.path)
        else:
            set_log_context(None)

    def _claim_trailing_metadata(self, scope: Scope) -> None:
        """Let an empty, unthemed scope take a theme/prefix comment written inside it.

            elves = {
                # Elves
            }
        """
        if scope.theme is not None or scope.child_count or scope.has_data:
            return
        depth = len(self.stack)
        if self.pending_theme is None or self.pending_theme_depth != depth:
            return
        scope.theme = self.pending_theme
        self.pending_theme = None
        if self.pending_prefix is not None and self.pending_prefix_depth == depth:
            scope.prefix = self.pending_prefix
            self.pending_prefix = None
