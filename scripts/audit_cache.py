#!/usr/bin/env python3
"""Audit cached generation responses.

Runs the repair pipeline and the names parser over every cached raw
response and reports which ones still fail to parse.

Usage:
    python scripts/audit_cache.py [cache_dir] [--fix]

    --fix: Delete unparsable cache files so the next run regenerates them
"""

import sys
from pathlib import Path
from typing import List, Tuple

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loregen.common.cache import list_cache_files
from loregen.output.generator import NamesParseError, parse_names
from loregen.output.repair import repair_buffer


def audit_cache_dir(cache_dir: Path) -> Tuple[List[Tuple[Path, int]], List[Tuple[Path, str]]]:
    """Return (ok, broken) lists: (path, name count) and (path, reason)."""
    ok: List[Tuple[Path, int]] = []
    broken: List[Tuple[Path, str]] = []
    for path in list_cache_files(cache_dir):
        try:
            raw = path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            broken.append((path, "not valid UTF-8"))
            continue
        if not raw.strip():
            broken.append((path, "empty"))
            continue
        try:
            names = parse_names(repair_buffer(raw))
        except NamesParseError as e:
            broken.append((path, str(e)))
            continue
        ok.append((path, sum(1 for n in names if n.strip())))
    return ok, broken


def main(argv: List[str]) -> int:
    args = [a for a in argv if not a.startswith("--")]
    fix = "--fix" in argv
    cache_dir = Path(args[0]) if args else Path("cache")

    if not cache_dir.is_dir():
        print(f"Error: Cache directory does not exist: {cache_dir}")
        return 1

    ok, broken = audit_cache_dir(cache_dir)

    for path, count in ok:
        print(f"  ✓ {path.name}: {count} names")
    for path, reason in broken:
        print(f"  ✗ {path.name}: {reason}")

    print(f"\n{len(ok)} parsable, {len(broken)} broken in {cache_dir}")

    if fix and broken:
        for path, _ in broken:
            path.unlink()
        print(f"✓ Deleted {len(broken)} broken cache files")

    return 0 if not broken or fix else 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
