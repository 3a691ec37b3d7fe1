#!/usr/bin/env python3
"""Clear cached responses to force regeneration.

Usage:
    python scripts/clear_cache.py <cache_dir> [scope_prefix]

Examples:
    # Regenerate everything:
    python scripts/clear_cache.py my-mod/cache

    # Regenerate only blocks under races.elves:
    python scripts/clear_cache.py my-mod/cache races.elves
"""

import sys
from pathlib import Path
from typing import List

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loregen.common.cache import list_cache_files, sanitize_filename


def clear_cache(cache_dir: Path, scope_prefix: str = "") -> List[Path]:
    """Delete cache files, optionally only those under a dotted scope path."""
    stem_prefix = sanitize_filename("_".join(scope_prefix.split("."))) if scope_prefix else ""
    deleted: List[Path] = []
    for path in list_cache_files(cache_dir):
        if stem_prefix and not path.stem.startswith(stem_prefix):
            continue
        path.unlink()
        deleted.append(path)
    return deleted


def main():
    if len(sys.argv) < 2:
        print("Usage: python scripts/clear_cache.py <cache_dir> [scope_prefix]")
        sys.exit(1)

    cache_dir = Path(sys.argv[1])
    scope_prefix = sys.argv[2] if len(sys.argv) > 2 else ""

    if not cache_dir.exists():
        print(f"Error: Cache directory does not exist: {cache_dir}")
        sys.exit(1)

    deleted = clear_cache(cache_dir, scope_prefix)
    print(f"✓ Deleted {len(deleted)} cache files from {cache_dir}")


if __name__ == "__main__":
    main()
