"""Raw response cache, one text document per leaf scope.

Cache documents hold the service output exactly as streamed, before repair,
so they are not guaranteed to be valid JSON.
"""

import re
from pathlib import Path
from typing import List, Optional


CACHE_EXTENSION = ".txt"


def sanitize_filename(name: str) -> str:
    """Sanitize a string for use as a filename.

    Replaces invalid characters with underscores.
    """
    return re.sub(r'[/\\:*?"<>|]', '_', name)


def get_cache_path(cache_dir: Path, scope_path: List[str]) -> Path:
    """Get the cache file path for a scope path, e.g. ["races", "elves"] -> races_elves.txt."""
    return cache_dir / f"{sanitize_filename('_'.join(scope_path))}{CACHE_EXTENSION}"


def read_raw_cache(cache_path: Path, verbose: bool = False) -> Optional[str]:
    """Read a cached raw buffer. Returns None if missing, unreadable or blank."""
    if not cache_path.is_file():
        return None
    try:
        text = cache_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"[cache] [skip] Ignoring unreadable cache file {cache_path.name}: {e}")
        return None
    if not text.strip():
        if verbose:
            print(f"[cache] [skip] Ignoring blank cache file: {cache_path.name}")
        return None
    return text


def write_raw_cache(cache_path: Path, raw: str, verbose: bool = False) -> None:
    """Write a raw buffer to the cache, creating the directory if needed."""
    cache_path.parent.mkdir(parents=True, exist_ok=True)
    cache_path.write_text(raw, encoding="utf-8")
    if verbose:
        print(f"[cache] [file] Cached {len(raw)} bytes to '{cache_path}'")


def list_cache_files(cache_dir: Path) -> List[Path]:
    """List all cache documents in a directory, sorted by name."""
    if not cache_dir.is_dir():
        return []
    return sorted(p for p in cache_dir.glob(f"*{CACHE_EXTENSION}") if p.is_file())


__all__ = [
    "CACHE_EXTENSION",
    "sanitize_filename",
    "get_cache_path",
    "read_raw_cache",
    "write_raw_cache",
    "list_cache_files",
]
