"""Turn generated display names into localisation keys."""

from typing import Iterable, List

from loregen.schema.base import Entry


_UNDERSCORED = {" ", "-", "'", "!", '"'}


def sanitize_key(name: str) -> str:
    """Sanitize a display name into a key fragment.

    ASCII letters are upper-cased, ASCII digits kept, everything else becomes
    an underscore: "Thal'rin" -> "THAL_RIN", "Élan" -> "_LAN".
    """
    chars = []
    for ch in name:
        if ch in _UNDERSCORED:
            chars.append("_")
        elif ch.isascii() and ch.isalnum():
            chars.append(ch.upper())
        else:
            chars.append("_")
    return "".join(chars)


def build_key(name: str, prefix: str = "") -> str:
    """Build the final key for a trimmed display name."""
    prefix_clean = prefix.rstrip("_")
    sanitized = sanitize_key(name)
    if not prefix_clean:
        return sanitized
    return f"{prefix_clean}_{sanitized}"


def normalize_entries(names: Iterable[str], prefix: str = "") -> List[Entry]:
    """Map raw names to (key, display name) pairs.

    Blank names are dropped. Order is kept and duplicates are not removed;
    the localisation table keeps the first display name per key.
    """
    entries: List[Entry] = []
    for raw in names:
        name = raw.strip()
        if not name:
            continue
        entries.append((build_key(name, prefix), name))
    return entries
