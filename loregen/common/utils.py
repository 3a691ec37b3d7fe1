"""Common utility functions shared across the library."""

import os
from pathlib import Path


_DEF_ENV_LOADED = False


def _load_env_file() -> None:
    """Load environment variables from .env file if present.

    Existing environment variables win over values from the file.
    """
    global _DEF_ENV_LOADED
    if _DEF_ENV_LOADED:
        return
    _DEF_ENV_LOADED = True
    # Look in the working directory first, then the project root
    here = Path(__file__).parent
    candidates = [
        Path.cwd() / ".env",
        here.parent.parent / ".env",
    ]
    for p in candidates:
        if not p.exists():
            continue
        try:
            text = p.read_text(encoding="utf-8", errors="ignore")
        except OSError:
            continue
        for raw in text.splitlines():
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("export "):
                line = line[len("export "):].strip()
            if "=" not in line:
                continue
            k, v = line.split("=", 1)
            key = k.strip()
            val = v.strip().strip('"').strip("'")
            if key and os.environ.get(key) is None:
                os.environ[key] = val


def ensure_dir(path: Path) -> None:
    """Create directory if it doesn't exist."""
    path.mkdir(parents=True, exist_ok=True)


def read_text_file(path: Path) -> str:
    """Read a required input document.

    Raises FileNotFoundError naming the path when it is missing, and
    ValueError when it is not UTF-8 text.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Input file does not exist: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"Input file is not valid UTF-8: {path}") from e
