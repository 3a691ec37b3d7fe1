"""Run configuration for structure generation.

A run folder can have a loregen.json file that specifies:
- lore_file: free-text lore used as generation context (default: lore.txt)
- structure_file: brace-structured input document (default: file_structure.txt)
- output_file / localisation_file: where the two documents are written
- cache_dir: raw service responses, one file per leaf scope (default: cache)
- model, temperature, max_tokens: service settings
- max_attempts: generation attempts per leaf before the run aborts
- language: localisation header label (l_<language>:)

Relative paths are resolved against the folder holding the config file.
"""

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional


CONFIG_FILENAME = "loregen.json"


@dataclass
class RunConfig:
    """Configuration for one generation run."""
    lore_file: str = "lore.txt"
    structure_file: str = "file_structure.txt"
    output_file: str = "out.txt"
    localisation_file: str = "localisation.txt"
    cache_dir: str = "cache"
    model: Optional[str] = None  # Falls back to OPENAI_MODEL
    temperature: float = 0.5
    max_tokens: int = 16384
    max_attempts: int = 5
    language: str = "english"

    def __post_init__(self):
        if not 0.0 <= self.temperature <= 2.0:
            raise ValueError(f"temperature must be between 0 and 2, got {self.temperature}")
        if self.max_tokens < 1:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if not self.language or not self.language.replace("_", "").isalnum():
            raise ValueError(f"language must be alphanumeric, got '{self.language}'")


def load_run_config(config_path: Path) -> RunConfig:
    """Load configuration from a loregen.json file.

    Unknown keys are ignored. Raises FileNotFoundError if the file is
    missing and ValueError if it is not a JSON object or a value is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file does not exist: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Config file is not valid JSON: {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {config_path}")

    defaults = RunConfig()
    return RunConfig(
        lore_file=data.get("lore_file", defaults.lore_file),
        structure_file=data.get("structure_file", defaults.structure_file),
        output_file=data.get("output_file", defaults.output_file),
        localisation_file=data.get("localisation_file", defaults.localisation_file),
        cache_dir=data.get("cache_dir", defaults.cache_dir),
        model=data.get("model", defaults.model),
        temperature=float(data.get("temperature", defaults.temperature)),
        max_tokens=int(data.get("max_tokens", defaults.max_tokens)),
        max_attempts=int(data.get("max_attempts", defaults.max_attempts)),
        language=data.get("language", defaults.language),
    )


def write_run_config(folder: Path, config: RunConfig) -> Path:
    """Write a configuration file to a folder."""
    config_path = folder / CONFIG_FILENAME
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(asdict(config), f, indent=2, ensure_ascii=False)
        f.write("\n")
    return config_path


def resolve_path(config_folder: Path, value: str) -> Path:
    """Resolve a configured path against the config folder."""
    return (config_folder / value).resolve()
