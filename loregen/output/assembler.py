"""Output document and localisation table for one run."""

from pathlib import Path
from typing import Dict, Iterable, List

from loregen.schema.base import Entry


class OutputAssembler:
    """Accumulates output lines and the key -> display name table.

    The table is an insertion-ordered dict: the first display name seen for
    a key wins, and the localisation file lists keys in the order they were
    first generated, so repeated runs over the same cache produce identical
    files.
    """

    def __init__(self) -> None:
        self.lines: List[str] = []
        self.localisations: Dict[str, str] = {}

    def add_line(self, line: str) -> None:
        self.lines.append(line)

    def add_entries(self, indent: str, entries: Iterable[Entry]) -> int:
        """Write one `KEY,` line per entry and record new keys.

        Returns the number of keys that were new to the table.
        """
        added = 0
        for key, name in entries:
            self.lines.append(f"{indent}{key},")
            if key not in self.localisations:
                self.localisations[key] = name
                added += 1
        return added

    def render_structure(self) -> str:
        return "\n".join(self.lines)

    def render_localisation(self, language: str = "english") -> str:
        out = [f"l_{language}:\n"]
        for key, name in self.localisations.items():
            out.append(f'    {key}:0 "{name}"\n')
        return "".join(out)

    def write(
        self,
        structure_path: Path,
        localisation_path: Path,
        language: str = "english",
        verbose: bool = False,
    ) -> None:
        """Write both output documents, creating parent folders."""
        for path in (structure_path, localisation_path):
            path.parent.mkdir(parents=True, exist_ok=True)
        structure_path.write_text(self.render_structure(), encoding="utf-8")
        localisation_path.write_text(self.render_localisation(language), encoding="utf-8")
        if verbose:
            print(f"[output] [file] Wrote {structure_path.name} ({len(self.lines)} lines)")
            print(f"[output] [file] Wrote {localisation_path.name} ({len(self.localisations)} keys)")
