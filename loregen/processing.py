"""Run orchestration: inputs -> parse/generate -> output documents."""

from pathlib import Path
from typing import Optional, Tuple

from loregen.common.config import RunConfig, resolve_path
from loregen.common.utils import ensure_dir, read_text_file
from loregen.input.structure import StructureParser
from loregen.output.assembler import OutputAssembler
from loregen.output.generator import NameGenerator


def run_generation(
    config: RunConfig,
    config_folder: Path,
    client=None,
    model: Optional[str] = None,
    echo: bool = True,
    verbose: bool = False,
    debug: bool = False,
) -> Tuple[int, int]:
    """Expand the structure file and write both output documents.

    Setup problems (missing inputs, unwritable folders) raise before any
    generation starts. A GenerationError aborts the run with nothing written.

    Returns (leaves_generated, localisation_keys).
    """
    lore_path = resolve_path(config_folder, config.lore_file)
    structure_path = resolve_path(config_folder, config.structure_file)
    output_path = resolve_path(config_folder, config.output_file)
    localisation_path = resolve_path(config_folder, config.localisation_file)
    cache_dir = resolve_path(config_folder, config.cache_dir)

    lore = read_text_file(lore_path)
    structure = read_text_file(structure_path)
    ensure_dir(cache_dir)
    ensure_dir(output_path.parent)
    ensure_dir(localisation_path.parent)

    if verbose:
        print(f"[run] [info] Lore: {lore_path} ({len(lore)} chars)")
        print(f"[run] [info] Structure: {structure_path}")
        print(f"[run] [info] Cache: {cache_dir}")

    generator = NameGenerator(
        client=client,
        lore=lore,
        model=model or config.model,
        max_attempts=config.max_attempts,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        echo=echo,
        verbose=verbose,
        debug=debug,
    )
    assembler = OutputAssembler()
    parser = StructureParser(generator, assembler, cache_dir, verbose=verbose)
    parser.parse(structure)

    assembler.write(output_path, localisation_path, language=config.language, verbose=verbose)
    if verbose:
        print(f"[run] [info] Service calls: {generator.service_calls}")
    return parser.leaves_generated, len(assembler.localisations)
