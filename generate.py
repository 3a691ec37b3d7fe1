#!/usr/bin/env python3
"""Expand a structure file with generated names and a localisation table.

Reads a lore file and a brace-structured file, fills every themed leaf block
with names from the OpenAI API (cached per block), and writes:
1. the expanded structure file (default: out.txt)
2. the localisation file (default: localisation.txt)

Folder structure:
    my-mod/
        loregen.json        (optional, paths relative to this folder)
        lore.txt
        file_structure.txt
        cache/
            races_elves.txt
        out.txt
        localisation.txt

Usage:
    python generate.py --config my-mod/loregen.json --verbose
    python generate.py --init my-mod
"""

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from loregen.common.utils import _load_env_file
from loregen.common.config import (
    CONFIG_FILENAME,
    RunConfig,
    load_run_config,
    write_run_config,
)
from loregen.common.logging import setup_scope_prefixed_stdout
from loregen.output.generator import GenerationError
from loregen.processing import run_generation


# Load .env on import
_load_env_file()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Fill themed structure blocks with generated names and write a localisation file"
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--config",
        type=str,
        help=f"Path to {CONFIG_FILENAME} (default: built-in defaults in the current directory)",
    )
    group.add_argument(
        "--init",
        type=str,
        metavar="DIR",
        help=f"Write a default {CONFIG_FILENAME} into DIR and exit",
    )
    parser.add_argument(
        "--model",
        default=None,
        help="OpenAI model name (overrides config, which falls back to OPENAI_MODEL)",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Generation attempts per block before giving up (overrides config)",
    )
    parser.add_argument(
        "--no-echo",
        action="store_true",
        help="Do not echo streamed responses",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    if args.init:
        folder = Path(args.init)
        folder.mkdir(parents=True, exist_ok=True)
        config_path = write_run_config(folder, RunConfig())
        print(f"[init] Wrote {config_path}")
        return 0

    try:
        if args.config:
            config_path = Path(args.config)
            config = load_run_config(config_path)
            config_folder = config_path.parent
        else:
            config = RunConfig()
            config_folder = Path.cwd()
        if args.max_attempts is not None:
            config = replace(config, max_attempts=args.max_attempts)
    except (OSError, ValueError) as e:
        print(f"[error] {e}", file=sys.stderr)
        return 2

    setup_scope_prefixed_stdout()

    if args.verbose:
        print(f"\n{'=' * 60}")
        print("🚀 Structure Generation")
        print(f"{'=' * 60}")

    try:
        leaves, keys = run_generation(
            config,
            config_folder,
            model=args.model,
            echo=not args.no_echo,
            verbose=args.verbose,
            debug=args.debug,
        )
    except GenerationError as e:
        print(f"[error] Generation failed: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError, RuntimeError) as e:
        # Missing or undecodable inputs, unwritable folders, missing API key
        print(f"[error] {e}", file=sys.stderr)
        return 2

    if args.verbose:
        print(f"\n{'=' * 60}")
        print("✅ Complete!")
        print(f"   Blocks generated: {leaves}")
        print(f"   Localisation keys: {keys}")
        print(f"{'=' * 60}\n")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
