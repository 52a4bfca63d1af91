"""CLI entry point: ``stcgen generate``."""

from __future__ import annotations

# Phase 1: singleton logging before any transitive litellm imports
from stcgen.logging_config import setup_logging

setup_logging()

import argparse  # noqa: E402
import asyncio  # noqa: E402
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

from pydantic import ValidationError  # noqa: E402

from stcgen import __version__  # noqa: E402
from stcgen.config import Settings  # noqa: E402
from stcgen.generation.schemas import GenerationResult  # noqa: E402
from stcgen.logging_config import (  # noqa: E402
    cleanup_third_party_handlers,
    set_level,
)

# Phase 2: Clear litellm's duplicate handlers after all imports
cleanup_third_party_handlers()


def main() -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args()

    if args.version:
        print(f"stcgen {__version__}")
        return

    if args.command == "generate":
        _run_generate(args)
    else:
        parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="stcgen",
        description=(
            "Generate stc.yaml structure manifests for a project "
            "and its first-level subdirectories."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    generate = sub.add_parser(
        "generate",
        help="Generate manifests for a directory tree",
    )
    generate.add_argument(
        "root_path",
        type=str,
        help="Project root to document",
    )
    generate.add_argument(
        "--model",
        "-m",
        default=None,
        help=(
            "LiteLLM model identifier "
            "(default: LITELLM_MODEL or settings default)"
        ),
    )
    generate.add_argument(
        "--manifest-name",
        default=None,
        help="Manifest file name (default: stc.yaml)",
    )
    generate.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def _run_generate(args: argparse.Namespace) -> None:
    """Execute the generate command."""
    from stcgen.generation.orchestrator import (
        generate_structure_yaml_recursively,
    )

    root = Path(args.root_path).expanduser().resolve()
    if not root.is_dir():
        print(f"Error: {root} is not a directory", file=sys.stderr)
        sys.exit(1)

    overrides: dict[str, str] = {}
    if args.model:
        overrides["litellm_model"] = args.model
    if args.manifest_name:
        overrides["manifest_filename"] = args.manifest_name
    try:
        settings = Settings(**overrides)  # type: ignore[arg-type]
    except ValidationError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        sys.exit(1)

    set_level("DEBUG" if args.verbose else settings.log_level)
    print(f"Generating manifests for: {root} ({settings.litellm_model})")

    try:
        result = asyncio.run(
            generate_structure_yaml_recursively(root, settings)
        )
    except Exception as exc:  # noqa: BLE001
        print(f"Error: generation failed: {exc}", file=sys.stderr)
        sys.exit(1)

    _print_summary(result)


def _print_summary(result: GenerationResult) -> None:
    """Print the manifest list and usage totals."""
    for manifest in result.manifests:
        print(f"  wrote {manifest}")
    print(f"\n{result.message}")
    print(f"Root manifest: {result.path}")
    print(
        f"Tokens: {result.total_input_tokens} in / "
        f"{result.total_output_tokens} out, "
        f"cost ${result.total_cost:.4f}"
    )


if __name__ == "__main__":
    main()
