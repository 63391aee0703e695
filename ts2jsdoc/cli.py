"""Command-line entry point for generating the documentation model."""

import argparse
import logging
from pathlib import Path

from ts2jsdoc.errors import Ts2JsdocError
from ts2jsdoc.generate_and_write import generate_and_write
from ts2jsdoc.load_config import load_config
from ts2jsdoc.load_typed_program import load_typed_program


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    ap = argparse.ArgumentParser(
        description=(
            "Extract a documentation model from a type-checked program dump and "
            "write one file per module."
        ),
    )
    ap.add_argument(
        "program",
        type=Path,
        help="Typed program dump (YAML or JSON) produced by the front end",
    )
    ap.add_argument(
        "--base-path",
        type=Path,
        default=Path(),
        help="Project directory holding package.json (default: current directory)",
    )
    ap.add_argument(
        "--config",
        help="Path to configuration file",
    )
    ap.add_argument(
        "--out",
        help="Output directory, overrides 'out' from the configuration",
    )
    ap.add_argument(
        "--external-if-not-main",
        help="Alias target for symbols referenced from the main module",
    )
    ap.add_argument(
        "--examples",
        help="Directory of per-class example snippets",
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return ap


def main(argv: list[str] | None = None) -> int:
    """Run the generator."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    if args.out:
        config["out"] = args.out
    if args.external_if_not_main:
        config["externalIfNotMain"] = args.external_if_not_main
    if args.examples:
        config["examples"] = args.examples

    if not args.program.is_file():
        msg = f"No program dump found at: {args.program}"
        raise SystemExit(msg)

    base_path = args.base_path.resolve()
    try:
        program = load_typed_program(args.program)
        generate_and_write(base_path, program, config)
    except Ts2JsdocError as e:
        msg = f"Error: {e}"
        raise SystemExit(msg) from e
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
