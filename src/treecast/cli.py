"""Command line interface for treecast."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import BUILD_VERSION, RunConfig
from .errors import TreecastError
from .scaffold import TreeScaffolder

DESCRIPTION = """\
Generate a file or directory tree from a template tree and a spec.

Template directives (Jinja2 syntax) are evaluated in file and directory names.
Files whose rendered name ends in '.templated' have their contents rendered and
the suffix removed; every other file is copied byte for byte. An entry whose
name renders to blank is skipped together with everything below it.

The spec is a JSON or YAML mapping; pass '-' to read it from stdin.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treecast",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Version: {BUILD_VERSION}",
        help="Print the version string and exit",
    )
    parser.add_argument(
        "--edit",
        action="store_true",
        help="Open the spec in $EDITOR before it is used",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument("template", type=Path, help="Template file or directory")
    parser.add_argument("spec", help="Spec file (JSON or YAML), or '-' for stdin")
    parser.add_argument("output", type=Path, help="Existing output directory")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = RunConfig.from_paths(args.template, args.spec, args.output, edit=args.edit)
        TreeScaffolder().run(config)
    except TreecastError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    return 0


def run() -> None:
    """Console script entry point."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover
    run()
