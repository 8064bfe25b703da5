"""CLI entry point: ``preflight scan``, ``report`` and ``generate``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from preflight import __version__
from preflight.config import Settings
from preflight.constants import EXIT_CODES, EXIT_USAGE_ERROR, Outcome
from preflight.logging_config import setup_logging


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point. Exits with the run's outcome code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"preflight {__version__}")
        return

    if args.command not in ("scan", "report", "generate"):
        parser.print_help()
        sys.exit(EXIT_USAGE_ERROR)

    setup_logging(_console_level(args))
    sys.exit(_run(args))


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="preflight",
        description=(
            "FAIR compliance preflight for scientific datasets: "
            "scores a directory before publication."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "dataset_path",
        type=str,
        help="Path to the dataset directory",
    )
    common.add_argument(
        "--no-hash",
        action="store_true",
        help="Skip SHA-256 hashing (still hashed when MANIFEST.txt exists)",
    )
    verbosity = common.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show every issue and per-stage timings",
    )
    verbosity.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Print nothing; only set the exit code",
    )

    sub = parser.add_subparsers(dest="command")
    sub.add_parser(
        "scan",
        parents=[common],
        help="Scan a dataset and print a summary report",
    )
    report = sub.add_parser(
        "report",
        parents=[common],
        help="Scan a dataset and print the full report",
    )
    report.add_argument(
        "--json",
        action="store_true",
        help="Emit the machine-readable JSON report",
    )
    generate = sub.add_parser(
        "generate",
        parents=[common],
        help="Scan a dataset and write missing documentation templates",
    )
    generate.add_argument(
        "--output-dir",
        "-o",
        default=None,
        help="Where to write templates (default: the dataset directory)",
    )
    return parser


def _console_level(args: argparse.Namespace) -> str:
    if args.quiet:
        return "ERROR"
    if args.verbose:
        return "INFO"
    return "WARNING"


def _run(args: argparse.Namespace) -> int:
    """Execute scan/report/generate and return the process exit code."""
    from preflight.generator import GeneratedFile, generate_documentation
    from preflight.report import render_json_report, render_terminal_report
    from preflight.scanner import ScanError
    from preflight.services.preflight_service import run_preflight

    dataset = Path(args.dataset_path).resolve()
    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_USAGE_ERROR
    if args.no_hash:
        settings = settings.model_copy(update={"hash_files": False})

    try:
        result = run_preflight(dataset, settings)
    except ScanError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    generated: list[GeneratedFile] = []
    if args.command == "generate":
        output_dir = (
            Path(args.output_dir).resolve() if args.output_dir else dataset
        )
        try:
            generated = generate_documentation(
                result.records,
                result.analyses,
                output_dir,
                settings.chunk_size_bytes,
            )
        except OSError as exc:
            print(f"Error: could not write documentation: {exc}", file=sys.stderr)
            return EXIT_CODES[Outcome.FAILURE]

    if args.quiet:
        return result.exit_code
    if getattr(args, "json", False):
        print(render_json_report(result))
    else:
        verbose = args.verbose or args.command == "report"
        print(render_terminal_report(result, verbose=verbose))
    if generated:
        print()
        print("GENERATED FILES")
        print("---------------")
        for item in generated:
            state = "created" if item.created else "skipped (already exists)"
            print(f"{item.path}: {state}")
    return result.exit_code


if __name__ == "__main__":
    main()
