"""
Command Line Interface
======================

Usage:
    seri [INPUT] [-o OUTPUT] [-f {tikz,html}] [-t TEMPLATE] [--standalone]
         [--strict] [--sort] [--check]

Reads Seri source from INPUT (or stdin when INPUT is "-" or missing) and
writes the compiled schedule to OUTPUT (or stdout). Exit status is 0 on
success, 1 when the document does not compile and 2 on I/O problems.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from seri import __version__
from seri.config.logging import get_logger, setup_logging
from seri.core.compiler import build_options, check_schedule, compile_source
from seri.core.errors import SeriError
from seri.models.schemas import OutputFormat

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_COMPILE_ERROR = 1
EXIT_IO_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seri",
        description="Compile Seri schedule documents to TikZ or HTML timetables",
    )
    parser.add_argument("--version", action="version", version=f"seri {__version__}")
    parser.add_argument(
        "input", nargs="?", default="-", help="Source file, '-' or omitted for stdin"
    )
    parser.add_argument("-o", "--output", default=None, help="Output file (default: stdout)")
    parser.add_argument(
        "-f",
        "--format",
        dest="output_format",
        choices=[fmt.value for fmt in OutputFormat],
        default=None,
        help="Output format (default: tikz, or SERI_DEFAULT_FORMAT)",
    )
    parser.add_argument(
        "-t", "--template", default=None, help="Template file with a {{ CALENDAR }} insertion point"
    )
    parser.add_argument(
        "--standalone",
        action="store_true",
        default=None,
        help="Wrap the output in the bundled template when no template is given",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Reject sessions without a start time or duration",
    )
    parser.add_argument(
        "--sort",
        dest="sort_sessions",
        action="store_true",
        default=None,
        help="Sort sessions within each day by start time before checking",
    )
    parser.add_argument(
        "--check", action="store_true", help="Validate only, do not render anything"
    )
    return parser


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line driver and return its exit status."""
    args = create_parser().parse_args(argv)
    setup_logging(driver_loggers=())

    try:
        source = _read_text(args.input)
        template = _read_text(args.template) if args.template else None
    except (OSError, UnicodeDecodeError) as e:
        print(f"seri: cannot read input: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    try:
        options = build_options(
            output_format=args.output_format,
            strict=args.strict,
            sort_sessions=args.sort_sessions,
            template=template,
            standalone=args.standalone,
        )
    except OSError as e:
        print(f"seri: cannot load bundled template: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    name = "<stdin>" if args.input == "-" else args.input

    if args.check:
        try:
            schedule = check_schedule(source, options)
        except SeriError as e:
            print(f"{name}: {e.stage.value} error: {e}", file=sys.stderr)
            return EXIT_COMPILE_ERROR
        print(
            f"{name}: ok ({len(schedule.days)} days, {schedule.session_count} sessions)",
            file=sys.stderr,
        )
        return EXIT_OK

    result = compile_source(source, options)
    if not result.success:
        assert result.diagnostic is not None
        print(
            f"{name}: {result.diagnostic.stage.value} error: {result.diagnostic.message}",
            file=sys.stderr,
        )
        return EXIT_COMPILE_ERROR

    output = result.output or ""
    try:
        if args.output:
            Path(args.output).write_text(output, encoding="utf-8")
        else:
            sys.stdout.write(output)
    except OSError as e:
        print(f"seri: cannot write output: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    logger.debug("Output written", destination=args.output or "<stdout>")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
