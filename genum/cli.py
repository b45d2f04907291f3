"""Command-line interface for genum."""

import argparse
import logging
import os
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from genum.core.config import config
from genum.core.error_handling import GenumError
from genum.main import Genum

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="genum",
        description="Generate String/Parse helpers for Go enums from //go:generate genum directives",
        allow_abbrev=False,
    )
    parser.add_argument("--dir", default=".", help="Directory of the Go package (default: current directory)")
    parser.add_argument(
        "--file",
        default=None,
        help="Go file holding the directives (default: $%s)" % config.get("loader", "source_env_var"),
    )
    parser.add_argument("--dry-run", action="store_true", help="Print the generated code instead of writing it")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--quiet", action="store_true", help="Reduce logs to errors only")
    return parser


def _log_level(args: argparse.Namespace) -> int:
    if args.debug:
        return logging.DEBUG
    if args.quiet:
        return logging.ERROR
    if args.verbose:
        return logging.INFO
    return getattr(logging, str(config.get("logging", "level", "WARNING")).upper(), logging.WARNING)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``genum`` command."""
    parser = build_parser()
    # go generate passes the directive flags (-type=..., -output=...) along
    args, ignored = parser.parse_known_args(argv)
    logging.basicConfig(level=_log_level(args))
    if ignored:
        logger.debug(f"Ignoring arguments: {' '.join(ignored)}")

    console = Console()
    err_console = Console(stderr=True)
    source_file = args.file or os.environ.get(config.get("loader", "source_env_var"), "")

    try:
        tool = Genum(args.dir)
        environment = tool.load(source_file)
        units = tool.parse(environment)
        if args.dry_run:
            for output, code in tool.render(units).items():
                console.rule(output)
                console.print(Syntax(code, "go"))
        else:
            tool.generate(units)
    except GenumError as e:
        logger.debug(e.describe())
        err_console.print(f"[bold red]{escape(str(e))}[/bold red]", soft_wrap=True, highlight=False)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
