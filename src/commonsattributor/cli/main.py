from __future__ import annotations

import argparse
import logging

from rich.console import Console

from commonsattributor.cli.commands import credit_cmd, locate_cmd, web_cmd
from commonsattributor.cli.context import CLIContext
from commonsattributor.core.config import VERSION, load_config
from commonsattributor.core.errors import AttributorError
from commonsattributor.core.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="commons-attributor",
        description="Build attribution credit lines for Wikimedia Commons files",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="count", default=0)

    subparsers = parser.add_subparsers(dest="command", required=True)
    credit_cmd.register(subparsers)
    locate_cmd.register(subparsers)
    web_cmd.register(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 2

    try:
        ctx = CLIContext(config=load_config(), console=console)
        return handler(args, ctx)
    except AttributorError as exc:
        logger.error(str(exc))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
