from __future__ import annotations

import argparse

from rich.table import Table

from commonsattributor.cli.context import CLIContext
from commonsattributor.core.locator import locate


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("locate", help="Show the canonical title parsed from a file URL (no network)")
    parser.add_argument("url", help="Commons file page URL")
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    identifier = locate(args.url.strip())

    table = Table(title="Resource")
    table.add_column("Field")
    table.add_column("Value", overflow="fold")
    table.add_row("Canonical title", identifier.canonical_title)
    table.add_row("Display name", identifier.display_name)
    ctx.console.print(table)
    return 0
