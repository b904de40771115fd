from __future__ import annotations

import argparse
import asyncio
import json
from dataclasses import asdict

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from commonsattributor.application.services.attribution_service import (
    AttributionOutcome,
    AttributionService,
    AttributionSession,
)
from commonsattributor.cli.context import CLIContext
from commonsattributor.core.dates import UNKNOWN
from commonsattributor.domain.models.attribution import CreditFormat
from commonsattributor.infrastructure.commons.fetcher import CommonsMetadataFetcher


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("credit", help="Fetch metadata and print the credit line for a Commons file")
    parser.add_argument("url", help="Commons file page URL, e.g. https://commons.wikimedia.org/wiki/File:Example.jpg")
    parser.add_argument("--plain", action="store_true", help="Print the plain-text credit instead of HTML")
    parser.add_argument("--icons", action="store_true", help="Append Creative Commons icons to the HTML credit")
    parser.add_argument("--json", action="store_true", help="Print the record and both credits as JSON")
    parser.set_defaults(handler=run)


def _build_service(ctx: CLIContext, with_icons: bool) -> AttributionService:
    return AttributionService(
        fetcher=CommonsMetadataFetcher(ctx.config),
        session=AttributionSession(),
        with_icons=with_icons,
    )


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    service = _build_service(ctx, args.icons)
    outcome = asyncio.run(service.run_attribution(args.url))

    if not outcome.ok:
        if args.json:
            ctx.console.print_json(json.dumps({"ok": False, "error": outcome.error}))
        else:
            ctx.console.print(f"[red]{escape(outcome.error or '')}[/red]")
        return 1

    if args.json:
        ctx.console.print_json(json.dumps(outcome_payload(outcome)))
        return 0

    fmt = CreditFormat.PLAIN if args.plain else CreditFormat.FORMATTED
    ctx.console.print(_details_table(outcome))
    ctx.console.print(
        Panel(
            escape(outcome.credits.select(fmt)),
            title=f"Credit ({fmt.value})",
            expand=False,
        )
    )
    return 0


def outcome_payload(outcome: AttributionOutcome) -> dict[str, object]:
    return {
        "ok": outcome.ok,
        "display_name": outcome.display_name,
        "record": asdict(outcome.record) if outcome.record else None,
        "credits": asdict(outcome.credits) if outcome.credits else None,
    }


def _details_table(outcome: AttributionOutcome) -> Table:
    record = outcome.record
    table = Table(title=escape(outcome.display_name or record.file_name))
    table.add_column("Field")
    table.add_column("Value", overflow="fold")

    table.add_row("Author", escape(record.author_plain))
    table.add_row("Creation date", escape(record.creation_date_cleaned))
    table.add_row("File name", escape(record.file_name))
    if record.license_url != UNKNOWN:
        table.add_row(
            "License",
            f"[link={record.license_url}]{escape(record.license_short_name)}[/link] ({escape(record.license_url)})",
        )
    else:
        table.add_row("License", escape(record.license_short_name))
    if record.thumbnail_url:
        table.add_row("Thumbnail", f"{escape(record.thumbnail_url)} ({record.thumbnail_width}px)")
    else:
        table.add_row("Thumbnail", "[dim]none[/dim]")
    table.add_row("Source page", escape(record.source_page_url))
    return table
