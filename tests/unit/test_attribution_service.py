import asyncio

import pytest

from commonsattributor.application.services.attribution_service import (
    FETCH_FAILED_MESSAGE,
    INVALID_URL_MESSAGE,
    AttributionService,
    AttributionSession,
)
from commonsattributor.application.services.credit_service import compose_pair
from commonsattributor.core.errors import (
    MissingMetadataBlockError,
    NoResultError,
    NotFoundError,
    TransportError,
)
from commonsattributor.domain.models.attribution import AttributionRecord, CreditFormat
from commonsattributor.domain.models.resource import ResourceIdentifier

EXAMPLE_URL = "https://commons.wikimedia.org/wiki/File:Example.jpg"


def _record(name: str = "Example.jpg") -> AttributionRecord:
    return AttributionRecord(
        file_title=f"File:{name.replace(' ', '_')}",
        file_name=name,
        source_page_url=f"https://commons.wikimedia.org/wiki/File:{name.replace(' ', '_')}",
        author_formatted="Jane Doe",
        author_plain="Jane Doe",
        creation_date_raw="2020-05-01",
        creation_date_cleaned="2020-05-01",
        license_short_name="CC BY-SA 4.0",
        license_url="https://example.org/license",
    )


class FakeFetcher:
    def __init__(self, result: object) -> None:
        self.result = result
        self.calls: list[ResourceIdentifier] = []

    async def fetch(self, identifier: ResourceIdentifier) -> AttributionRecord:
        self.calls.append(identifier)
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result


def test_run_attribution_success_caches_credit_pair() -> None:
    fetcher = FakeFetcher(_record())
    session = AttributionSession()
    service = AttributionService(fetcher, session)

    outcome = asyncio.run(service.run_attribution(f"  {EXAMPLE_URL}  "))

    assert outcome.ok
    assert outcome.error is None
    assert outcome.display_name == "Example.jpg"
    assert outcome.credits == compose_pair(_record())
    assert fetcher.calls[0].canonical_title == "File:Example.jpg"
    assert session.current is not None
    assert session.current.record == _record()
    assert session.current_credit(CreditFormat.PLAIN) == outcome.credits.plain
    assert session.current_credit(CreditFormat.FORMATTED) == outcome.credits.formatted


@pytest.mark.parametrize(
    "url",
    ["", None, "   ", "https://en.wikipedia.org/wiki/Example", "https://commons.wikimedia.org/wiki/Main_Page"],
)
def test_run_attribution_rejects_invalid_url_without_fetching(url: str | None) -> None:
    fetcher = FakeFetcher(_record())
    service = AttributionService(fetcher, AttributionSession())

    outcome = asyncio.run(service.run_attribution(url))

    assert not outcome.ok
    assert outcome.error == INVALID_URL_MESSAGE
    assert outcome.error_kind == "validation"
    assert fetcher.calls == []


def test_run_attribution_marker_without_name_is_validation_error() -> None:
    fetcher = FakeFetcher(_record())
    service = AttributionService(fetcher, AttributionSession())

    outcome = asyncio.run(service.run_attribution("https://commons.wikimedia.org/wiki/File:?x=1"))

    assert outcome.error == INVALID_URL_MESSAGE
    assert fetcher.calls == []


@pytest.mark.parametrize(
    ("error", "kind"),
    [
        (NotFoundError("missing"), "not_found"),
        (MissingMetadataBlockError("no extmetadata"), "not_found"),
        (TransportError("HTTP 500"), "transport"),
    ],
)
def test_run_attribution_collapses_fetch_failures_into_one_message(error: Exception, kind: str) -> None:
    service = AttributionService(FakeFetcher(error), AttributionSession())

    outcome = asyncio.run(service.run_attribution(EXAMPLE_URL))

    assert not outcome.ok
    assert outcome.error == FETCH_FAILED_MESSAGE
    assert outcome.error_kind == kind
    assert outcome.record is None
    assert outcome.credits is None
    assert outcome.display_name == "Example.jpg"


def test_run_attribution_reports_unexpected_errors() -> None:
    service = AttributionService(FakeFetcher(RuntimeError("boom")), AttributionSession())

    outcome = asyncio.run(service.run_attribution(EXAMPLE_URL))

    assert not outcome.ok
    assert outcome.error == "An unexpected error occurred: boom"
    assert outcome.error_kind == "unexpected"


def test_failed_run_keeps_previous_result_but_does_not_reuse_it() -> None:
    session = AttributionSession()
    first = asyncio.run(AttributionService(FakeFetcher(_record()), session).run_attribution(EXAMPLE_URL))

    failed = asyncio.run(
        AttributionService(FakeFetcher(NotFoundError("gone")), session).run_attribution(
            "https://commons.wikimedia.org/wiki/File:Gone.jpg"
        )
    )

    assert failed.credits is None
    assert failed.record is None
    assert session.current is not None
    assert session.current.credits == first.credits


def test_session_without_result_raises_no_result() -> None:
    with pytest.raises(NoResultError):
        AttributionSession().current_credit(CreditFormat.PLAIN)


def test_session_discards_stale_commit() -> None:
    session = AttributionSession()
    older = session.begin()
    newer = session.begin()
    new_record = _record("New.jpg")
    old_record = _record("Old.jpg")

    assert session.commit(newer, new_record, compose_pair(new_record))
    assert not session.commit(older, old_record, compose_pair(old_record))
    assert session.current.record == new_record


def test_overlapping_runs_keep_latest_started_result() -> None:
    session = AttributionSession()

    class SlowFetcher:
        def __init__(self, record: AttributionRecord, delay: float) -> None:
            self.record = record
            self.delay = delay

        async def fetch(self, identifier: ResourceIdentifier) -> AttributionRecord:
            await asyncio.sleep(self.delay)
            return self.record

    async def scenario() -> None:
        slow = AttributionService(SlowFetcher(_record("Slow.jpg"), 0.05), session)
        fast = AttributionService(SlowFetcher(_record("Fast.jpg"), 0.0), session)
        slow_task = asyncio.create_task(slow.run_attribution("https://commons.wikimedia.org/wiki/File:Slow.jpg"))
        await asyncio.sleep(0)
        fast_task = asyncio.create_task(fast.run_attribution("https://commons.wikimedia.org/wiki/File:Fast.jpg"))
        await asyncio.gather(slow_task, fast_task)

    asyncio.run(scenario())

    assert session.current.record.file_name == "Fast.jpg"


def test_with_icons_is_passed_to_composer() -> None:
    record = AttributionRecord(
        file_name="Example.jpg",
        license_short_name="CC BY 4.0",
        license_components=("cc", "by"),
    )
    service = AttributionService(FakeFetcher(record), AttributionSession(), with_icons=True)

    outcome = asyncio.run(service.run_attribution(EXAMPLE_URL))

    assert outcome.credits.formatted.count("<img ") == 2
