from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Protocol

from commonsattributor.application.services.credit_service import compose_pair
from commonsattributor.core.errors import NoResultError, NotAFileUrlError, NotFoundError, TransportError
from commonsattributor.core.locator import is_commons_file_url, locate
from commonsattributor.domain.models.attribution import AttributionRecord, CreditFormat, CreditPair
from commonsattributor.domain.models.resource import ResourceIdentifier

logger = logging.getLogger(__name__)

INVALID_URL_MESSAGE = "Please enter a valid Wikimedia Commons file URL."
FETCH_FAILED_MESSAGE = "Could not fetch attribution data. Please check the URL or if the file exists."
UNEXPECTED_ERROR_PREFIX = "An unexpected error occurred: "


class MetadataFetcher(Protocol):
    async def fetch(self, identifier: ResourceIdentifier) -> AttributionRecord: ...


@dataclass(frozen=True, slots=True)
class AttributionResult:
    record: AttributionRecord
    credits: CreditPair


@dataclass(frozen=True, slots=True)
class AttributionOutcome:
    ok: bool
    display_name: str | None = None
    record: AttributionRecord | None = None
    credits: CreditPair | None = None
    error: str | None = None
    error_kind: str | None = None


class AttributionSession:
    """Holds the single current attribution result for one user session.

    Runs call :meth:`begin` for a generation number and hand it back to
    :meth:`commit`; a commit from a run that has since been superseded is
    dropped, so an older response can never overwrite a newer one.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._generation = 0
        self._current: AttributionResult | None = None

    @property
    def current(self) -> AttributionResult | None:
        with self._lock:
            return self._current

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def begin(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def commit(self, generation: int, record: AttributionRecord, credits: CreditPair) -> bool:
        with self._lock:
            if generation != self._generation:
                logger.debug("Discarding stale result from run %s (latest is %s)", generation, self._generation)
                return False
            self._current = AttributionResult(record=record, credits=credits)
            return True

    def current_credit(self, fmt: CreditFormat) -> str:
        current = self.current
        if current is None:
            raise NoResultError("No attribution result is available yet.")
        return current.credits.select(fmt)


class AttributionService:
    def __init__(
        self,
        fetcher: MetadataFetcher,
        session: AttributionSession,
        *,
        with_icons: bool = False,
    ) -> None:
        self.fetcher = fetcher
        self.session = session
        self.with_icons = with_icons

    async def run_attribution(self, raw_url: str | None) -> AttributionOutcome:
        """Locate, fetch and compose credits for one Commons file URL.

        Never raises: every failure is reported through the outcome. A failed
        run leaves the session's previous result in place.
        """
        url = (raw_url or "").strip()
        if not is_commons_file_url(url):
            return AttributionOutcome(ok=False, error=INVALID_URL_MESSAGE, error_kind="validation")

        generation = self.session.begin()
        display_name: str | None = None
        try:
            identifier = locate(url)
            display_name = identifier.display_name
            record = await self.fetcher.fetch(identifier)
            credits = compose_pair(record, with_icons=self.with_icons)
        except NotAFileUrlError as exc:
            logger.info("Rejected URL %s: %s", url, exc)
            return AttributionOutcome(ok=False, error=INVALID_URL_MESSAGE, error_kind="validation")
        except NotFoundError as exc:
            logger.info("Attribution lookup found nothing for %s: %s", url, exc)
            return AttributionOutcome(
                ok=False, display_name=display_name, error=FETCH_FAILED_MESSAGE, error_kind="not_found"
            )
        except TransportError as exc:
            logger.warning("Attribution fetch failed for %s: %s", url, exc)
            return AttributionOutcome(
                ok=False, display_name=display_name, error=FETCH_FAILED_MESSAGE, error_kind="transport"
            )
        except Exception as exc:
            logger.exception("Unexpected failure while attributing %s", url)
            return AttributionOutcome(
                ok=False,
                display_name=display_name,
                error=f"{UNEXPECTED_ERROR_PREFIX}{exc}",
                error_kind="unexpected",
            )

        self.session.commit(generation, record, credits)
        logger.info("Attribution ready for %s", identifier.canonical_title)
        return AttributionOutcome(
            ok=True,
            display_name=display_name,
            record=record,
            credits=credits,
        )
