from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from commonsattributor.core.dates import UNKNOWN


class CreditFormat(str, Enum):
    FORMATTED = "formatted"
    PLAIN = "plain"


@dataclass(frozen=True, slots=True)
class AttributionRecord:
    """Normalized snapshot of one file's extended metadata.

    Every text field holds ``UNKNOWN`` rather than being absent. Only the
    thumbnail pair uses ``None``, meaning Commons returned no thumbnail.
    """

    file_title: str = UNKNOWN
    file_name: str = UNKNOWN
    source_page_url: str = UNKNOWN
    thumbnail_url: str | None = None
    thumbnail_width: int | None = None
    author_formatted: str = UNKNOWN
    author_plain: str = UNKNOWN
    creation_date_raw: str = UNKNOWN
    creation_date_cleaned: str = UNKNOWN
    license_short_name: str = UNKNOWN
    license_url: str = UNKNOWN
    license_components: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class CreditPair:
    formatted: str
    plain: str

    def select(self, fmt: CreditFormat) -> str:
        return self.formatted if CreditFormat(fmt) is CreditFormat.FORMATTED else self.plain
