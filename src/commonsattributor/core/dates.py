from __future__ import annotations

import re

from commonsattributor.core.markup import strip_markup

UNKNOWN = "N/A"
YEAR_UNKNOWN = "Year Unknown"

_YEAR_RE = re.compile(r"\d{4}")


def clean_year_value(raw_date_value: str | None) -> str:
    """Reduce a Commons date field to its date part.

    Markup is stripped, then everything from the first ``(`` (qualifiers such
    as "according to EXIF data") and from the first ``,`` is dropped.
    """
    if not raw_date_value or raw_date_value == UNKNOWN:
        return UNKNOWN

    value = strip_markup(raw_date_value).strip()
    value = value.split("(", 1)[0].strip()
    value = value.split(",", 1)[0].strip()
    return value


def extract_year(cleaned_date: str) -> str:
    match = _YEAR_RE.search(cleaned_date)
    return match.group(0) if match else YEAR_UNKNOWN
