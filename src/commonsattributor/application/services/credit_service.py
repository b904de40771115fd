from __future__ import annotations

from html import escape

from commonsattributor.core.dates import UNKNOWN, extract_year
from commonsattributor.core.licenses import icon_url, is_dedication
from commonsattributor.core.markup import build_link, open_links_in_new_tab, strip_markup
from commonsattributor.domain.models.attribution import AttributionRecord, CreditFormat, CreditPair

_ICON_STYLE = 'style="max-width: 1em;max-height:1em;margin-left: .2em;"'


def _link_or_label(url: str, label: str) -> str:
    if url == UNKNOWN:
        return escape(label, quote=False)
    return build_link(url, label)


def _license_icons(record: AttributionRecord) -> str:
    return "".join(
        f'<img src="{icon_url(component)}" alt="{component}" {_ICON_STYLE}>'
        for component in record.license_components
    )


def _compose_formatted(record: AttributionRecord, with_icons: bool) -> str:
    file_link = _link_or_label(record.source_page_url, record.file_name)
    license_link = _link_or_label(record.license_url, record.license_short_name)
    if with_icons:
        license_link += _license_icons(record)
    author = open_links_in_new_tab(record.author_formatted)

    if is_dedication(record.license_short_name):
        return f"{file_link} by {author} is marked {license_link}"

    year = extract_year(record.creation_date_cleaned)
    return f"{file_link} © {year} by {author} is licensed under {license_link}"


def _compose_plain(record: AttributionRecord) -> str:
    year = extract_year(record.creation_date_cleaned)
    credit = (
        f"{record.file_name} © {year} by {record.author_plain} "
        f"is licensed under {record.license_short_name}."
    )
    if record.license_url != UNKNOWN:
        credit += f" To view a copy of this license, visit {record.license_url}"
    return strip_markup(credit).strip()


def compose(record: AttributionRecord, fmt: CreditFormat, *, with_icons: bool = False) -> str:
    """Render the credit line for ``record`` in the requested format.

    Formatted output is HTML and switches to the dedication wording for CC0.
    Plain output always uses the standard "© <year> ... is licensed under"
    sentence and never carries markup.
    """
    if CreditFormat(fmt) is CreditFormat.FORMATTED:
        return _compose_formatted(record, with_icons)
    return _compose_plain(record)


def compose_pair(record: AttributionRecord, *, with_icons: bool = False) -> CreditPair:
    return CreditPair(
        formatted=compose(record, CreditFormat.FORMATTED, with_icons=with_icons),
        plain=compose(record, CreditFormat.PLAIN),
    )
