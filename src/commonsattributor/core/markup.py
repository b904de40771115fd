"""Small HTML helpers for the markup Commons embeds in metadata fields.

``Artist`` and date values arrive as HTML fragments (links to user pages,
``<span>`` wrappers, ``<time>`` elements). Text is pulled out with an
:class:`html.parser.HTMLParser` subclass, so quoted ``>`` characters inside
attributes are handled and character references are decoded.
"""

from __future__ import annotations

import re
from html import escape
from html.parser import HTMLParser

_ANCHOR_START_RE = re.compile(r"<a(?=[\s>/])([^>]*)>", flags=re.IGNORECASE)
_TARGET_ATTR_RE = re.compile(
    r"""\s+target\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>]+)""",
    flags=re.IGNORECASE,
)


class _TextCollector(HTMLParser):
    def __init__(self, parts: list[str]) -> None:
        super().__init__(convert_charrefs=True)
        self.parts = parts

    def handle_data(self, data: str) -> None:
        self.parts.append(data)


def strip_markup(value: str) -> str:
    """Return the text content of ``value`` with all tags and comments removed.

    A tag the parser cannot finish (``<span title="x>Jane``) is dropped up to
    its first ``>`` and parsing resumes after it. A trailing ``<`` fragment
    with no ``>`` at all is kept as text.
    """
    if "<" not in value and "&" not in value:
        return value

    parts: list[str] = []
    remaining = value
    while True:
        collector = _TextCollector(parts)
        collector.feed(remaining)
        # feed() leaves whatever it could not complete in rawdata.
        tail = collector.rawdata
        if not tail.startswith("<"):
            collector.close()
            break
        end = tail.find(">")
        if end < 0:
            parts.append(tail)
            break
        remaining = tail[end + 1:]
    return "".join(parts)


def open_links_in_new_tab(fragment: str) -> str:
    """Force every ``<a>`` start tag in ``fragment`` to open in a new viewing context."""

    def _retarget(match: re.Match[str]) -> str:
        attrs = _TARGET_ATTR_RE.sub("", match.group(1)).rstrip()
        self_closing = attrs.endswith("/")
        if self_closing:
            attrs = attrs[:-1].rstrip()
        return f'<a target="_blank"{attrs}{" /" if self_closing else ""}>'

    return _ANCHOR_START_RE.sub(_retarget, fragment)


def build_link(href: str, label: str) -> str:
    return f'<a href="{escape(href, quote=True)}" target="_blank">{escape(label, quote=False)}</a>'
