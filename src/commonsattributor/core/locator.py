from __future__ import annotations

from urllib.parse import unquote

from commonsattributor.core.errors import NotAFileUrlError
from commonsattributor.domain.models.resource import ResourceIdentifier

FILE_NAMESPACE = "File:"
COMMONS_FILE_MARKER = "commons.wikimedia.org/wiki/File:"
WORD_JOINER = "_"


def is_commons_file_url(raw_url: str | None) -> bool:
    return bool(raw_url) and COMMONS_FILE_MARKER in str(raw_url)


def locate(page_url: str) -> ResourceIdentifier:
    """Parse a Commons file page URL into its canonical title and display name."""
    _, marker, remainder = page_url.partition(FILE_NAMESPACE)
    if not marker:
        raise NotAFileUrlError(f"Not a Commons file URL: {page_url}")

    name = remainder.split("#", 1)[0].split("?", 1)[0]
    name = unquote(name).strip()
    if not name:
        raise NotAFileUrlError(f"Commons file URL has no file name: {page_url}")

    canonical_title = FILE_NAMESPACE + name.replace(" ", WORD_JOINER)
    display_name = canonical_title[len(FILE_NAMESPACE):].replace(WORD_JOINER, " ")
    return ResourceIdentifier(canonical_title=canonical_title, display_name=display_name)
