from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from commonsattributor.core.config import AppConfig
from commonsattributor.core.dates import UNKNOWN, clean_year_value
from commonsattributor.core.errors import MissingMetadataBlockError, NotFoundError, TransportError
from commonsattributor.core.licenses import license_components, parse_license_components
from commonsattributor.core.markup import strip_markup
from commonsattributor.domain.models.attribution import AttributionRecord
from commonsattributor.domain.models.resource import ResourceIdentifier
from commonsattributor.infrastructure.commons.api_models import ExtMetadata, MetadataValue, QueryResponse

logger = logging.getLogger(__name__)


def _field_value(field: MetadataValue | None) -> str:
    if field is None or field.value is None:
        return UNKNOWN
    value = str(field.value).strip()
    return value or UNKNOWN


def _plain_value(formatted: str) -> str:
    if formatted == UNKNOWN:
        return UNKNOWN
    return strip_markup(formatted).strip() or UNKNOWN


def _license_components(metadata: ExtMetadata, license_short_name: str) -> tuple[str, ...]:
    explicit = _field_value(metadata.LicenseComponent)
    if explicit != UNKNOWN:
        return parse_license_components(explicit)
    if license_short_name == UNKNOWN:
        return ()
    return license_components(license_short_name)


class CommonsMetadataFetcher:
    """Reads one file's image information from the Commons query API.

    Each :meth:`fetch` issues exactly one GET request. There are no retries
    and no caching between calls.
    """

    def __init__(self, config: AppConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self.transport = transport

    def build_params(self, identifier: ResourceIdentifier) -> dict[str, Any]:
        return {
            "action": "query",
            "prop": "imageinfo",
            "titles": identifier.canonical_title,
            "iiprop": "extmetadata|url",
            "iiurlwidth": self.config.thumbnail_width,
            "iilimit": 1,
            "format": "json",
            "origin": "*",
        }

    async def fetch(self, identifier: ResourceIdentifier) -> AttributionRecord:
        params = self.build_params(identifier)
        logger.debug("Requesting image info for %s from %s", identifier.canonical_title, self.config.api_endpoint)

        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                headers={"User-Agent": self.config.user_agent},
                transport=self.transport,
            ) as client:
                response = await client.get(self.config.api_endpoint, params=params)
        except httpx.HTTPError as exc:
            logger.warning("Commons API request failed for %s: %s", identifier.canonical_title, exc)
            raise TransportError(f"Commons API request failed: {exc}") from exc

        if not response.is_success:
            logger.warning("Commons API returned HTTP %s for %s", response.status_code, identifier.canonical_title)
            raise TransportError(f"Commons API returned HTTP {response.status_code}")

        try:
            payload = QueryResponse.model_validate_json(response.content)
        except ValidationError as exc:
            logger.warning("Unexpected Commons API body for %s", identifier.canonical_title)
            raise TransportError(f"Unexpected Commons API response: {exc.error_count()} validation error(s)") from exc

        return self._to_record(identifier, payload)

    def _to_record(self, identifier: ResourceIdentifier, payload: QueryResponse) -> AttributionRecord:
        # The request is scoped to one title, so whichever single entry is present is ours.
        pages = list(payload.query.pages.values())
        if not pages:
            raise NotFoundError(f"No page returned for {identifier.canonical_title}")
        page = pages[0]

        if page.is_missing or page.is_invalid or not page.imageinfo:
            raise NotFoundError(f"File not found on Commons: {identifier.canonical_title}")

        info = page.imageinfo[0]
        if info.extmetadata is None:
            raise MissingMetadataBlockError(f"No extended metadata for {identifier.canonical_title}")
        metadata: ExtMetadata = info.extmetadata

        author_formatted = _field_value(metadata.Artist)
        creation_date_raw = _field_value(metadata.DateTimeOriginal)
        if creation_date_raw == UNKNOWN:
            creation_date_raw = _field_value(metadata.DateTime)
        license_short_name = _field_value(metadata.LicenseShortName)

        thumbnail_url = info.thumburl or None
        thumbnail_width = info.thumbwidth if thumbnail_url else None

        return AttributionRecord(
            file_title=identifier.canonical_title,
            file_name=identifier.display_name,
            source_page_url=info.descriptionurl or UNKNOWN,
            thumbnail_url=thumbnail_url,
            thumbnail_width=thumbnail_width,
            author_formatted=author_formatted,
            author_plain=_plain_value(author_formatted),
            creation_date_raw=creation_date_raw,
            creation_date_cleaned=clean_year_value(creation_date_raw),
            license_short_name=license_short_name,
            license_url=_field_value(metadata.LicenseUrl),
            license_components=_license_components(metadata, license_short_name),
        )
