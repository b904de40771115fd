"""Pydantic models for the Commons ``action=query&prop=imageinfo`` response.

Only the parts the fetcher reads are modelled; unknown keys are ignored.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict


class MetadataValue(BaseModel):
    """One extended metadata field: a ``value`` plus the ``source`` it came from."""

    model_config = ConfigDict(frozen=True)

    value: Any = None
    source: str | None = None


class ExtMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    Artist: MetadataValue | None = None
    DateTimeOriginal: MetadataValue | None = None
    DateTime: MetadataValue | None = None
    LicenseShortName: MetadataValue | None = None
    LicenseUrl: MetadataValue | None = None
    LicenseComponent: MetadataValue | None = None


class ImageInfoEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str | None = None
    descriptionurl: str | None = None
    thumburl: str | None = None
    thumbwidth: int | None = None
    extmetadata: ExtMetadata | None = None


class Page(BaseModel):
    """A page entry; ``missing``/``invalid`` are present (usually as ``""``) when set."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    missing: Any = None
    invalid: Any = None
    imageinfo: Sequence[ImageInfoEntry] | None = None

    @property
    def is_missing(self) -> bool:
        return self.missing is not None and self.missing is not False

    @property
    def is_invalid(self) -> bool:
        return self.invalid is not None and self.invalid is not False


class Query(BaseModel):
    model_config = ConfigDict(frozen=True)

    pages: Mapping[str, Page] = {}


class QueryResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: Query
