from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ResourceIdentifier:
    canonical_title: str
    display_name: str
