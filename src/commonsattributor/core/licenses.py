from __future__ import annotations

DEDICATION_MARKER = "cc0"
CC_ICON_BASE_URL = "https://mirrors.creativecommons.org/presskit/icons/"
_CC_ELEMENTS = ("by", "sa", "nc", "nd")


def is_dedication(license_short_name: str) -> bool:
    """Dedication licenses waive rights instead of asserting them (CC0)."""
    return DEDICATION_MARKER in license_short_name.lower()


def license_components(license_short_name: str) -> tuple[str, ...]:
    """Map a license short name to Creative Commons icon names.

    ``"CC BY-SA 4.0"`` gives ``("cc", "by", "sa")``, ``"CC0 1.0"`` gives
    ``("cc", "zero")``. Anything that is not a CC license gives ``()``.
    """
    tokens = license_short_name.strip().lower().split()
    if not tokens:
        return ()
    if tokens[0] == "cc0":
        return ("cc", "zero")
    if tokens[0] != "cc" or len(tokens) < 2:
        return ()

    elements = [part for part in tokens[1].split("-") if part in _CC_ELEMENTS]
    if not elements:
        return ()
    return ("cc", *elements)


def icon_url(component: str) -> str:
    return f"{CC_ICON_BASE_URL}{component}.svg"


def parse_license_components(raw: str) -> tuple[str, ...]:
    """Split a comma-separated ``LicenseComponent`` metadata value into icon names."""
    return tuple(part.strip().lower() for part in raw.split(",") if part.strip())
