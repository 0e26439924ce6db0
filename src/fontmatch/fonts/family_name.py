"""
Family name handling.

Platform catalogs disagree on the casing and spacing of family names, so lookups go
through ``normalize_family_name``. Generic CSS families (serif, sans-serif, ...) are
resolved to a concrete family before lookup.
"""

import platform
import re

GENERIC_FAMILIES = ("serif", "sans-serif", "monospace", "cursive", "fantasy")

_WINDOWS_DEFAULTS = {
    "serif": "Times New Roman",
    "sans-serif": "Arial",
    "monospace": "Courier New",
    "cursive": "Comic Sans MS",
    "fantasy": "Impact",
}

_MACOS_DEFAULTS = {
    "serif": "Times New Roman",
    "sans-serif": "Arial",
    "monospace": "Courier New",
    "cursive": "Comic Sans MS",
    "fantasy": "Papyrus",
}


def normalize_family_name(name: str) -> str:
    """Case-fold and collapse whitespace so equivalent family names compare equal."""
    return re.sub(r"\s+", " ", name).strip().casefold()


def default_generic_families(system: str | None = None) -> dict[str, str]:
    """Default generic family mapping for ``system`` (defaults to the running OS).

    Fontconfig-based systems understand the generic names as aliases, so they map to
    themselves there.
    """
    system = (system or platform.system()).lower()
    if system == "windows":
        return dict(_WINDOWS_DEFAULTS)
    if system == "darwin":
        return dict(_MACOS_DEFAULTS)
    return {generic: generic for generic in GENERIC_FAMILIES}


def is_generic_family(name: str) -> bool:
    return normalize_family_name(name) in GENERIC_FAMILIES


def resolve_family_name(
    name: str,
    overrides: dict[str, str] | None = None,
    system: str | None = None,
) -> str:
    """
    Resolve a requested family name to the name looked up in a source.

    Args:
        name: Requested family name, possibly generic (``"sans-serif"``)
        overrides: Optional generic family overrides, keyed by generic name
        system: Platform name used for the defaults

    Returns:
        The concrete family name; non-generic names are returned unchanged
    """
    key = normalize_family_name(name)
    if key not in GENERIC_FAMILIES:
        return name

    if overrides and key in overrides:
        return overrides[key]
    return default_generic_families(system)[key]


def parse_family_list(value: str) -> list[str]:
    """Split a CSS-style family list (``"Times New Roman, Arial, serif"``)."""
    families = []
    for part in value.split(","):
        family = part.strip().strip("'\"").strip()
        if family:
            families.append(family)
    return families
