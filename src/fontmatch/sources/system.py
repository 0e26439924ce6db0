"""
System Font Source
==================

Picks the native font catalog for the running platform.
"""

import logging
import platform

from .base import Source
from .core_text import CoreTextSource
from .directwrite import DirectWriteSource
from .fontconfig import FontconfigSource
from .fs import FsSource

logger = logging.getLogger(__name__)


def SystemSource(  # noqa: N802
    timeout: float = 30.0,
    compute_checksums: bool = False,
    generic_families: dict[str, str] | None = None,
    system: str | None = None,
) -> Source:
    """
    Create the default source for the platform's installed fonts.

    Core Text on macOS, DirectWrite on Windows, fontconfig elsewhere when ``fc-list``
    is available, and a walk of the standard font directories otherwise.
    """
    system = (system or platform.system()).lower()

    if system == "darwin":
        source = CoreTextSource(timeout=timeout, generic_families=generic_families)
    elif system == "windows":
        source = DirectWriteSource(
            compute_checksums=compute_checksums, generic_families=generic_families
        )
    elif FontconfigSource.is_available():
        source = FontconfigSource(timeout=timeout, generic_families=generic_families)
    else:
        logger.warning("fc-list not found in PATH, falling back to scanning font directories")
        source = FsSource(
            compute_checksums=compute_checksums, generic_families=generic_families
        )

    logger.debug(f"SystemSource for {system}: {source!r}")
    return source
