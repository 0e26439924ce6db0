"""
Font Selection
==============

Caller-facing entry point: select fonts by PostScript name or by family and desired
properties from one active source, usually a ``MultiSource`` built from configuration.
"""

import logging
from collections.abc import Iterable

from fontTools.ttLib import TTFont

from .core.config import FontMatchConfig
from .fonts.handle import Handle
from .fonts.loader import load_font
from .fonts.models import FamilyEntry, FontMetadata
from .fonts.properties import Properties, Style
from .sources.base import FamilyNames, Source
from .sources.fs import FsSource
from .sources.mem import MemSource
from .sources.multi import MultiSource
from .sources.system import SystemSource

logger = logging.getLogger(__name__)


class FontSelector:
    """
    Thin orchestration over a font source.

    Every call is delegated to the source; the selector keeps no state of its own.
    """

    def __init__(self, source: Source):
        self.source = source

    @classmethod
    def from_config(
        cls,
        config: FontMatchConfig | None = None,
        memory_fonts: Iterable[bytes] = (),
    ) -> "FontSelector":
        """
        Build a selector from configuration.

        Priority order: configured font directories, then ``memory_fonts``, then the
        platform font catalog.

        Args:
            config: Configuration; loaded from the environment when omitted
            memory_fonts: Raw font files to make available in memory
        """
        config = config or FontMatchConfig.load_from_env()
        generic_families = config.generic_families or None

        sources: list[Source] = []
        if config.font_directories:
            sources.append(
                FsSource(
                    config.font_directories,
                    font_extensions=config.font_extensions,
                    compute_checksums=config.compute_checksums,
                    generic_families=generic_families,
                )
            )

        memory_fonts = list(memory_fonts)
        if memory_fonts:
            sources.append(MemSource.from_bytes(memory_fonts, generic_families=generic_families))

        if config.include_system_fonts:
            sources.append(
                SystemSource(
                    timeout=config.command_timeout,
                    compute_checksums=config.compute_checksums,
                    generic_families=generic_families,
                )
            )

        logger.info(f"FontSelector initialized with {len(sources)} sources")
        return cls(MultiSource(sources, generic_families=generic_families))

    def all_families(self) -> list[str]:
        """List all available font families."""
        return self.source.all_families()

    def all_fonts(self) -> list[Handle]:
        return self.source.all_fonts()

    def all_faces(self) -> list[FontMetadata]:
        """Metadata of every available face, each face listed once."""
        return self.source.all_faces()

    def select_family(self, family_name: str) -> FamilyEntry:
        return self.source.select_family_by_name(family_name)

    def select(
        self,
        family_names: FamilyNames,
        properties: Properties | None = None,
        *,
        style: Style | str | None = None,
        weight: float | None = None,
        stretch: float | None = None,
    ) -> Handle:
        """
        Select the best matching font.

        Args:
            family_names: Family name or names in preference order (generic names allowed)
            properties: Desired properties, defaults to normal/400/100%
            style: Overrides ``properties.style``
            weight: Overrides ``properties.weight``
            stretch: Overrides ``properties.stretch``

        Returns:
            Handle of the selected face

        Raises:
            FamilyNotFoundError: If no listed family exists in the source
            NoCandidatesError: If the family found has no faces
        """
        properties = properties or Properties()
        if style is not None:
            properties = properties.with_style(style)
        if weight is not None:
            properties = properties.with_weight(weight)
        if stretch is not None:
            properties = properties.with_stretch(stretch)

        handle = self.source.select_best_match(family_names, properties)
        logger.debug(f"Selected {handle} for {family_names!r} ({properties})")
        return handle

    def select_by_postscript_name(self, postscript_name: str) -> Handle:
        return self.source.select_by_postscript_name(postscript_name)

    def load(self, handle: Handle) -> TTFont:
        """Open a selected handle; failures surface as ``FontLoadError``."""
        return load_font(handle)
