"""
Font Matching
=============

Picks the face that best matches a set of desired properties, following the font
matching procedure of CSS Fonts Level 3 § 5.2:
https://drafts.csswg.org/css-fonts-3/#font-style-matching

The candidate set is narrowed in three passes (stretch, then style, then weight). Each
pass keeps every candidate sharing the chosen value, and the next pass only ever sees
the survivors of the previous one.
"""

import logging
from collections.abc import Sequence

from fontmatch.core.exceptions import NoCandidatesError

from .handle import Handle
from .properties import Properties, Stretch, Style, Weight

logger = logging.getLogger(__name__)

STYLE_PREFERENCES = {
    Style.ITALIC: (Style.ITALIC, Style.OBLIQUE, Style.NORMAL),
    Style.OBLIQUE: (Style.OBLIQUE, Style.ITALIC, Style.NORMAL),
    Style.NORMAL: (Style.NORMAL, Style.OBLIQUE, Style.ITALIC),
}


def find_best_match(candidates: Sequence[Properties], query: Properties) -> int:
    """
    Find the index of the candidate that best matches ``query``.

    Args:
        candidates: Properties of each face, in source order
        query: Desired properties

    Returns:
        Index into ``candidates``; ties left after all passes go to the earliest index

    Raises:
        NoCandidatesError: If ``candidates`` is empty
    """
    if not candidates:
        raise NoCandidatesError()

    matching_set = list(range(len(candidates)))

    # Step 4a (font-stretch)
    stretch = _match_stretch([candidates[i].stretch for i in matching_set], query.stretch)
    matching_set = [i for i in matching_set if candidates[i].stretch == stretch]

    # Step 4b (font-style)
    style = _match_style([candidates[i].style for i in matching_set], query.style)
    matching_set = [i for i in matching_set if candidates[i].style == style]

    # Step 4c (font-weight)
    weight = _match_weight([candidates[i].weight for i in matching_set], query.weight)
    matching_set = [i for i in matching_set if candidates[i].weight == weight]

    # Step 4d concerns font-size; faces here are unsized
    return matching_set[0]


def best_match(
    desired: Properties, candidates: Sequence[tuple[Handle, Properties]]
) -> Handle:
    """Return the handle of the best matching ``(handle, properties)`` candidate."""
    if not candidates:
        raise NoCandidatesError()

    index = find_best_match([properties for _, properties in candidates], desired)
    handle, properties = candidates[index]
    logger.debug(f"Matched {desired} to {properties} ({handle})")
    return handle


def _match_stretch(values: list[float], desired: float) -> float:
    if desired in values:
        return desired

    narrower = [v for v in values if v < desired]
    wider = [v for v in values if v > desired]

    if desired <= Stretch.NORMAL:
        # Narrower widths first, then wider ones
        return max(narrower) if narrower else min(wider)
    return min(wider) if wider else max(narrower)


def _match_style(values: list[Style], desired: Style) -> Style:
    for style in STYLE_PREFERENCES[desired]:
        if style in values:
            return style
    # Unreachable while Style has exactly three members
    return values[0]


def _match_weight(values: list[float], desired: float) -> float:
    if desired in values:
        return desired

    if Weight.NORMAL <= desired <= Weight.MEDIUM:
        # Ascending up to 500, then descending down to 400
        upward = [v for v in values if desired < v <= Weight.MEDIUM]
        if upward:
            return min(upward)
        downward = [v for v in values if Weight.NORMAL <= v < desired]
        if downward:
            return max(downward)
        # Outside [400, 500]: nearest wins, heavier on a tie
        return min(values, key=lambda v: (abs(v - desired), -v))

    lighter = [v for v in values if v < desired]
    heavier = [v for v in values if v > desired]

    if desired < Weight.NORMAL:
        return max(lighter) if lighter else min(heavier)
    return min(heavier) if heavier else max(lighter)
