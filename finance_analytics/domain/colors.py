"""Deterministic, pairwise-distinct chart colors for category names"""

import colorsys
import math
from typing import Dict, Iterable, Optional, Set

from finance_analytics.config import settings
from finance_analytics.domain.exceptions import ColorAssignmentError
from finance_analytics.utils.hashing import hash_string

SMALL_SET_SATURATION = 75
SMALL_SET_LIGHTNESS = 60


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """HSL (degrees, percent, percent) -> #rrggbb"""
    red, green, blue = colorsys.hls_to_rgb((hue % 360) / 360, lightness / 100, saturation / 100)
    return "#{:02x}{:02x}{:02x}".format(round(red * 255), round(green * 255), round(blue * 255))


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _base_hsl(index: int, total: int, small_set_threshold: int) -> tuple[float, int, int]:
    hue = index * 360 / total
    if total <= small_set_threshold:
        return hue, SMALL_SET_SATURATION, SMALL_SET_LIGHTNESS

    # Dense sets: vary saturation per group and lightness within a group
    groups = math.ceil(math.sqrt(total))
    per_group = math.ceil(total / groups)
    group_index = index // per_group
    index_in_group = index % per_group
    saturation = 70 + (group_index % 3) * 5
    lightness = 50 + (index_in_group % 4) * 5
    return hue, saturation, lightness


def assign_colors(
    names: Iterable[str],
    small_set_threshold: Optional[int] = None,
    max_retries: Optional[int] = None,
    hue_offset: Optional[int] = None,
) -> Dict[str, str]:
    """
    Map category names to hex colors, distinct within one call.

    Names are deduplicated and ordered before hues are spread around the wheel, so
    the same set of names always yields the same mapping. A generated color that
    was already issued is perturbed by `hue_offset` degrees per retry, with
    saturation/lightness nudged from the name's hash.

    Raises:
        ColorAssignmentError: a unique color was not found within `max_retries`
    """
    small_set_threshold = settings.color_small_set_threshold if small_set_threshold is None else small_set_threshold
    max_retries = settings.color_max_retries if max_retries is None else max_retries
    hue_offset = settings.color_hue_offset if hue_offset is None else hue_offset

    unique_names = sorted(set(names))
    total = len(unique_names)
    colors: Dict[str, str] = {}
    used: Set[str] = set()

    for index, name in enumerate(unique_names):
        hue, saturation, lightness = _base_hsl(index, total, small_set_threshold)
        color = hsl_to_hex(hue, saturation, lightness)

        name_hash = hash_string(name)
        attempt = 0
        while color in used:
            attempt += 1
            if attempt > max_retries:
                raise ColorAssignmentError(f"No unique color for {name!r} after {max_retries} retries")
            adjusted_saturation = _clamp(saturation + (name_hash + attempt) % 11 - 5, 40, 90)
            adjusted_lightness = _clamp(lightness + (name_hash * 7 + attempt) % 11 - 5, 35, 75)
            color = hsl_to_hex(hue + hue_offset * attempt, adjusted_saturation, adjusted_lightness)

        used.add(color)
        colors[name] = color

    return colors
