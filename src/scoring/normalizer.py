"""
Attribute normalizer.

Turns a raw ``ClothingItem`` into the canonical attributes every
dimension scorer works from:

1. Color string -> HSL (hex or fashion color name), plus a neutral flag
2. Tag / season / occasion sets lower-cased and de-duplicated
3. Formality and boldness estimates from category, occasions and tags
4. Style families inferred from tags and subcategory

Never raises on bad input:
- Unparseable color -> mid-gray neutral with ``parsed=False``
- Unknown category -> default style baseline
"""

import colorsys
import re
from dataclasses import dataclass
from typing import FrozenSet, Optional

from core.logging import get_logger
from core.utils import clamp, normalize_string_set
from scoring.constants.color_names import COLOR_HEX, COLOR_MODIFIERS, NEUTRAL_COLOR_NAMES
from scoring.constants.style_attributes import (
    BOLD_TAGS,
    BOLDNESS_SHIFT,
    CATEGORY_STYLE_BASE,
    CONSERVATIVE_TAGS,
    DEFAULT_STYLE_BASE,
    OCCASION_FORMALITY_SHIFT,
    STYLE_FAMILY_KEYWORDS,
)
from scoring.context import Occasion, Season
from scoring.models import ClothingCategory, ClothingItem

logger = get_logger(__name__)

# ── Neutral thresholds ────────────────────────────────────────────
NEUTRAL_MAX_SATURATION = 0.15
NEUTRAL_MAX_LIGHTNESS_DARK = 0.10
NEUTRAL_MIN_LIGHTNESS_LIGHT = 0.92

# ── "Close color" thresholds (preferred-color matching) ──────────
CLOSE_HUE_DEGREES = 30.0
CLOSE_SATURATION = 0.3
CLOSE_LIGHTNESS = 0.3

# Lightness shift applied for a modifier in front of an unknown shade
_MODIFIER_LIGHTNESS = {"light": 0.15, "pale": 0.15, "pastel": 0.15, "dark": -0.15, "deep": -0.15}

_HEX_RE = re.compile(r"^#?([0-9a-f]{6})$|^#([0-9a-f]{3})$")
_WORD_SPLIT_RE = re.compile(r"[\s_/]+")


@dataclass(frozen=True)
class HSLColor:
    """Hue in degrees [0, 360), saturation and lightness in [0, 1]."""
    h: float
    s: float
    l: float
    is_neutral: bool = False
    parsed: bool = True


UNPARSED_COLOR = HSLColor(h=0.0, s=0.0, l=0.5, is_neutral=True, parsed=False)


@dataclass(frozen=True)
class NormalizedAttributes:
    item_id: str
    category: Optional[ClothingCategory]
    color: HSLColor
    seasons: FrozenSet[Season]
    occasions: FrozenSet[Occasion]
    tags: FrozenSet[str]
    formality: float
    boldness: float
    style_families: FrozenSet[str]


# =============================================================================
# Color parsing
# =============================================================================

def _hex_to_hsl(hex_digits: str) -> HSLColor:
    if len(hex_digits) == 3:
        hex_digits = "".join(c * 2 for c in hex_digits)
    r, g, b = (int(hex_digits[i:i + 2], 16) / 255.0 for i in (0, 2, 4))
    # colorsys returns (h, l, s) with h in [0, 1)
    h, l, s = colorsys.rgb_to_hls(r, g, b)
    return HSLColor(h=h * 360.0, s=s, l=l)


def _with_neutral_flag(color: HSLColor, named_neutral: bool = False) -> HSLColor:
    neutral = (
        named_neutral
        or color.s < NEUTRAL_MAX_SATURATION
        or color.l < NEUTRAL_MAX_LIGHTNESS_DARK
        or color.l > NEUTRAL_MIN_LIGHTNESS_LIGHT
    )
    return HSLColor(h=color.h, s=color.s, l=color.l, is_neutral=neutral, parsed=True)


def _lookup_name(words: list) -> Optional[str]:
    """Longest known suffix first ("dusty navy blue" -> "navy blue"), then
    the right-most known word."""
    for start in range(len(words)):
        candidate = " ".join(words[start:])
        if candidate in COLOR_HEX:
            return candidate
    for word in reversed(words):
        if word in COLOR_HEX:
            return word
    return None


def parse_color(value) -> HSLColor:
    """
    Resolve a color string to HSL.

    Accepts ``#rgb``, ``#rrggbb``, ``rrggbb`` and fashion color names
    ("navy", "light blue", "heather grey", "dusty rose").
    """
    if not isinstance(value, str) or not value.strip():
        logger.debug("color_missing", value=value)
        return UNPARSED_COLOR

    text = value.strip().lower()
    if text in COLOR_HEX:
        return _with_neutral_flag(_hex_to_hsl(COLOR_HEX[text][1:]), text in NEUTRAL_COLOR_NAMES)

    match = _HEX_RE.match(text)
    if match:
        return _with_neutral_flag(_hex_to_hsl(match.group(1) or match.group(2)))

    words = [w for w in _WORD_SPLIT_RE.split(text) if w]
    name = _lookup_name(words)
    if name is None:
        logger.debug("color_unparsed", value=value)
        return UNPARSED_COLOR

    base = _hex_to_hsl(COLOR_HEX[name][1:])
    # "pale sage": shift lightness when the modifier was not part of the name
    leading = [w for w in words[: len(words) - len(name.split())] if w in COLOR_MODIFIERS]
    shift = sum(_MODIFIER_LIGHTNESS.get(w, 0.0) for w in leading)
    if shift:
        base = HSLColor(h=base.h, s=base.s, l=clamp(base.l + shift))
    return _with_neutral_flag(base, name in NEUTRAL_COLOR_NAMES)


def hue_distance(a: HSLColor, b: HSLColor) -> float:
    """Circular hue distance in degrees, 0-180."""
    diff = abs(a.h - b.h) % 360.0
    return min(diff, 360.0 - diff)


def colors_close(a: HSLColor, b: HSLColor) -> bool:
    return (
        hue_distance(a, b) < CLOSE_HUE_DEGREES
        and abs(a.s - b.s) < CLOSE_SATURATION
        and abs(a.l - b.l) < CLOSE_LIGHTNESS
    )


# =============================================================================
# Style estimates
# =============================================================================

def estimate_formality(category: Optional[ClothingCategory], occasions) -> float:
    formality, _ = CATEGORY_STYLE_BASE.get(category, DEFAULT_STYLE_BASE)
    for occasion in occasions:
        formality += OCCASION_FORMALITY_SHIFT.get(occasion, 0.0)
    return clamp(formality)


def estimate_boldness(category: Optional[ClothingCategory], tags) -> float:
    _, boldness = CATEGORY_STYLE_BASE.get(category, DEFAULT_STYLE_BASE)
    for tag in tags:
        if any(word in tag for word in BOLD_TAGS):
            boldness += BOLDNESS_SHIFT
        if any(word in tag for word in CONSERVATIVE_TAGS):
            boldness -= BOLDNESS_SHIFT
    return clamp(boldness)


def infer_style_families(tags, subcategory: str = "") -> FrozenSet[str]:
    terms = set(tags)
    sub = (subcategory or "").strip().lower()
    if sub:
        terms.add(sub)
        terms.update(w for w in _WORD_SPLIT_RE.split(sub) if w)
    return frozenset(
        family for family, keywords in STYLE_FAMILY_KEYWORDS.items()
        if terms & keywords
    )


# =============================================================================
# Entry point
# =============================================================================

def normalize(item: ClothingItem) -> NormalizedAttributes:
    """Canonical attributes for one item."""
    tags = frozenset(normalize_string_set(item.tags))
    seasons = frozenset(item.seasons)
    occasions = frozenset(item.occasions)
    return NormalizedAttributes(
        item_id=item.id,
        category=item.category,
        color=parse_color(item.color),
        seasons=seasons,
        occasions=occasions,
        tags=tags,
        formality=estimate_formality(item.category, occasions),
        boldness=estimate_boldness(item.category, tags),
        style_families=infer_style_families(tags, item.subcategory),
    )
