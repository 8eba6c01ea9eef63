"""
Weather Scoring.

Scores a whole outfit against a weather snapshot:
1. Temperature band vs layering (outerwear, long sleeves, warm-weather pieces)
2. Items' season tags vs the season the temperature implies
3. Precipitation vs waterproof pieces
4. Wind vs windproof pieces / outerwear

Temperature bands (effective / feels-like temperature):
- very cold < 0C, cold < 10C, cool < 18C, mild < 24C, warm < 30C, hot

A day range of 10C or more rewards a removable outer layer.

Degrades gracefully:
- No weather in context -> dimension absent (``None``), never 0
- No season tags on an item -> half credit
"""

from typing import Optional, Sequence

from config.constants import DEFAULT_SCORING_CONFIG, ScoringConfig
from scoring.constants.style_attributes import (
    LONG_SLEEVE_TAGS,
    WARM_WEATHER_TAGS,
    WATERPROOF_TAGS,
    WINDPROOF_TAGS,
)
from scoring.context import ScoreContext, Season, WeatherContext
from scoring.dimensions import as_normalized
from scoring.models import ClothingCategory
from scoring.normalizer import NormalizedAttributes

# ── Weights ───────────────────────────────────────────────────────
TEMPERATURE_WEIGHT = 0.5
SEASON_WEIGHT = 0.2
PRECIPITATION_WEIGHT = 0.2
WIND_WEIGHT = 0.1

# ── Temperature bands (upper bounds, C) ───────────────────────────
VERY_COLD_MAX = 0.0
COLD_MAX = 10.0
COOL_MAX = 18.0
MILD_MAX = 24.0
WARM_MAX = 30.0

# Day range that makes a removable layer worthwhile
LAYERING_SPREAD_C = 10.0
LAYERING_BONUS = 0.2

UNPROTECTED_WET_SCORE = 0.5
UNPROTECTED_WIND_SCORE = 0.7

# ── Season implied by each band ───────────────────────────────────
_BAND_SEASONS: dict = {
    "very_cold": frozenset({Season.WINTER}),
    "cold": frozenset({Season.WINTER, Season.FALL}),
    "cool": frozenset({Season.FALL, Season.SPRING}),
    "mild": frozenset({Season.SPRING, Season.FALL}),
    "warm": frozenset({Season.SUMMER, Season.SPRING}),
    "hot": frozenset({Season.SUMMER}),
}


def temperature_band(temp_c: float) -> str:
    if temp_c < VERY_COLD_MAX:
        return "very_cold"
    if temp_c < COLD_MAX:
        return "cold"
    if temp_c < COOL_MAX:
        return "cool"
    if temp_c < MILD_MAX:
        return "mild"
    if temp_c < WARM_MAX:
        return "warm"
    return "hot"


def _has_tag(attrs: Sequence[NormalizedAttributes], fragments: tuple) -> bool:
    return any(
        frag in tag
        for a in attrs
        for tag in a.tags
        for frag in fragments
    )


class WeatherScorer:
    """Score a set of items against one weather snapshot."""

    def __init__(self, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> None:
        self.config = config

    def score(self, items: Sequence, weather: WeatherContext) -> float:
        """
        Weather suitability of the outfit.

        Returns float in ``[0, 1]``.
        """
        attrs = as_normalized(items)
        if not attrs:
            return 0.0
        total = (
            TEMPERATURE_WEIGHT * self._score_temperature(attrs, weather)
            + SEASON_WEIGHT * self._score_season(attrs, weather)
            + PRECIPITATION_WEIGHT * self._score_precipitation(attrs, weather)
            + WIND_WEIGHT * self._score_wind(attrs, weather)
        )
        return max(0.0, min(1.0, total))

    # ── 1. Temperature vs layering ────────────────────────────────

    def _score_temperature(self, attrs: Sequence[NormalizedAttributes], weather: WeatherContext) -> float:
        has_outerwear = any(a.category == ClothingCategory.OUTERWEAR for a in attrs)
        has_long_sleeves = _has_tag(attrs, LONG_SLEEVE_TAGS)
        has_warm_pieces = _has_tag(attrs, WARM_WEATHER_TAGS)

        band = temperature_band(weather.effective_temp_c)
        if band == "very_cold":
            if has_outerwear and has_long_sleeves:
                score = 1.0
            elif has_outerwear:
                score = 0.7
            else:
                score = 0.1
            if has_warm_pieces:
                score -= 0.3
        elif band == "cold":
            score = 1.0 if has_outerwear else 0.3
            if has_warm_pieces:
                score -= 0.2
        elif band == "cool":
            score = 1.0 if (has_outerwear or has_long_sleeves) else 0.6
        elif band == "mild":
            score = 1.0
        elif band == "warm":
            score = 0.5 if has_outerwear else 1.0
        else:
            if has_outerwear:
                score = 0.2
            elif has_long_sleeves:
                score = 0.6
            else:
                score = 1.0

        # Cold morning, warm afternoon: a jacket you can take off is right
        if has_outerwear and weather.temperature_spread >= LAYERING_SPREAD_C:
            score += LAYERING_BONUS

        return max(0.0, min(1.0, score))

    # ── 2. Season tags vs implied season ──────────────────────────

    def _score_season(self, attrs: Sequence[NormalizedAttributes], weather: WeatherContext) -> float:
        implied = _BAND_SEASONS[temperature_band(weather.effective_temp_c)]
        total = 0.0
        for a in attrs:
            if not a.seasons:
                total += self.config.untagged_item_credit
            elif a.seasons & implied:
                total += 1.0
        return total / len(attrs)

    # ── 3. Precipitation ──────────────────────────────────────────

    @staticmethod
    def _score_precipitation(attrs: Sequence[NormalizedAttributes], weather: WeatherContext) -> float:
        if not weather.is_wet:
            return 1.0
        return 1.0 if _has_tag(attrs, WATERPROOF_TAGS) else UNPROTECTED_WET_SCORE

    # ── 4. Wind ───────────────────────────────────────────────────

    @staticmethod
    def _score_wind(attrs: Sequence[NormalizedAttributes], weather: WeatherContext) -> float:
        if not weather.is_windy:
            return 1.0
        protected = (
            _has_tag(attrs, WINDPROOF_TAGS)
            or any(a.category == ClothingCategory.OUTERWEAR for a in attrs)
        )
        return 1.0 if protected else UNPROTECTED_WIND_SCORE


def weather_suitability(
    items: Sequence,
    context: Optional[ScoreContext] = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> Optional[float]:
    """Weather dimension; ``None`` when no weather snapshot is supplied."""
    if context is None or context.weather is None:
        return None
    return WeatherScorer(config).score(items, context.weather)
