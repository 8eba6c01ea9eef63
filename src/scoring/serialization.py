"""
Score transport.

Three representations of an ``OutfitScore`` leave the engine:

- ``to_dict`` / ``from_dict``: full breakdown, 4 decimals (API payloads)
- ``to_db_columns`` / ``from_db_columns``: the ``saved_outfits`` score
  columns, ``decimal(3,2)``; absent dimensions are stored as NULL
- ``format_score_note`` / ``parse_score_note``: the human-readable
  "Score: NN%" line written into outfit notes.  Only the total survives
  this path; a breakdown is never invented when reading it back.
"""

import math
import re
from typing import Any, Dict, Mapping, Optional

from config.constants import LOWEST_SCORE_TIER, SCORE_TIERS
from scoring.models import Dimension, OutfitScore

TOTAL_COLUMN = "total_score"

# Dimension -> saved_outfits column
DB_COLUMNS: Dict[str, str] = {
    Dimension.COLOR_HARMONY.value: "color_match_score",
    Dimension.STYLE_MATCHING.value: "style_harmony_score",
    Dimension.SEASON_SUITABILITY.value: "season_fit_score",
    Dimension.OCCASION_SUITABILITY.value: "occasion_score",
    Dimension.WEATHER.value: "weather_score",
    Dimension.USER_PREFERENCE.value: "user_preference_score",
    Dimension.VARIETY.value: "variety_score",
}

DB_PRECISION = 2

_NOTE_SCORE_RE = re.compile(r"Score:\s*(\d{1,3})\s*%")


def to_dict(score: OutfitScore) -> Dict[str, Any]:
    return score.to_dict()


def from_dict(data: Mapping[str, Any]) -> OutfitScore:
    return OutfitScore.from_dict(data)


def to_db_columns(score: OutfitScore) -> Dict[str, Optional[float]]:
    """Column values for a ``saved_outfits`` insert."""
    row: Dict[str, Optional[float]] = {TOTAL_COLUMN: round(score.total, DB_PRECISION)}
    for dimension, column in DB_COLUMNS.items():
        value = score.breakdown.get(dimension)
        row[column] = round(value, DB_PRECISION) if value is not None else None
    return row


def from_db_columns(row: Mapping[str, Any]) -> Optional[OutfitScore]:
    """
    Rebuild a score from a ``saved_outfits`` row.

    Returns ``None`` when the row carries no total (outfits created by
    hand); NULL dimension columns stay absent from the breakdown.
    """
    total = row.get(TOTAL_COLUMN)
    if total is None:
        return None
    breakdown = {
        dimension: float(row[column])
        for dimension, column in DB_COLUMNS.items()
        if row.get(column) is not None
    }
    return OutfitScore(total=float(total), breakdown=breakdown)


def score_display(value: float) -> str:
    """0.853 -> "85%".  Halves round up (0.125 -> "13%")."""
    return f"{math.floor(value * 100 + 0.5)}%"


def score_tier(value: float) -> str:
    for threshold, label in SCORE_TIERS:
        if value >= threshold:
            return label
    return LOWEST_SCORE_TIER


def format_score_note(score: OutfitScore, item_count: int) -> str:
    return f"AI-generated outfit with {item_count} items. Score: {score_display(score.total)}"


def parse_score_note(notes: Optional[str]) -> Optional[float]:
    """Recover the total from a note; ``None`` if there is no score line."""
    if not notes:
        return None
    match = _NOTE_SCORE_RE.search(notes)
    if match is None:
        return None
    percent = int(match.group(1))
    if percent > 100:
        return None
    return percent / 100.0
