"""
Outfit Scoring Module.

Compatibility scoring for sets of wardrobe items, used by the outfit
generator (``recs/``) and by anything that displays a score.

Quick start::

    from scoring import OutfitScorer, ScoreContext, Occasion, ContextResolver

    resolver = ContextResolver(weather_api_key="...")
    ctx = resolver.build_context(occasion="work", city="Oslo", country="NO")

    score = OutfitScorer().score(items, ctx)
    score.total          # 0.0 - 1.0
    score.breakdown      # {"color_harmony": 0.8, "style_matching": 0.93, ...}
"""

from scoring.aggregator import aggregate, score_outfit
from scoring.context import (
    Occasion,
    OutfitHistoryEntry,
    ScoreContext,
    Season,
    UserPreferences,
    WeatherContext,
)
from scoring.context_resolver import ContextResolver
from scoring.models import ClothingCategory, ClothingItem, Dimension, OutfitCandidate, OutfitScore
from scoring.normalizer import normalize, parse_color
from scoring.scorer import OutfitScorer

__all__ = [
    "aggregate",
    "score_outfit",
    "Occasion",
    "OutfitHistoryEntry",
    "ScoreContext",
    "Season",
    "UserPreferences",
    "WeatherContext",
    "ContextResolver",
    "ClothingCategory",
    "ClothingItem",
    "Dimension",
    "OutfitCandidate",
    "OutfitScore",
    "normalize",
    "parse_color",
    "OutfitScorer",
]
