"""
Score aggregation.

``aggregate`` folds per-dimension scores into one ``OutfitScore``:
weighted sum over the dimensions that are present (not ``None``) and
carry a positive weight, divided by the sum of those weights.  Missing
optional dimensions therefore never drag the total down.

``score_outfit`` is the full pipeline:
normalize items -> run every dimension scorer -> aggregate.
"""

from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from config.constants import DEFAULT_SCORING_CONFIG, DEFAULT_WEIGHTS, ScoringConfig
from core.logging import get_logger
from core.utils import clamp
from scoring.context import ScoreContext
from scoring.dimensions import color_harmony, occasion_suitability, season_suitability, style_matching
from scoring.models import ClothingItem, Dimension, OutfitScore
from scoring.normalizer import normalize
from scoring.preference_scorer import user_preference
from scoring.variety_scorer import variety
from scoring.weather_scorer import weather_suitability

logger = get_logger(__name__)

BREAKDOWN_PRECISION = 4

# (dimension, scorer) in evaluation order
DIMENSION_SCORERS: Tuple[Tuple[Dimension, Callable], ...] = (
    (Dimension.COLOR_HARMONY, color_harmony),
    (Dimension.STYLE_MATCHING, style_matching),
    (Dimension.SEASON_SUITABILITY, season_suitability),
    (Dimension.OCCASION_SUITABILITY, occasion_suitability),
    (Dimension.WEATHER, weather_suitability),
    (Dimension.USER_PREFERENCE, user_preference),
    (Dimension.VARIETY, variety),
)


def aggregate(
    dimension_scores: Mapping[str, Optional[float]],
    weights: Optional[Mapping[str, float]] = None,
) -> OutfitScore:
    """
    Combine dimension scores into a weighted total.

    Args:
        dimension_scores: Dimension key -> score, ``None`` for unavailable
        weights: Dimension key -> weight (defaults to ``DEFAULT_WEIGHTS``)

    Returns:
        OutfitScore whose breakdown holds only the present dimensions
    """
    weights = DEFAULT_WEIGHTS if weights is None else weights

    breakdown: Dict[str, float] = {}
    weighted_sum = 0.0
    weight_total = 0.0
    for key, value in dimension_scores.items():
        if value is None:
            continue
        key = key.value if isinstance(key, Dimension) else str(key)
        value = clamp(float(value))
        breakdown[key] = round(value, BREAKDOWN_PRECISION)

        weight = weights.get(key, 0.0)
        if weight > 0:
            weighted_sum += weight * value
            weight_total += weight

    if weight_total <= 0:
        return OutfitScore(total=0.0, breakdown=breakdown)
    return OutfitScore(total=clamp(weighted_sum / weight_total), breakdown=breakdown)


def unique_items(items: Iterable[ClothingItem]) -> List[ClothingItem]:
    """Drop repeated ids, keeping the first occurrence."""
    seen = set()
    out = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        out.append(item)
    return out


def score_dimensions(
    items: Iterable[ClothingItem],
    context: Optional[ScoreContext] = None,
    config: Optional[ScoringConfig] = None,
) -> Dict[str, Optional[float]]:
    """
    Run every dimension scorer.

    A scorer that raises is logged and reported as ``None`` (unavailable)
    so one bad dimension cannot sink the whole outfit.
    """
    config = config or DEFAULT_SCORING_CONFIG
    attrs = [normalize(item) for item in unique_items(items)]

    scores: Dict[str, Optional[float]] = {}
    for dimension, scorer in DIMENSION_SCORERS:
        try:
            scores[dimension.value] = scorer(attrs, context, config)
        except Exception as e:
            logger.warning(
                "dimension_scorer_failed",
                dimension=dimension.value,
                error=str(e),
                items=[a.item_id for a in attrs],
            )
            scores[dimension.value] = None
    return scores


def score_outfit(
    items: Iterable[ClothingItem],
    context: Optional[ScoreContext] = None,
    config: Optional[ScoringConfig] = None,
) -> OutfitScore:
    """Score a set of items; empty input scores 0.0 with no breakdown."""
    config = config or DEFAULT_SCORING_CONFIG
    items = unique_items(items)
    if not items:
        return OutfitScore(total=0.0, breakdown={})
    return aggregate(score_dimensions(items, context, config), config.weights)
