"""
Required dimension scorers.

Each scorer takes the outfit's items (raw ``ClothingItem`` or already
``NormalizedAttributes``), an optional ``ScoreContext`` and the scoring
config, and returns a float in [0, 1].  None of them consult anything
beyond their arguments.

- color_harmony:        pairwise hue relationships, averaged
- style_matching:       formality spread + style-family overlap
- season_suitability:   target season coverage, or best common season
- occasion_suitability: target occasion coverage, or best common occasion
"""

from itertools import combinations
from typing import Iterable, List, Optional, Sequence

from config.constants import DEFAULT_SCORING_CONFIG, ScoringConfig
from core.utils import jaccard
from scoring.context import Occasion, ScoreContext, Season
from scoring.normalizer import HSLColor, NormalizedAttributes, hue_distance, normalize


def as_normalized(items: Iterable) -> List[NormalizedAttributes]:
    """Normalize any raw items; already-normalized entries pass through."""
    return [
        item if isinstance(item, NormalizedAttributes) else normalize(item)
        for item in items
    ]


# =============================================================================
# Color harmony
# =============================================================================

def color_pair_score(a: HSLColor, b: HSLColor, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> float:
    """Score one color pairing by its hue relationship."""
    if a.is_neutral or b.is_neutral:
        return config.neutral_pair_score

    distance = hue_distance(a, b)
    if distance <= config.tonal_max_hue:
        if (abs(a.s - b.s) <= config.near_duplicate_delta
                and abs(a.l - b.l) <= config.near_duplicate_delta):
            return config.near_duplicate_score
        return config.tonal_score
    if distance <= config.analogous_max_hue:
        return config.analogous_score
    if distance < config.clash_max_hue:
        return config.clash_score
    if distance < config.triadic_max_hue:
        return config.triadic_score
    return config.complementary_score


def color_harmony(
    items: Sequence,
    context: Optional[ScoreContext] = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    attrs = as_normalized(items)
    if len(attrs) < 2:
        return config.single_item_color_score

    pair_scores = [
        color_pair_score(a.color, b.color, config)
        for a, b in combinations(attrs, 2)
    ]
    return sum(pair_scores) / len(pair_scores)


# =============================================================================
# Style matching
# =============================================================================

def style_matching(
    items: Sequence,
    context: Optional[ScoreContext] = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    """
    Coherence of the outfit's formality level.

    ``1 - (max - min)`` of item formality, blended with the mean pairwise
    Jaccard of style families when at least two items carry a family.
    """
    attrs = as_normalized(items)
    if len(attrs) < 2:
        return 1.0

    formalities = [a.formality for a in attrs]
    formality_score = 1.0 - (max(formalities) - min(formalities))

    styled = [a.style_families for a in attrs if a.style_families]
    if len(styled) < 2:
        return max(0.0, min(1.0, formality_score))

    overlaps = [jaccard(a, b) for a, b in combinations(styled, 2)]
    family_score = sum(overlaps) / len(overlaps)
    score = config.formality_share * formality_score + (1.0 - config.formality_share) * family_score
    return max(0.0, min(1.0, score))


# =============================================================================
# Season / occasion suitability
# =============================================================================

def _coverage(tag_sets: List[frozenset], target, untagged_credit: float) -> float:
    total = 0.0
    for tags in tag_sets:
        if not tags:
            total += untagged_credit
        elif target in tags:
            total += 1.0
    return total / len(tag_sets)


def _suitability(tag_sets: List[frozenset], target, universe, untagged_credit: float) -> float:
    if not tag_sets:
        return 0.0
    if target is not None:
        return _coverage(tag_sets, target, untagged_credit)
    # No target: how well does the outfit agree on any single value
    return max(_coverage(tag_sets, value, untagged_credit) for value in universe)


def season_suitability(
    items: Sequence,
    context: Optional[ScoreContext] = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    attrs = as_normalized(items)
    target = context.season if context is not None else None
    return _suitability([a.seasons for a in attrs], target, list(Season), config.untagged_item_credit)


def occasion_suitability(
    items: Sequence,
    context: Optional[ScoreContext] = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    attrs = as_normalized(items)
    target = context.occasion if context is not None else None
    return _suitability([a.occasions for a in attrs], target, list(Occasion), config.untagged_item_credit)
