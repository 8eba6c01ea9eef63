"""
User preference scoring.

Builds a four-axis profile of the outfit (formality, boldness,
layering, colorfulness) and compares it with the user's preference
vector.  Distance is Euclidean, normalized by the diagonal of the unit
hypercube (sqrt(4)) and inverted, so identical vectors score 1.0.

When the user lists preferred colors, the share of items close to one
of them is blended in.
"""

from typing import List, Optional, Sequence

import numpy as np

from config.constants import DEFAULT_SCORING_CONFIG, ScoringConfig
from scoring.constants.style_attributes import LAYER_CATEGORIES
from scoring.context import ScoreContext, UserPreferences
from scoring.dimensions import as_normalized
from scoring.normalizer import NormalizedAttributes, colors_close, parse_color

_MAX_DISTANCE = np.sqrt(4.0)


def outfit_profile(attrs: Sequence[NormalizedAttributes]) -> np.ndarray:
    """[formality, boldness, layering, colorfulness] of the outfit."""
    n = len(attrs)
    formality = float(np.mean([a.formality for a in attrs]))
    boldness = float(np.mean([a.boldness for a in attrs]))

    layers = sum(1 for a in attrs if a.category in LAYER_CATEGORIES)
    # 1 layer -> minimal, 3+ layers -> maximal
    layering = min(1.0, max(0.0, (layers - 1) / 2.0))

    colorfulness = sum(a.color.s for a in attrs if not a.color.is_neutral) / n

    return np.array([formality, boldness, layering, colorfulness], dtype=float)


def _preferred_color_share(attrs: Sequence[NormalizedAttributes], preferred: List[str]) -> float:
    targets = [parse_color(c) for c in preferred]
    targets = [t for t in targets if t.parsed]
    if not targets:
        return 0.0
    matching = sum(
        1 for a in attrs
        if a.color.parsed and any(colors_close(a.color, t) for t in targets)
    )
    return matching / len(attrs)


def preference_score(
    items: Sequence,
    preferences: UserPreferences,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    attrs = as_normalized(items)
    if not attrs:
        return 0.0

    target = np.clip(np.array(preferences.as_vector(), dtype=float), 0.0, 1.0)
    distance = np.linalg.norm(outfit_profile(attrs) - target)
    score = 1.0 - float(distance / _MAX_DISTANCE)

    if preferences.preferred_colors:
        share = config.preferred_color_share
        score = (1.0 - share) * score + share * _preferred_color_share(attrs, preferences.preferred_colors)

    return max(0.0, min(1.0, score))


def user_preference(
    items: Sequence,
    context: Optional[ScoreContext] = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> Optional[float]:
    """User preference dimension; ``None`` without a preference vector."""
    if context is None or context.preferences is None:
        return None
    return preference_score(items, context.preferences, config)
