"""
Scoring constants and algorithm configuration.

These are values that don't change based on environment but may need
to be tuned or referenced across the codebase.  The weight table lives
here and nowhere else: both the generator and any caller that displays
a score go through the same ``ScoringConfig``.
"""

from dataclasses import dataclass, field, replace
from typing import Dict


# =============================================================================
# Dimension Weights
# =============================================================================

# Dimension keys: color_harmony, style_matching, season_suitability,
#                 occasion_suitability, weather, user_preference, variety
DEFAULT_WEIGHTS: Dict[str, float] = {
    "style_matching": 0.25,        # formality / style-family coherence
    "color_harmony": 0.25,         # pairwise hue relationships
    "occasion_suitability": 0.15,  # target or common occasion overlap
    "season_suitability": 0.15,    # target or common season overlap
    "weather": 0.10,               # only when a weather snapshot is supplied
    "user_preference": 0.05,       # only when a preference vector is supplied
    "variety": 0.05,               # only when a history list is supplied
}


# =============================================================================
# Scoring Configuration
# =============================================================================

@dataclass(frozen=True)
class ScoringConfig:
    """Weights and thresholds for outfit scoring and generation."""

    weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))

    # Color harmony
    single_item_color_score: float = 0.75
    neutral_pair_score: float = 0.80
    near_duplicate_score: float = 0.50
    tonal_score: float = 0.70
    analogous_score: float = 0.85
    triadic_score: float = 0.75
    complementary_score: float = 0.90
    clash_score: float = 0.35

    # Hue-distance band edges (degrees) and near-duplicate S/L tolerance
    tonal_max_hue: float = 15.0
    analogous_max_hue: float = 45.0
    clash_max_hue: float = 90.0
    triadic_max_hue: float = 150.0
    near_duplicate_delta: float = 0.30

    # Style matching: share of the formality-spread component
    formality_share: float = 0.70

    # Season / occasion: credit for items with no tags at all
    untagged_item_credit: float = 0.5

    # Variety
    variety_similarity_threshold: float = 0.6
    variety_decay_days: float = 7.0

    # User preference: share of the preferred-color component
    preferred_color_share: float = 0.30

    # Generator
    exhaustive_limit: int = 5000
    sample_budget: int = 2000
    max_accessories: int = 1

    def with_weights(self, **overrides: float) -> "ScoringConfig":
        """Return a copy with some dimension weights replaced."""
        weights = dict(self.weights)
        weights.update(overrides)
        return replace(self, weights=weights)


DEFAULT_SCORING_CONFIG = ScoringConfig()


# =============================================================================
# Score Display
# =============================================================================

SCORE_TIERS = (
    (0.85, "excellent"),
    (0.70, "good"),
    (0.50, "fair"),
)
LOWEST_SCORE_TIER = "poor"
