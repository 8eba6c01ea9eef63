"""
OutfitScorer -- the scoring orchestrator.

Thin class wrapper over ``scoring.aggregator`` that carries one
``ScoringConfig`` so callers (the generator, API handlers, scripts)
don't have to pass it on every call.

Usage::

    from scoring.scorer import OutfitScorer
    from scoring.context import ScoreContext, Occasion

    scorer = OutfitScorer()
    ctx = ScoreContext(occasion=Occasion.WORK)

    score = scorer.score(items, ctx)
    score.total, score.breakdown

    # With weights / coverage for display
    report = scorer.explain(items, ctx)
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from config.constants import DEFAULT_SCORING_CONFIG, ScoringConfig
from core.utils import convert_numpy
from scoring.aggregator import aggregate, score_dimensions, unique_items
from scoring.context import ScoreContext
from scoring.models import ClothingItem, OutfitCandidate, OutfitScore
from scoring.serialization import score_tier


class OutfitScorer:
    """
    Scores item sets for compatibility.

    Stateless apart from its config: safe to share and reuse.
    """

    def __init__(self, config: Optional[ScoringConfig] = None) -> None:
        self.config = config or DEFAULT_SCORING_CONFIG

    def score(self, items: Iterable[ClothingItem], context: Optional[ScoreContext] = None) -> OutfitScore:
        items = unique_items(items)
        if not items:
            return OutfitScore(total=0.0, breakdown={})
        return aggregate(score_dimensions(items, context, self.config), self.config.weights)

    def score_candidate(self, candidate: OutfitCandidate, context: Optional[ScoreContext] = None) -> OutfitScore:
        return self.score(candidate.items, context)

    def score_many(
        self,
        outfits: Sequence[Iterable[ClothingItem]],
        context: Optional[ScoreContext] = None,
    ) -> List[OutfitScore]:
        return [self.score(items, context) for items in outfits]

    def explain(self, items: Iterable[ClothingItem], context: Optional[ScoreContext] = None) -> Dict[str, Any]:
        """
        Score plus the weights actually applied.

        ``coverage`` is the share of the full weight table that was
        available for this call (1.0 when every weighted dimension ran).
        """
        score = self.score(items, context)
        weights = self.config.weights
        available = sum(w for w in weights.values() if w > 0)
        used = {
            key: weights[key]
            for key in score.breakdown
            if weights.get(key, 0.0) > 0
        }
        missing = sorted(k for k, w in weights.items() if w > 0 and k not in score.breakdown)
        coverage = sum(used.values()) / available if available > 0 else 0.0
        return convert_numpy({
            "total": round(score.total, 4),
            "tier": score_tier(score.total),
            "breakdown": dict(score.breakdown),
            "weights_used": used,
            "missing_dimensions": missing,
            "coverage": round(coverage, 4),
        })
