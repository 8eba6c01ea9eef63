"""
Outfit recommendations.

Candidate generation over a wardrobe snapshot and the completeness
rules every generated outfit satisfies.
"""

from recs.completeness import CompletenessReport, check_completeness
from recs.generator import (
    GenerationConstraints,
    GenerationResult,
    GenerationStatus,
    OutfitGenerator,
    ScoredOutfit,
    generate,
)

__all__ = [
    "CompletenessReport",
    "check_completeness",
    "GenerationConstraints",
    "GenerationResult",
    "GenerationStatus",
    "OutfitGenerator",
    "ScoredOutfit",
    "generate",
]
