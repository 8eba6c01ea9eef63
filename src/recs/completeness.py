"""
Outfit completeness rules.

An outfit is wearable when it covers:
- a top, or a dress
- a bottom, unless a dress is present
- shoes (can be switched off by the caller)
"""

from dataclasses import dataclass, field
from typing import Iterable, List

from scoring.models import ClothingCategory, ClothingItem

SLOT_TOP = "top"
SLOT_BOTTOM = "bottom"
SLOT_SHOES = "shoes"

SLOT_SUGGESTIONS = {
    SLOT_TOP: "Add a shirt, blouse, or sweater",
    SLOT_BOTTOM: "Add pants, skirt, or shorts",
    SLOT_SHOES: "Add appropriate footwear",
}


@dataclass
class CompletenessReport:
    is_complete: bool
    missing_slots: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)


def check_completeness(items: Iterable[ClothingItem], require_shoes: bool = True) -> CompletenessReport:
    """Which required slots does this set of items leave empty?"""
    categories = {item.category for item in items}
    has_dress = ClothingCategory.DRESSES in categories

    missing: List[str] = []
    if not has_dress and ClothingCategory.TOPS not in categories:
        missing.append(SLOT_TOP)
    if not has_dress and ClothingCategory.BOTTOMS not in categories:
        missing.append(SLOT_BOTTOM)
    if require_shoes and ClothingCategory.SHOES not in categories:
        missing.append(SLOT_SHOES)

    return CompletenessReport(
        is_complete=not missing,
        missing_slots=missing,
        suggestions=[SLOT_SUGGESTIONS[slot] for slot in missing],
    )
