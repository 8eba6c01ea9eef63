"""
Per-category style baselines and tag vocabularies.

Used by the normalizer to estimate each item's formality, boldness and
style families, and by the weather scorer to recognise layering and
weather-protection pieces from free-form tags.
"""

from scoring.context import Occasion
from scoring.models import ClothingCategory

# ── Category baselines (formality, boldness) ──────────────────────

CATEGORY_STYLE_BASE: dict = {
    ClothingCategory.TOPS: (0.5, 0.5),
    ClothingCategory.BOTTOMS: (0.5, 0.4),
    ClothingCategory.DRESSES: (0.7, 0.6),
    ClothingCategory.OUTERWEAR: (0.6, 0.5),
    ClothingCategory.SHOES: (0.5, 0.4),
    ClothingCategory.ACCESSORIES: (0.5, 0.7),
    ClothingCategory.UNDERWEAR: (0.3, 0.5),
    ClothingCategory.ACTIVEWEAR: (0.2, 0.6),
    ClothingCategory.SLEEPWEAR: (0.1, 0.4),
    ClothingCategory.SWIMWEAR: (0.3, 0.7),
}

# Unknown category
DEFAULT_STYLE_BASE = (0.5, 0.5)

# ── Occasion -> formality shift ───────────────────────────────────

OCCASION_FORMALITY_SHIFT: dict = {
    Occasion.FORMAL: 0.3,
    Occasion.WORK: 0.2,
    Occasion.CASUAL: -0.2,
    Occasion.SPORT: -0.3,
}

# ── Boldness tag vocabulary ───────────────────────────────────────

BOLDNESS_SHIFT = 0.1

BOLD_TAGS: frozenset = frozenset({
    "bright", "pattern", "print", "colorful", "vibrant",
})

CONSERVATIVE_TAGS: frozenset = frozenset({
    "plain", "simple", "basic", "classic",
})

# ── Style families ────────────────────────────────────────────────
# A family is assigned when any keyword appears as a tag or as a word
# of the subcategory.

STYLE_FAMILY_KEYWORDS: dict = {
    "casual": frozenset({
        "casual", "relaxed", "everyday", "tshirt", "t-shirt", "tee",
        "jeans", "denim", "sneakers", "hoodie", "sweatshirt",
    }),
    "formal": frozenset({
        "formal", "business", "tailored", "suit", "blazer", "dress shirt",
        "oxford", "heels", "pumps", "gown", "tie", "silk",
    }),
    "sporty": frozenset({
        "sporty", "athletic", "sport", "running", "gym", "performance",
        "leggings", "joggers", "trainers",
    }),
    "bohemian": frozenset({
        "bohemian", "boho", "floral", "fringe", "maxi", "peasant",
        "crochet", "paisley",
    }),
    "edgy": frozenset({
        "edgy", "leather", "studded", "biker", "moto", "punk", "grunge",
        "combat",
    }),
    "romantic": frozenset({
        "romantic", "lace", "ruffle", "feminine", "bow", "satin", "pastel",
    }),
    "preppy": frozenset({
        "preppy", "polo", "loafers", "chinos", "cardigan", "plaid",
        "pleated", "cable knit",
    }),
    "minimalist": frozenset({
        "minimalist", "minimal", "clean", "basic", "simple", "plain",
        "classic", "essential",
    }),
    "streetwear": frozenset({
        "streetwear", "street", "oversized", "graphic", "cargo", "bomber",
        "high-tops", "trendy",
    }),
}

# ── Weather-related tags (substring match) ────────────────────────

LONG_SLEEVE_TAGS: tuple = ("long sleeve", "long-sleeve", "sweater", "turtleneck")
WARM_WEATHER_TAGS: tuple = ("shorts", "sandals", "tank", "sleeveless", "linen")
WATERPROOF_TAGS: tuple = ("waterproof", "water-resistant", "rain")
WINDPROOF_TAGS: tuple = ("windproof", "wind-resistant")

# Categories that count as a clothing layer for layering estimates
LAYER_CATEGORIES: frozenset = frozenset({
    ClothingCategory.TOPS,
    ClothingCategory.DRESSES,
    ClothingCategory.OUTERWEAR,
})
