"""
Fashion color vocabulary.

Maps the color names users type into the wardrobe (and the labels the
item-tagging flow produces) onto hex values the normalizer can convert
to HSL.  Keys are lowercase; multi-word keys use single spaces.
"""

# ── Named colors ──────────────────────────────────────────────────

COLOR_HEX: dict = {
    # Neutrals
    "black": "#000000",
    "jet black": "#0a0a0a",
    "charcoal": "#36454f",
    "graphite": "#383838",
    "dark grey": "#555555",
    "grey": "#808080",
    "gray": "#808080",
    "heather grey": "#9e9e9e",
    "heather gray": "#9e9e9e",
    "light grey": "#c8c8c8",
    "light gray": "#c8c8c8",
    "silver": "#c0c0c0",
    "white": "#ffffff",
    "off-white": "#f8f5ee",
    "off white": "#f8f5ee",
    "ivory": "#fffff0",
    "cream": "#fffdd0",
    "ecru": "#f0ead6",
    "bone": "#e3dac9",
    "beige": "#f5f5dc",
    "oatmeal": "#e0d6c2",
    "sand": "#c2b280",
    "stone": "#928e85",
    "taupe": "#483c32",
    "tan": "#d2b48c",
    "khaki": "#c3b091",
    "camel": "#c19a6b",
    "brown": "#8b4513",
    "chocolate": "#7b3f00",
    "espresso": "#4b3621",
    "cognac": "#9a463d",
    "navy": "#000080",
    "navy blue": "#000080",
    "midnight": "#191970",
    "denim": "#1560bd",
    "olive": "#808000",
    # Reds / pinks
    "red": "#ff0000",
    "cherry": "#d2042d",
    "crimson": "#dc143c",
    "scarlet": "#ff2400",
    "burgundy": "#800020",
    "maroon": "#800000",
    "wine": "#722f37",
    "oxblood": "#4a0000",
    "rust": "#b7410e",
    "brick": "#cb4154",
    "pink": "#ffc0cb",
    "light pink": "#ffb6c1",
    "blush": "#de5d83",
    "hot pink": "#ff69b4",
    "fuchsia": "#ff00ff",
    "magenta": "#ff00ff",
    "rose": "#ff007f",
    "coral": "#ff7f50",
    "salmon": "#fa8072",
    "peach": "#ffe5b4",
    # Oranges / yellows
    "orange": "#ffa500",
    "burnt orange": "#cc5500",
    "terracotta": "#e2725b",
    "apricot": "#fbceb1",
    "amber": "#ffbf00",
    "mustard": "#ffdb58",
    "yellow": "#ffff00",
    "lemon": "#fff44f",
    "butter": "#fffacd",
    "gold": "#ffd700",
    # Greens
    "green": "#008000",
    "lime": "#32cd32",
    "mint": "#98ff98",
    "sage": "#9caf88",
    "emerald": "#50c878",
    "forest green": "#228b22",
    "hunter green": "#355e3b",
    "army green": "#4b5320",
    "khaki green": "#8a865d",
    "teal": "#008080",
    "turquoise": "#40e0d0",
    "aqua": "#00ffff",
    "cyan": "#00ffff",
    # Blues
    "blue": "#0000ff",
    "light blue": "#add8e6",
    "baby blue": "#89cff0",
    "sky blue": "#87ceeb",
    "powder blue": "#b0e0e6",
    "royal blue": "#4169e1",
    "cobalt": "#0047ab",
    "indigo": "#4b0082",
    "steel blue": "#4682b4",
    "periwinkle": "#ccccff",
    # Purples
    "purple": "#800080",
    "violet": "#8f00ff",
    "lavender": "#e6e6fa",
    "lilac": "#c8a2c8",
    "mauve": "#e0b0ff",
    "plum": "#8e4585",
    "eggplant": "#614051",
}


# ── Colors that act as neutrals in an outfit ──────────────────────
# Some of these are saturated enough to fail the HSL neutral test
# (navy, denim, camel) but are worn as neutrals.

NEUTRAL_COLOR_NAMES: frozenset = frozenset({
    "black", "jet black", "charcoal", "graphite", "dark grey", "grey", "gray",
    "heather grey", "heather gray", "light grey", "light gray", "silver",
    "white", "off-white", "off white", "ivory", "cream", "ecru", "bone",
    "beige", "oatmeal", "sand", "stone", "taupe", "tan", "khaki", "camel",
    "brown", "chocolate", "espresso", "cognac", "navy", "navy blue",
    "midnight", "denim", "olive",
})


# Prefix words that shift a base color without changing its name
COLOR_MODIFIERS: frozenset = frozenset({
    "light", "dark", "pale", "deep", "bright", "dusty", "muted", "washed",
    "faded", "soft", "neon", "pastel", "heather", "vintage",
})
