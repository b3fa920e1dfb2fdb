"""
Wizard Keyword Tables.

Declarative lookup tables used to classify bundle components by the name of
their linked product. All matching is a case-insensitive substring test, and
each table is checked top to bottom with the first hit winning, so more
specific keywords must come before generic ones.
"""

from .models import FlavorCategory

# =============================================================================
# Flavor Category Detection
# =============================================================================

# Ribs, chicken and wings all draw from the wing sauce list
CATEGORY_KEYWORDS: list[tuple[tuple[str, ...], FlavorCategory]] = [
    (("rib", "chicken", "wing", "ala carte"), FlavorCategory.WINGS),
    (("fries", "fry"), FlavorCategory.FRIES),
    (("drink", "beverage"), FlavorCategory.DRINKS),
]

DEFAULT_CATEGORY = FlavorCategory.WINGS


# =============================================================================
# Step Headings
# =============================================================================

# (keywords that must appear, keywords that must not appear, heading)
STEP_LABELS: list[tuple[tuple[str, ...], tuple[str, ...], str]] = [
    (("rib",), (), "CHOOSE RIBS FLAVOR"),
    (("chicken",), ("wing",), "CHOOSE CHICKEN FLAVOR"),
    (("wing", "ala carte"), (), "CHOOSE WINGS FLAVOR"),
    (("fries", "fry"), (), "CHOOSE FRIES FLAVOR"),
    (("drink", "beverage"), (), "CHOOSE YOUR DRINK"),
]

DEFAULT_STEP_LABEL = "CHOOSE FLAVOR"

UPGRADE_STEP_LABEL = "UPGRADE YOUR SIDE"
REVIEW_STEP_LABEL = "REVIEW YOUR BUNDLE"


# =============================================================================
# Included Item Display Names
# =============================================================================

# "java rice" is listed before "rice" so an already-upgraded item keeps its name
INCLUDED_ITEM_LABELS: list[tuple[str, str]] = [
    ("java rice", "Java Rice"),
    ("garlic rice", "Garlic Rice"),
    ("plain rice", "Plain Rice"),
    ("rice", "Plain Rice"),
    ("coleslaw", "Coleslaw"),
    ("mashed", "Mashed Potatoes"),
    ("corn", "Buttered Corn"),
    ("gravy", "Gravy"),
    ("fries", "Fries"),
    ("soda", "Soda"),
    ("iced tea", "Iced Tea"),
]

EMPTY_STATE_MESSAGE = "No options available for this selection."
OUT_OF_STOCK_LABEL = "Out of Stock"
FREE_LABEL = "FREE"
