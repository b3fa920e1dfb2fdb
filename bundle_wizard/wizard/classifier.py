"""
Component Classifier.

Resolves, once per wizard load, how each bundle component is presented:
which flavor list it uses, whether its pieces are split across flavor slots,
and what the step and included-item labels read.
"""

import math
from dataclasses import dataclass

from ..config import DEFAULT_UNITS_PER_FLAVOR
from .constants import (
    CATEGORY_KEYWORDS,
    DEFAULT_CATEGORY,
    DEFAULT_STEP_LABEL,
    INCLUDED_ITEM_LABELS,
    STEP_LABELS,
)
from .models import BundleComponent, FlavorCategory


@dataclass(frozen=True)
class ComponentClassification:
    """Static selection rules for one flavor-selectable component."""
    category: FlavorCategory
    is_multi_slot: bool
    total_units: int
    units_per_slot: int
    total_slots: int


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def get_flavor_category(product_name: str) -> FlavorCategory:
    """Map a component product name to the flavor list it draws from."""
    lower = product_name.lower()
    for keywords, category in CATEGORY_KEYWORDS:
        if _contains_any(lower, keywords):
            return category
    return DEFAULT_CATEGORY


def get_step_label(product_name: str) -> str:
    """Heading shown above a flavor step, e.g. "CHOOSE WINGS FLAVOR"."""
    lower = product_name.lower()
    for required, excluded, label in STEP_LABELS:
        if _contains_any(lower, required) and not _contains_any(lower, excluded):
            return label
    return DEFAULT_STEP_LABEL


def get_included_item_label(product_name: str) -> str:
    """Normalized display name for an included item; unknown names pass through."""
    lower = product_name.lower()
    for keyword, label in INCLUDED_ITEM_LABELS:
        if keyword in lower:
            return label
    return product_name


def classify_component(
    component: BundleComponent,
    default_units_per_slot: int = DEFAULT_UNITS_PER_FLAVOR,
) -> ComponentClassification:
    """
    Work out the selection mode for a flavor-selectable component.

    A component is multi-slot when its pieces outnumber one slot. A component
    whose total is not a whole number of slots is treated as one slot covering
    every piece, so it falls back to a single flavor choice.
    """
    total_units = component.total_units if component.total_units and component.total_units > 0 else 1
    units_per_slot = component.units_per_slot
    if not units_per_slot or units_per_slot <= 0:
        units_per_slot = default_units_per_slot

    is_multi_slot = total_units > units_per_slot
    if is_multi_slot and total_units % units_per_slot != 0:
        units_per_slot = total_units
        is_multi_slot = False

    return ComponentClassification(
        category=get_flavor_category(component.product_name),
        is_multi_slot=is_multi_slot,
        total_units=total_units,
        units_per_slot=units_per_slot,
        total_slots=math.ceil(total_units / units_per_slot),
    )
