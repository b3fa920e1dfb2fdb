"""
Pydantic models for the bundle flavor wizard.

The wizard walks a customer through one step per flavor-selectable bundle
component, an optional paid-upgrade step per upgradeable included item, and
a final review step:

- SINGLE_SELECT step -> SingleSelection (one flavor covers the whole component)
- SLOT_ALLOCATION step -> SlotAllocation (pieces split across flavors by slot)
- UPGRADE step -> chosen option key of an UpgradeDefinition
- REVIEW step -> read-only summary, confirms the bundle
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class FlavorCategory(str, Enum):
    """Which flavor list a bundle component draws from."""
    WINGS = "wings"
    FRIES = "fries"
    DRINKS = "drinks"


class FlavorType(str, Enum):
    STANDARD = "standard"
    SPECIAL = "special"

    @classmethod
    def _missing_(cls, value):
        # Older catalogs store free flavors as "all_time"
        if value == "all_time":
            return cls.STANDARD
        return None


class StepKind(str, Enum):
    """Kinds of wizard steps, resolved once when the wizard loads."""
    SINGLE_SELECT = "single_select"
    SLOT_ALLOCATION = "slot_allocation"
    UPGRADE = "upgrade"
    REVIEW = "review"


class RiceUpgradeChoice(str, Enum):
    PLAIN = "plain"
    JAVA = "java"


# =============================================================================
# Catalog Records
# =============================================================================

class Flavor(BaseModel):
    """A selectable flavor (wing sauce, fry seasoning, drink)."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    flavor_category: FlavorCategory = FlavorCategory.WINGS
    flavor_type: FlavorType = FlavorType.STANDARD
    surcharge: float | None = None  # None and 0 both mean free
    is_active: bool = True  # catalog visibility
    is_available: bool = True  # real-time stock, independent of is_active

    @property
    def effective_surcharge(self) -> float:
        return self.surcharge or 0.0

    @property
    def is_free(self) -> bool:
        return self.effective_surcharge <= 0

    @property
    def is_special(self) -> bool:
        return self.flavor_type == FlavorType.SPECIAL


class BundleProduct(BaseModel):
    """The purchasable bundle the wizard is configuring."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: float = 0.0


class BundleComponent(BaseModel):
    """A sub-item of a bundle (e.g. "6 pcs Wings", "Plain Rice")."""
    model_config = ConfigDict(frozen=True)

    id: str
    product_id: str
    product_name: str
    has_flavor_selection: bool = False
    total_units: int | None = None  # pieces in the component, e.g. 6
    units_per_slot: int | None = None  # pieces per flavor slot, e.g. 3
    quantity: int = 1  # count for included (non-selectable) items


# =============================================================================
# Per-Step Selection State
# =============================================================================

class SingleSelection(BaseModel):
    """Selection for a single-slot step: one flavor or nothing yet."""
    kind: Literal["single"] = "single"
    flavor_id: str | None = None

    def has_selection(self) -> bool:
        return self.flavor_id is not None


class SlotAllocation(BaseModel):
    """Selection for a multi-slot step: flavor id -> allocated units.

    Flavors at zero units are never stored; insertion order is the order in
    which flavors were first picked.
    """
    kind: Literal["slots"] = "slots"
    allocations: dict[str, int] = Field(default_factory=dict)

    def allocated_units(self) -> int:
        return sum(self.allocations.values())

    def units_for(self, flavor_id: str) -> int:
        return self.allocations.get(flavor_id, 0)


# =============================================================================
# Confirmation Output
# =============================================================================

class SelectedFlavorLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    flavor_id: str
    name: str
    quantity: int
    surcharge: float
    category: FlavorCategory


class IncludedItemLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    quantity: int
    surcharge: float = 0.0


class BundleConfirmation(BaseModel):
    """Normalized order-line payload handed to the cart on confirmation."""
    model_config = ConfigDict(frozen=True)

    product: BundleProduct
    selected_flavors: tuple[SelectedFlavorLine, ...] = ()
    included_items: tuple[IncludedItemLine, ...] = ()

    @property
    def total_surcharge(self) -> float:
        return (
            sum(line.surcharge for line in self.selected_flavors)
            + sum(line.surcharge for line in self.included_items)
        )

    @property
    def unit_price(self) -> float:
        return self.product.price + self.total_surcharge
