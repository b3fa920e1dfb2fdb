"""
Wizard Schemas for Bundle Wizard
================================

Request and response models for the customer-facing bundle wizard endpoints.

Every wizard endpoint answers with a WizardStateOut describing what the
storefront should render for the current step. Transitions that the wizard
rejects (over-allocation, out-of-stock pick, proceeding without a choice) are
not errors: the response comes back with ``accepted: false`` and an unchanged
state.

Wizard Status:
--------------
- open: waiting for customer input
- confirmed: review step confirmed; ``confirmation`` holds the order line
- cancelled: customer closed the wizard
"""

from typing import List, Literal, Optional

from pydantic import BaseModel


# =============================================================================
# Requests
# =============================================================================

class SelectFlavorRequest(BaseModel):
    flavor_id: str


class AdjustSlotRequest(BaseModel):
    flavor_id: str
    direction: Literal[-1, 1]


class UpgradeChoiceRequest(BaseModel):
    choice: str


# =============================================================================
# Responses
# =============================================================================

class FlavorOptionOut(BaseModel):
    """A flavor button on a flavor step."""
    id: str
    name: str
    is_special: bool
    surcharge: float
    price_label: str  # "+₱40.00" or "FREE"
    is_available: bool
    stock_label: Optional[str] = None  # "Out of Stock" when unavailable
    is_selected: bool = False
    allocated_units: int = 0


class UpgradeOptionOut(BaseModel):
    key: str
    label: str
    price: float
    price_label: str
    is_selected: bool = False


class WizardStepOut(BaseModel):
    index: int
    kind: str
    label: str
    component_name: Optional[str] = None
    total_units: Optional[int] = None
    units_per_slot: Optional[int] = None
    total_slots: Optional[int] = None
    upgrade_title: Optional[str] = None


class SelectedFlavorLineOut(BaseModel):
    flavor_id: str
    name: str
    quantity: int
    surcharge: float
    category: str


class IncludedItemLineOut(BaseModel):
    name: str
    quantity: int
    surcharge: float


class ConfirmationOut(BaseModel):
    product_id: str
    product_name: str
    base_price: float
    selected_flavors: List[SelectedFlavorLineOut]
    included_items: List[IncludedItemLineOut]
    total_surcharge: float
    unit_price: float
    line_total: float


class WizardStateOut(BaseModel):
    wizard_id: str
    product_id: str
    product_name: str
    status: Literal["loading", "open", "confirmed", "cancelled"]
    accepted: bool = True
    step: Optional[WizardStepOut] = None
    step_number: int = 0
    total_steps: int = 0
    is_last_step: bool = False
    can_proceed: bool = False
    flavors: List[FlavorOptionOut] = []
    allocated_units: int = 0
    upgrade_options: List[UpgradeOptionOut] = []
    summary: Optional[ConfirmationOut] = None  # preview shown on the review step
    empty_state_message: Optional[str] = None
    base_price: float
    total_surcharge: float = 0.0
    total_price: float
    total_price_label: str
    confirmation: Optional[ConfirmationOut] = None
