"""
Schemas Package for Bundle Wizard
=================================

Pydantic models used for API request validation and response serialization.

Schema Organization:
--------------------
- **catalog.py**: Product, flavor and bundle component CRUD schemas
- **wizard.py**: Customer wizard requests and state responses

Naming Conventions:
-------------------
- *Out: Response models (e.g., FlavorOut) - what API returns
- *Create: Request models for POST - what client sends to create
- *Update: Request models for PUT/PATCH - what client sends to update
- *Request: Action bodies (e.g., AdjustSlotRequest)
"""

from .catalog import (
    ProductOut,
    ProductCreate,
    ProductUpdate,
    FlavorOut,
    FlavorCreate,
    FlavorUpdate,
    FlavorAvailabilityUpdate,
    BundleComponentOut,
    BundleComponentCreate,
    BundleComponentUpdate,
)
from .wizard import (
    SelectFlavorRequest,
    AdjustSlotRequest,
    UpgradeChoiceRequest,
    FlavorOptionOut,
    UpgradeOptionOut,
    WizardStepOut,
    SelectedFlavorLineOut,
    IncludedItemLineOut,
    ConfirmationOut,
    WizardStateOut,
)

__all__ = [
    # Catalog
    "ProductOut",
    "ProductCreate",
    "ProductUpdate",
    "FlavorOut",
    "FlavorCreate",
    "FlavorUpdate",
    "FlavorAvailabilityUpdate",
    "BundleComponentOut",
    "BundleComponentCreate",
    "BundleComponentUpdate",
    # Wizard
    "SelectFlavorRequest",
    "AdjustSlotRequest",
    "UpgradeChoiceRequest",
    "FlavorOptionOut",
    "UpgradeOptionOut",
    "WizardStepOut",
    "SelectedFlavorLineOut",
    "IncludedItemLineOut",
    "ConfirmationOut",
    "WizardStateOut",
]
