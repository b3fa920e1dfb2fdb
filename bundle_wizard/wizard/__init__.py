"""
Bundle Flavor Wizard.

This package configures multi-component menu bundles (e.g. "6 pcs wings +
fries + drink"):
- Component classification into flavor categories and slot rules
- A step-by-step selection state machine with paid upgrade steps
- Surcharge pricing (one charge per distinct flavor on slot steps)
- Assembly of the confirmed selections into an order-line payload
"""

from .models import (
    FlavorCategory,
    FlavorType,
    StepKind,
    RiceUpgradeChoice,
    Flavor,
    BundleProduct,
    BundleComponent,
    SingleSelection,
    SlotAllocation,
    SelectedFlavorLine,
    IncludedItemLine,
    BundleConfirmation,
)
from .catalog import FlavorCatalog
from .classifier import (
    ComponentClassification,
    classify_component,
    get_flavor_category,
    get_included_item_label,
    get_step_label,
)
from .upgrades import UpgradeOption, UpgradeDefinition, RICE_UPGRADE, DEFAULT_UPGRADES
from .steps import WizardStep, build_steps
from .pricing import PricingCalculator, compute_line_total, format_price, format_surcharge_label
from .assembler import assemble_confirmation
from .state_machine import BundleWizard

__all__ = [
    # Models
    "FlavorCategory",
    "FlavorType",
    "StepKind",
    "RiceUpgradeChoice",
    "Flavor",
    "BundleProduct",
    "BundleComponent",
    "SingleSelection",
    "SlotAllocation",
    "SelectedFlavorLine",
    "IncludedItemLine",
    "BundleConfirmation",
    # Catalog and classification
    "FlavorCatalog",
    "ComponentClassification",
    "classify_component",
    "get_flavor_category",
    "get_included_item_label",
    "get_step_label",
    # Steps and upgrades
    "UpgradeOption",
    "UpgradeDefinition",
    "RICE_UPGRADE",
    "DEFAULT_UPGRADES",
    "WizardStep",
    "build_steps",
    # Pricing and assembly
    "PricingCalculator",
    "compute_line_total",
    "format_price",
    "format_surcharge_label",
    "assemble_confirmation",
    "BundleWizard",
]
