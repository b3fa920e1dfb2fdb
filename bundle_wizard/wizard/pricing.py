"""
Pricing Calculator for bundle selections.

Surcharge rules:
- Single-slot step: the selected flavor's surcharge.
- Multi-slot step: one surcharge per distinct flavor with units allocated,
  however many slots that flavor covers.
- Upgrade step: the chosen option's price.

Flavors with a zero or missing surcharge are free and labeled "FREE".
"""

import logging
from typing import Mapping

from ..config import CURRENCY_SYMBOL
from .catalog import FlavorCatalog
from .constants import FREE_LABEL
from .models import BundleConfirmation, Flavor, SingleSelection, SlotAllocation, StepKind
from .steps import WizardStep

logger = logging.getLogger(__name__)


def format_price(amount: float) -> str:
    return f"{CURRENCY_SYMBOL}{amount:.2f}"


def format_surcharge_label(flavor: Flavor) -> str:
    """Price tag shown next to a flavor option, e.g. "+₱40.00" or "FREE"."""
    if flavor.is_free:
        return FREE_LABEL
    return f"+{format_price(flavor.effective_surcharge)}"


class PricingCalculator:
    """Computes the bundle surcharge from the wizard's current selections."""

    def __init__(self, catalog: FlavorCatalog):
        self._catalog = catalog

    def _flavor_surcharge(self, flavor_id: str) -> float:
        flavor = self._catalog.get(flavor_id)
        if flavor is None:
            logger.warning("Selected flavor %s missing from catalog, pricing as free", flavor_id)
            return 0.0
        return flavor.effective_surcharge

    def step_surcharge(
        self,
        step: WizardStep,
        selection: SingleSelection | SlotAllocation | None,
        upgrade_choice: str | None = None,
    ) -> float:
        if step.kind == StepKind.SINGLE_SELECT:
            if isinstance(selection, SingleSelection) and selection.flavor_id is not None:
                return self._flavor_surcharge(selection.flavor_id)
            return 0.0

        if step.kind == StepKind.SLOT_ALLOCATION:
            if not isinstance(selection, SlotAllocation):
                return 0.0
            # Charged once per distinct flavor, not per slot
            return sum(
                self._flavor_surcharge(flavor_id)
                for flavor_id, units in selection.allocations.items()
                if units > 0
            )

        if step.kind == StepKind.UPGRADE and step.upgrade is not None and upgrade_choice is not None:
            option = step.upgrade.get_option(upgrade_choice)
            return option.price if option else 0.0

        return 0.0

    def total_surcharge(
        self,
        steps: list[WizardStep],
        selections: Mapping[int, SingleSelection | SlotAllocation],
        upgrade_choices: Mapping[str, str],
    ) -> float:
        total = 0.0
        for step in steps:
            choice = upgrade_choices.get(step.upgrade.key) if step.upgrade else None
            total += self.step_surcharge(step, selections.get(step.index), choice)
        return total


def compute_line_total(confirmation: BundleConfirmation, quantity: int = 1) -> float:
    """
    Cart line total for a confirmed bundle.

    The base price scales with quantity; flavor and included-item surcharges
    are added once per line.
    """
    return confirmation.product.price * quantity + confirmation.total_surcharge
