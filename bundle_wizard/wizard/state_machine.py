"""
Bundle Wizard State Machine.

Drives the customer through a bundle's flavor steps:

    flavor steps (single-select or slot allocation)
    -> optional paid upgrade steps (e.g. Java Rice)
    -> review
    -> confirmed (on_confirm fires once, wizard closes)

Every transition runs synchronously against this instance's in-memory state.
Invalid transitions are rejected silently: state is left untouched and the
method returns False so the host can keep its control disabled. Nothing in
here raises for bad user input.

The wizard starts in a loading state and accepts no transitions until the
host hands it the bundle's components via load().
"""

import logging
from typing import Callable, Iterable

from .assembler import assemble_confirmation
from .catalog import FlavorCatalog
from .constants import EMPTY_STATE_MESSAGE
from .models import (
    BundleComponent,
    BundleConfirmation,
    BundleProduct,
    Flavor,
    IncludedItemLine,
    RiceUpgradeChoice,
    SelectedFlavorLine,
    SingleSelection,
    SlotAllocation,
    StepKind,
)
from .pricing import PricingCalculator
from .steps import WizardStep, build_steps
from .upgrades import DEFAULT_UPGRADES, RICE_UPGRADE, UpgradeDefinition

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[BundleProduct, list[SelectedFlavorLine], list[IncludedItemLine]], None]
OpenChangeCallback = Callable[[bool], None]


class BundleWizard:
    """
    Selection state for one open bundle wizard.

    Args:
        product: The bundle being configured.
        flavors: Flavor catalog fetched by the host; filtered locally per step.
        on_confirm: Called once with (product, selected_flavors, included_items)
                    when the review step is confirmed.
        on_open_change: Called with False when the wizard is cancelled or
                        confirmed, so the host can dismiss it.
        upgrades: Paid upgrade definitions to offer when their target item is
                  part of the bundle.
    """

    def __init__(
        self,
        product: BundleProduct,
        flavors: Iterable[Flavor],
        on_confirm: ConfirmCallback | None = None,
        on_open_change: OpenChangeCallback | None = None,
        upgrades: Iterable[UpgradeDefinition] = DEFAULT_UPGRADES,
    ):
        self.product = product
        self.catalog = FlavorCatalog(flavors)
        self._pricing = PricingCalculator(self.catalog)
        self._upgrades = tuple(upgrades)
        self._on_confirm = on_confirm
        self._on_open_change = on_open_change

        self._components: list[BundleComponent] = []
        self.steps: list[WizardStep] = []
        self.current_step_index = 0
        self._selections: dict[int, SingleSelection | SlotAllocation] = {}
        self._upgrade_choices: dict[str, str] = {}
        self._surcharge_memo: tuple[tuple, float] | None = None

        self.is_loading = True
        self.is_open = True
        self.confirmation: BundleConfirmation | None = None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def load(self, components: Iterable[BundleComponent]) -> None:
        """Finish loading with the bundle's components and present step 0."""
        self._components = list(components)
        self.steps = build_steps(self._components, self._upgrades)
        self._reset_selections()
        self.is_loading = False
        logger.debug(
            "Wizard loaded for %s: %d components, %d steps",
            self.product.name, len(self._components), len(self.steps),
        )

    def close(self) -> None:
        """Cancel or dismiss the wizard, discarding all selections."""
        if not self.is_open:
            return
        self._reset_selections()
        self.is_open = False
        if self._on_open_change:
            self._on_open_change(False)

    cancel = close

    def _reset_selections(self) -> None:
        self.current_step_index = 0
        self._selections = {}
        for step in self.steps:
            empty = step.empty_selection()
            if empty is not None:
                self._selections[step.index] = empty
        self._upgrade_choices = {
            step.upgrade.key: step.upgrade.default_choice
            for step in self.steps
            if step.upgrade is not None
        }
        self._surcharge_memo = None

    def _accepts_transitions(self) -> bool:
        return self.is_open and not self.is_loading and bool(self.steps)

    # =========================================================================
    # Read-only State
    # =========================================================================

    @property
    def current_step(self) -> WizardStep | None:
        if not self.steps:
            return None
        return self.steps[self.current_step_index]

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def is_last_step(self) -> bool:
        return bool(self.steps) and self.current_step_index == len(self.steps) - 1

    @property
    def components(self) -> list[BundleComponent]:
        return list(self._components)

    @property
    def selections(self) -> dict[int, SingleSelection | SlotAllocation]:
        return {idx: sel.model_copy(deep=True) for idx, sel in self._selections.items()}

    @property
    def upgrade_choices(self) -> dict[str, str]:
        return dict(self._upgrade_choices)

    @property
    def rice_upgrade(self) -> RiceUpgradeChoice | None:
        """Current rice choice, or None when the bundle has no plain rice."""
        choice = self._upgrade_choices.get(RICE_UPGRADE.key)
        return RiceUpgradeChoice(choice) if choice is not None else None

    def selection_for(self, step_index: int) -> SingleSelection | SlotAllocation | None:
        selection = self._selections.get(step_index)
        return selection.model_copy(deep=True) if selection is not None else None

    def step_flavors(self) -> list[Flavor]:
        """Flavors offered on the current step, unavailable ones included."""
        step = self.current_step
        if step is None or not step.is_flavor_step:
            return []
        return self.catalog.for_category(step.classification.category)

    @property
    def empty_state_message(self) -> str | None:
        """Message to show when the catalog gave this step nothing to offer."""
        if self.is_loading:
            return None
        if not self._components:
            return EMPTY_STATE_MESSAGE
        step = self.current_step
        if step is not None and step.is_flavor_step and not self.step_flavors():
            return EMPTY_STATE_MESSAGE
        return None

    @property
    def can_proceed(self) -> bool:
        if not self._accepts_transitions() or not self._components:
            return False
        step = self.current_step
        if step.kind in (StepKind.REVIEW, StepKind.UPGRADE):
            return True
        selection = self._selections.get(step.index)
        if step.kind == StepKind.SLOT_ALLOCATION:
            return selection.allocated_units() == step.classification.total_units
        return selection.has_selection()

    def allocated_units(self, step_index: int | None = None) -> int:
        idx = self.current_step_index if step_index is None else step_index
        selection = self._selections.get(idx)
        if isinstance(selection, SlotAllocation):
            return selection.allocated_units()
        return 0

    # =========================================================================
    # Pricing
    # =========================================================================

    def _selection_key(self) -> tuple:
        parts = []
        for idx in sorted(self._selections):
            selection = self._selections[idx]
            if isinstance(selection, SlotAllocation):
                parts.append((idx, tuple(sorted(selection.allocations.items()))))
            else:
                parts.append((idx, selection.flavor_id))
        return tuple(parts), tuple(sorted(self._upgrade_choices.items()))

    @property
    def total_surcharge(self) -> float:
        key = self._selection_key()
        if self._surcharge_memo is not None and self._surcharge_memo[0] == key:
            return self._surcharge_memo[1]
        total = self._pricing.total_surcharge(self.steps, self._selections, self._upgrade_choices)
        self._surcharge_memo = (key, total)
        return total

    @property
    def total_price(self) -> float:
        return self.product.price + self.total_surcharge

    # =========================================================================
    # Transitions
    # =========================================================================

    def next(self) -> bool:
        """Advance one step, or confirm the bundle from the review step."""
        if not self.can_proceed:
            logger.debug("Rejected next on step %d: cannot proceed", self.current_step_index)
            return False
        if self.is_last_step:
            self._confirm()
        else:
            self.current_step_index += 1
        return True

    def back(self) -> bool:
        if not self._accepts_transitions() or self.current_step_index == 0:
            return False
        self.current_step_index -= 1
        return True

    def select_single(self, flavor_id: str) -> bool:
        """Pick the flavor for a single-slot step, replacing any earlier pick."""
        step = self.current_step
        if not self._accepts_transitions() or step.kind != StepKind.SINGLE_SELECT:
            logger.debug("Rejected select_single(%s): not a single-select step", flavor_id)
            return False
        if not self.catalog.is_selectable(flavor_id, step.classification.category):
            logger.debug("Rejected select_single(%s): flavor not selectable", flavor_id)
            return False
        self._selections[step.index] = SingleSelection(flavor_id=flavor_id)
        return True

    def adjust_slot(self, flavor_id: str, direction: int) -> bool:
        """
        Add (direction=1) or remove (direction=-1) one slot of a flavor.

        The step total can never exceed the component's pieces, and a flavor
        dropping to zero pieces is removed from the step.
        """
        step = self.current_step
        if not self._accepts_transitions() or step.kind != StepKind.SLOT_ALLOCATION:
            logger.debug("Rejected adjust_slot(%s): not a slot step", flavor_id)
            return False
        if direction not in (1, -1):
            return False

        classification = step.classification
        flavor = self.catalog.get(flavor_id)
        if flavor is None or not flavor.is_active or flavor.flavor_category != classification.category:
            logger.debug("Rejected adjust_slot(%s): unknown flavor for step", flavor_id)
            return False
        if direction > 0 and not flavor.is_available:
            logger.debug("Rejected adjust_slot(%s): out of stock", flavor_id)
            return False

        selection = self._selections[step.index]
        current = selection.units_for(flavor_id)
        new_units = max(0, current + direction * classification.units_per_slot)
        if new_units == current:
            return False

        new_total = selection.allocated_units() - current + new_units
        if new_total > classification.total_units:
            logger.debug(
                "Rejected adjust_slot(%s): %d of %d pcs would be allocated",
                flavor_id, new_total, classification.total_units,
            )
            return False

        allocations = dict(selection.allocations)
        if new_units == 0:
            del allocations[flavor_id]
        else:
            allocations[flavor_id] = new_units
        self._selections[step.index] = SlotAllocation(allocations=allocations)
        return True

    def set_upgrade(self, choice: str) -> bool:
        """Choose an option on the current upgrade step."""
        step = self.current_step
        if not self._accepts_transitions() or step.kind != StepKind.UPGRADE:
            logger.debug("Rejected set_upgrade(%s): not an upgrade step", choice)
            return False
        choice = getattr(choice, "value", choice)
        if step.upgrade.get_option(choice) is None:
            return False
        self._upgrade_choices[step.upgrade.key] = choice
        return True

    def set_rice_upgrade(self, choice: RiceUpgradeChoice | str) -> bool:
        step = self.current_step
        if step is None or step.upgrade is None or step.upgrade.key != RICE_UPGRADE.key:
            return False
        return self.set_upgrade(choice)

    def preview_confirmation(self) -> BundleConfirmation:
        """Assemble the order line from the current selections without confirming."""
        return assemble_confirmation(
            self.product,
            self._components,
            self.steps,
            self._selections,
            self._upgrade_choices,
            self.catalog,
        )

    def _confirm(self) -> None:
        self.confirmation = self.preview_confirmation()
        logger.info(
            "Bundle confirmed: %s with %d flavor lines, surcharge %.2f",
            self.product.name,
            len(self.confirmation.selected_flavors),
            self.confirmation.total_surcharge,
        )
        # A failing callback must not leave the wizard open for a second confirm
        try:
            if self._on_confirm:
                self._on_confirm(
                    self.product,
                    list(self.confirmation.selected_flavors),
                    list(self.confirmation.included_items),
                )
        finally:
            self.close()
