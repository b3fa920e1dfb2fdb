"""
Wizard step construction.

Steps are resolved once from the bundle's components:

    [one step per flavor-selectable component, in component order]
    + [one upgrade step per upgrade definition with a matching included item]
    + [review]
"""

from dataclasses import dataclass
from typing import Iterable

from .classifier import ComponentClassification, classify_component, get_step_label
from .constants import REVIEW_STEP_LABEL, UPGRADE_STEP_LABEL
from .models import BundleComponent, SingleSelection, SlotAllocation, StepKind
from .upgrades import UpgradeDefinition


@dataclass(frozen=True)
class WizardStep:
    index: int
    kind: StepKind
    label: str
    component: BundleComponent | None = None
    classification: ComponentClassification | None = None
    upgrade: UpgradeDefinition | None = None

    @property
    def is_flavor_step(self) -> bool:
        return self.kind in (StepKind.SINGLE_SELECT, StepKind.SLOT_ALLOCATION)

    def empty_selection(self) -> SingleSelection | SlotAllocation | None:
        if self.kind == StepKind.SINGLE_SELECT:
            return SingleSelection()
        if self.kind == StepKind.SLOT_ALLOCATION:
            return SlotAllocation()
        return None


def build_steps(
    components: Iterable[BundleComponent],
    upgrades: Iterable[UpgradeDefinition],
) -> list[WizardStep]:
    components = list(components)
    steps: list[WizardStep] = []

    for component in components:
        if not component.has_flavor_selection:
            continue
        classification = classify_component(component)
        kind = StepKind.SLOT_ALLOCATION if classification.is_multi_slot else StepKind.SINGLE_SELECT
        steps.append(WizardStep(
            index=len(steps),
            kind=kind,
            label=get_step_label(component.product_name),
            component=component,
            classification=classification,
        ))

    for upgrade in upgrades:
        target = next((c for c in components if upgrade.matches(c)), None)
        if target is None:
            continue
        steps.append(WizardStep(
            index=len(steps),
            kind=StepKind.UPGRADE,
            label=UPGRADE_STEP_LABEL,
            component=target,
            upgrade=upgrade,
        ))

    steps.append(WizardStep(index=len(steps), kind=StepKind.REVIEW, label=REVIEW_STEP_LABEL))
    return steps
