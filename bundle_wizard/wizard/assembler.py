"""
Confirmation Assembler.

Turns the wizard's final state into the order-line payload the cart
consumes. Pure transformation: the same steps, selections and upgrade
choices always produce the same confirmation.
"""

from typing import Iterable, Mapping

from .catalog import FlavorCatalog
from .classifier import get_included_item_label
from .models import (
    BundleComponent,
    BundleConfirmation,
    BundleProduct,
    IncludedItemLine,
    SelectedFlavorLine,
    SingleSelection,
    SlotAllocation,
    StepKind,
)
from .steps import WizardStep


def _flavor_line(catalog: FlavorCatalog, step: WizardStep, flavor_id: str, quantity: int) -> SelectedFlavorLine | None:
    flavor = catalog.get(flavor_id)
    if flavor is None:
        return None
    return SelectedFlavorLine(
        flavor_id=flavor.id,
        name=flavor.name,
        quantity=quantity,
        surcharge=flavor.effective_surcharge,
        category=step.classification.category,
    )


def assemble_confirmation(
    product: BundleProduct,
    components: Iterable[BundleComponent],
    steps: list[WizardStep],
    selections: Mapping[int, SingleSelection | SlotAllocation],
    upgrade_choices: Mapping[str, str],
    catalog: FlavorCatalog,
) -> BundleConfirmation:
    selected: list[SelectedFlavorLine] = []

    for step in steps:
        selection = selections.get(step.index)
        if step.kind == StepKind.SINGLE_SELECT:
            if isinstance(selection, SingleSelection) and selection.flavor_id is not None:
                line = _flavor_line(catalog, step, selection.flavor_id, step.classification.total_units)
                if line:
                    selected.append(line)
        elif step.kind == StepKind.SLOT_ALLOCATION:
            if isinstance(selection, SlotAllocation):
                for flavor_id, units in selection.allocations.items():
                    if units <= 0:
                        continue
                    line = _flavor_line(catalog, step, flavor_id, units)
                    if line:
                        selected.append(line)

    # Included items targeted by an upgrade step take the chosen option's label and price
    upgraded = {}
    for step in steps:
        if step.kind == StepKind.UPGRADE and step.upgrade and step.component:
            choice = upgrade_choices.get(step.upgrade.key, step.upgrade.default_choice)
            option = step.upgrade.get_option(choice)
            if option:
                upgraded[step.component.id] = option

    included: list[IncludedItemLine] = []
    for component in components:
        if component.has_flavor_selection:
            continue
        option = upgraded.get(component.id)
        if option:
            included.append(IncludedItemLine(
                name=option.label,
                quantity=component.quantity,
                surcharge=option.price,
            ))
        else:
            included.append(IncludedItemLine(
                name=get_included_item_label(component.product_name),
                quantity=component.quantity,
            ))

    return BundleConfirmation(
        product=product,
        selected_flavors=tuple(selected),
        included_items=tuple(included),
    )
