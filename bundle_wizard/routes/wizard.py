"""
Bundle Wizard Routes
====================

Customer-facing endpoints that drive a bundle flavor wizard over HTTP.

Endpoints:
----------
- POST /wizard/bundles/{product_id}: Open a wizard for a bundle
- GET /wizard/{wizard_id}: Current wizard state
- POST /wizard/{wizard_id}/next: Advance, or confirm from the review step
- POST /wizard/{wizard_id}/back: Go back one step
- POST /wizard/{wizard_id}/select: Pick the flavor on a single-select step
- POST /wizard/{wizard_id}/adjust: Add/remove a slot on a slot step
- POST /wizard/{wizard_id}/upgrade: Choose an upgrade option
- DELETE /wizard/{wizard_id}: Cancel the wizard

Opening a wizard reads the bundle's components and the flavor catalog once;
every later call works on the in-memory wizard only. Rejected transitions
return 200 with ``accepted: false``.

When the review step is confirmed, the response carries the assembled order
line in ``confirmation``. Persisting it (cart, checkout) is the caller's job;
the wizard is discarded either way.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.wizard import (
    AdjustSlotRequest,
    ConfirmationOut,
    FlavorOptionOut,
    IncludedItemLineOut,
    SelectedFlavorLineOut,
    SelectFlavorRequest,
    UpgradeChoiceRequest,
    UpgradeOptionOut,
    WizardStateOut,
    WizardStepOut,
)
from ..services.catalog import (
    fetch_bundle_components,
    fetch_bundle_product,
    fetch_flavor_catalog,
    to_bundle_product,
)
from ..services.wizard_sessions import discard_wizard, locked_wizard, store_wizard
from ..wizard import (
    BundleConfirmation,
    BundleWizard,
    SingleSelection,
    SlotAllocation,
    StepKind,
    compute_line_total,
    format_price,
    format_surcharge_label,
)
from ..wizard.constants import FREE_LABEL, OUT_OF_STOCK_LABEL


logger = logging.getLogger(__name__)

wizard_router = APIRouter(prefix="/wizard", tags=["Wizard"])


# =============================================================================
# Serialization Helpers
# =============================================================================

def serialize_confirmation(confirmation: BundleConfirmation) -> ConfirmationOut:
    return ConfirmationOut(
        product_id=confirmation.product.id,
        product_name=confirmation.product.name,
        base_price=confirmation.product.price,
        selected_flavors=[
            SelectedFlavorLineOut(
                flavor_id=line.flavor_id,
                name=line.name,
                quantity=line.quantity,
                surcharge=line.surcharge,
                category=line.category.value,
            )
            for line in confirmation.selected_flavors
        ],
        included_items=[
            IncludedItemLineOut(name=line.name, quantity=line.quantity, surcharge=line.surcharge)
            for line in confirmation.included_items
        ],
        total_surcharge=confirmation.total_surcharge,
        unit_price=confirmation.unit_price,
        line_total=compute_line_total(confirmation),
    )


def _status(wizard: BundleWizard) -> str:
    if wizard.confirmation is not None:
        return "confirmed"
    if not wizard.is_open:
        return "cancelled"
    if wizard.is_loading:
        return "loading"
    return "open"


def serialize_wizard(wizard_id: str, wizard: BundleWizard, accepted: bool = True) -> WizardStateOut:
    """Build the storefront view of a wizard's current step."""
    state = WizardStateOut(
        wizard_id=wizard_id,
        product_id=wizard.product.id,
        product_name=wizard.product.name,
        status=_status(wizard),
        accepted=accepted,
        base_price=wizard.product.price,
        total_price=wizard.product.price,
        total_price_label=format_price(wizard.product.price),
    )

    if wizard.confirmation is not None:
        confirmation = serialize_confirmation(wizard.confirmation)
        state.confirmation = confirmation
        state.total_surcharge = confirmation.total_surcharge
        state.total_price = confirmation.unit_price
        state.total_price_label = format_price(confirmation.unit_price)
        return state

    step = wizard.current_step
    if not wizard.is_open or step is None:
        return state

    classification = step.classification
    state.step = WizardStepOut(
        index=step.index,
        kind=step.kind.value,
        label=step.label,
        component_name=step.component.product_name if step.component else None,
        total_units=classification.total_units if classification else None,
        units_per_slot=classification.units_per_slot if classification else None,
        total_slots=classification.total_slots if classification else None,
        upgrade_title=step.upgrade.title if step.upgrade else None,
    )
    state.step_number = step.index + 1
    state.total_steps = wizard.total_steps
    state.is_last_step = wizard.is_last_step
    state.can_proceed = wizard.can_proceed
    state.empty_state_message = wizard.empty_state_message
    state.total_surcharge = wizard.total_surcharge
    state.total_price = wizard.total_price
    state.total_price_label = format_price(wizard.total_price)

    selection = wizard.selection_for(step.index)
    if step.is_flavor_step:
        options = []
        for flavor in wizard.step_flavors():
            if isinstance(selection, SlotAllocation):
                units = selection.units_for(flavor.id)
                is_selected = units > 0
            else:
                units = 0
                is_selected = isinstance(selection, SingleSelection) and selection.flavor_id == flavor.id
            options.append(FlavorOptionOut(
                id=flavor.id,
                name=flavor.name,
                is_special=flavor.is_special,
                surcharge=flavor.effective_surcharge,
                price_label=format_surcharge_label(flavor),
                is_available=flavor.is_available,
                stock_label=None if flavor.is_available else OUT_OF_STOCK_LABEL,
                is_selected=is_selected,
                allocated_units=units,
            ))
        state.flavors = options
        state.allocated_units = wizard.allocated_units()
    elif step.kind == StepKind.UPGRADE:
        chosen = wizard.upgrade_choices.get(step.upgrade.key)
        state.upgrade_options = [
            UpgradeOptionOut(
                key=option.key,
                label=option.label,
                price=option.price,
                price_label=f"+{format_price(option.price)}" if option.price > 0 else FREE_LABEL,
                is_selected=option.key == chosen,
            )
            for option in step.upgrade.options
        ]
    elif step.kind == StepKind.REVIEW:
        state.summary = serialize_confirmation(wizard.preview_confirmation())

    return state


@contextmanager
def _locked_wizard_or_404(wizard_id: str) -> Iterator[BundleWizard]:
    with locked_wizard(wizard_id) as wizard:
        if wizard is None:
            raise HTTPException(status_code=404, detail="Wizard not found")
        yield wizard


# =============================================================================
# Wizard Endpoints
# =============================================================================

@wizard_router.post("/bundles/{product_id}", response_model=WizardStateOut)
def open_wizard(
    product_id: str,
    db: Session = Depends(get_db),
) -> WizardStateOut:
    """Open a flavor wizard for a bundle product."""
    product = fetch_bundle_product(db, product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    if product.product_type != "bundle":
        raise HTTPException(status_code=400, detail="Product is not a bundle")

    wizard = BundleWizard(to_bundle_product(product), fetch_flavor_catalog(db))
    wizard.load(fetch_bundle_components(db, product.id))
    wizard_id = store_wizard(wizard)
    logger.info("Opened wizard %s for bundle %s", wizard_id, product.name)
    return serialize_wizard(wizard_id, wizard)


@wizard_router.get("/{wizard_id}", response_model=WizardStateOut)
def get_wizard_state(wizard_id: str) -> WizardStateOut:
    with _locked_wizard_or_404(wizard_id) as wizard:
        return serialize_wizard(wizard_id, wizard)


@wizard_router.post("/{wizard_id}/next", response_model=WizardStateOut)
def next_step(wizard_id: str) -> WizardStateOut:
    """Advance one step. On the review step this confirms and closes the wizard."""
    with _locked_wizard_or_404(wizard_id) as wizard:
        accepted = wizard.next()
        if wizard.confirmation is not None:
            discard_wizard(wizard_id)
            logger.info("Wizard %s confirmed", wizard_id)
        return serialize_wizard(wizard_id, wizard, accepted)


@wizard_router.post("/{wizard_id}/back", response_model=WizardStateOut)
def previous_step(wizard_id: str) -> WizardStateOut:
    with _locked_wizard_or_404(wizard_id) as wizard:
        accepted = wizard.back()
        return serialize_wizard(wizard_id, wizard, accepted)


@wizard_router.post("/{wizard_id}/select", response_model=WizardStateOut)
def select_flavor(wizard_id: str, payload: SelectFlavorRequest) -> WizardStateOut:
    with _locked_wizard_or_404(wizard_id) as wizard:
        accepted = wizard.select_single(payload.flavor_id)
        return serialize_wizard(wizard_id, wizard, accepted)


@wizard_router.post("/{wizard_id}/adjust", response_model=WizardStateOut)
def adjust_slot(wizard_id: str, payload: AdjustSlotRequest) -> WizardStateOut:
    with _locked_wizard_or_404(wizard_id) as wizard:
        accepted = wizard.adjust_slot(payload.flavor_id, payload.direction)
        return serialize_wizard(wizard_id, wizard, accepted)


@wizard_router.post("/{wizard_id}/upgrade", response_model=WizardStateOut)
def choose_upgrade(wizard_id: str, payload: UpgradeChoiceRequest) -> WizardStateOut:
    with _locked_wizard_or_404(wizard_id) as wizard:
        accepted = wizard.set_upgrade(payload.choice)
        return serialize_wizard(wizard_id, wizard, accepted)


@wizard_router.delete("/{wizard_id}", response_model=WizardStateOut)
def cancel_wizard(wizard_id: str) -> WizardStateOut:
    """Close the wizard and discard its selections."""
    with _locked_wizard_or_404(wizard_id) as wizard:
        wizard.cancel()
        discard_wizard(wizard_id)
        logger.info("Wizard %s cancelled", wizard_id)
        return serialize_wizard(wizard_id, wizard)
