"""
Admin Bundle Component Routes for Bundle Wizard
===============================================

Manage which products make up a bundle and how the wizard splits them.

Endpoints:
----------
- GET /admin/bundles/{bundle_id}/components: List a bundle's components
- POST /admin/bundles/{bundle_id}/components: Add a component
- PUT /admin/bundles/{bundle_id}/components/{component_id}: Update a component
- DELETE /admin/bundles/{bundle_id}/components/{component_id}: Remove a component

Components are returned in wizard order (position, then id). A component
with ``has_flavor_selection`` becomes a wizard step; ``required_flavors`` in
the response is how many flavor slots it will show.

All endpoints require admin authentication via HTTP Basic Auth.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ..auth import verify_admin_credentials
from ..db import get_db
from ..models import BundleComponent, Product
from ..schemas.catalog import BundleComponentCreate, BundleComponentOut, BundleComponentUpdate
from ..services.catalog import component_from_row
from ..wizard import classify_component


logger = logging.getLogger(__name__)

admin_bundles_router = APIRouter(prefix="/admin/bundles", tags=["Admin - Bundles"])


def required_flavors(component: BundleComponent) -> Optional[int]:
    """Flavor slots the wizard will show for this component, None for included items."""
    if not component.has_flavor_selection or component.component_product is None:
        return None
    return classify_component(component_from_row(component)).total_slots


def serialize_component(component: BundleComponent) -> BundleComponentOut:
    return BundleComponentOut(
        id=component.id,
        bundle_product_id=component.bundle_product_id,
        component_product_id=component.component_product_id,
        component_product_name=component.component_product.name if component.component_product else "",
        position=component.position,
        quantity=component.quantity,
        has_flavor_selection=component.has_flavor_selection,
        total_units=component.total_units,
        units_per_flavor=component.units_per_flavor,
        required_flavors=required_flavors(component),
    )


def get_bundle_or_404(db: Session, bundle_id: str) -> Product:
    bundle = db.query(Product).filter(Product.id == bundle_id).first()
    if not bundle:
        raise HTTPException(status_code=404, detail="Bundle not found")
    if bundle.product_type != "bundle":
        raise HTTPException(status_code=400, detail="Product is not a bundle")
    return bundle


def get_component_or_404(db: Session, bundle_id: str, component_id: str) -> BundleComponent:
    component = (
        db.query(BundleComponent)
        .filter(
            BundleComponent.id == component_id,
            BundleComponent.bundle_product_id == bundle_id,
        )
        .first()
    )
    if not component:
        raise HTTPException(status_code=404, detail="Bundle component not found")
    return component


@admin_bundles_router.get("/{bundle_id}/components", response_model=List[BundleComponentOut])
def list_bundle_components(
    bundle_id: str,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> List[BundleComponentOut]:
    get_bundle_or_404(db, bundle_id)
    components = (
        db.query(BundleComponent)
        .options(joinedload(BundleComponent.component_product))
        .filter(BundleComponent.bundle_product_id == bundle_id)
        .order_by(BundleComponent.position.asc(), BundleComponent.id.asc())
        .all()
    )
    return [serialize_component(c) for c in components]


@admin_bundles_router.post("/{bundle_id}/components", response_model=BundleComponentOut)
def add_bundle_component(
    bundle_id: str,
    payload: BundleComponentCreate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> BundleComponentOut:
    bundle = get_bundle_or_404(db, bundle_id)
    if payload.component_product_id == bundle_id:
        raise HTTPException(status_code=400, detail="A bundle cannot contain itself")
    component_product = db.query(Product).filter(Product.id == payload.component_product_id).first()
    if not component_product:
        raise HTTPException(status_code=404, detail="Component product not found")

    position = payload.position
    if position is None:
        max_position = (
            db.query(func.max(BundleComponent.position))
            .filter(BundleComponent.bundle_product_id == bundle_id)
            .scalar()
        )
        position = 0 if max_position is None else max_position + 1

    component = BundleComponent(
        bundle_product_id=bundle_id,
        component_product_id=component_product.id,
        position=position,
        quantity=payload.quantity,
        has_flavor_selection=payload.has_flavor_selection,
        total_units=payload.total_units,
        units_per_flavor=payload.units_per_flavor,
    )
    db.add(component)
    db.commit()
    db.refresh(component)
    logger.info("Added %s to bundle %s at position %d", component_product.name, bundle.name, position)
    return serialize_component(component)


@admin_bundles_router.put("/{bundle_id}/components/{component_id}", response_model=BundleComponentOut)
def update_bundle_component(
    bundle_id: str,
    component_id: str,
    payload: BundleComponentUpdate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> BundleComponentOut:
    get_bundle_or_404(db, bundle_id)
    component = get_component_or_404(db, bundle_id, component_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(component, field, value)
    db.commit()
    db.refresh(component)
    logger.info("Updated bundle component %s", component.id)
    return serialize_component(component)


@admin_bundles_router.delete("/{bundle_id}/components/{component_id}", status_code=204)
def delete_bundle_component(
    bundle_id: str,
    component_id: str,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> None:
    get_bundle_or_404(db, bundle_id)
    component = get_component_or_404(db, bundle_id, component_id)
    db.delete(component)
    db.commit()
    logger.info("Removed component %s from bundle %s", component_id, bundle_id)
