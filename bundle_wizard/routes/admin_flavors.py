"""
Admin Flavor Routes for Bundle Wizard
=====================================

Wing sauces, fry seasonings and drinks offered in the bundle wizard.

Endpoints:
----------
- GET /admin/flavors: List flavors (active list or archived list)
- POST /admin/flavors: Create a flavor
- PUT /admin/flavors/{id}: Update a flavor
- PATCH /admin/flavors/{id}/availability: Mark in stock / out of stock
- POST /admin/flavors/{id}/archive: Archive a flavor
- POST /admin/flavors/{id}/restore: Restore an archived flavor

Surcharge Rules:
----------------
Only special flavors carry a surcharge. Creating a special flavor without a
surcharge uses SPECIAL_FLAVOR_SURCHARGE; standard flavors are stored with a
surcharge of 0 whatever the request says.

Availability:
-------------
``is_available=false`` keeps the flavor visible in the wizard with an
"Out of Stock" badge but blocks selecting it. Use ``is_active`` to hide a
flavor entirely.

All endpoints require admin authentication via HTTP Basic Auth.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import config
from ..auth import verify_admin_credentials
from ..db import get_db
from ..models import Flavor
from ..schemas.catalog import FlavorAvailabilityUpdate, FlavorCreate, FlavorOut, FlavorUpdate
from ..wizard.models import FlavorCategory, FlavorType


logger = logging.getLogger(__name__)

admin_flavors_router = APIRouter(prefix="/admin/flavors", tags=["Admin - Flavors"])


def resolve_surcharge(flavor_type: FlavorType, surcharge: Optional[float]) -> float:
    """Surcharge to store for a flavor of this type."""
    if flavor_type != FlavorType.SPECIAL:
        return 0.0
    if surcharge is None:
        return config.SPECIAL_FLAVOR_SURCHARGE
    return surcharge


def get_flavor_or_404(db: Session, flavor_id: str) -> Flavor:
    flavor = db.query(Flavor).filter(Flavor.id == flavor_id).first()
    if not flavor:
        raise HTTPException(status_code=404, detail="Flavor not found")
    return flavor


@admin_flavors_router.get("", response_model=List[FlavorOut])
def list_flavors(
    archived: bool = False,
    category: Optional[FlavorCategory] = None,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> List[FlavorOut]:
    """List flavors sorted by name. Requires admin authentication."""
    query = db.query(Flavor)
    if archived:
        query = query.filter(Flavor.archived_at.isnot(None))
    else:
        query = query.filter(Flavor.archived_at.is_(None))
    if category is not None:
        query = query.filter(Flavor.flavor_category == category.value)
    return [FlavorOut.model_validate(f) for f in query.order_by(Flavor.name.asc()).all()]


@admin_flavors_router.post("", response_model=FlavorOut)
def create_flavor(
    payload: FlavorCreate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> FlavorOut:
    flavor = Flavor(
        name=payload.name,
        flavor_type=payload.flavor_type.value,
        flavor_category=payload.flavor_category.value,
        surcharge=resolve_surcharge(payload.flavor_type, payload.surcharge),
        is_active=payload.is_active,
        is_available=payload.is_available,
    )
    db.add(flavor)
    db.commit()
    db.refresh(flavor)
    logger.info("Created flavor: %s (id=%s)", flavor.name, flavor.id)
    return FlavorOut.model_validate(flavor)


@admin_flavors_router.put("/{flavor_id}", response_model=FlavorOut)
def update_flavor(
    flavor_id: str,
    payload: FlavorUpdate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> FlavorOut:
    flavor = get_flavor_or_404(db, flavor_id)
    updates = payload.model_dump(exclude_unset=True)

    if "name" in updates:
        flavor.name = updates["name"]
    if "flavor_category" in updates:
        flavor.flavor_category = updates["flavor_category"].value
    if "is_active" in updates:
        flavor.is_active = updates["is_active"]
    if "is_available" in updates:
        flavor.is_available = updates["is_available"]

    if "flavor_type" in updates or "surcharge" in updates:
        flavor_type = updates.get("flavor_type") or FlavorType(flavor.flavor_type)
        surcharge = updates["surcharge"] if "surcharge" in updates else flavor.surcharge
        flavor.flavor_type = flavor_type.value
        flavor.surcharge = resolve_surcharge(flavor_type, surcharge)

    db.commit()
    db.refresh(flavor)
    logger.info("Updated flavor: %s (id=%s)", flavor.name, flavor.id)
    return FlavorOut.model_validate(flavor)


@admin_flavors_router.patch("/{flavor_id}/availability", response_model=FlavorOut)
def set_flavor_availability(
    flavor_id: str,
    payload: FlavorAvailabilityUpdate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> FlavorOut:
    flavor = get_flavor_or_404(db, flavor_id)
    flavor.is_available = payload.is_available
    db.commit()
    db.refresh(flavor)
    logger.info(
        "Flavor %s marked %s", flavor.name,
        "available" if flavor.is_available else "out of stock",
    )
    return FlavorOut.model_validate(flavor)


@admin_flavors_router.post("/{flavor_id}/archive", response_model=FlavorOut)
def archive_flavor(
    flavor_id: str,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> FlavorOut:
    flavor = get_flavor_or_404(db, flavor_id)
    flavor.archived_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(flavor)
    logger.info("Archived flavor: %s (id=%s)", flavor.name, flavor.id)
    return FlavorOut.model_validate(flavor)


@admin_flavors_router.post("/{flavor_id}/restore", response_model=FlavorOut)
def restore_flavor(
    flavor_id: str,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> FlavorOut:
    flavor = get_flavor_or_404(db, flavor_id)
    flavor.archived_at = None
    db.commit()
    db.refresh(flavor)
    logger.info("Restored flavor: %s (id=%s)", flavor.name, flavor.id)
    return FlavorOut.model_validate(flavor)
