"""
Catalog Queries for the Bundle Wizard
=====================================

Read-only queries that feed an open wizard. The wizard itself never touches
the database; the host runs these once when a wizard is opened and hands the
results over.

- fetch_bundle_product: the bundle being configured
- fetch_bundle_components: ordered components (selectable and included)
- fetch_flavor_catalog: every non-archived flavor; the wizard filters by
  category and is_active itself
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from ..models import BundleComponent as BundleComponentRow
from ..models import Flavor as FlavorRow
from ..models import Product
from ..wizard.models import BundleComponent, BundleProduct, Flavor, FlavorCategory, FlavorType


logger = logging.getLogger(__name__)


def flavor_from_row(row: FlavorRow) -> Flavor:
    return Flavor(
        id=row.id,
        name=row.name,
        flavor_category=FlavorCategory(row.flavor_category),
        flavor_type=FlavorType(row.flavor_type),
        surcharge=row.surcharge,
        is_active=bool(row.is_active),
        is_available=bool(row.is_available),
    )


def component_from_row(row: BundleComponentRow) -> BundleComponent:
    return BundleComponent(
        id=row.id,
        product_id=row.component_product_id,
        product_name=row.component_product.name,
        has_flavor_selection=bool(row.has_flavor_selection),
        total_units=row.total_units,
        units_per_slot=row.units_per_flavor,
        quantity=row.quantity or 1,
    )


def fetch_bundle_product(db: Session, product_id: str) -> Optional[Product]:
    """Active, non-archived product by id, or None."""
    return (
        db.query(Product)
        .filter(Product.id == product_id)
        .filter(Product.archived_at.is_(None))
        .filter(Product.is_active.is_(True))
        .first()
    )


def to_bundle_product(product: Product) -> BundleProduct:
    return BundleProduct(id=product.id, name=product.name, price=float(product.price or 0.0))


def fetch_bundle_components(db: Session, bundle_product_id: str) -> List[BundleComponent]:
    rows = (
        db.query(BundleComponentRow)
        .options(joinedload(BundleComponentRow.component_product))
        .filter(BundleComponentRow.bundle_product_id == bundle_product_id)
        .order_by(BundleComponentRow.position.asc(), BundleComponentRow.id.asc())
        .all()
    )
    if not rows:
        logger.info("Bundle %s has no components", bundle_product_id)
    return [component_from_row(r) for r in rows]


def fetch_flavor_catalog(db: Session) -> List[Flavor]:
    rows = (
        db.query(FlavorRow)
        .filter(FlavorRow.archived_at.is_(None))
        .order_by(FlavorRow.name.asc())
        .all()
    )
    return [flavor_from_row(r) for r in rows]
