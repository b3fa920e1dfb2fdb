"""
Admin Product Routes for Bundle Wizard
======================================

Endpoints:
----------
- GET /admin/products: List products (optionally archived ones)
- POST /admin/products: Create a product
- GET /admin/products/{id}: Get a product
- PUT /admin/products/{id}: Update a product
- POST /admin/products/{id}/archive: Archive a product
- POST /admin/products/{id}/restore: Restore an archived product

Archived products disappear from the storefront and cannot be opened in the
wizard, but stay in the database so past order lines still resolve.

All endpoints require admin authentication via HTTP Basic Auth.
"""

import logging
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..auth import verify_admin_credentials
from ..db import get_db
from ..models import Product
from ..schemas.catalog import ProductCreate, ProductOut, ProductUpdate


logger = logging.getLogger(__name__)

admin_products_router = APIRouter(prefix="/admin/products", tags=["Admin - Products"])


def get_product_or_404(db: Session, product_id: str) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@admin_products_router.get("", response_model=List[ProductOut])
def list_products(
    archived: bool = False,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> List[ProductOut]:
    query = db.query(Product)
    if archived:
        query = query.filter(Product.archived_at.isnot(None))
    else:
        query = query.filter(Product.archived_at.is_(None))
    return [ProductOut.model_validate(p) for p in query.order_by(Product.name.asc()).all()]


@admin_products_router.post("", response_model=ProductOut)
def create_product(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> ProductOut:
    product = Product(**payload.model_dump())
    db.add(product)
    db.commit()
    db.refresh(product)
    logger.info("Created product: %s (id=%s)", product.name, product.id)
    return ProductOut.model_validate(product)


@admin_products_router.get("/{product_id}", response_model=ProductOut)
def get_product(
    product_id: str,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> ProductOut:
    return ProductOut.model_validate(get_product_or_404(db, product_id))


@admin_products_router.put("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> ProductOut:
    product = get_product_or_404(db, product_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(product, field, value)
    db.commit()
    db.refresh(product)
    logger.info("Updated product: %s (id=%s)", product.name, product.id)
    return ProductOut.model_validate(product)


@admin_products_router.post("/{product_id}/archive", response_model=ProductOut)
def archive_product(
    product_id: str,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> ProductOut:
    product = get_product_or_404(db, product_id)
    product.archived_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(product)
    logger.info("Archived product: %s (id=%s)", product.name, product.id)
    return ProductOut.model_validate(product)


@admin_products_router.post("/{product_id}/restore", response_model=ProductOut)
def restore_product(
    product_id: str,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> ProductOut:
    product = get_product_or_404(db, product_id)
    product.archived_at = None
    db.commit()
    db.refresh(product)
    logger.info("Restored product: %s (id=%s)", product.name, product.id)
    return ProductOut.model_validate(product)
