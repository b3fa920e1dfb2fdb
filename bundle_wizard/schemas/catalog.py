"""
Catalog Schemas for Bundle Wizard
=================================

Pydantic models for the admin back office: products, flavors and bundle
components.

Catalog Concepts:
-----------------
1. **Products**: Anything on the menu. Bundles (product_type="bundle") are
   made of other products via bundle components.

2. **Flavors**: Wing sauces, fry seasonings and drinks. A flavor belongs to
   one category (wings, fries, drinks). Special flavors carry a surcharge.
   ``is_active`` hides a flavor from the storefront; ``is_available`` marks
   it out of stock while keeping it visible.

3. **Bundle Components**: Link a bundle to a component product. A component
   with ``has_flavor_selection`` becomes a wizard step; ``total_units`` and
   ``units_per_flavor`` split multi-piece items into flavor slots. Other
   components are included items (rice, coleslaw).

Usage:
------
    flavor = FlavorCreate(name="Buffalo", flavor_type="special")
    # surcharge defaults to SPECIAL_FLAVOR_SURCHARGE for special flavors
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..wizard.models import FlavorCategory, FlavorType


ProductType = Literal["simple", "flavored", "bundle"]


# =============================================================================
# Products
# =============================================================================

class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    price: float
    product_type: str
    is_active: bool
    archived_at: Optional[datetime] = None


class ProductCreate(BaseModel):
    """
    Request model for creating a product.

    Example:
        {"name": "6 pcs Wings Meal", "price": 299.0, "product_type": "bundle"}
    """
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: float = Field(ge=0)
    product_type: ProductType = "simple"
    is_active: bool = True


class ProductUpdate(BaseModel):
    """All fields optional - only provided fields are updated."""
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    product_type: Optional[ProductType] = None
    is_active: Optional[bool] = None


# =============================================================================
# Flavors
# =============================================================================

class FlavorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    flavor_type: FlavorType
    flavor_category: FlavorCategory
    surcharge: Optional[float] = None
    is_active: bool
    is_available: bool
    archived_at: Optional[datetime] = None


class FlavorCreate(BaseModel):
    """
    Request model for creating a flavor.

    Standard flavors are always free. Special flavors use the given surcharge,
    or SPECIAL_FLAVOR_SURCHARGE when none is given.

    Example:
        {"name": "Garlic Parmesan", "flavor_type": "special", "flavor_category": "wings"}
    """
    name: str = Field(min_length=1)
    flavor_type: FlavorType = FlavorType.STANDARD
    flavor_category: FlavorCategory = FlavorCategory.WINGS
    surcharge: Optional[float] = Field(default=None, ge=0)
    is_active: bool = True
    is_available: bool = True


class FlavorUpdate(BaseModel):
    """All fields optional - only provided fields are updated."""
    name: Optional[str] = Field(default=None, min_length=1)
    flavor_type: Optional[FlavorType] = None
    flavor_category: Optional[FlavorCategory] = None
    surcharge: Optional[float] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
    is_available: Optional[bool] = None


class FlavorAvailabilityUpdate(BaseModel):
    is_available: bool


# =============================================================================
# Bundle Components
# =============================================================================

class BundleComponentOut(BaseModel):
    id: str
    bundle_product_id: str
    component_product_id: str
    component_product_name: str
    position: int
    quantity: int
    has_flavor_selection: bool
    total_units: Optional[int] = None
    units_per_flavor: Optional[int] = None
    required_flavors: Optional[int] = None  # flavor slots the wizard shows; None for included items


class BundleComponentCreate(BaseModel):
    """
    Request model for adding a component to a bundle.

    Example:
        {
            "component_product_id": "…",
            "has_flavor_selection": true,
            "total_units": 6,
            "units_per_flavor": 3
        }
    """
    component_product_id: str
    position: Optional[int] = None  # appended after existing components when omitted
    quantity: int = Field(default=1, ge=1)
    has_flavor_selection: bool = False
    total_units: Optional[int] = Field(default=None, ge=0)
    units_per_flavor: Optional[int] = Field(default=None, ge=1)


class BundleComponentUpdate(BaseModel):
    position: Optional[int] = None
    quantity: Optional[int] = Field(default=None, ge=1)
    has_flavor_selection: Optional[bool] = None
    total_units: Optional[int] = Field(default=None, ge=0)
    units_per_flavor: Optional[int] = Field(default=None, ge=1)
