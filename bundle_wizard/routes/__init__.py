"""
Routes Package for Bundle Wizard
================================

This package contains all API route definitions organized by domain. Each
module defines a FastAPI APIRouter with related endpoints grouped together.

**Customer-Facing Routes:**
- wizard.py: Open a bundle wizard and drive it step by step

**Admin Routes (require authentication):**
- admin_products.py: Product CRUD and archiving
- admin_flavors.py: Flavor CRUD, archiving and out-of-stock toggling
- admin_bundles.py: Bundle component management

Router Registration:
--------------------
All routers are registered in main.py under two prefixes:
1. /api/v1/* - Versioned API
2. /* - Root paths

Error Handling:
---------------
Routes raise HTTPException for error conditions:
- 400: Bad request (e.g. product is not a bundle)
- 401: Unauthorized (invalid credentials)
- 404: Not found (invalid ID, expired wizard)
- 503: Service unavailable (admin password not configured)

Rejected wizard transitions are not errors; they return the unchanged state
with ``accepted: false``.
"""

from .wizard import wizard_router
from .admin_products import admin_products_router
from .admin_flavors import admin_flavors_router
from .admin_bundles import admin_bundles_router

__all__ = [
    "wizard_router",
    "admin_products_router",
    "admin_flavors_router",
    "admin_bundles_router",
]
