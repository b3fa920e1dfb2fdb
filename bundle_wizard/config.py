"""
Configuration Module for Bundle Wizard
======================================

This module centralizes all configuration settings, environment variables, and
constants used throughout the Bundle Wizard application. All environment
variables and their defaults are defined here, so it is easy to see what
configuration options exist.

Configuration Categories:
-------------------------
- **Database**: Connection URL for the product/flavor/bundle catalog.

- **Bundle Rules**: Slot sizes and upgrade prices used by the flavor wizard
  when the catalog does not specify them.

- **Wizard Sessions**: TTL and cache size settings for the in-memory cache of
  open wizards. Open wizards are never persisted.

- **CORS Settings**: Cross-Origin Resource Sharing configuration for the
  storefront frontend. Defaults allow all origins for development.

- **Admin Authentication**: Credentials for the catalog back office.

Environment Variables:
----------------------
- DATABASE_URL: SQLAlchemy URL (default: "sqlite:///./bundle_wizard.db")
- DEFAULT_UNITS_PER_FLAVOR: Pieces per flavor slot (default: 3)
- JAVA_RICE_UPGRADE_PRICE: Plain rice to java rice upgrade (default: 40)
- SPECIAL_FLAVOR_SURCHARGE: Default surcharge for special flavors (default: 40)
- CURRENCY_SYMBOL: Symbol used in price labels (default: "₱")
- WIZARD_TTL_SECONDS: Open wizard cache TTL (default: 1800)
- WIZARD_MAX_CACHE_SIZE: Max open wizards kept in memory (default: 1000)
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")
- ADMIN_USERNAME: Admin panel username (default: "admin")
- ADMIN_PASSWORD: Admin panel password (required for admin access)

Usage:
------
    from bundle_wizard.config import (
        DEFAULT_UNITS_PER_FLAVOR,
        JAVA_RICE_UPGRADE_PRICE,
    )
"""

import os
from typing import List


# =============================================================================
# Database Configuration
# =============================================================================

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./bundle_wizard.db")


# =============================================================================
# Bundle Rules
# =============================================================================
# Fallbacks applied when a bundle component or flavor row leaves them empty.

# Pieces covered by one flavor slot (e.g. 6 pcs wings = 2 slots of 3)
DEFAULT_UNITS_PER_FLAVOR: int = int(os.getenv("DEFAULT_UNITS_PER_FLAVOR", "3"))

# Flat price for upgrading an included "Plain Rice" to "Java Rice"
JAVA_RICE_UPGRADE_PRICE: float = float(os.getenv("JAVA_RICE_UPGRADE_PRICE", "40"))

# Surcharge pre-filled for new "special" flavors in the back office
SPECIAL_FLAVOR_SURCHARGE: float = float(os.getenv("SPECIAL_FLAVOR_SURCHARGE", "40"))

CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "₱")


# =============================================================================
# Wizard Session Configuration
# =============================================================================
# Open wizards live only in memory for their open/close lifetime.

# How long an untouched wizard stays in the cache (seconds)
WIZARD_TTL_SECONDS: int = int(os.getenv("WIZARD_TTL_SECONDS", "1800"))  # 30 minutes

# Maximum number of open wizards to keep in memory
# When exceeded, least recently used wizards are discarded
WIZARD_MAX_CACHE_SIZE: int = int(os.getenv("WIZARD_MAX_CACHE_SIZE", "1000"))


# =============================================================================
# CORS Configuration
# =============================================================================

# Format: comma-separated list of origins, e.g., "https://shop.example,https://admin.shop.example"
# Default "*" allows all origins (suitable for development only)
_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]


# =============================================================================
# Admin Authentication Configuration
# =============================================================================
# Credentials for HTTP Basic Auth on admin endpoints.
# ADMIN_PASSWORD must be set in production for admin access to work.

ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "")
