"""
Back Office Access
==================

Guards the catalog back office. Menu staff use the /admin/* endpoints to
edit products, flavors and bundle components; customers driving a wizard
never authenticate.

Access is one shared HTTP Basic login taken from ADMIN_USERNAME and
ADMIN_PASSWORD (see config.py). A deployment that forgot to set
ADMIN_PASSWORD answers every back office request with 503 instead of
opening the catalog to anyone.

Usage:
------
    from bundle_wizard.auth import verify_admin_credentials

    @admin_flavors_router.patch("/{flavor_id}/availability")
    def set_flavor_availability(
        flavor_id: str,
        _admin: str = Depends(verify_admin_credentials),
    ):
        ...
"""

import logging
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from . import config


logger = logging.getLogger(__name__)

# One realm for the whole back office, so a browser asks for the login once
security = HTTPBasic(realm="Bundle Wizard Admin")


def _same_secret(given: str, expected: str) -> bool:
    return secrets.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


def verify_admin_credentials(
    credentials: HTTPBasicCredentials = Depends(security),
) -> str:
    """
    FastAPI dependency for back office endpoints; returns the staff username.

    Raises 503 while no admin password is configured and 401 (with a Basic
    challenge) for a wrong username or password. The 401 does not say which
    of the two was wrong.
    """
    if not config.ADMIN_PASSWORD:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Admin authentication not configured. Set ADMIN_PASSWORD environment variable.",
        )

    # Both comparisons always run so timing does not reveal which one failed
    username_ok = _same_secret(credentials.username, config.ADMIN_USERNAME)
    password_ok = _same_secret(credentials.password, config.ADMIN_PASSWORD)

    if not (username_ok and password_ok):
        logger.warning("Rejected back office login for user %r", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username
