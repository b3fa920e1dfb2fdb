from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import bundle_wizard.config as config_mod
import bundle_wizard.db as db
from bundle_wizard.main import app
from bundle_wizard.models import Base, BundleComponent, Flavor, Product
from bundle_wizard.services.wizard_sessions import WIZARD_CACHE
from bundle_wizard.wizard import (
    BundleComponent as WizardComponent,
    BundleProduct,
    Flavor as WizardFlavor,
    FlavorCategory,
    FlavorType,
)

# Test admin credentials
TEST_ADMIN_USERNAME = "testadmin"
TEST_ADMIN_PASSWORD = "testpassword123"


# =============================================================================
# Domain Fixtures (no database)
# =============================================================================

@pytest.fixture
def flavors():
    """Wing sauces and drinks, including one out-of-stock and one inactive flavor."""
    return [
        WizardFlavor(id="buffalo", name="Buffalo", flavor_type=FlavorType.SPECIAL, surcharge=40.0),
        WizardFlavor(id="garlic-parm", name="Garlic Parmesan", flavor_type=FlavorType.SPECIAL, surcharge=40.0),
        WizardFlavor(id="honey-bbq", name="Honey BBQ", surcharge=0.0, is_available=False),
        WizardFlavor(id="original", name="Original", surcharge=None),
        WizardFlavor(id="retired", name="Retired Sauce", is_active=False),
        WizardFlavor(id="coke", name="Coke", flavor_category=FlavorCategory.DRINKS, surcharge=0.0),
        WizardFlavor(id="sprite", name="Sprite", flavor_category=FlavorCategory.DRINKS, surcharge=0.0),
    ]


@pytest.fixture
def wings_meal():
    return BundleProduct(id="wings-meal", name="6 pcs Wings Meal", price=299.0)


@pytest.fixture
def wings_meal_components():
    """6 pcs wings split into 3-pc slots, a drink and two included sides."""
    return [
        WizardComponent(
            id="c-wings", product_id="wings-6", product_name="6 pcs Chicken Wings",
            has_flavor_selection=True, total_units=6, units_per_slot=3,
        ),
        WizardComponent(
            id="c-drink", product_id="drink", product_name="Regular Drink",
            has_flavor_selection=True,
        ),
        WizardComponent(id="c-rice", product_id="plain-rice", product_name="Plain Rice"),
        WizardComponent(id="c-slaw", product_id="coleslaw", product_name="Coleslaw", quantity=2),
    ]


# =============================================================================
# API Fixtures
# =============================================================================

def _seed_catalog(session):
    products = [
        Product(id="wings-meal", name="6 pcs Wings Meal", price=299.0, product_type="bundle"),
        Product(id="empty-bundle", name="Party Bundle", price=999.0, product_type="bundle"),
        Product(id="archived-bundle", name="Old Bundle", price=199.0, product_type="bundle"),
        Product(id="wings-6", name="6 pcs Chicken Wings", price=249.0, product_type="flavored"),
        Product(id="drink", name="Regular Drink", price=45.0, product_type="flavored"),
        Product(id="plain-rice", name="Plain Rice", price=25.0),
        Product(id="coleslaw", name="Coleslaw", price=35.0),
    ]
    session.add_all(products)
    session.flush()

    products[2].archived_at = datetime.now(timezone.utc)

    session.add_all([
        BundleComponent(
            id="c-wings", bundle_product_id="wings-meal", component_product_id="wings-6",
            position=0, has_flavor_selection=True, total_units=6, units_per_flavor=3,
        ),
        BundleComponent(
            id="c-drink", bundle_product_id="wings-meal", component_product_id="drink",
            position=1, has_flavor_selection=True,
        ),
        BundleComponent(
            id="c-rice", bundle_product_id="wings-meal", component_product_id="plain-rice",
            position=2,
        ),
        BundleComponent(
            id="c-slaw", bundle_product_id="wings-meal", component_product_id="coleslaw",
            position=3, quantity=2,
        ),
    ])

    session.add_all([
        Flavor(id="buffalo", name="Buffalo", flavor_type="special", surcharge=40.0),
        Flavor(id="garlic-parm", name="Garlic Parmesan", flavor_type="special", surcharge=40.0),
        Flavor(id="honey-bbq", name="Honey BBQ", surcharge=0.0, is_available=False),
        Flavor(id="original", name="Original", surcharge=0.0),
        Flavor(id="coke", name="Coke", flavor_category="drinks", surcharge=0.0),
    ])
    session.commit()


@pytest.fixture
def client(monkeypatch):
    """Shared FastAPI TestClient using an in-memory SQLite DB.

    Uses StaticPool so all connections share the same in-memory database.
    Sets up test admin credentials for authentication.
    """
    monkeypatch.setattr(config_mod, "ADMIN_USERNAME", TEST_ADMIN_USERNAME)
    monkeypatch.setattr(config_mod, "ADMIN_PASSWORD", TEST_ADMIN_PASSWORD)

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    # Patch the db module used by the app
    monkeypatch.setattr(db, "engine", engine)
    monkeypatch.setattr(db, "SessionLocal", TestingSessionLocal)

    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    _seed_catalog(session)
    session.close()

    def override_get_db():
        db_sess = TestingSessionLocal()
        try:
            yield db_sess
        finally:
            db_sess.close()

    app.dependency_overrides[db.get_db] = override_get_db

    WIZARD_CACHE.clear()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    WIZARD_CACHE.clear()


@pytest.fixture
def admin_auth():
    """Returns HTTP Basic Auth tuple for admin endpoints."""
    return (TEST_ADMIN_USERNAME, TEST_ADMIN_PASSWORD)


@pytest.fixture
def db_session(client):
    """Session on the same in-memory database the client uses."""
    session = db.SessionLocal()
    yield session
    session.close()
