"""
Tests for the catalog back office endpoints.
"""
import logging

import pytest

import bundle_wizard.config as config_mod


# =============================================================================
# Authentication
# =============================================================================

def test_admin_requires_auth(client):
    resp = client.get("/admin/flavors")
    assert resp.status_code == 401


def test_admin_rejects_invalid_auth(client):
    resp = client.get("/admin/flavors", auth=("wrong", "credentials"))
    assert resp.status_code == 401
    assert resp.headers["WWW-Authenticate"] == "Basic"


def test_rejected_login_is_logged(client, admin_auth, caplog):
    with caplog.at_level(logging.WARNING, logger="bundle_wizard.auth"):
        client.get("/admin/flavors", auth=(admin_auth[0], "not-the-password"))
    assert any("Rejected back office login" in r.message for r in caplog.records)


def test_admin_unconfigured_password_is_503(client, admin_auth, monkeypatch):
    monkeypatch.setattr(config_mod, "ADMIN_PASSWORD", "")
    resp = client.get("/admin/flavors", auth=admin_auth)
    assert resp.status_code == 503


# =============================================================================
# Products
# =============================================================================

def test_list_products(client, admin_auth):
    resp = client.get("/admin/products", auth=admin_auth)
    assert resp.status_code == 200
    names = {p["name"] for p in resp.json()}
    assert "6 pcs Wings Meal" in names
    assert "Old Bundle" not in names

    archived = client.get("/admin/products", params={"archived": True}, auth=admin_auth).json()
    assert [p["name"] for p in archived] == ["Old Bundle"]


def test_create_update_and_archive_product(client, admin_auth):
    resp = client.post(
        "/admin/products",
        json={"name": "Ribs Meal", "price": 349.0, "product_type": "bundle"},
        auth=admin_auth,
    )
    assert resp.status_code == 200
    product = resp.json()
    assert product["product_type"] == "bundle"

    resp = client.put(f"/admin/products/{product['id']}", json={"price": 359.0}, auth=admin_auth)
    assert resp.json()["price"] == 359.0
    assert resp.json()["name"] == "Ribs Meal"

    resp = client.post(f"/admin/products/{product['id']}/archive", auth=admin_auth)
    assert resp.json()["archived_at"] is not None

    # Archived bundles cannot be opened in the wizard
    assert client.post(f"/wizard/bundles/{product['id']}").status_code == 404

    resp = client.post(f"/admin/products/{product['id']}/restore", auth=admin_auth)
    assert resp.json()["archived_at"] is None


def test_create_product_rejects_unknown_type(client, admin_auth):
    resp = client.post(
        "/admin/products",
        json={"name": "Thing", "price": 1.0, "product_type": "combo"},
        auth=admin_auth,
    )
    assert resp.status_code == 422


def test_get_missing_product_is_404(client, admin_auth):
    assert client.get("/admin/products/missing", auth=admin_auth).status_code == 404


# =============================================================================
# Flavors
# =============================================================================

def test_list_flavors_by_category(client, admin_auth):
    resp = client.get("/admin/flavors", params={"category": "drinks"}, auth=admin_auth)
    assert resp.status_code == 200
    assert [f["name"] for f in resp.json()] == ["Coke"]


def test_special_flavor_defaults_surcharge(client, admin_auth):
    resp = client.post(
        "/admin/flavors",
        json={"name": "Salted Egg", "flavor_type": "special"},
        auth=admin_auth,
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["surcharge"] == config_mod.SPECIAL_FLAVOR_SURCHARGE
    assert data["flavor_category"] == "wings"


def test_standard_flavor_is_always_free(client, admin_auth):
    resp = client.post(
        "/admin/flavors",
        json={"name": "Lemon Pepper", "flavor_type": "standard", "surcharge": 25.0},
        auth=admin_auth,
    )
    assert resp.json()["surcharge"] == 0.0


def test_changing_type_to_standard_clears_surcharge(client, admin_auth):
    resp = client.put("/admin/flavors/buffalo", json={"flavor_type": "standard"}, auth=admin_auth)
    assert resp.status_code == 200
    assert resp.json()["surcharge"] == 0.0

    resp = client.put(
        "/admin/flavors/buffalo",
        json={"flavor_type": "special", "surcharge": 55.0},
        auth=admin_auth,
    )
    assert resp.json()["surcharge"] == 55.0


def test_availability_toggle_reaches_wizard(client, admin_auth):
    resp = client.patch(
        "/admin/flavors/honey-bbq/availability",
        json={"is_available": True},
        auth=admin_auth,
    )
    assert resp.status_code == 200
    assert resp.json()["is_available"] is True

    wizard_id = client.post("/wizard/bundles/wings-meal").json()["wizard_id"]
    data = client.post(
        f"/wizard/{wizard_id}/adjust",
        json={"flavor_id": "honey-bbq", "direction": 1},
    ).json()
    assert data["accepted"] is True


def test_archived_flavor_leaves_wizard(client, admin_auth):
    resp = client.post("/admin/flavors/original/archive", auth=admin_auth)
    assert resp.json()["archived_at"] is not None

    flavors = client.post("/wizard/bundles/wings-meal").json()["flavors"]
    assert "original" not in {f["id"] for f in flavors}

    archived = client.get("/admin/flavors", params={"archived": True}, auth=admin_auth).json()
    assert [f["id"] for f in archived] == ["original"]

    client.post("/admin/flavors/original/restore", auth=admin_auth)
    assert client.get("/admin/flavors", params={"archived": True}, auth=admin_auth).json() == []


def test_update_missing_flavor_is_404(client, admin_auth):
    resp = client.put("/admin/flavors/missing", json={"name": "X"}, auth=admin_auth)
    assert resp.status_code == 404


# =============================================================================
# Bundle Components
# =============================================================================

def test_list_bundle_components(client, admin_auth):
    resp = client.get("/admin/bundles/wings-meal/components", auth=admin_auth)
    assert resp.status_code == 200
    data = resp.json()
    assert [c["component_product_name"] for c in data] == [
        "6 pcs Chicken Wings", "Regular Drink", "Plain Rice", "Coleslaw",
    ]
    assert data[0]["required_flavors"] == 2
    assert data[1]["required_flavors"] == 1
    assert data[2]["required_flavors"] is None


def test_add_component_appends_position(client, admin_auth):
    resp = client.post(
        "/admin/bundles/empty-bundle/components",
        json={"component_product_id": "wings-6", "has_flavor_selection": True, "total_units": 6, "units_per_flavor": 3},
        auth=admin_auth,
    )
    assert resp.status_code == 200
    assert resp.json()["position"] == 0

    resp = client.post(
        "/admin/bundles/empty-bundle/components",
        json={"component_product_id": "coleslaw"},
        auth=admin_auth,
    )
    assert resp.json()["position"] == 1

    data = client.post("/wizard/bundles/empty-bundle").json()
    assert data["step"]["kind"] == "slot_allocation"
    assert data["total_steps"] == 2


@pytest.mark.parametrize("product_id,total_units,units_per_flavor,expected", [
    ("wings-6", 6, 3, 2),
    ("wings-6", 6, None, 2),
    ("wings-6", 2, 3, 1),
    ("wings-6", 5, 3, 1),
    ("drink", None, None, 1),
])
def test_required_flavors_matches_wizard_slots(
    client, admin_auth, product_id, total_units, units_per_flavor, expected
):
    resp = client.post(
        "/admin/bundles/empty-bundle/components",
        json={
            "component_product_id": product_id,
            "has_flavor_selection": True,
            "total_units": total_units,
            "units_per_flavor": units_per_flavor,
        },
        auth=admin_auth,
    )
    assert resp.status_code == 200
    assert resp.json()["required_flavors"] == expected

    step = client.post("/wizard/bundles/empty-bundle").json()["step"]
    assert step["total_slots"] == expected


def test_included_component_has_no_required_flavors(client, admin_auth):
    resp = client.post(
        "/admin/bundles/empty-bundle/components",
        json={"component_product_id": "coleslaw", "total_units": 6, "units_per_flavor": 3},
        auth=admin_auth,
    )
    assert resp.json()["required_flavors"] is None


@pytest.mark.parametrize("bundle_id,product_id,status", [
    ("missing", "wings-6", 404),
    ("plain-rice", "wings-6", 400),
    ("wings-meal", "missing", 404),
    ("wings-meal", "wings-meal", 400),
])
def test_add_component_validation(client, admin_auth, bundle_id, product_id, status):
    resp = client.post(
        f"/admin/bundles/{bundle_id}/components",
        json={"component_product_id": product_id},
        auth=admin_auth,
    )
    assert resp.status_code == status


def test_update_and_delete_component(client, admin_auth):
    resp = client.put(
        "/admin/bundles/wings-meal/components/c-wings",
        json={"total_units": 9},
        auth=admin_auth,
    )
    assert resp.status_code == 200
    assert resp.json()["required_flavors"] == 3

    resp = client.delete("/admin/bundles/wings-meal/components/c-rice", auth=admin_auth)
    assert resp.status_code == 204

    data = client.get("/admin/bundles/wings-meal/components", auth=admin_auth).json()
    assert "Plain Rice" not in [c["component_product_name"] for c in data]

    # Without plain rice the wizard has no upgrade step
    assert client.post("/wizard/bundles/wings-meal").json()["total_steps"] == 3


def test_component_of_other_bundle_is_404(client, admin_auth):
    resp = client.delete("/admin/bundles/empty-bundle/components/c-wings", auth=admin_auth)
    assert resp.status_code == 404
