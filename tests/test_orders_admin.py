import pytest

from conftest import auth_headers, order_payload


def _place(client, product, sku, user_id=None, **overrides):
    headers = auth_headers(user_id) if user_id else None
    resp = client.post(
        "/api/orders/create",
        json=order_payload(items=[{"productId": product["id"], "variantId": sku, "quantity": 1}], **overrides),
        headers=headers,
    )
    assert resp.status_code == 201
    return resp.get_json()["data"]


@pytest.fixture
def admin_client(client):
    resp = client.post("/api/admin/login", json={"username": "admin", "password": "s3cret"})
    assert resp.status_code == 200
    return client


def test_user_order_history_is_scoped(client, tee, trouser):
    mine = _place(client, tee, "NT-BLK-M", user_id="alice")
    _place(client, trouser, "LT-SND-S", user_id="bob")
    _place(client, tee, "NT-BLK-M")

    resp = client.get("/api/orders/user", headers=auth_headers("alice"))
    assert resp.status_code == 200
    assert [o["id"] for o in resp.get_json()["data"]] == [mine["id"]]
    assert client.get("/api/orders/user").status_code == 401


def test_user_order_history_is_newest_first(client, tee, trouser):
    placed = [
        _place(client, tee, "NT-BLK-M", user_id="alice"),
        _place(client, trouser, "LT-SND-S", user_id="alice"),
        _place(client, tee, "NT-BLK-M", user_id="alice"),
        _place(client, trouser, "LT-SND-S", user_id="alice"),
    ]

    resp = client.get("/api/orders/user", headers=auth_headers("alice"))
    history = resp.get_json()["data"]
    assert [o["id"] for o in history] == [o["id"] for o in reversed(placed)]
    assert history[0]["createdAt"] > history[-1]["createdAt"]


def test_order_detail_ownership(client, tee):
    order = _place(client, tee, "NT-BLK-M", user_id="alice")

    assert client.get(f"/api/orders/{order['id']}", headers=auth_headers("alice")).status_code == 200
    forbidden = client.get(f"/api/orders/{order['id']}", headers=auth_headers("mallory"))
    assert forbidden.status_code == 403
    assert forbidden.get_json()["error"] == "Access denied"
    assert client.get("/api/orders/missing", headers=auth_headers("alice")).status_code == 404


def test_admin_endpoints_need_login(client):
    assert client.get("/api/admin/orders").status_code == 401
    bad = client.post("/api/admin/login", json={"username": "admin", "password": "wrong"})
    assert bad.status_code == 401


def test_admin_lists_and_filters_orders(admin_client, tee, trouser):
    first = _place(admin_client, tee, "NT-BLK-M", email="first@example.com")
    _place(admin_client, trouser, "LT-SND-S", email="second@example.com", paymentMethod="COD")

    everything = admin_client.get("/api/admin/orders").get_json()
    assert everything["pagination"]["total"] == 2

    by_method = admin_client.get("/api/admin/orders?paymentMethod=cod").get_json()["data"]
    assert [o["email"] for o in by_method] == ["second@example.com"]

    by_search = admin_client.get("/api/admin/orders?search=first").get_json()["data"]
    assert [o["id"] for o in by_search] == [first["id"]]

    by_id = admin_client.get(f"/api/admin/orders?search={first['id']}").get_json()["data"]
    assert [o["id"] for o in by_id] == [first["id"]]

    assert admin_client.get("/api/admin/orders?startDate=yesterday").status_code == 400


def test_admin_updates_status(admin_client, tee):
    order = _place(admin_client, tee, "NT-BLK-M")

    resp = admin_client.put(f"/api/admin/orders/{order['id']}/status", json={"status": "shipped"})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["status"] == "SHIPPED"

    detail = admin_client.get(f"/api/admin/orders/{order['id']}").get_json()["data"]
    assert detail["status"] == "SHIPPED"
    assert detail["payments"] == []


@pytest.mark.parametrize("status", ["FAILED", "LOST", ""])
def test_admin_rejects_unknown_status(admin_client, tee, status):
    order = _place(admin_client, tee, "NT-BLK-M")
    resp = admin_client.put(f"/api/admin/orders/{order['id']}/status", json={"status": status})
    assert resp.status_code == 400


def test_admin_status_update_for_missing_order(admin_client):
    resp = admin_client.put("/api/admin/orders/missing/status", json={"status": "SHIPPED"})
    assert resp.status_code == 404


def test_admin_stats(admin_client, tee, trouser):
    paid = _place(admin_client, tee, "NT-BLK-M")
    _place(admin_client, trouser, "LT-SND-S")
    admin_client.put(f"/api/admin/orders/{paid['id']}/status", json={"status": "PAID"})

    stats = admin_client.get("/api/admin/orders/stats/overview").get_json()["data"]
    assert stats["total"] == 2
    assert stats["byStatus"]["paid"] == 1
    assert stats["byStatus"]["pending"] == 1
    assert stats["totalRevenue"] == 3290
    assert len(stats["recentOrders"]) == 2


def test_logout_drops_admin_session(admin_client):
    admin_client.post("/api/admin/logout")
    assert admin_client.get("/api/admin/orders").status_code == 401
