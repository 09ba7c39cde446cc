from conftest import auth_headers


def test_cart_requires_token(client):
    assert client.get("/api/cart").status_code == 401
    assert client.get("/api/cart", headers={"Authorization": "Token abc"}).status_code == 401


def test_cart_is_created_lazily(client):
    resp = client.get("/api/cart", headers=auth_headers("shopper"))
    assert resp.status_code == 200
    cart = resp.get_json()["data"]
    assert cart["userId"] == "shopper"
    assert cart["items"] == []


def test_add_merges_same_variant(client, tee):
    headers = auth_headers("shopper")
    client.post("/api/cart/add", json={"productId": tee["id"], "variantId": "NT-BLK-M"}, headers=headers)
    resp = client.post(
        "/api/cart/add", json={"productId": tee["id"], "variantId": "NT-BLK-M", "quantity": 2}, headers=headers
    )

    assert resp.status_code == 200
    cart = resp.get_json()["data"]
    assert len(cart["items"]) == 1
    line = cart["items"][0]
    assert line["quantity"] == 3
    assert line["product"]["name"] == "Novela Tee - Black"
    assert line["variant"]["sku"] == "NT-BLK-M"
    assert cart["subtotal"] == 3 * 3290


def test_add_checks_stock(client, tee):
    headers = auth_headers("shopper")
    resp = client.post(
        "/api/cart/add", json={"productId": tee["id"], "variantId": "NT-BLK-M", "quantity": 6}, headers=headers
    )
    assert resp.status_code == 400
    assert resp.get_json()["available"] == 5


def test_add_merges_every_spelling_of_a_variant(client, tee):
    headers = auth_headers("shopper")
    variant_id = next(v["id"] for v in tee["variants"] if v["sku"] == "NT-BLK-M")

    first = client.post("/api/cart/add", json={"productId": tee["id"], "variantId": "NT-BLK-M"}, headers=headers)
    by_id = client.post(
        "/api/cart/add", json={"productId": tee["id"], "variantId": variant_id}, headers=headers
    )
    assert first.status_code == 200
    assert by_id.status_code == 200
    cart = by_id.get_json()["data"]
    assert [(i["variantId"], i["quantity"]) for i in cart["items"]] == [("NT-BLK-M", 2)]

    over = client.post(
        "/api/cart/add",
        json={"productId": tee["id"], "variantId": "nt-blk-m", "quantity": 4},
        headers=headers,
    )
    assert over.status_code == 400
    assert over.get_json()["available"] == 5

    cart = client.get("/api/cart", headers=headers).get_json()["data"]
    assert [(i["variantId"], i["quantity"]) for i in cart["items"]] == [("NT-BLK-M", 2)]


def test_add_unknown_product_and_variant(client, tee):
    headers = auth_headers("shopper")
    missing_product = client.post(
        "/api/cart/add", json={"productId": "nope", "variantId": "NT-BLK-M"}, headers=headers
    )
    missing_variant = client.post(
        "/api/cart/add", json={"productId": tee["id"], "variantId": "NOPE"}, headers=headers
    )
    assert missing_product.status_code == 404
    assert missing_variant.get_json()["error"] == "Variant not found"


def test_update_remove_and_clear(client, tee, trouser):
    headers = auth_headers("shopper")
    client.post("/api/cart/add", json={"productId": tee["id"], "variantId": "NT-BLK-M"}, headers=headers)
    cart = client.post(
        "/api/cart/add", json={"productId": trouser["id"], "variantId": "LT-SND-S"}, headers=headers
    ).get_json()["data"]
    tee_line = next(i for i in cart["items"] if i["productId"] == tee["id"])

    updated = client.put(f"/api/cart/update/{tee_line['id']}", json={"quantity": 4}, headers=headers)
    assert updated.status_code == 200
    assert next(i["quantity"] for i in updated.get_json()["data"]["items"] if i["id"] == tee_line["id"]) == 4

    bad = client.put(f"/api/cart/update/{tee_line['id']}", json={"quantity": 0}, headers=headers)
    assert bad.status_code == 400
    assert bad.get_json()["error"] == "Invalid quantity"

    assert client.put("/api/cart/update/unknown", json={"quantity": 1}, headers=headers).status_code == 404

    removed = client.delete(f"/api/cart/remove/{tee_line['id']}", headers=headers).get_json()["data"]
    assert [i["productId"] for i in removed["items"]] == [trouser["id"]]

    cleared = client.delete("/api/cart/clear", headers=headers)
    assert cleared.status_code == 200
    assert cleared.get_json()["data"]["items"] == []


def test_mutations_without_cart_are_not_found(client):
    headers = auth_headers("nobody")
    assert client.delete("/api/cart/clear", headers=headers).status_code == 404
    assert client.delete("/api/cart/remove/x", headers=headers).status_code == 404
    assert client.put("/api/cart/update/x", json={"quantity": 1}, headers=headers).status_code == 404
