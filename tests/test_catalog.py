import pytest

from storefront.common.services.errors import ValidationError
from storefront.seed import seed_catalog


def test_list_products_with_pagination(client, tee, trouser):
    resp = client.get("/api/products?limit=1&sortBy=price&order=asc")
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["pagination"] == {"page": 1, "limit": 1, "total": 2, "pages": 2}
    assert [p["slug"] for p in body["data"]] == ["novela-tee-black"]


@pytest.mark.parametrize(
    "query, expected",
    [
        ("category=tops", ["novela-tee-black"]),
        ("isNewArrival=true", ["novela-tee-black"]),
        ("minPrice=4000", ["lina-linen-trouser"]),
        ("maxPrice=4000", ["novela-tee-black"]),
        ("size=m", ["novela-tee-black"]),
        ("color=Sand", ["lina-linen-trouser"]),
        # only out-of-stock variants match
        ("size=L", []),
        ("sortBy=soldCount", ["novela-tee-black", "lina-linen-trouser"]),
        ("sortBy=name&order=asc", ["lina-linen-trouser", "novela-tee-black"]),
    ],
)
def test_list_products_filters(client, tee, trouser, query, expected):
    body = client.get(f"/api/products?{query}").get_json()
    assert [p["slug"] for p in body["data"]] == expected


def test_bad_price_filter(client):
    assert client.get("/api/products?minPrice=cheap").status_code == 400


def test_product_detail_and_variants(client, trouser):
    detail = client.get("/api/products/lina-linen-trouser").get_json()["data"]
    assert detail["effectivePrice"] == 4990
    assert detail["isOnSale"] is True
    assert detail["productCode"] == "LT-SND-001"

    variants = client.get(f"/api/products/{trouser['id']}/variants").get_json()["data"]
    assert [v["sku"] for v in variants] == ["LT-SND-S"]

    assert client.get("/api/products/nothing-here").status_code == 404
    assert client.get("/api/products/nothing/variants").status_code == 404


def test_categories(client, tee):
    data = client.get("/api/categories").get_json()["data"]
    assert [c["slug"] for c in data] == ["tops"]


def test_sku_is_unique_across_products(catalog, tee):
    with pytest.raises(ValidationError) as exc:
        catalog.create_product(
            name="Copycat",
            slug="copycat",
            product_code="CC-001",
            price=100,
            variants=[{"color": "Black", "size": "M", "quantity": 1, "sku": "nt-blk-m"}],
        )
    assert exc.value.fields == ["NT-BLK-M"]


def test_sku_is_unique_within_product(catalog):
    with pytest.raises(ValidationError):
        catalog.create_product(
            name="Twins",
            slug="twins",
            product_code="TW-001",
            price=100,
            variants=[
                {"color": "Black", "size": "M", "quantity": 1, "sku": "TW-M"},
                {"color": "Black", "size": "M", "quantity": 1, "sku": "TW-M"},
            ],
        )


def test_seed_is_idempotent(catalog):
    first = seed_catalog(catalog)
    second = seed_catalog(catalog)
    assert first["message"] == "Seeded"
    assert second == {"message": "Already seeded", "count": first["count"]}


def test_cli_init_db_and_seed(app):
    runner = app.test_cli_runner()

    init = runner.invoke(args=["init-db"])
    assert init.exit_code == 0
    assert "database ready" in init.output

    first = runner.invoke(args=["seed"])
    again = runner.invoke(args=["seed"])
    assert first.exit_code == 0
    assert first.output.startswith("Seeded: ")
    assert again.output.startswith("Already seeded: ")
