"""示範用的分類與商品資料。"""

from __future__ import annotations

from typing import Dict, List


CATEGORIES: List[Dict[str, str]] = [
    {"name": "Tops", "slug": "tops", "description": "T-shirts, blouses, and more"},
    {"name": "Bottoms", "slug": "bottoms", "description": "Pants, skirts, and shorts"},
    {"name": "Dresses", "slug": "dresses", "description": "Casual and formal dresses"},
    {"name": "Accessories", "slug": "accessories", "description": "Complete your look"},
]


def _images(url: str) -> List[Dict]:
    return [
        {"url": url, "isPrimary": True, "isHover": False, "displayOrder": 0},
        {"url": url + "&sat=-100", "isPrimary": False, "isHover": True, "displayOrder": 1},
    ]


def _sizes(prefix: str, color: str, quantities: Dict[str, int]) -> List[Dict]:
    return [
        {"color": color, "size": size, "quantity": qty, "sku": f"{prefix}-{size}"}
        for size, qty in quantities.items()
    ]


PRODUCTS: List[Dict] = [
    {
        "name": "Novela Tee - Black",
        "slug": "novela-tee-black",
        "product_code": "NT-BLK-001",
        "description": "A classic scoop neck tee with a fitted, cropped silhouette.",
        "price": 3290,
        "category": "tops",
        "is_new_arrival": True,
        "is_featured": True,
        "sold_count": 45,
        "images": _images("https://images.unsplash.com/photo-1594633312681-425c7b97ccd1?w=800&q=80"),
        "variants": _sizes("NT-BLK", "Black", {"XS": 10, "S": 15, "M": 20, "L": 12}),
    },
    {
        "name": "Novela Tee - Brown",
        "slug": "novela-tee-brown",
        "product_code": "NT-BRN-001",
        "description": "A classic scoop neck tee with a fitted, cropped silhouette.",
        "price": 3290,
        "category": "tops",
        "is_new_arrival": True,
        "sold_count": 38,
        "images": _images("https://images.unsplash.com/photo-1583743814966-8936f5b7be1a?w=800&q=80"),
        "variants": _sizes("NT-BRN", "Brown", {"XS": 8, "S": 12, "M": 18, "L": 10}),
    },
    {
        "name": "Gia Tee - White",
        "slug": "gia-tee-white",
        "product_code": "GT-WHT-001",
        "description": "Off-shoulder design with short sleeves and a fitted, cropped length.",
        "price": 2990,
        "sale_price": 2490,
        "category": "tops",
        "is_featured": True,
        "sold_count": 52,
        "images": _images("https://images.unsplash.com/photo-1618932260643-eee4a2f652a6?w=800&q=80"),
        "variants": _sizes("GT-WHT", "White", {"XS": 15, "S": 20, "M": 25, "L": 15}),
    },
    {
        "name": "Lina Linen Trouser",
        "slug": "lina-linen-trouser",
        "product_code": "LT-SND-001",
        "description": "High-waisted linen trousers with a relaxed straight leg.",
        "price": 5490,
        "category": "bottoms",
        "sold_count": 21,
        "images": _images("https://images.unsplash.com/photo-1594633313593-bab3825d0caf?w=800&q=80"),
        "variants": _sizes("LT-SND", "Sand", {"S": 6, "M": 9, "L": 4}),
    },
]


def seed_catalog(catalog) -> Dict:
    """資料庫沒有任何商品時寫入示範資料。"""
    count = catalog.count_products()
    if count > 0:
        return {"message": "Already seeded", "count": count}

    category_ids = {c["slug"]: catalog.create_category(**c)["id"] for c in CATEGORIES}
    ids = []
    for data in PRODUCTS:
        data = dict(data)
        data["category_id"] = category_ids.get(data.pop("category"))
        ids.append(catalog.create_product(**data)["id"])
    return {"message": "Seeded", "count": len(ids), "ids": ids}
