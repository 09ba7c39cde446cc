"""商品與分類的公開查詢 API。"""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from ..common.services.errors import ValidationError
from ..common.utils.validators import parse_bool, parse_decimal, parse_int
from .context import components


catalog_bp = Blueprint("storefront_catalog", __name__, url_prefix="/api")


@catalog_bp.get("/products")
def list_products():
    args = request.args
    try:
        min_price = parse_decimal(args.get("minPrice"))
        max_price = parse_decimal(args.get("maxPrice"))
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc

    result = components()["catalog_service"].list_products(
        category=args.get("category"),
        is_new_arrival=parse_bool(args.get("isNewArrival")),
        is_featured=parse_bool(args.get("isFeatured")),
        min_price=min_price,
        max_price=max_price,
        color=args.get("color"),
        size=args.get("size"),
        sort_by=args.get("sortBy", "createdAt"),
        order=args.get("order", "desc"),
        page=parse_int(args.get("page"), 1),
        limit=parse_int(args.get("limit"), 12),
    )
    return jsonify(
        {
            "success": True,
            "data": result["items"],
            "pagination": {
                "page": result["page"],
                "limit": result["limit"],
                "total": result["total"],
                "pages": result["pages"],
            },
        }
    )


@catalog_bp.get("/products/<slug>")
def get_product(slug: str):
    return jsonify({"success": True, "data": components()["catalog_service"].get_product_by_slug(slug)})


@catalog_bp.get("/products/<product_id>/variants")
def product_variants(product_id: str):
    return jsonify({"success": True, "data": components()["catalog_service"].get_variants(product_id)})


@catalog_bp.get("/categories")
def list_categories():
    return jsonify({"success": True, "data": components()["catalog_service"].list_categories()})
