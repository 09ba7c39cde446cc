from typing import Dict, List, Optional
from uuid import uuid4
from decimal import Decimal
from sqlalchemy import and_, or_
from ..db.session import get_session
from ..models.category import Category
from ..models.product import Product, ProductVariant
from ..utils.pagination import normalize_paging, page_count
from ..utils.dto import to_product_dto
from .errors import NotFoundError, ValidationError
from .logging import log_event


SORT_FIELDS = {
    "price": Product.price,
    "soldCount": Product.sold_count,
    "name": Product.name,
    "createdAt": Product.created_at,
}


class CatalogService:
    """Catalog querying service.

    Responsibilities:
    - List/search products with pagination, category, flag, price and variant filters
    - Get single product detail by slug, and variants by product id
    - Create products for seeding, enforcing SKU uniqueness across all variants
    """

    def __init__(self, session_factory=get_session):
        self._session_factory = session_factory

    def list_products(
        self,
        *,
        category: Optional[str] = None,
        is_new_arrival: Optional[bool] = None,
        is_featured: Optional[bool] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        color: Optional[str] = None,
        size: Optional[str] = None,
        sort_by: str = "createdAt",
        order: str = "desc",
        page: int = 1,
        limit: int = 12,
    ) -> Dict:
        """Return dict: { items: [ProductDTO], page, limit, total, pages }"""
        p, ps = normalize_paging(page, limit)
        with self._session_factory() as session:
            q = session.query(Product)
            if category:
                q = (
                    q.join(Category, Category.id == Product.category_id, isouter=True)
                    .filter(or_(Category.slug == category, Product.category_id == category))
                )
            if is_new_arrival is not None:
                q = q.filter(Product.is_new_arrival.is_(is_new_arrival))
            if is_featured is not None:
                q = q.filter(Product.is_featured.is_(is_featured))
            if min_price is not None:
                q = q.filter(Product.price >= min_price)
            if max_price is not None:
                q = q.filter(Product.price <= max_price)
            if color or size:
                # only variants that are actually in stock count as a match
                conds = [ProductVariant.quantity > 0]
                if color:
                    conds.append(ProductVariant.color == color)
                if size:
                    conds.append(ProductVariant.size == size.upper())
                q = q.filter(Product.variants.any(and_(*conds)))

            column = SORT_FIELDS.get(sort_by, Product.created_at)
            if sort_by == "soldCount":
                ordering = column.desc()
            else:
                ordering = column.asc() if order == "asc" else column.desc()

            total = q.count()
            rows = q.order_by(ordering, Product.id).offset((p - 1) * ps).limit(ps).all()
            items = [to_product_dto(r) for r in rows]
            return {"items": items, "page": p, "limit": ps, "total": total, "pages": page_count(total, ps)}

    def get_product_by_slug(self, slug: str) -> Dict:
        with self._session_factory() as session:
            r = session.query(Product).filter(Product.slug == (slug or "").lower()).first()
            if not r:
                raise NotFoundError("Product not found")
            return to_product_dto(r)

    def get_variants(self, product_id: str) -> List[Dict]:
        with self._session_factory() as session:
            r = session.get(Product, product_id)
            if not r:
                raise NotFoundError("Product not found")
            return [v.to_dict() for v in r.variants]

    def list_categories(self) -> List[Dict]:
        with self._session_factory() as session:
            rows = session.query(Category).order_by(Category.name.asc()).all()
            return [c.to_dict() for c in rows]

    def create_category(self, *, name: str, slug: str, description: Optional[str] = None) -> Dict:
        with self._session_factory() as session:
            c = Category(id=str(uuid4()), name=name, slug=slug.lower(), description=description)
            session.add(c)
            session.flush()
            return c.to_dict()

    def create_product(
        self,
        *,
        name: str,
        slug: str,
        product_code: str,
        price,
        variants: List[Dict],
        description: Optional[str] = None,
        sale_price=None,
        category_id: Optional[str] = None,
        images: Optional[List[Dict]] = None,
        is_new_arrival: bool = False,
        is_featured: bool = False,
        sold_count: int = 0,
    ) -> Dict:
        if Decimal(str(price)) < 0 or (sale_price is not None and Decimal(str(sale_price)) < 0):
            raise ValidationError("Price cannot be negative")
        skus = [str(v["sku"]).strip().upper() for v in variants]
        if len(set(skus)) != len(skus):
            raise ValidationError("Duplicate SKU within product", fields=skus)
        with self._session_factory() as session:
            taken = [s for (s,) in session.query(ProductVariant.sku).filter(ProductVariant.sku.in_(skus)).all()]
            if taken:
                raise ValidationError("SKU already in use", fields=sorted(taken))
            prod = Product(
                id=str(uuid4()),
                name=name.strip(),
                slug=slug.strip().lower(),
                product_code=product_code.strip().upper(),
                description=description,
                price=Decimal(str(price)),
                sale_price=Decimal(str(sale_price)) if sale_price is not None else None,
                category_id=category_id,
                images=images or [],
                is_new_arrival=is_new_arrival,
                is_featured=is_featured,
                sold_count=sold_count,
            )
            for v, sku in zip(variants, skus):
                qty = int(v.get("quantity", 0) or 0)
                if qty < 0:
                    raise ValidationError("quantity must be >= 0")
                prod.variants.append(
                    ProductVariant(
                        id=str(uuid4()),
                        color=str(v["color"]).strip(),
                        size=str(v["size"]).strip().upper(),
                        quantity=qty,
                        sku=sku,
                    )
                )
            session.add(prod)
            session.flush()
            log_event("info", "product.created", product_id=prod.id, variants=len(skus))
            return to_product_dto(prod)

    def count_products(self) -> int:
        with self._session_factory() as session:
            return session.query(Product).count()
