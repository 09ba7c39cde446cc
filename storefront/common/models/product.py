"""
商品與款式模型
每個商品擁有多個款式（顏色 × 尺寸），庫存與 SKU 記錄在款式上
"""
from decimal import Decimal

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, Numeric, String, Text, func
from sqlalchemy.orm import relationship
from .base import Base


class Product(Base):
    __tablename__ = "product"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True)
    product_code = Column(String(64), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(12, 2), nullable=False)
    sale_price = Column(Numeric(12, 2), nullable=True)
    category_id = Column(String(36), ForeignKey("category.id"), nullable=True)
    images = Column(JSON, nullable=True)
    is_new_arrival = Column(Boolean, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False)
    sold_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    variants = relationship(
        "ProductVariant",
        back_populates="product",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ProductVariant.sku",
    )

    @property
    def is_on_sale(self) -> bool:
        return self.sale_price is not None and Decimal(str(self.sale_price)) < Decimal(str(self.price))

    @property
    def effective_price(self) -> Decimal:
        """特價低於原價時使用特價，否則使用原價。"""
        if self.is_on_sale:
            return Decimal(str(self.sale_price))
        return Decimal(str(self.price))

    def find_variant(self, variant_id: str):
        """以 SKU 或款式 id 尋找款式。"""
        if not variant_id:
            return None
        sku = variant_id.strip().upper()
        for v in self.variants:
            if v.sku == sku or v.id == variant_id:
                return v
        return None


class ProductVariant(Base):
    """商品款式（例如：Black / M）"""
    __tablename__ = "product_variant"

    id = Column(String(36), primary_key=True)
    product_id = Column(String(36), ForeignKey("product.id", ondelete="CASCADE"), nullable=False)
    color = Column(String(64), nullable=False)
    size = Column(String(16), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    sku = Column(String(64), nullable=False, unique=True)

    product = relationship("Product", back_populates="variants")

    def to_dict(self):
        return {
            "id": self.id,
            "color": self.color,
            "size": self.size,
            "quantity": self.quantity,
            "sku": self.sku,
        }
