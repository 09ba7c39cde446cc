import hashlib
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from sqlalchemy.pool import StaticPool

from storefront.app import create_app
from storefront.common.config import AppConfig
from storefront.common.db.session import build_engine, make_session_factory
from storefront.common.models import Base
from storefront.common.services.catalog_service import CatalogService
from storefront.config import StorefrontConfig


JWT_SECRET = "test-supabase-secret-0123456789abcdef"
MERCHANT_ID = "1211149"
MERCHANT_SECRET = "test-merchant-secret"


@pytest.fixture
def config():
    return StorefrontConfig(
        secret_key="test-secret",
        environment="testing",
        admin_username="admin",
        admin_password="s3cret",
        frontend_url="http://shop.test",
        backend_url="http://api.shop.test",
        payhere_merchant_id=MERCHANT_ID,
        payhere_merchant_secret=MERCHANT_SECRET,
        supabase_jwt_secret=JWT_SECRET,
        supabase_jwt_audience="authenticated",
        app=AppConfig(database_url="sqlite://", log_level="WARNING", currency="LKR"),
    )


@pytest.fixture
def session_factory():
    engine = build_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def app(config, session_factory):
    return create_app(config, session_factory=session_factory)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def catalog(session_factory):
    return CatalogService(session_factory)


@pytest.fixture
def tee(catalog):
    """Novela Tee with Black / M at 5 units."""
    category = catalog.create_category(name="Tops", slug="tops")
    return catalog.create_product(
        name="Novela Tee - Black",
        slug="novela-tee-black",
        product_code="NT-BLK-001",
        price=3290,
        category_id=category["id"],
        is_new_arrival=True,
        sold_count=45,
        variants=[
            {"color": "Black", "size": "M", "quantity": 5, "sku": "NT-BLK-M"},
            {"color": "Black", "size": "L", "quantity": 0, "sku": "NT-BLK-L"},
        ],
    )


@pytest.fixture
def trouser(catalog):
    """Trouser on sale: 5490 list, 4990 sale."""
    return catalog.create_product(
        name="Lina Linen Trouser",
        slug="lina-linen-trouser",
        product_code="LT-SND-001",
        price=5490,
        sale_price=4990,
        sold_count=3,
        variants=[{"color": "Sand", "size": "S", "quantity": 4, "sku": "LT-SND-S"}],
    )


def make_token(user_id, *, secret=JWT_SECRET, audience="authenticated", expires_in=3600):
    now = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "aud": audience,
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
        "role": "authenticated",
    }
    return jwt.encode(claims, secret, algorithm="HS256")


def auth_headers(user_id, **kwargs):
    return {"Authorization": f"Bearer {make_token(user_id, **kwargs)}"}


def payhere_sig(merchant_id, order_id, amount, currency, status_code, secret=MERCHANT_SECRET):
    secret_digest = hashlib.md5(secret.encode()).hexdigest().upper()
    raw = merchant_id + order_id + amount + currency + status_code + secret_digest
    return hashlib.md5(raw.encode()).hexdigest().upper()


def order_payload(**overrides):
    payload = {
        "email": "Jane@Example.com",
        "firstName": "Jane",
        "lastName": "Perera",
        "phone": "+94771234567",
        "shippingAddress": {
            "addressLine1": "12 Galle Road",
            "city": "Colombo",
            "postalCode": "00300",
            "country": "Sri Lanka",
        },
        "paymentMethod": "payhere",
    }
    payload.update(overrides)
    return payload
