"""Storefront 電商後端 Flask 應用。"""

from __future__ import annotations

import logging
import os
import traceback
from datetime import datetime, timezone
from typing import Optional

import click
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from .common.db.session import build_engine, make_session_factory
from .common.models import Base
from .common.services.cart_service import CartService
from .common.services.catalog_service import CatalogService
from .common.services.errors import StorefrontError
from .common.services.logging import log_event
from .common.services.order_service import OrderService
from .common.services.payment_service import PaymentService
from .config import StorefrontConfig
from .routes import admin_bp, cart_bp, catalog_bp, orders_bp, payment_bp
from .seed import seed_catalog
from .services import PayHereGateway, SupabaseTokenVerifier


logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask, config: StorefrontConfig) -> None:
    @app.errorhandler(StorefrontError)
    def handle_storefront_error(exc: StorefrontError):
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        if exc.code == 404:
            return jsonify({"error": "Not Found", "message": f"Route {request.method} {request.path} not found"}), 404
        return jsonify({"error": exc.name, "message": exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.path)
        log_event("error", "request.failed", method=request.method, path=request.path, error=str(exc))
        body = {"success": False, "error": "Server error"}
        if not config.is_production:
            body["message"] = str(exc)
            body["stack"] = traceback.format_exc()
        return jsonify(body), 500


def _register_cli(app: Flask, session_factory) -> None:
    @app.cli.command("init-db")
    def init_db():
        """建立資料表。"""
        with session_factory() as session:
            Base.metadata.create_all(session.get_bind())
        click.echo("database ready")

    @app.cli.command("seed")
    def seed():
        """寫入示範分類與商品。"""
        result = seed_catalog(app.extensions["storefront_components"]["catalog_service"])
        click.echo(f"{result['message']}: {result['count']} products")


def create_app(config: Optional[StorefrontConfig] = None, session_factory=None) -> Flask:
    config = config or StorefrontConfig.load()
    logging.basicConfig(level=getattr(logging, config.app.log_level, logging.INFO))

    if session_factory is None:
        engine = build_engine(config.app.database_url)
        Base.metadata.create_all(engine)
        session_factory = make_session_factory(engine)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.secret_key
    app.config["STOREFRONT_CONFIG"] = config
    app.config["TESTING"] = config.environment == "testing"

    components = {
        "catalog_service": CatalogService(session_factory),
        "cart_service": CartService(session_factory),
        "order_service": OrderService(session_factory),
        "payment_service": PaymentService(session_factory, currency=config.app.currency),
        "payhere": PayHereGateway(
            config.payhere_merchant_id,
            config.payhere_merchant_secret,
            currency=config.app.currency,
            frontend_url=config.frontend_url,
            backend_url=config.backend_url,
        ),
        "token_verifier": SupabaseTokenVerifier(config.supabase_jwt_secret, config.supabase_jwt_audience),
    }
    app.extensions["storefront_components"] = components

    @app.get("/health")
    def health():
        return jsonify(
            {
                "status": "OK",
                "message": "Server is running",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "environment": config.environment,
            }
        )

    app.register_blueprint(catalog_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(payment_bp)
    app.register_blueprint(admin_bp)

    _register_error_handlers(app, config)
    _register_cli(app, session_factory)
    return app


def main() -> None:
    app = create_app()
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)), debug=False)


if __name__ == "__main__":
    main()
