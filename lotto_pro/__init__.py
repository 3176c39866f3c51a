"""Lotto Pro: lottery book inventory and ticket-scan back office."""

from __future__ import annotations

from typing import Any, Mapping

from dotenv import load_dotenv
from flask import Flask


def create_app(config_overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        config_overrides: values applied on top of the environment config,
            mainly for tests.

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from lotto_pro.config import get_config
    from lotto_pro.db import init_db
    from lotto_pro.error_handlers import register_error_handlers
    from lotto_pro.logging_config import configure_logging
    from lotto_pro.routes.account import account_bp
    from lotto_pro.routes.health import health_bp
    from lotto_pro.routes.inventory import inventory_bp
    from lotto_pro.routes.reports import reports_bp
    from lotto_pro.routes.scan import scan_bp

    app = Flask(__name__)
    app.config.from_object(get_config())
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(scan_bp)
    app.register_blueprint(reports_bp, url_prefix="/reports")
    app.register_blueprint(inventory_bp, url_prefix="/lottery")
    app.register_blueprint(account_bp, url_prefix="/auth")

    return app
