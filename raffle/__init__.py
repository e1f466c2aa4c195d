"""Flask application package for running raffle draws."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask


def create_app(config_overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        config_overrides: Values applied on top of the environment config,
            mostly useful for tests.

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from raffle.config import get_config
    from raffle.db import init_db
    from raffle.error_handlers import register_error_handlers
    from raffle.logging_config import configure_logging
    from raffle.routes.activities import activities_bp
    from raffle.routes.health import health_bp
    from raffle.routes.lottery import lottery_bp
    from raffle.routes.participants import participants_bp
    from raffle.routes.prizes import prizes_bp

    app = Flask(__name__)
    app.config.from_object(get_config())
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(activities_bp, url_prefix="/api")
    app.register_blueprint(prizes_bp, url_prefix="/api")
    app.register_blueprint(participants_bp, url_prefix="/api")
    app.register_blueprint(lottery_bp, url_prefix="/api/lottery")

    return app
