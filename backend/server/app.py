"""
FastAPI app factory.

Responsibilities:
- Create and configure FastAPI app
- Configure JSONL logging from the environment
- Build the shared TurnGateway
- Register routes
"""

from __future__ import annotations

from fastapi import FastAPI

from config import AppConfig
from observability.logger import configure_logging
from session.gateway import TurnGateway

from server.routes import register_routes


def create_app(config: AppConfig | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Passing a config lets tests skip the environment entirely.
    """
    config = config or AppConfig.load_from_env()

    configure_logging(enabled=config.enable_json_logs)

    app = FastAPI(title="Quick Colors Turn API")

    app.state.config = config

    # Gateway is stateless, one per process is enough
    app.state.gateway = TurnGateway(
        settings=config.game_settings(),
        rng=config.make_rng(),
    )

    register_routes(app)

    return app
