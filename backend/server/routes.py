"""
Route registration for the turn API.

Responsibilities:
- Define HTTP endpoints
- Pull the gateway from app.state
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException, Request

from session.gateway import TurnGateway


def register_routes(app: FastAPI) -> None:
    """Register all routes on the FastAPI app."""
    @app.get("/health")
    async def health() -> dict[str, str]: # pyright: ignore[reportUnusedFunction]
        return {"status": "ok"}

    @app.post("/turn")
    async def turn(request: Request) -> dict[str, Any]: # pyright: ignore[reportUnusedFunction]
        gateway: TurnGateway = app.state.gateway

        result = gateway.on_json_message(await request.body())
        if not result.ok or result.response is None:
            raise HTTPException(status_code=400, detail=result.error)

        return result.response
