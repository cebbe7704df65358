"""FastAPI application exposing the dispatcher over HTTP."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agents_mcp import __version__
from agents_mcp.config import ServerSettings
from agents_mcp.server.dispatcher import RequestDispatcher


def create_app(dispatcher: RequestDispatcher, settings: ServerSettings | None = None) -> FastAPI:
    """Create the HTTP app around an already-built *dispatcher*.

    *settings* supplies the endpoint path and server info; it defaults to the
    dispatcher's own settings. JSON-RPC faults are always answered with HTTP
    200 and an error envelope.
    """
    settings = settings or dispatcher.settings
    app = FastAPI(title=settings.server_name, version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post(settings.endpoint)
    async def rpc(request: Request) -> JSONResponse:
        body = await request.body()
        response = await dispatcher.handle_json(body)
        return JSONResponse(response.to_wire())

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {
            "status": "healthy",
            "tools": len(dispatcher.registry),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/")
    async def info() -> dict[str, Any]:
        return {
            "name": settings.server_name,
            "version": settings.server_version,
            "description": "MCP server exposing registered tools over JSON-RPC",
            "endpoints": {
                "mcp": f"{settings.endpoint} (POST)",
                "health": "/health",
            },
            "methods": dispatcher.methods,
            "tools": len(dispatcher.registry),
            "remoteServer": settings.remote_server_url,
        }

    return app
