"""Read-only HTTP view of a session's asset store."""
from __future__ import annotations

import io
from typing import Dict, Optional

import pygame
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse, Response

from .config import AssetConfig
from .diagnostics import asset_dump, status_report
from .models import Category, ImageHandle
from .session import AssetSession


def encode_png(image: ImageHandle) -> bytes:
    buffer = io.BytesIO()
    pygame.image.save(image.to_surface(), buffer, "asset.png")
    return buffer.getvalue()


def create_app(session: Optional[AssetSession] = None) -> FastAPI:
    """Create the FastAPI application.

    Without an explicit ``session`` a default one is created and
    bootstrapped when the application starts.
    """

    app = FastAPI(title="RTS Assets", description="Asset store query surface")
    app.state.session = session

    @app.on_event("startup")
    async def _bootstrap_session() -> None:
        if app.state.session is None:
            app.state.session = AssetSession(AssetConfig())
            await app.state.session.bootstrap()

    def _session() -> AssetSession:
        if app.state.session is None:
            raise HTTPException(status_code=503, detail="Assets not loaded yet")
        return app.state.session

    def _category(name: str) -> Category:
        try:
            return Category(name)
        except ValueError:
            raise HTTPException(status_code=404, detail=f"Unknown category: {name}") from None

    @app.get("/health")
    async def healthcheck() -> JSONResponse:
        current = app.state.session
        total = len(current.store) if current is not None else 0
        return JSONResponse({"status": "ok" if current is not None else "starting", "assets": total})

    @app.get("/assets")
    async def status() -> Dict[str, int]:
        return status_report(_session().store)

    @app.get("/assets/{category}")
    async def category_dump(category: str) -> Dict[str, list]:
        resolved = _category(category)
        dump = asset_dump(_session().store)[resolved.value]
        return {name: [width, height] for name, (width, height) in dump.items()}

    @app.get("/assets/{category}/{name}.png")
    async def asset_png(category: str, name: str) -> Response:
        resolved = _category(category)
        image = _session().store.get(resolved, name)
        if image is None:
            raise HTTPException(status_code=404, detail=f"No asset {resolved.value}/{name}")
        return Response(content=encode_png(image), media_type="image/png")

    return app


app = create_app()
