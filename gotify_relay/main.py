"""Gotify relay - Alertmanager webhook server."""

import json
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger

from gotify_relay import __version__
from gotify_relay.config import Settings, settings as default_settings
from gotify_relay.engine import RelayEngine
from gotify_relay.errors import RelayError, ValidationError
from gotify_relay.notifiers import GotifyNotifier
from gotify_relay.utils import get_local_ip

SUCCESS_MESSAGE = "Alerts forwarded to Gotify"


def create_engine(settings: Settings) -> RelayEngine:
    notifier = GotifyNotifier(settings.gotify.url)
    return RelayEngine(notifier, max_concurrency=settings.max_concurrency)


def create_app(
    engine: Optional[RelayEngine] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the FastAPI application around a single relay engine."""
    settings = settings or default_settings
    engine = engine or create_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        await engine.start()
        yield
        await engine.stop()

    app = FastAPI(
        title="Gotify Relay",
        description="Forwards Alertmanager alerts to Gotify with deduplication",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.engine = engine

    @app.exception_handler(ValidationError)
    async def on_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RelayError)
    async def on_relay_error(request: Request, exc: RelayError) -> JSONResponse:
        logger.error(f"❌ Error sending to Gotify: {exc}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.post("/alert")
    async def receive_alert(request: Request) -> PlainTextResponse:
        """Alertmanager webhook receiver."""
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            payload = None

        result = await engine.handle_batch(payload)
        logger.debug(
            f"Batch processed: {result.received} received, "
            f"{result.sent} sent, {result.duplicates} duplicates"
        )
        return PlainTextResponse(SUCCESS_MESSAGE)

    @app.get("/api/status")
    async def get_status():
        """Get system status."""
        return {
            "status": "running" if engine.running else "stopped",
            "cached_alerts": len(engine.cache),
            "environment": settings.environment,
        }

    @app.get("/healthz")
    async def healthz():
        return {"ok": True}

    return app


app = create_app()


def main():
    """Run the server."""
    import uvicorn

    settings = default_settings
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level.upper())

    host = settings.server.host or get_local_ip()
    port = settings.server.port
    logger.info(
        f"Server running on http://{host}:{port}/ | "
        f"Alert endpoint at http://{host}:{port}/alert | "
        f"environment: {settings.environment}"
    )

    uvicorn.run(
        "gotify_relay.main:app",
        host=host,
        port=port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
