from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from ted_exporter.api.router import api_router
from ted_exporter.core.config import Settings, load_settings
from ted_exporter.core.logging import configure_logging
from ted_exporter.repositories.prometheus import PrometheusMetricSink
from ted_exporter.version import __version__
from ted_exporter.web.router import ui_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None, registry: CollectorRegistry | None = None
) -> FastAPI:
    settings = settings or load_settings()
    registry = registry or CollectorRegistry()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting ted_exporter v%s at %s:%d",
            __version__,
            settings.listen_host,
            settings.listen_port,
        )
        yield
        logger.info("ted_exporter stopped")

    app = FastAPI(
        title="TED Exporter",
        version=__version__,
        debug=settings.debug,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.registry = registry
    app.state.metric_sink = PrometheusMetricSink(registry=registry)

    @app.get(settings.metrics_path, tags=["meta"], include_in_schema=False)
    def metrics() -> Response:
        return Response(
            content=generate_latest(app.state.registry), media_type=CONTENT_TYPE_LATEST
        )

    @app.get("/health", tags=["meta"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(api_router)
    app.include_router(ui_router)
    return app
