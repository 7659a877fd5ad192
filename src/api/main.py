import logging
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response

from src.api.deps import Settings, get_clock, get_settings
from src.api.routes import public_links
from src.components.config_store import ConfigurationStore, create_configuration_store
from src.components.configuration import ConfigLoadError
from src.components.resolver import create_redirect_resolver
from src.shell.http.health import StartupTracker, create_health_router, default_probes

logger = logging.getLogger(__name__)

SERVICE_NAME = "lynx"
VERSION = "0.1.0"


def start_store(store: ConfigurationStore, settings: Settings) -> None:
    """
    Load the links file and start watching it.

    Raises:
        ConfigLoadError: If the initial load fails. Nothing is watched then.
    """
    if not store.is_loaded:
        store.load(settings.config_path)
    store.watch(poll_interval_seconds=settings.watch_interval)


def create_app(
    settings: Settings | None = None,
    store: ConfigurationStore | None = None,
) -> FastAPI:
    """Build the FastAPI application around a configuration store."""
    settings = settings or get_settings()
    store = store or create_configuration_store(time_port=get_clock())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler for startup/shutdown."""
        # Never serve traffic without a valid configuration (fail-fast)
        try:
            start_store(store, settings)
        except ConfigLoadError as e:
            logger.critical(
                "Your configuration file is invalid, see inner error for details: %s", e
            )
            sys.exit(1)

        StartupTracker.mark_started()
        logger.info(
            "Starting Lynx server on http://%s:%d with configuration from %s",
            settings.host,
            settings.port,
            settings.config_path,
        )
        yield
        store.stop()

    app = FastAPI(
        title="Lynx",
        version=VERSION,
        lifespan=lifespan,
        # Keep every top-level path free for link IDs except the reserved /api
        docs_url="/api/docs",
        redoc_url=None,
        openapi_url="/api/openapi.json",
    )
    app.state.settings = settings
    app.state.store = store
    app.state.resolver = create_redirect_resolver(store, time_port=get_clock())

    @app.middleware("http")
    async def service_headers(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        response.headers["Server"] = SERVICE_NAME
        response.headers["X-Robots-Tag"] = "none"
        return response

    # --- Routers ---
    app.include_router(
        create_health_router(default_probes(store), version=VERSION),
        prefix="/api",
        tags=["Health"],
    )
    # Catch-all, must stay last
    app.include_router(public_links.router, prefix="", tags=["Links"])

    return app
