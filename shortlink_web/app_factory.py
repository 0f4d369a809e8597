"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shortlink.config import Config
from shortlink.registry import LinkRegistry
from shortlink.shortcode import ShortCodeGenerator
from shortlink.sweeper import ExpirySweeper
from .api import api_router
from .web import web_router
from .errors import register_exception_handlers
from .middleware.logging import LoggingMiddleware


def build_registry(config: Config, logger: Optional[logging.Logger] = None) -> LinkRegistry:
    """Create a registry configured from settings.
    
    Args:
        config: Configuration instance
        logger: Parent logger; the registry logs to its "registry" child
        
    Returns:
        Empty link registry
    """
    logger = logger or logging.getLogger("shortlink")
    return LinkRegistry(
        short_code_generator=ShortCodeGenerator(default_length=config.short_code_length),
        logger=logger.getChild("registry"),
        enable_custom_codes=config.enable_custom_codes,
        max_collision_retries=config.max_collision_retries,
        max_url_length=config.max_url_length,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the registry and sweeper for the lifetime of the server."""
    config = app.state.config
    logger = app.state.logger
    
    logger.info("Starting shortlink service...")
    
    registry = build_registry(config, logger)
    sweeper = ExpirySweeper(
        registry,
        interval_seconds=config.sweep_interval_seconds,
        logger=logger.getChild("sweeper"),
    )
    sweeper.start()
    
    app.state.registry = registry
    app.state.sweeper = sweeper
    
    logger.info("Service started successfully")
    
    yield
    
    logger.info(
        f"Shutting down shortlink service ({len(registry)} links, "
        f"{registry.total_clicks()} clicks discarded)..."
    )
    
    sweeper.stop()
    registry.clear()
    
    logger.info("Service stopped")


def create_app(
    config: Config,
    registry: Optional[LinkRegistry] = None,
    logger: Optional[logging.Logger] = None,
) -> FastAPI:
    """Create and configure FastAPI application.
    
    When no registry is passed, the app builds one (plus its expiry sweeper)
    on startup and tears both down on shutdown.
    
    Args:
        config: Configuration instance
        registry: Optional pre-built registry, shared with the caller
        logger: Optional service logger
        
    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="shortlink",
        description="In-memory URL shortening service",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan if registry is None else None,
    )
    
    # Store instances in app state for access in routes
    app.state.config = config
    app.state.logger = logger or logging.getLogger("shortlink")
    app.state.registry = registry
    app.state.sweeper = None
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware, logger=app.state.logger.getChild("web"))
    
    register_exception_handlers(app)
    
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])
    
    return app
