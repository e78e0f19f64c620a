"""FastAPI application for the risk configuration service."""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..interfaces import IConfigStore
from ..services import ConfigStore
from .config import RiskConfigServiceConfig
from .errors import register_error_handlers
from .middleware import BodySizeLimitMiddleware
from .routes import router

logger = logging.getLogger("riskconfig.server")

ENDPOINTS = [
    ("GET", "/configs", "Get all configurations"),
    ("GET", "/configs/{resourceId}", "Get config by resourceId"),
    ("POST", "/configs", "Save config with resourceId in body"),
    ("PUT", "/configs", "Update config with resourceId in body"),
    ("DELETE", "/configs", "Delete config with resourceId in body"),
    ("GET", "/risk-assessment-guide", "Get risk assessment documentation"),
    ("POST", "/configs/assess-risk", "Example risk assessment (placeholder)"),
    ("GET", "/health", "Health check"),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    config: RiskConfigServiceConfig = app.state.config

    # Validate config
    errors = config.validate()
    if errors:
        raise ValueError(f"Configuration errors: {errors}")

    logger.info(f"Starting risk configuration service (version: {__version__})")
    logger.info(f"Risk assessment guide: {config.guide.path}")
    for method, path, summary in ENDPOINTS:
        logger.info(f"  {method:<6} {path:<24} {summary}")

    yield

    logger.info(f"Shutting down risk configuration service ({app.state.store.count()} configs in memory)")


def create_app(
    config: Optional[RiskConfigServiceConfig] = None,
    store: Optional[IConfigStore] = None,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        config: Service configuration. If None, loads from environment.
        store: Configuration store. If None, a fresh empty ConfigStore.

    Returns:
        Configured FastAPI application.
    """
    if config is None:
        config = RiskConfigServiceConfig.from_env()

    app = FastAPI(
        title="Risk Configuration API",
        description="Save, fetch, update and delete JSON risk configurations by resource id",
        version=__version__,
        lifespan=lifespan,
    )

    # Each app owns its store; nothing is shared between instances
    app.state.config = config
    app.state.store = store if store is not None else ConfigStore()
    app.state.started_at = time.monotonic()

    app.add_middleware(
        BodySizeLimitMiddleware,
        max_body_bytes=config.server.max_body_bytes,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(router)

    return app


def run_server(
    config: Optional[RiskConfigServiceConfig] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
    log_level: str = "info",
):
    """Run the HTTP server.

    Args:
        config: Service configuration. If None, loads from environment.
        host: Override host from config.
        port: Override port from config.
        log_level: Logging level.
    """
    if config is None:
        config = RiskConfigServiceConfig.from_env()

    app = create_app(config)

    uvicorn.run(
        app,
        host=host or config.server.host,
        port=port or config.server.port,
        log_level=log_level,
    )


# CLI entry point
def main():
    """CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Risk Configuration HTTP Server")
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to config file (default: ~/.risk-config/config.yaml)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to bind to (default: 3000)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Logging level",
    )

    args = parser.parse_args()

    # Load config
    if args.config:
        config = RiskConfigServiceConfig.from_file(args.config)
    else:
        config = RiskConfigServiceConfig.from_env()

    run_server(
        config=config,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
