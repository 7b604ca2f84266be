"""
Runtime server - creates and runs the FastAPI application.

This module provides the main entry point for serving the catalog over
GraphQL.
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from fastapi import FastAPI

from shelfql._version import get_version
from shelfql.demo_data import DEFAULT_BOOKS, load_seed_file, seed_catalog
from shelfql.graphql.integration import mount_graphql
from shelfql.runtime.catalog import Catalog
from shelfql.runtime.logging import get_http_logger, log_with_context, setup_logging

logger = get_http_logger()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ServerConfig:
    """
    Configuration for the catalog server.

    Groups all initialization options into a single object. ``from_env``
    reads the ``SHELFQL_*`` environment variables.
    """

    host: str = "127.0.0.1"
    port: int = 4000
    graphql_path: str = "/graphql"
    enable_graphiql: bool = True

    # Demo data
    seed: bool = True
    seed_file: Path | None = None  # JSON list of books; replaces the defaults

    # Logging
    log_dir: Path | None = field(default_factory=lambda: Path(".shelfql/logs"))
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, **overrides: Any) -> ServerConfig:
        """Build a config from ``SHELFQL_*`` variables; ``overrides`` win."""
        seed_file = os.environ.get("SHELFQL_SEED_FILE")
        log_dir = os.environ.get("SHELFQL_LOG_DIR", ".shelfql/logs")
        values: dict[str, Any] = {
            "host": os.environ.get("SHELFQL_HOST", "127.0.0.1"),
            "port": int(os.environ.get("SHELFQL_PORT", "4000")),
            "graphql_path": os.environ.get("SHELFQL_GRAPHQL_PATH", "/graphql"),
            "enable_graphiql": _env_bool("SHELFQL_GRAPHIQL", True),
            "seed": _env_bool("SHELFQL_SEED", True),
            "seed_file": Path(seed_file) if seed_file else None,
            # An empty SHELFQL_LOG_DIR turns file logging off.
            "log_dir": Path(log_dir) if log_dir else None,
            "log_level": os.environ.get("SHELFQL_LOG_LEVEL", "INFO"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def graphql_url(self) -> str:
        return f"http://{self.host}:{self.port}{self.graphql_path}"


def build_catalog(config: ServerConfig) -> Catalog:
    """Create the catalog and load demo data as configured."""
    catalog = Catalog()
    if config.seed:
        books = load_seed_file(config.seed_file) if config.seed_file else DEFAULT_BOOKS
        seed_catalog(catalog, books)
    return catalog


def create_app(config: ServerConfig | None = None, catalog: Catalog | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: Server configuration (default: ``ServerConfig()``)
        catalog: Catalog to serve (default: built from ``config``)

    Returns:
        FastAPI application with GraphQL mounted at ``config.graphql_path``
    """
    config = config or ServerConfig()
    catalog = catalog if catalog is not None else build_catalog(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan handler."""
        log_with_context(
            logger,
            logging.INFO,
            f"GraphQL server running at {config.graphql_url}",
            records=len(catalog),
            graphiql=config.enable_graphiql,
        )
        yield
        logger.info("GraphQL server stopped")

    app = FastAPI(title="shelfql", version=get_version(), lifespan=lifespan)
    app.state.config = config
    app.state.catalog = catalog

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {"status": "ok", "records": len(catalog)}

    mount_graphql(
        app,
        catalog,
        path=config.graphql_path,
        enable_graphiql=config.enable_graphiql,
    )
    return app


def run_app(config: ServerConfig | None = None) -> None:
    """Configure logging and serve the app with uvicorn until interrupted."""
    import uvicorn

    config = config or ServerConfig.from_env()
    setup_logging(config.log_dir, config.log_level)
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())
