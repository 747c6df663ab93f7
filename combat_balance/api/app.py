"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from combat_balance.api.routes import api_router
from combat_balance.config import ServiceConfig
from combat_balance.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: ServiceConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = ServiceConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        logger.info(
            "API server started — max %d iterations per request.",
            _config.limits.max_iterations,
        )
        yield
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Combat Balance Simulator",
        description=(
            "Monte Carlo combat simulation and balance-alert API.\n\n"
            "## API Groups\n\n"
            "- **Combat** — Run a batch of simulated fights for a scenario and tuning\n"
            "- **Metadata** — Ability, enemy archetype and gear catalogs plus defaults\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Combat", "description": "Monte Carlo simulation runs: summary statistics, histograms and balance alerts."},
            {"name": "Metadata", "description": "Definition catalogs (abilities, archetypes, gear), default tuning and config, enums."},
        ],
    )
    app.state.limits = _config.limits

    # CORS — allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app
