"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lolo import __version__
from lolo.api.dependencies import set_game_manager
from lolo.api.game_manager import GameManager
from lolo.api.routes import api_router
from lolo.config import GameConfig
from lolo.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GameConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GameConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = GameManager(_config)
        set_game_manager(manager)
        manager.start()
        logger.info("API server started — enemy ticks every %.0fms.", _config.tick_interval_ms)
        yield
        manager.stop()
        set_game_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Lolo Stage Engine",
        description=(
            "Grid puzzle-chase engine host.\n\n"
            "## API Groups\n\n"
            "- **State** — Read-only stage snapshot and event feed\n"
            "- **Input** — One discrete player step per request\n"
            "- **Control** — Reset, advance, pause/resume the enemy timer, manual tick\n"
            "- **Levels** — Built-in stage list\n"
            "- **Config** — Read-only game configuration\n"
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RuntimeError)
    async def manager_unavailable(request: Request, exc: RuntimeError) -> JSONResponse:
        logger.error("Request to %s failed: %s", request.url.path, exc)
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    app.include_router(api_router)

    return app
