from __future__ import annotations  # FastAPI server exposing interview sessions and the question catalog

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import catalog_router, router
from config import load_config, settings
from services.model_bindings import bind_routes
from storage.migrate import migrate

logger = logging.getLogger(__name__)

ROOT = Path(__file__).resolve().parent


def _config_path() -> Path:
    path = Path(settings.APP_CONFIG_PATH)
    return path if path.is_absolute() else ROOT / path


def bind_configured_models() -> list[str]:
    """Bind LLM routes from ``app_config.json``; heuristics stay in place when it is absent."""

    path = _config_path()
    if not path.exists():
        logger.info("No LLM config at %s; running with heuristic fallbacks", path)
        return []
    bound = bind_routes(load_config(path))
    logger.info("Bound LLM routes: %s", ", ".join(bound) or "none")
    return bound


def create_app() -> FastAPI:
    migrate(settings.DB_PATH)
    bind_configured_models()
    application = FastAPI(title="Case Interview API")
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(router)
    application.include_router(catalog_router)
    return application


app = create_app()
