"""
Todo List Service — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.admin import router as admin_router
from api.middleware import register_error_handlers, register_middleware
from api.routes import router as todo_router
from auth.password import PasswordHasher
from auth.routes import router as auth_router
from config.settings import Settings, load_settings
from database.session import build_engine, build_session_factory, create_schema

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "asyncio", "uvicorn.access"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings)
    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await create_schema(engine)
        logger.info("Todo service ready (env=%s)", settings.env)
        yield
        await engine.dispose()
        logger.info("Todo service shut down")

    app = FastAPI(
        title="Todo List Service",
        version="1.0.0",
        description="Per-user todo lists behind bearer-token auth.",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.password_hasher = PasswordHasher(
        rounds=settings.bcrypt_rounds,
        max_concurrency=settings.hashing_concurrency,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_error_handlers(app)

    # Routes
    app.include_router(auth_router)
    app.include_router(todo_router)
    app.include_router(admin_router)

    return app


if __name__ == "__main__":
    settings = load_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )
