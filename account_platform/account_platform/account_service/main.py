"""
Account Service - registration, login and token-gated posts
"""
from contextlib import asynccontextmanager
from typing import Optional
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .auth import PasswordHasher, TokenIssuer
from .config import Settings, get_settings
from .db import create_db_engine, create_session_factory, init_db
from .errors import (
    ServiceError,
    request_validation_handler,
    service_error_handler,
    unhandled_error_handler,
)
from .middleware import register_middleware
from .routes import accounts, health, posts, users
from .utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Signing secret and password policy are fixed here, once per process.
    The database engine is opened in the lifespan on startup and disposed
    on shutdown.
    """
    if settings is None:
        settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = create_db_engine(settings)
        init_db(engine)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        logger.info("Account service started")
        try:
            yield
        finally:
            engine.dispose()
            logger.info("Database engine disposed")

    app = FastAPI(
        title="Account Service",
        description="User registration, login and bearer-token protected posts",
        version="1.0.0",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.password_hasher = PasswordHasher(rounds=settings.PASSWORD_HASH_ROUNDS)
    app.state.token_issuer = TokenIssuer(
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_middleware(app)

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include routers
    app.include_router(accounts.router)
    app.include_router(users.router)
    app.include_router(posts.router)
    app.include_router(health.router)

    return app


def run() -> None:
    """Console entry point: load settings, configure logging, serve."""
    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
