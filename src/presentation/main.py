"""FastAPI Application Entry Point"""
from contextlib import asynccontextmanager
import logging
from typing import AsyncIterator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.infrastructure.config import get_settings
from src.presentation.api.dependencies import Container, build_container
from src.presentation.api.routes import health_routes, todo_routes
from src.presentation.middleware.error_handler import error_handlers
from src.presentation.middleware.logging import LoggingMiddleware

logger = structlog.get_logger()


def configure_logging(log_level: str = "INFO") -> None:
    """構造化ログを設定"""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """アプリケーションのライフサイクル管理"""
    settings = get_settings()
    logger.info(
        "application_starting",
        service=settings.service_name,
        environment=settings.environment,
    )
    yield
    logger.info("application_shutting_down")


def create_app(container: Container | None = None) -> FastAPI:
    """
    FastAPI アプリケーションを作成

    container を省略した場合は設定から組み立てる（プロセスにつき一度）。
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Todo Platform API",
        description="Serverless to-do list backend on DynamoDB and S3",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )
    app.state.container = container or build_container(settings)

    # Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    # Error Handlers
    for exception_class, handler in error_handlers.items():
        app.add_exception_handler(exception_class, handler)

    # Routes
    app.include_router(health_routes.router, tags=["Health"])
    app.include_router(todo_routes.router, prefix="/todos", tags=["Todos"])

    return app
