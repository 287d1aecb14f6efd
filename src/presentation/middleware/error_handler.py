"""Error Handler Middleware"""
from __future__ import annotations

from botocore.exceptions import BotoCoreError, ClientError
import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from src.domain.todo import TodoNotFoundError
from src.presentation.api.dependencies import OwnerIdentityError

logger = structlog.get_logger()


def _error_response(
    status_code: int, error: str, message: str, code: str, **extra: object
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message, "code": code, **extra},
    )


async def todo_not_found_handler(request: Request, exc: TodoNotFoundError) -> JSONResponse:
    """Todo が見つからないエラーハンドラ"""
    logger.warning("todo_not_found", todo_id=exc.todo_id)
    return _error_response(404, "TodoNotFound", str(exc), "TODO_NOT_FOUND")


async def owner_identity_handler(request: Request, exc: OwnerIdentityError) -> JSONResponse:
    """所有者を特定できないエラーハンドラ"""
    logger.warning("owner_identity_missing", path=request.url.path)
    return _error_response(401, "Unauthorized", str(exc), "UNAUTHORIZED")


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """リクエスト不正エラーハンドラ"""
    logger.warning("request_validation_failed", error_count=len(exc.errors()))
    return _error_response(
        422,
        "ValidationError",
        "Request validation failed",
        "VALIDATION_ERROR",
        detail=jsonable_encoder(exc.errors()),
    )


async def store_unavailable_handler(
    request: Request, exc: ClientError | BotoCoreError
) -> JSONResponse:
    """DynamoDB / S3 呼び出し失敗エラーハンドラ"""
    logger.error("store_unavailable", error=str(exc))
    return _error_response(
        503,
        "StoreUnavailable",
        "The data store is temporarily unavailable",
        "STORE_UNAVAILABLE",
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """汎用エラーハンドラ"""
    logger.error("unhandled_error", error=str(exc), exc_info=True)
    return _error_response(
        500,
        "InternalServerError",
        "An unexpected error occurred",
        "INTERNAL_ERROR",
    )


# エラーハンドラのマッピング
error_handlers = {
    TodoNotFoundError: todo_not_found_handler,
    OwnerIdentityError: owner_identity_handler,
    RequestValidationError: validation_error_handler,
    ClientError: store_unavailable_handler,
    BotoCoreError: store_unavailable_handler,
    Exception: generic_error_handler,
}
