"""Logging Middleware"""
from __future__ import annotations

import time
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()


def _request_id(request: Request) -> str:
    """X-Request-ID ヘッダー、Lambda のリクエストID、新規 UUID の順に採用"""
    header = request.headers.get("X-Request-ID")
    if header:
        return header

    lambda_context = request.scope.get("aws.context")
    aws_request_id = getattr(lambda_context, "aws_request_id", None)
    if aws_request_id:
        return aws_request_id

    return str(uuid4())


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    リクエスト/レスポンス ログミドルウェア

    12-Factor App の Logs 原則に従い、
    構造化されたログをイベントストリームとして出力する。
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = _request_id(request)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start_time = time.perf_counter()
        logger.info(
            "request_started",
            method=request.method,
            path=request.url.path,
        )

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        response.headers["X-Request-ID"] = request_id

        return response
