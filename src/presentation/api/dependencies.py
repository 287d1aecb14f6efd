"""API Dependencies"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any

from botocore.config import Config
from fastapi import Depends, Request
import structlog

from src.application.ports.gateways import IAttachmentGateway
from src.application.ports.repositories import ITodoRepository
from src.infrastructure.config import Settings, get_settings
from src.infrastructure.gateways import S3AttachmentGateway
from src.infrastructure.repositories import DynamoDBTodoRepository, InMemoryTodoRepository

logger = structlog.get_logger()


class OwnerIdentityError(Exception):
    """所有者（呼び出し元）を特定できないエラー"""

    pass


@dataclass
class Container:
    """
    プロセス起動時に一度だけ組み立てる依存オブジェクト

    各リクエストのハンドラへは参照として渡す。
    """

    todo_repository: ITodoRepository
    attachment_gateway: IAttachmentGateway


def build_container(settings: Settings) -> Container:
    """設定から依存オブジェクトを組み立てる"""
    config = Config(retries={"max_attempts": settings.max_attempts, "mode": "standard"})

    if settings.persistence_backend == "memory":
        todo_repository: ITodoRepository = InMemoryTodoRepository()
    else:
        todo_repository = DynamoDBTodoRepository(
            table_name=settings.todos_table,
            index_name=settings.todos_index,
            region=settings.aws_region,
            config=config,
        )

    logger.info(
        "container_built",
        persistence_backend=settings.persistence_backend,
        table=settings.todos_table,
        bucket=settings.attachment_bucket,
    )
    return Container(
        todo_repository=todo_repository,
        attachment_gateway=S3AttachmentGateway(
            bucket_name=settings.attachment_bucket,
            region=settings.aws_region,
            expires_in=settings.signed_url_expiration,
        ),
    )


# === Dependency Injection ===


def get_container(request: Request) -> Container:
    """Container の依存性注入"""
    return request.app.state.container


def get_todo_repository(
    container: Annotated[Container, Depends(get_container)]
) -> ITodoRepository:
    """Todo Repository の依存性注入"""
    return container.todo_repository


def get_attachment_gateway(
    container: Annotated[Container, Depends(get_container)]
) -> IAttachmentGateway:
    """Attachment Gateway の依存性注入"""
    return container.attachment_gateway


def _owner_from_event(event: dict[str, Any]) -> str | None:
    """API Gateway オーソライザのコンテキストから所有者IDを取り出す"""
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    if authorizer.get("principalId"):
        return authorizer["principalId"]

    # Cognito / JWT オーソライザ
    claims = authorizer.get("claims") or (authorizer.get("jwt") or {}).get("claims") or {}
    return claims.get("sub")


async def get_owner_id(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> str:
    """
    所有者IDの依存性注入

    トークンの検証は API Gateway のオーソライザで完了している前提。
    Mangum が scope に格納した "aws.event" から取り出す。
    開発環境に限り X-User-Id ヘッダーも受け付ける。
    user_id のログ束縛はリクエストのコンテキストで行う必要があるため async とする。
    """
    owner_id = _owner_from_event(request.scope.get("aws.event") or {})

    if not owner_id and settings.is_development:
        owner_id = request.headers.get("X-User-Id")

    if not owner_id:
        raise OwnerIdentityError("Owner identity is missing")

    structlog.contextvars.bind_contextvars(user_id=owner_id)
    return owner_id
