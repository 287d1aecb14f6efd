"""Create Todo Use Case"""
from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4

import structlog

from src.application.ports.gateways import IAttachmentGateway
from src.application.ports.repositories import ITodoRepository
from src.domain.todo import TodoItem

logger = structlog.get_logger()


@dataclass
class CreateTodoInput:
    """作成入力DTO"""

    user_id: str
    name: str
    due_date: str


class CreateTodoUseCase:
    """
    Todo 作成 ユースケース

    1. todoId (UUID v4) と createdAt を採番
    2. 添付ファイル URL を命名規則から導出
    3. done=False で保存
    """

    def __init__(
        self,
        todo_repository: ITodoRepository,
        attachment_gateway: IAttachmentGateway,
    ):
        self._todo_repo = todo_repository
        self._attachment_gateway = attachment_gateway

    async def execute(self, input_data: CreateTodoInput) -> TodoItem:
        """ユースケースを実行"""
        todo_id = str(uuid4())
        log = logger.bind(user_id=input_data.user_id, todo_id=todo_id)
        log.info("create_todo_started")

        item = TodoItem.create(
            user_id=input_data.user_id,
            todo_id=todo_id,
            name=input_data.name,
            due_date=input_data.due_date,
            attachment_url=self._attachment_gateway.get_attachment_url(todo_id),
        )
        created = await self._todo_repo.create(item)

        log.info("create_todo_completed", created_at=created.created_at)
        return created
