"""Get Todos Use Case"""
from __future__ import annotations

import structlog

from src.application.ports.repositories import ITodoRepository
from src.domain.todo import TodoItem

logger = structlog.get_logger()


class GetTodosUseCase:
    """所有者の Todo 一覧取得 ユースケース"""

    def __init__(self, todo_repository: ITodoRepository):
        self._todo_repo = todo_repository

    async def execute(self, user_id: str) -> list[TodoItem]:
        """ユースケースを実行"""
        log = logger.bind(user_id=user_id)
        log.info("get_todos_started")

        items = await self._todo_repo.list_by_owner(user_id)

        log.info("get_todos_completed", count=len(items))
        return items
