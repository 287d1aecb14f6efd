"""Get Todo Use Case"""
from __future__ import annotations

import structlog

from src.application.ports.repositories import ITodoRepository
from src.domain.todo import TodoItem, TodoNotFoundError

logger = structlog.get_logger()


class GetTodoUseCase:
    """Todo 1件取得 ユースケース"""

    def __init__(self, todo_repository: ITodoRepository):
        self._todo_repo = todo_repository

    async def execute(self, user_id: str, todo_id: str) -> TodoItem:
        """ユースケースを実行"""
        log = logger.bind(user_id=user_id, todo_id=todo_id)
        log.info("get_todo_started")

        item = await self._todo_repo.get(user_id, todo_id)
        if item is None:
            log.warning("todo_not_found")
            raise TodoNotFoundError(todo_id, user_id)

        log.info("get_todo_completed", done=item.done)
        return item
