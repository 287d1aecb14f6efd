"""Delete Todo Use Case"""
from __future__ import annotations

import structlog

from src.application.ports.repositories import ITodoRepository

logger = structlog.get_logger()


class DeleteTodoUseCase:
    """Todo 削除 ユースケース"""

    def __init__(self, todo_repository: ITodoRepository):
        self._todo_repo = todo_repository

    async def execute(self, user_id: str, todo_id: str) -> None:
        """ユースケースを実行"""
        log = logger.bind(user_id=user_id, todo_id=todo_id)
        log.info("delete_todo_started")

        await self._todo_repo.delete(todo_id, user_id)

        log.info("delete_todo_completed")
