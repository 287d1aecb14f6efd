"""Update Todo Use Case"""
from __future__ import annotations

from dataclasses import dataclass

import structlog

from src.application.ports.repositories import ITodoRepository
from src.domain.todo import TodoItem, TodoUpdate

logger = structlog.get_logger()


@dataclass
class UpdateTodoInput:
    """更新入力DTO"""

    user_id: str
    todo_id: str
    update: TodoUpdate


class UpdateTodoUseCase:
    """
    Todo 更新 ユースケース

    name / dueDate / done をそのままリポジトリへ渡す。
    キーが存在しない場合は TodoNotFoundError が伝播する。
    """

    def __init__(self, todo_repository: ITodoRepository):
        self._todo_repo = todo_repository

    async def execute(self, input_data: UpdateTodoInput) -> TodoItem:
        """ユースケースを実行"""
        log = logger.bind(user_id=input_data.user_id, todo_id=input_data.todo_id)
        log.info("update_todo_started", done=input_data.update.done)

        updated = await self._todo_repo.update(
            input_data.todo_id,
            input_data.user_id,
            input_data.update,
        )

        log.info("update_todo_completed")
        return updated
