"""Search Todos Use Case"""
from __future__ import annotations

import structlog

from src.application.ports.repositories import ITodoRepository
from src.domain.todo import TodoItem

logger = structlog.get_logger()


class SearchTodosUseCase:
    """
    Todo 検索 ユースケース

    name がキーワードと完全一致する Todo のみを返す（部分一致ではない）。
    """

    def __init__(self, todo_repository: ITodoRepository):
        self._todo_repo = todo_repository

    async def execute(self, user_id: str, keyword: str) -> list[TodoItem]:
        """ユースケースを実行"""
        log = logger.bind(user_id=user_id, keyword=keyword)
        log.info("search_todos_started")

        items = await self._todo_repo.find_by_owner_and_name(user_id, keyword)

        log.info("search_todos_completed", count=len(items))
        return items
