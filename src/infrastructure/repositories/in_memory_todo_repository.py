"""In-Memory Todo Repository Implementation"""
from __future__ import annotations

from threading import RLock

import structlog

from src.application.ports.repositories import ITodoRepository
from src.domain.todo import TodoItem, TodoNotFoundError, TodoUpdate

logger = structlog.get_logger()


class InMemoryTodoRepository(ITodoRepository):
    """
    インメモリの Todo Repository

    テストとローカル開発用。DynamoDB 実装と同じ契約を持つ。
    一覧は挿入順で返す。
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: dict[tuple[str, str], TodoItem] = {}

    async def list_by_owner(self, user_id: str) -> list[TodoItem]:
        with self._lock:
            return [item for (owner, _), item in self._items.items() if owner == user_id]

    async def find_by_owner_and_name(self, user_id: str, text: str) -> list[TodoItem]:
        items = await self.list_by_owner(user_id)
        return [item for item in items if item.name == text]

    async def get(self, user_id: str, todo_id: str) -> TodoItem | None:
        with self._lock:
            return self._items.get((user_id, todo_id))

    async def create(self, item: TodoItem) -> TodoItem:
        with self._lock:
            self._items[(item.user_id, item.todo_id)] = item
        logger.info("todo_created", user_id=item.user_id, todo_id=item.todo_id)
        return item

    async def update(self, todo_id: str, user_id: str, update: TodoUpdate) -> TodoItem:
        with self._lock:
            existing = self._require(todo_id, user_id)
            updated = existing.apply_update(update)
            self._items[(user_id, todo_id)] = updated
            return updated

    async def update_attachment_url(
        self, todo_id: str, user_id: str, attachment_url: str
    ) -> None:
        with self._lock:
            existing = self._require(todo_id, user_id)
            self._items[(user_id, todo_id)] = existing.with_attachment_url(attachment_url)

    async def delete(self, todo_id: str, user_id: str) -> None:
        with self._lock:
            self._items.pop((user_id, todo_id), None)

    def _require(self, todo_id: str, user_id: str) -> TodoItem:
        existing = self._items.get((user_id, todo_id))
        if existing is None:
            logger.warning("todo_not_found", user_id=user_id, todo_id=todo_id)
            raise TodoNotFoundError(todo_id, user_id)
        return existing
