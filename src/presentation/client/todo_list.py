"""Todo List View Binding"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta

import structlog

from src.domain.todo import TodoItem, TodoUpdate
from src.presentation.client.todos_api import TodosApiClient, TodosApiError

logger = structlog.get_logger()

DUE_IN_DAYS = 7


def describe_error(action: str, exc: TodosApiError) -> str:
    """エラー原因ごとの表示メッセージを返す"""
    if exc.status_code is None:
        return f"Todo {action} failed: could not reach the server"
    if exc.status_code == 404:
        return f"Todo {action} failed: the todo no longer exists"
    if exc.status_code in (401, 403):
        return f"Todo {action} failed: your session has expired, please log in again"
    if exc.status_code in (400, 422):
        return f"Todo {action} failed: the request was invalid ({exc.message})"
    if exc.status_code == 503:
        return f"Todo {action} failed: the service is temporarily unavailable"
    return f"Todo {action} failed: {exc.message}"


@dataclass
class TodoListView:
    """
    Todo 一覧画面の状態

    API 呼び出しの結果を画面状態（todos, loading, error）へ反映する。
    失敗時は原因ごとのメッセージを error に設定する。
    """

    api: TodosApiClient
    todos: list[TodoItem] = field(default_factory=list)
    new_todo_name: str = ""
    keyword: str = ""
    loading: bool = True
    error: str | None = None

    async def load(self) -> None:
        """一覧を読み込む"""
        self.loading = True
        try:
            self.todos = await self.api.get_todos()
            self.error = None
        except TodosApiError as e:
            self._fail("loading", e)
        finally:
            self.loading = False

    async def search(self) -> None:
        """キーワード検索（空ならすべて読み込む）"""
        if not self.keyword.strip():
            await self.load()
            return

        self.loading = True
        try:
            self.todos = await self.api.search_todos(self.keyword)
            self.error = None
        except TodosApiError as e:
            self._fail("search", e)
        finally:
            self.loading = False

    async def create(self, today: date | None = None) -> None:
        """new_todo_name で Todo を作成（期日は7日後）"""
        due_date = ((today or date.today()) + timedelta(days=DUE_IN_DAYS)).isoformat()
        try:
            todo = await self.api.create_todo(self.new_todo_name, due_date)
        except TodosApiError as e:
            self._fail("creation", e)
            return

        self.todos = [*self.todos, todo]
        self.new_todo_name = ""
        self.error = None

    async def toggle_done(self, pos: int) -> None:
        """pos 番目の Todo の完了状態を反転"""
        todo = self.todos[pos]
        update = TodoUpdate(name=todo.name, due_date=todo.due_date, done=not todo.done)
        try:
            updated = await self.api.patch_todo(todo.todo_id, update)
        except TodosApiError as e:
            self._fail("update", e)
            return

        self.todos = [*self.todos[:pos], updated, *self.todos[pos + 1:]]
        self.error = None

    async def delete(self, todo_id: str) -> None:
        """Todo を削除"""
        try:
            await self.api.delete_todo(todo_id)
        except TodosApiError as e:
            self._fail("deletion", e)
            return

        self.todos = [todo for todo in self.todos if todo.todo_id != todo_id]
        self.error = None

    def _fail(self, action: str, exc: TodosApiError) -> None:
        logger.warning("todo_action_failed", action=action, status_code=exc.status_code, code=exc.code)
        self.error = describe_error(action, exc)
