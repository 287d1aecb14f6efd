"""Repository Interfaces (Ports)"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.todo import TodoItem, TodoUpdate


class ITodoRepository(ABC):
    """
    Todo Repository Interface

    1つのテーブルを (userId, todoId) の複合キーで扱い、
    userId をキーとするセカンダリインデックスで所有者ごとに一覧する。
    具体的な実装（DynamoDB, インメモリ）はインフラ層で提供する。
    """

    @abstractmethod
    async def list_by_owner(self, user_id: str) -> list[TodoItem]:
        """所有者の Todo をすべて取得（順序はストア依存）"""
        pass

    @abstractmethod
    async def find_by_owner_and_name(self, user_id: str, text: str) -> list[TodoItem]:
        """所有者の Todo のうち name が text と完全一致するものを取得"""
        pass

    @abstractmethod
    async def get(self, user_id: str, todo_id: str) -> TodoItem | None:
        """複合キーで1件取得（存在しなければ None）"""
        pass

    @abstractmethod
    async def create(self, item: TodoItem) -> TodoItem:
        """無条件に保存（同一キーは上書き）"""
        pass

    @abstractmethod
    async def update(self, todo_id: str, user_id: str, update: TodoUpdate) -> TodoItem:
        """
        name / dueDate / done を上書きし、永続化後の状態を返す

        Raises:
            TodoNotFoundError: キーが存在しない場合
        """
        pass

    @abstractmethod
    async def update_attachment_url(
        self, todo_id: str, user_id: str, attachment_url: str
    ) -> None:
        """
        attachmentUrl のみを上書き

        Raises:
            TodoNotFoundError: キーが存在しない場合
        """
        pass

    @abstractmethod
    async def delete(self, todo_id: str, user_id: str) -> None:
        """無条件に削除（存在しなくてもエラーにしない）"""
        pass
