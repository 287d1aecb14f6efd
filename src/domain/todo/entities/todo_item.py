"""TodoItem Entity"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any

from ..value_objects.todo_update import TodoUpdate


def utc_now_iso() -> str:
    """現在時刻を ISO-8601 (UTC, ミリ秒, Z 付き) で返す"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class TodoItem:
    """
    Todo アイテム（エンティティ）

    (user_id, todo_id) の複合キーで一意に識別される。
    created_at は作成後に変更されない。
    attachment_url は専用の操作でのみ書き換える。
    """

    user_id: str
    todo_id: str
    name: str
    due_date: str
    created_at: str
    done: bool = False
    attachment_url: str | None = None

    # === Factory Methods ===

    @classmethod
    def create(
        cls,
        user_id: str,
        todo_id: str,
        name: str,
        due_date: str,
        attachment_url: str | None = None,
    ) -> TodoItem:
        """新しい TodoItem を作成（done=False, created_at=現在時刻）"""
        return cls(
            user_id=user_id,
            todo_id=todo_id,
            name=name,
            due_date=due_date,
            created_at=utc_now_iso(),
            done=False,
            attachment_url=attachment_url,
        )

    # === Command Methods ===

    def apply_update(self, update: TodoUpdate) -> TodoItem:
        """name / due_date / done のみを書き換えた新しいインスタンスを返す"""
        return replace(
            self,
            name=update.name,
            due_date=update.due_date,
            done=update.done,
        )

    def with_attachment_url(self, attachment_url: str) -> TodoItem:
        """attachment_url のみを書き換えた新しいインスタンスを返す"""
        return replace(self, attachment_url=attachment_url)

    # === Serialization ===

    def to_dict(self) -> dict[str, Any]:
        """永続化・レスポンス用の辞書（camelCase）に変換"""
        data: dict[str, Any] = {
            "userId": self.user_id,
            "todoId": self.todo_id,
            "name": self.name,
            "dueDate": self.due_date,
            "createdAt": self.created_at,
            "done": self.done,
        }
        if self.attachment_url is not None:
            data["attachmentUrl"] = self.attachment_url
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TodoItem:
        """辞書から復元"""
        return cls(
            user_id=data["userId"],
            todo_id=data["todoId"],
            name=data["name"],
            due_date=data["dueDate"],
            created_at=data["createdAt"],
            done=bool(data.get("done", False)),
            attachment_url=data.get("attachmentUrl"),
        )
