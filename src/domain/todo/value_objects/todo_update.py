"""TodoUpdate Value Object"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TodoUpdate:
    """
    Todo 更新内容（値オブジェクト）

    更新操作で書き換え可能なフィールドは name / due_date / done の3つのみ。
    """

    name: str
    due_date: str
    done: bool

    def to_dict(self) -> dict[str, Any]:
        """辞書に変換"""
        return {
            "name": self.name,
            "dueDate": self.due_date,
            "done": self.done,
        }
