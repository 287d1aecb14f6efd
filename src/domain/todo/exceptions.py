"""Todo Domain Exceptions"""
from __future__ import annotations


class TodoNotFoundError(Exception):
    """Todo アイテムが見つからないエラー"""

    def __init__(self, todo_id: str, user_id: str):
        super().__init__(f"Todo {todo_id} not found")
        self.todo_id = todo_id
        self.user_id = user_id
