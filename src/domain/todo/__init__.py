"""Todo Domain Module"""
from .entities.todo_item import TodoItem
from .exceptions import TodoNotFoundError
from .value_objects.todo_update import TodoUpdate

__all__ = [
    "TodoItem",
    "TodoNotFoundError",
    "TodoUpdate",
]
