"""Todo Entities"""
from .todo_item import TodoItem

__all__ = ["TodoItem"]
