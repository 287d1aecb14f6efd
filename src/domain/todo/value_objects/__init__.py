"""Todo Value Objects"""
from .todo_update import TodoUpdate

__all__ = ["TodoUpdate"]
