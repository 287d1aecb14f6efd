"""Todos API client and list view binding"""
from .todo_list import TodoListView, describe_error
from .todos_api import TodosApiClient, TodosApiError

__all__ = ["TodoListView", "TodosApiClient", "TodosApiError", "describe_error"]
