"""Todo Use Cases"""
from .create_todo import CreateTodoInput, CreateTodoUseCase
from .delete_todo import DeleteTodoUseCase
from .generate_upload_url import GenerateUploadUrlUseCase
from .get_todo import GetTodoUseCase
from .get_todos import GetTodosUseCase
from .search_todos import SearchTodosUseCase
from .update_todo import UpdateTodoInput, UpdateTodoUseCase

__all__ = [
    "CreateTodoInput",
    "CreateTodoUseCase",
    "DeleteTodoUseCase",
    "GenerateUploadUrlUseCase",
    "GetTodoUseCase",
    "GetTodosUseCase",
    "SearchTodosUseCase",
    "UpdateTodoInput",
    "UpdateTodoUseCase",
]
