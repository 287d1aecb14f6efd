"""Repository implementations"""
from .dynamodb_todo_repository import DynamoDBTodoRepository
from .in_memory_todo_repository import InMemoryTodoRepository

__all__ = ["DynamoDBTodoRepository", "InMemoryTodoRepository"]
