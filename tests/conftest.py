"""Shared Test Fixtures"""
import pytest

from src.application.ports.gateways import IAttachmentGateway
from src.infrastructure.config import get_settings
from src.infrastructure.repositories import InMemoryTodoRepository


class FakeAttachmentGateway(IAttachmentGateway):
    """S3 を使わない Attachment Gateway"""

    def __init__(self, bucket_name: str = "test-bucket"):
        self.bucket_name = bucket_name
        self.upload_requests: list[str] = []

    def get_attachment_url(self, todo_id: str) -> str:
        return f"https://{self.bucket_name}.s3.amazonaws.com/{todo_id}"

    async def generate_upload_url(self, todo_id: str) -> str:
        self.upload_requests.append(todo_id)
        return f"https://{self.bucket_name}.s3.amazonaws.com/{todo_id}?X-Amz-Signature=test"


@pytest.fixture(autouse=True)
def development_settings(monkeypatch):
    """各テストで設定を開発環境に固定"""
    monkeypatch.setenv("TODO_ENVIRONMENT", "development")
    monkeypatch.setenv("TODO_PERSISTENCE_BACKEND", "memory")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def todo_repository() -> InMemoryTodoRepository:
    return InMemoryTodoRepository()


@pytest.fixture
def attachment_gateway() -> FakeAttachmentGateway:
    return FakeAttachmentGateway()
