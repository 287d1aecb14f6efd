"""Application Settings"""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    アプリケーション設定

    12-Factor App の Config 原則に従い、
    すべての設定は環境変数（TODO_ プレフィックス）から取得する。
    """

    model_config = SettingsConfigDict(
        env_prefix="TODO_",
        env_file=".env",
        case_sensitive=False,
    )

    # Service
    service_name: str = "todo-platform"
    environment: str = "development"
    log_level: str = "INFO"

    # Persistence: "dynamodb" または "memory"（ローカル開発用）
    persistence_backend: str = "dynamodb"

    # AWS
    aws_region: str = "us-east-1"
    max_attempts: int = 3

    # DynamoDB
    todos_table: str = "todos"
    todos_index: str = "todos-user-index"

    # S3
    attachment_bucket: str = "todo-attachments"
    signed_url_expiration: int = 300

    # CORS
    cors_allow_origins: list[str] = ["*"]

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache()
def get_settings() -> Settings:
    """設定のシングルトンインスタンスを取得"""
    return Settings()
