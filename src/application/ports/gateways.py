"""Gateway Interfaces (Ports)"""
from __future__ import annotations

from abc import ABC, abstractmethod


class IAttachmentGateway(ABC):
    """
    Attachment Gateway Interface

    添付ファイルを保存するオブジェクトストレージ（S3）を抽象化する。
    添付ファイルの URL 命名規則はこのゲートウェイが所有する。
    """

    @abstractmethod
    def get_attachment_url(self, todo_id: str) -> str:
        """todo_id から添付ファイルの URL を導出"""
        pass

    @abstractmethod
    async def generate_upload_url(self, todo_id: str) -> str:
        """アップロード用の有効期限付き URL を生成"""
        pass
