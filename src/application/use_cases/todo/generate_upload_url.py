"""Generate Upload URL Use Case"""
from __future__ import annotations

import structlog

from src.application.ports.gateways import IAttachmentGateway
from src.application.ports.repositories import ITodoRepository
from src.domain.todo import TodoNotFoundError

logger = structlog.get_logger()


class GenerateUploadUrlUseCase:
    """
    添付ファイルのアップロード URL 生成 ユースケース

    1. 所有者のキーで Todo を取得（存在しなければ TodoNotFoundError）
    2. 保存済みの attachmentUrl が命名規則と異なる場合のみ書き直す
    3. 有効期限付きのアップロード URL を返す

    attachmentUrl は作成時に書き込まれるため、通常 2 は何もしない。
    """

    def __init__(
        self,
        todo_repository: ITodoRepository,
        attachment_gateway: IAttachmentGateway,
    ):
        self._todo_repo = todo_repository
        self._attachment_gateway = attachment_gateway

    async def execute(self, user_id: str, todo_id: str) -> str:
        """ユースケースを実行"""
        log = logger.bind(user_id=user_id, todo_id=todo_id)
        log.info("generate_upload_url_started")

        item = await self._todo_repo.get(user_id, todo_id)
        if item is None:
            log.warning("todo_not_found")
            raise TodoNotFoundError(todo_id, user_id)

        attachment_url = self._attachment_gateway.get_attachment_url(todo_id)
        if item.attachment_url != attachment_url:
            log.info("attachment_url_repaired", previous=item.attachment_url)
            await self._todo_repo.update_attachment_url(todo_id, user_id, attachment_url)

        upload_url = await self._attachment_gateway.generate_upload_url(todo_id)

        log.info("generate_upload_url_completed")
        return upload_url
