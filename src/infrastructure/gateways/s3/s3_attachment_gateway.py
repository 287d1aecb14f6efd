"""S3 Attachment Gateway Implementation"""
from __future__ import annotations

from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError
import structlog

from src.application.ports.gateways import IAttachmentGateway

logger = structlog.get_logger()


class S3AttachmentGateway(IAttachmentGateway):
    """
    S3 Attachment Gateway

    添付ファイルのオブジェクトキーは todoId そのもの。
    URL は https://{bucket}.s3.amazonaws.com/{todoId} の形式。
    """

    def __init__(
        self,
        bucket_name: str,
        region: str = "us-east-1",
        expires_in: int = 300,
        client: Any = None,
    ):
        self.bucket_name = bucket_name
        self.region = region
        self.expires_in = expires_in
        self._client = client or boto3.client(
            "s3",
            region_name=region,
            config=Config(signature_version="s3v4"),
        )

    def get_attachment_url(self, todo_id: str) -> str:
        """添付ファイルの URL を導出"""
        return f"https://{self.bucket_name}.s3.amazonaws.com/{todo_id}"

    async def generate_upload_url(self, todo_id: str) -> str:
        """
        PUT 用の署名付き URL を生成

        Args:
            todo_id: Todo ID（オブジェクトキー）

        Returns:
            str: 署名付きURL
        """
        log = logger.bind(bucket=self.bucket_name, key=todo_id)
        log.info("generating_presigned_url", operation="put_object")

        try:
            url = self._client.generate_presigned_url(
                ClientMethod="put_object",
                Params={"Bucket": self.bucket_name, "Key": todo_id},
                ExpiresIn=self.expires_in,
            )

            log.info("presigned_url_generated", expires_in=self.expires_in)
            return url

        except ClientError as e:
            log.error("presigned_url_generation_failed", error=str(e))
            raise
