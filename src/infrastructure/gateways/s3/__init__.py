"""S3 Gateway implementations"""
from src.infrastructure.gateways.s3.s3_attachment_gateway import S3AttachmentGateway

__all__ = ["S3AttachmentGateway"]
