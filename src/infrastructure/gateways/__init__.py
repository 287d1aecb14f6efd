"""Gateway implementations"""
from src.infrastructure.gateways.s3 import S3AttachmentGateway

__all__ = ["S3AttachmentGateway"]
