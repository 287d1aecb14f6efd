"""Application Ports (Interfaces)"""
from .repositories import ITodoRepository
from .gateways import IAttachmentGateway

__all__ = [
    "ITodoRepository",
    "IAttachmentGateway",
]
