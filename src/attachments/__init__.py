"""Attachment management: validation, encoding and pending/delivered lifecycle."""

from src.attachments.config import AttachmentConfig, get_attachment_config
from src.attachments.manager import AttachmentManager

__all__ = ["AttachmentConfig", "AttachmentManager", "get_attachment_config"]
