"""Attachment limits with environment variable loading."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

BYTES_PER_MB = 1024 * 1024


class AttachmentConfig(BaseModel):
    """Configuration for attachment validation.

    Attributes:
        max_file_size_mb: Largest accepted file, in mebibytes.
    """

    max_file_size_mb: int = Field(
        default_factory=lambda: int(os.getenv("MAX_FILE_SIZE_MB", "50")),
        ge=1,
        description="Maximum accepted file size in MiB",
    )

    @property
    def max_file_size(self) -> int:
        """Maximum accepted file size in bytes."""
        return self.max_file_size_mb * BYTES_PER_MB


def get_attachment_config() -> AttachmentConfig:
    """Create attachment configuration from environment."""
    return AttachmentConfig()
