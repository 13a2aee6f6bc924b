"""Attachment endpoints: batch upload, listing and removal."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, UploadFile, status

from src.api.dependencies import get_chat_session
from src.chat.session import ChatSession
from src.models.schemas import AttachmentSummary, RawFile, UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/attachments", tags=["attachments"])

SessionDep = Annotated[ChatSession, Depends(get_chat_session)]


async def _to_raw_file(file: UploadFile) -> RawFile:
    """Read an uploaded file into a RawFile.

    Args:
        file: The uploaded file.

    Returns:
        RawFile with declared type, size and content.
    """
    content = await file.read()
    return RawFile(
        name=file.filename or "unnamed",
        media_type=file.content_type or "",
        size=file.size if file.size is not None else len(content),
        data=content,
    )


@router.post("", response_model=UploadResponse)
async def upload_attachments(files: list[UploadFile], session: SessionDep) -> UploadResponse:
    """Upload a batch of documents.

    Each file is validated and converted independently. Files that fail are
    reported in `rejections`; the others are added to the pending set.

    Args:
        files: The uploaded files (multipart/form-data).

    Returns:
        UploadResponse with accepted attachments and rejections.
    """
    raw_files = [await _to_raw_file(file) for file in files]
    result = await session.upload(raw_files)

    return UploadResponse(
        accepted=[a.summary() for a in result.accepted],
        rejections=result.rejections,
    )


@router.get("", response_model=list[AttachmentSummary])
async def list_attachments(session: SessionDep) -> list[AttachmentSummary]:
    """List all attachments of the session, delivered or not."""
    return [a.summary() for a in session.attachments.pending]


@router.delete("/{attachment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_attachment(attachment_id: str, session: SessionDep) -> Response:
    """Remove an attachment from the pending set.

    Raises:
        404: Unknown attachment id.
    """
    if not session.remove_attachment(attachment_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Attachment {attachment_id} not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
