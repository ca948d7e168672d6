"""Conversation endpoints: state, PDF upload, messages and clear.

Handles file validation and maps rejected sends onto HTTP status codes.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, UploadFile, status

from chatpdfy.chat.session import ChatSession, get_chat_session
from chatpdfy.models.schemas import (
    ChatRequest,
    ChatResponse,
    ConversationState,
    ExtractionFailure,
    UploadedFile,
    UploadResponse,
)
from chatpdfy.parsing.pdf_parser import PdfBackendUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/conversation", tags=["conversation"])


def _filename_problem(filename: str | None) -> str | None:
    """Check that an uploaded file has a name with a .pdf extension.

    Args:
        filename: The uploaded filename.

    Returns:
        The reason the file is skipped, or None if the name is acceptable.
    """
    if not filename:
        return "Filename is required"

    if not filename.lower().endswith(".pdf"):
        return f"Only PDF files are accepted: {filename}"

    return None


@router.get("", response_model=ConversationState)
async def get_conversation(session: ChatSession = Depends(get_chat_session)) -> ConversationState:
    """Return the conversation log and request state."""
    return session.state()


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_conversation(session: ChatSession = Depends(get_chat_session)) -> Response:
    """Clear the log, drop pending PDF context and reset the request state."""
    session.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/upload", response_model=UploadResponse)
async def upload_pdfs(
    files: list[UploadFile],
    session: ChatSession = Depends(get_chat_session),
) -> UploadResponse:
    """Upload one or more PDF documents.

    Each extracted file adds a summary turn to the conversation, and the
    combined text is attached to the next message sent.

    Args:
        files: The uploaded PDF files (multipart/form-data), in order.

    Returns:
        UploadResponse with per-file summaries and skipped files. Files
        without a .pdf name are skipped without being read.

    Raises:
        503: PDF extraction is not available.
    """
    uploads: list[UploadedFile] = []
    rejected: list[ExtractionFailure] = []
    for file in files:
        problem = _filename_problem(file.filename)
        if problem is not None:
            rejected.append(ExtractionFailure(name=file.filename or "", reason=problem))
            continue
        uploads.append(UploadedFile(name=file.filename, content=await file.read()))

    try:
        batch = await session.upload(uploads)
    except PdfBackendUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        ) from e

    failures = rejected + batch.failures
    for failure in failures:
        logger.warning(f"Skipped {failure.name}: {failure.reason}")

    return UploadResponse(
        files=[turn.file_meta for turn in batch.turns if turn.file_meta is not None],
        failures=failures,
    )


@router.post("/messages", response_model=ChatResponse)
async def send_message(
    request: ChatRequest,
    session: ChatSession = Depends(get_chat_session),
) -> ChatResponse | Response:
    """Send a message and wait for the assistant's reply.

    A blank message is ignored and answered with 204 No Content.

    Raises:
        409: A reply to a previous message is still pending.
    """
    reply = await session.send(request.message)
    if reply is None:
        if not request.message:
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A reply is already pending",
        )
    return ChatResponse(reply=reply)
