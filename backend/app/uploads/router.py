"""FastAPI router for file uploads."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from app.errors import MissingFileError, UploadFailedError

from .schemas import UploadResponse
from .store import UploadStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["uploads"])


def get_upload_store(request: Request) -> UploadStore:
    """The upload store created at startup and stored on app.state."""
    return request.app.state.upload_store


@router.post("/upload", response_model=UploadResponse)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    type: Optional[str] = Form(None),
    store: UploadStore = Depends(get_upload_store),
):
    """Store a single uploaded file (voice or video recordings).

    No type or size checks are applied. The ``type`` form field is
    echoed back as given.

    Returns:
        UploadResponse with the public URL of the stored file.

    Raises:
        MissingFileError: 400 if no file part was sent.
        UploadFailedError: 500 if the file could not be stored.
    """
    if file is None or not file.filename:
        raise MissingFileError()

    try:
        content = await file.read()
        stored = await store.save(
            filename=file.filename,
            content=content,
            mime_type=file.content_type or "application/octet-stream",
        )
    except Exception:
        logger.exception("Error uploading file %s", file.filename)
        raise UploadFailedError()

    return UploadResponse(url=stored.url, type=type)
