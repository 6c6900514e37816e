"""Pydantic schemas for file uploads.

- UploadedFile: what the store wrote to disk
- UploadResponse: API response after a successful upload
"""
from pathlib import PurePosixPath
from typing import Optional

from pydantic import BaseModel, Field


class UploadedFile(BaseModel):
    """Metadata for a stored upload.

    ``stored_name`` is the timestamp-based name on disk; ``original_name``
    is only kept for logging and callers that want it.
    """
    original_name: str = Field(..., description="Filename as sent by the client")
    stored_name: str = Field(..., description="Filename on disk (timestamp-based)")
    size_bytes: int = Field(..., description="File size in bytes")
    mime_type: str = Field(..., description="MIME type reported by the client")
    storage_path: str = Field(..., description="Path of the stored file")
    url_prefix: str = Field("/uploads", description="Public URL prefix of the upload directory")

    @property
    def url(self) -> str:
        return str(PurePosixPath(self.url_prefix) / self.stored_name)


class UploadResponse(BaseModel):
    url: str = Field(..., description="Relative URL the file is served from")
    type: Optional[str] = Field(None, description="Caller-supplied type tag, echoed back")
