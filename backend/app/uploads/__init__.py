"""File upload module.

Accepts one file per request and stores it under the public upload
directory, where the static file mount serves it back:

    public/uploads/<timestamp><ext>  ->  /uploads/<timestamp><ext>

There is no cleanup, expiry, deduplication or content validation.
"""
from .schemas import UploadedFile, UploadResponse
from .store import UploadStore

__all__ = ["UploadedFile", "UploadResponse", "UploadStore"]
