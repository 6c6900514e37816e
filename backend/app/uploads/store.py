"""Upload store.

Writes uploaded files into the public upload directory under a name made
of the arrival time in milliseconds plus the original extension, e.g.
``1718000000000.wav``. Files are kept indefinitely.

Names never repeat within a process: a timestamp is never issued twice,
and files are opened with exclusive create so a name already on disk is
skipped rather than overwritten.
"""
import logging
import time
from pathlib import Path, PurePath
from typing import Callable, Optional, Union

from .schemas import UploadedFile

logger = logging.getLogger(__name__)

# Upper bound on names tried for one upload before giving up.
MAX_NAME_ATTEMPTS = 1000


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class UploadStore:
    """Persists uploads to local disk.

    Args:
        upload_dir: Directory files are written to. Created if missing.
        url_prefix: Public URL prefix the directory is served under.
        clock: Millisecond clock, replaceable in tests.
    """

    def __init__(
        self,
        upload_dir: Union[str, Path],
        url_prefix: str = "/uploads",
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix
        self._clock = clock or _now_ms
        self._last_stamp = 0
        self._ensure_upload_dir()

    def _ensure_upload_dir(self) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def _next_stamp(self) -> int:
        stamp = max(self._clock(), self._last_stamp + 1)
        self._last_stamp = stamp
        return stamp

    @staticmethod
    def extension_of(filename: str) -> str:
        """Extension of *filename* including the dot, case preserved; '' if none."""
        # Windows clients may send backslash-separated paths.
        basename = PurePath(filename.replace("\\", "/")).name
        return PurePath(basename).suffix

    async def save(self, filename: str, content: bytes, mime_type: str) -> UploadedFile:
        """Write *content* under a fresh unique name.

        Args:
            filename: Original filename from the client.
            content: File bytes.
            mime_type: MIME type reported by the client.

        Returns:
            UploadedFile describing the stored file.

        Raises:
            OSError: If the file cannot be written.
        """
        ext = self.extension_of(filename)
        self._ensure_upload_dir()

        for _ in range(MAX_NAME_ATTEMPTS):
            stored_name = f"{self._next_stamp()}{ext}"
            path = self.upload_dir / stored_name
            try:
                with path.open("xb") as fh:
                    fh.write(content)
                break
            except FileExistsError:
                logger.debug("Upload name %s already taken, trying the next one", stored_name)
        else:
            raise FileExistsError(f"No free upload name after {MAX_NAME_ATTEMPTS} attempts")

        logger.info("Saved upload %s as %s (%d bytes)", filename, path, len(content))
        return UploadedFile(
            original_name=filename,
            stored_name=stored_name,
            size_bytes=len(content),
            mime_type=mime_type,
            storage_path=str(path),
            url_prefix=self.url_prefix,
        )
