"""
Blob storage for uploaded media.

Files are streamed in chunks to a directory tree under MEDIA_ROOT and served
from MEDIA_URL. Progress is reported as a percentage through a callback.
Uploads are written to a `.part` file beside the target and moved over it
only when complete. A failed upload leaves that partial file behind and the
previously stored object untouched.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Callable, Optional

from talenthub.core.config import settings

logger = logging.getLogger("blob_storage")

ProgressCallback = Callable[[float], None]


class UploadError(Exception):
    """The upload could not be completed."""


class UploadTooLargeError(UploadError):
    pass


@dataclass
class StoredBlob:
    url: str
    path: str
    size: int


def video_pitch_path(owner_id: str, filename: str) -> str:
    """Storage path of a talent's video pitch."""
    return f"talents/{owner_id}/video-pitch/{safe_filename(filename)}"


def safe_filename(filename: str) -> str:
    name = PurePosixPath((filename or "").replace("\\", "/")).name
    if name in ("", ".", ".."):
        raise UploadError("Invalid file name")
    return name


class LocalBlobStorage:
    def __init__(self, root: str, base_url: str, chunk_size: int = 1024 * 1024):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")
        self.chunk_size = chunk_size

    def _resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if self.root.resolve() not in target.parents:
            raise UploadError("Invalid storage path")
        return target

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path}"

    async def upload(
        self,
        path: str,
        source,
        total_bytes: Optional[int] = None,
        max_bytes: Optional[int] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> StoredBlob:
        """
        Stream `source` (anything with an async `read(size)`) to `path`.

        Raises:
            UploadTooLargeError: more than max_bytes were received
            UploadError: the write failed
        """
        target = self._resolve(path)
        # The stored object is only replaced once the whole stream is written
        staging = target.with_name(target.name + ".part")
        written = 0
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(staging, "wb") as out:
                while True:
                    chunk = await source.read(self.chunk_size)
                    if not chunk:
                        break
                    written += len(chunk)
                    if max_bytes is not None and written > max_bytes:
                        raise UploadTooLargeError(f"File exceeds {max_bytes} bytes")
                    out.write(chunk)
                    if on_progress and total_bytes:
                        on_progress(min(written * 100 / total_bytes, 100.0))
            os.replace(staging, target)
        except OSError as e:
            logger.error(f"Error uploading {path}: {str(e)}")
            raise UploadError("Failed to store file") from e

        if on_progress:
            on_progress(100.0)
        logger.info(f"Stored {path} ({written} bytes)")
        return StoredBlob(url=self.url_for(path), path=path, size=written)

    def delete(self, path: str) -> bool:
        target = self._resolve(path)
        if not target.exists():
            return False
        os.remove(target)
        return True


blob_storage = LocalBlobStorage(
    root=settings.MEDIA_ROOT,
    base_url=settings.MEDIA_URL,
    chunk_size=settings.UPLOAD_CHUNK_SIZE,
)


def get_blob_storage() -> LocalBlobStorage:
    return blob_storage
