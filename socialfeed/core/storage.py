import logging
import os
import uuid
from pathlib import Path
from typing import BinaryIO, List, Optional, Protocol

from socialfeed.core.config import Settings
from socialfeed.core.validation import FieldError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = [".jpg", ".jpeg", ".png", ".gif", ".webp"]
VIDEO_EXTENSIONS = [".mp4", ".mov", ".webm", ".mkv", ".avi"]
ALLOWED_EXTENSIONS = {"image": IMAGE_EXTENSIONS, "video": VIDEO_EXTENSIONS}

CHUNK_SIZE = 1024 * 1024


class Upload(Protocol):
    """The parts of fastapi.UploadFile the storage layer relies on."""

    filename: Optional[str]
    file: BinaryIO


class UploadTooLarge(Exception):
    pass


def has_upload(upload: Optional[Upload]) -> bool:
    return upload is not None and bool(upload.filename)


class MediaStorage:
    """Stores uploaded post media as files in a single static directory.

    Records only ever hold the generated filename; URLs are composed at read
    time with public_url().
    """

    def __init__(self, settings: Settings):
        self.directory = Path(settings.UPLOAD_DIRECTORY)
        self.url_prefix = settings.MEDIA_URL_PREFIX
        self.max_size = settings.MAX_UPLOAD_SIZE

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def check_upload(self, upload: Optional[Upload], kind: str) -> List[FieldError]:
        if not has_upload(upload):
            return []
        allowed = ALLOWED_EXTENSIONS[kind]
        extension = os.path.splitext(upload.filename)[1].lower()
        if extension not in allowed:
            return [
                FieldError(kind, f"Unsupported file format. Please use one of: {', '.join(allowed)}")
            ]
        return []

    def save(self, upload: Upload) -> str:
        """Copy an upload into the media directory and return its generated filename."""
        self.ensure_directory()
        extension = Path(upload.filename).suffix.lower()
        filename = f"{uuid.uuid4().hex}{extension}"
        path = self.directory / filename

        written = 0
        try:
            with open(path, "wb") as out_file:
                while True:
                    chunk = upload.file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_size:
                        raise UploadTooLarge(upload.filename)
                    out_file.write(chunk)
        except BaseException:
            path.unlink(missing_ok=True)
            raise

        logger.info(f"Saved upload {upload.filename!r} as {path} ({written} bytes)")
        return filename

    def delete(self, filename: Optional[str]) -> bool:
        """Best-effort removal; failures are logged, never raised."""
        if not filename:
            return False
        path = self.directory / Path(filename).name
        try:
            os.remove(path)
            logger.info(f"Deleted media file: {path}")
            return True
        except FileNotFoundError:
            logger.warning(f"Media file already missing: {path}")
        except OSError as e:
            logger.error(f"Failed to delete media file {path}: {e}")
        return False

    def public_url(self, base_url: str, filename: Optional[str]) -> Optional[str]:
        if not filename:
            return None
        return f"{base_url.rstrip('/')}{self.url_prefix}/{filename}"
