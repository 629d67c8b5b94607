"""
User-selected media and résumé files, and the transport payloads built from them.
"""
import os
import mimetypes
import logging
from dataclasses import dataclass
from typing import Optional

from ...errors import MediaTooLargeError, PayloadEncodingError

logger = logging.getLogger("media_files")

DEFAULT_MIME_TYPE = "application/octet-stream"

# mimetypes misses a few formats recruiters commonly upload
_EXTRA_TYPES = {
    ".m4a": "audio/mp4",
    ".webm": "video/webm",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def guess_mime_type(filename: str) -> str:
    """Guess a MIME type from a filename, falling back to octet-stream."""
    ext = os.path.splitext(filename)[1].lower()
    if ext in _EXTRA_TYPES:
        return _EXTRA_TYPES[ext]
    mime_type, _ = mimetypes.guess_type(filename)
    return mime_type or DEFAULT_MIME_TYPE


def format_megabytes(size_bytes: int) -> str:
    return f"{size_bytes / (1024 * 1024):.0f}MB"


@dataclass(frozen=True)
class MediaFile:
    """A local file chosen by the user: name, byte size and MIME type."""
    path: str
    filename: str
    size_bytes: int
    mime_type: str

    @classmethod
    def from_path(cls, path: str, mime_type: Optional[str] = None) -> "MediaFile":
        """
        Describe a local file without reading its contents.

        Raises:
            OSError: If the file does not exist or cannot be stat'ed
        """
        path = os.path.expanduser(path)
        size = os.path.getsize(path)
        filename = os.path.basename(path)
        return cls(path=path, filename=filename, size_bytes=size,
                   mime_type=mime_type or guess_mime_type(filename))

    def read_bytes(self) -> bytes:
        """
        Read the file contents.

        Raises:
            PayloadEncodingError: If the file cannot be read
        """
        try:
            with open(self.path, "rb") as f:
                return f.read()
        except OSError as e:
            logger.error("Failed to read %s: %s", self.path, e)
            raise PayloadEncodingError(f"Gagal membaca file {self.filename}: {e.strerror or e}") from e


def ensure_within_limit(media: MediaFile, limit_bytes: int, message: str) -> None:
    """
    Reject a file that exceeds its size ceiling.

    Raises:
        MediaTooLargeError: If media.size_bytes > limit_bytes
    """
    if media.size_bytes > limit_bytes:
        logger.info("Rejected %s: %d bytes exceeds %d", media.filename, media.size_bytes, limit_bytes)
        raise MediaTooLargeError(message, size_bytes=media.size_bytes, limit_bytes=limit_bytes)


@dataclass(frozen=True)
class MediaPayload:
    """Binary content converted to base64 text, ready for the analysis request."""
    data_base64: str
    mime_type: str
    filename: Optional[str] = None
