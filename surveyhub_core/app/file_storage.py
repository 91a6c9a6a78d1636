"""
Local disk storage for uploaded files.

Stored names look like `<base>_<epoch millis>_<8 random chars>.<ext>` so two
uploads of the same file never collide. Only the stored name is kept in the
database; the directory comes from `settings.UPLOAD_DIR`.
"""
import logging
import pathlib
import time
from typing import BinaryIO, Optional, Tuple

from surveyhub_core.app.survey_core.constants import DEFAULT_MAX_FILE_SIZE
from surveyhub_core.utils.base import get_random_suffix
from surveyhub_core.utils.errors import InvalidFileError, NotFoundError, StorageError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {
    "jpg", "jpeg", "png", "gif", "webp", "bmp", "tiff", "tif", "svg", "heic", "heif",
    "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "txt", "zip", "rar", "7z", "csv",
}

ALLOWED_MIME_TYPES = {
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/bmp",
    "image/tiff",
    "image/svg+xml",
    "image/heic",
    "image/heif",
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-powerpoint",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "text/plain",
    "application/zip",
    "application/x-rar-compressed",
    "application/x-7z-compressed",
    "application/x-zip-compressed",
    "text/csv",
    "application/octet-stream",
}

GENERIC_MIME_TYPE = "application/octet-stream"

CHUNK_SIZE = 64 * 1024


def split_extension(filename: str) -> Tuple[str, str]:
    idx = filename.rfind(".")
    if idx > 0:
        return filename[:idx], filename[idx + 1 :]
    return filename, ""


def read_limited(fp: BinaryIO, limit: int) -> bytes:
    # Reads at most limit + 1 bytes so oversized uploads are detected
    # without pulling the whole body into memory
    chunks = []
    read_size = 0
    while read_size <= limit:
        chunk = fp.read(min(CHUNK_SIZE, limit + 1 - read_size))
        if len(chunk) == 0:
            break
        read_size += len(chunk)
        chunks.append(chunk)
    return b"".join(chunks)


class FileStorage(object):
    def __init__(
        self, upload_dir: str, *, max_file_size: int = DEFAULT_MAX_FILE_SIZE
    ) -> None:
        self.upload_dir = pathlib.Path(upload_dir)
        self.max_file_size = max_file_size

    def validate(
        self, filename: Optional[str], content_type: Optional[str], size: int
    ) -> None:
        if size == 0:
            raise InvalidFileError("File is empty.")
        if size > self.max_file_size:
            raise InvalidFileError(
                f"File size exceeds maximum allowed size of {self.max_file_size} bytes."
            )
        if not filename:
            raise InvalidFileError("File name is invalid.")
        _, extension = split_extension(filename)
        if extension.lower() not in ALLOWED_EXTENSIONS:
            raise InvalidFileError(f"File extension not allowed: {extension.lower()}")
        # Browsers often send no type or the generic one, the extension decides then
        if content_type and content_type != GENERIC_MIME_TYPE:
            if content_type not in ALLOWED_MIME_TYPES:
                raise InvalidFileError(f"Content type not allowed: {content_type}")

    def generate_stored_name(self, filename: str) -> str:
        base, extension = split_extension(filename)
        timestamp = int(time.time() * 1000)
        return f"{base}_{timestamp}_{get_random_suffix()}.{extension}"

    def _path(self, stored_name: str) -> pathlib.Path:
        # Stored names never contain directories
        return self.upload_dir / pathlib.Path(stored_name).name

    def save(
        self, filename: Optional[str], content_type: Optional[str], data: bytes
    ) -> str:
        self.validate(filename, content_type, len(data))
        assert filename is not None
        if not self.upload_dir.exists():
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created upload directory: {self.upload_dir}")
        stored_name = self.generate_stored_name(filename)
        try:
            self._path(stored_name).write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to save file: {stored_name}")
            raise StorageError("Failed to save file.") from e
        logger.info(f"File saved: {filename} -> {stored_name}")
        return stored_name

    def read(self, stored_name: str) -> bytes:
        path = self._path(stored_name)
        if not path.exists():
            raise NotFoundError(f"File not found: {stored_name}")
        try:
            return path.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read file: {stored_name}")
            raise StorageError("Failed to read file.") from e

    def delete(self, stored_name: str) -> None:
        path = self._path(stored_name)
        if not path.exists():
            logger.warning(f"File not found for deletion: {stored_name}")
            return
        try:
            path.unlink()
        except OSError as e:
            logger.error(f"Failed to delete file: {stored_name}")
            raise StorageError("Failed to delete file.") from e
        logger.info(f"File deleted: {stored_name}")

    def delete_quietly(self, stored_name: Optional[str]) -> None:
        """Best effort removal used on delete paths; failures are only logged."""
        if not stored_name:
            return
        try:
            self.delete(stored_name)
        except StorageError:
            logger.exception(f"Leaving orphaned file behind: {stored_name}")
