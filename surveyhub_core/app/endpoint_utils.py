from typing import Optional, Tuple
from urllib.parse import quote

from fastapi import Response, UploadFile

from surveyhub_core.app.file_storage import FileStorage, read_limited
from surveyhub_core.utils.base import HTTPException_

GENERIC_CONTENT_TYPE = "application/octet-stream"


def save_upload(storage: FileStorage, file: UploadFile) -> Tuple[str, int]:
    """Validates and stores the upload, returns the stored name and size."""
    if not file.filename:
        raise HTTPException_(status_code=400, detail="Upload requires a file name.")
    data = read_limited(file.file, storage.max_file_size)
    stored_name = storage.save(file.filename, file.content_type, data)
    return stored_name, len(data)


def file_response(
    data: bytes, *, filename: Optional[str], content_type: Optional[str]
) -> Response:
    media_type = content_type or GENERIC_CONTENT_TYPE
    disposition = "inline" if media_type.startswith("image/") else "attachment"
    headers = {}
    if filename:
        headers["Content-Disposition"] = (
            f"{disposition}; filename*=UTF-8''{quote(filename)}"
        )
    else:
        headers["Content-Disposition"] = disposition
    return Response(content=data, media_type=media_type, headers=headers)
