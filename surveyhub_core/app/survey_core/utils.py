import copy
import html
import math
import uuid
from typing import Any, Optional

from surveyhub_core.app.survey_core.constants import IMAGE_EXTENSIONS


def escape_html(text: Any) -> str:
    if text is None:
        return ""
    return html.escape(str(text), quote=True).replace("&#x27;", "&#039;")


def generate_id() -> str:
    return str(uuid.uuid4())


def deep_clone(obj: Any) -> Any:
    return copy.deepcopy(obj)


def format_file_size(size: int) -> str:
    if size == 0:
        return "0 B"
    units = ["B", "KB", "MB", "GB"]
    i = 0
    while i < len(units) - 1 and size >= math.pow(1024, i + 1):
        i += 1
    value = round(size / math.pow(1024, i), 2)
    if value == int(value):
        return f"{int(value)} {units[i]}"
    return f"{value} {units[i]}"


def file_extension(filename: Optional[str]) -> str:
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def is_image_file(filename: Optional[str]) -> bool:
    return file_extension(filename) in IMAGE_EXTENSIONS
