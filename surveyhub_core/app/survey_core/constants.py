from typing import Dict, List

QUESTION_TYPES: Dict[str, Dict[str, str]] = {
    "short-text": {"label": "Short answer", "icon": "text"},
    "long-text": {"label": "Paragraph", "icon": "textarea"},
    "multiple-choice": {"label": "Multiple choice", "icon": "radio"},
    "checkbox": {"label": "Checkboxes", "icon": "checkbox"},
    "dropdown": {"label": "Dropdown", "icon": "dropdown"},
    "file-upload": {"label": "File upload", "icon": "file"},
    "linear-scale": {"label": "Linear scale", "icon": "scale"},
    "date": {"label": "Date", "icon": "calendar"},
}

OPTION_BASED_TYPES: List[str] = ["multiple-choice", "checkbox", "dropdown"]

TEXT_TYPES: List[str] = ["short-text", "long-text"]

IMAGE_EXTENSIONS: List[str] = ["jpg", "jpeg", "png", "gif", "webp", "bmp", "svg"]

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
