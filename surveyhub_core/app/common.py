import datetime
from typing import Any, Mapping, Optional

from surveyhub_core.utils.base import as_utc, get_utc_now
from surveyhub_core.utils.errors import ResponsePeriodError


def is_dev() -> bool:
    from surveyhub_core.app.config import settings

    return settings.ENV == "dev"


def form_setting(settings_blob: Optional[Mapping[str, Any]], key: str) -> bool:
    if not settings_blob:
        return False
    return bool(settings_blob.get(key, False))


def collects_email(settings_blob: Optional[Mapping[str, Any]]) -> bool:
    return form_setting(settings_blob, "collect_email")


def allows_response_edit(settings_blob: Optional[Mapping[str, Any]]) -> bool:
    return form_setting(settings_blob, "allow_response_edit")


def check_response_window(
    start_at: Optional[datetime.datetime],
    end_at: Optional[datetime.datetime],
    now: Optional[datetime.datetime] = None,
) -> None:
    if now is None:
        now = get_utc_now()
    if start_at is not None and now < as_utc(start_at):
        raise ResponsePeriodError("The form is not accepting responses yet.")
    if end_at is not None and now > as_utc(end_at):
        raise ResponsePeriodError("The form is no longer accepting responses.")
