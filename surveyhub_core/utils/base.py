import datetime
from typing import Callable, List, Literal, Optional, TypeVar, Union

import shortuuid
from fastapi.exceptions import HTTPException

ErrorMsg = Union[
    Literal["Admin tools are only available in dev."],
    Literal["Upload requires a file name."],
    Literal["Could not reset the database."],
]


def HTTPException_(status_code: int, detail: ErrorMsg) -> HTTPException:
    return HTTPException(status_code=status_code, detail=detail)


def get_utc_now() -> datetime.datetime:
    return datetime.datetime.now(tz=datetime.timezone.utc)


def as_utc(dt: datetime.datetime) -> datetime.datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if dt.tzinfo is None:
        return dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


T = TypeVar("T")
S = TypeVar("S")


def map_(v: Optional[T], f: Callable[[T], S]) -> Optional[S]:
    if v is not None:
        return f(v)
    return None


def dedup(vs: List[T]) -> List[T]:
    return list(dict.fromkeys(vs))


RANDOM_SUFFIX_LENGTH = 8


def get_random_suffix(length: int = RANDOM_SUFFIX_LENGTH) -> str:
    return shortuuid.ShortUUID().random(length=length)
