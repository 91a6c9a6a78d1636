from typing import Literal, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    success: bool = True
    version: str = "v0.1.0"
    database: Literal["ok", "unreachable"] = "ok"


class GenericResponse(BaseModel):
    success: bool = True
    msg: Optional[str] = None
