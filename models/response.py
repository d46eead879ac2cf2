from typing import Any
from pydantic import BaseModel


class BasicResponse(BaseModel):
    message: str


class ResponseData(BaseModel):
    result: Any | None = None
    count: int | None = None
    message: str | None = None


class ControllerResponse(BaseModel):
    """HTTP shaped outcome of a controller call"""
    status: int
    data: ResponseData | None = None
