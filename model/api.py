# model/api.py
from typing import Dict, Optional
from pydantic import BaseModel, Field


class StoreResponse(BaseModel):
    hash: str
    url: str


class NotFoundResponse(BaseModel):
    error: int = 404
    url: str


class ErrorResponse(BaseModel):
    error: int
    url: str
    message: Optional[str] = None


class ResponseEnvelope(BaseModel):
    """One per request: status, headers and an optional body."""

    status_code: int = 200
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[bytes] = None
