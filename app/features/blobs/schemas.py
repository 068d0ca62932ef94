from __future__ import annotations

from pydantic import BaseModel, Field


class HashResponse(BaseModel):
    hash: str = Field(min_length=64, max_length=64, description="sha256 of the stored content")


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
