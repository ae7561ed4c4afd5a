"""
Pydantic response schemas shared by the JSON endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str


class CreatedUserResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    user_id: int = Field(..., alias="userId")


class PingResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    result: str = Field(..., alias="RESULT")
