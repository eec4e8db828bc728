from pydantic import BaseModel, Field
from typing import Any


class ChatRequestSchema(BaseModel):
    session_id: str | None = Field(default=None, max_length=128)
    message: str = Field(min_length=1, max_length=2000)
    user_name: str | None = Field(default=None, max_length=100)


class ChatActionRequestSchema(BaseModel):
    session_id: str = Field(min_length=1, max_length=128)
    action: str = Field(min_length=1, max_length=64)
    user_name: str | None = Field(default=None, max_length=100)


class ChatResponseSchema(BaseModel):
    session_id: str
    messages: list[dict[str, Any]] = Field(default_factory=list)


class FollowUpResponseSchema(BaseModel):
    session_id: str
    message: dict[str, Any]
