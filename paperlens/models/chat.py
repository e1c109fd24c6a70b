"""
Chat domain models and schemas.

Request/response schemas for paper chat.

Dependencies: pydantic
System role: Chat API contracts
"""

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    message: str = Field(min_length=1, max_length=4000, description="User question")


class ChatSource(BaseModel):
    """Retrieved chunk that grounded the answer."""

    content: str
    score: float
    sequence_index: int


class ChatResponse(BaseModel):
    """Response schema for chat messages."""

    answer: str
    sources: list[ChatSource] = Field(default_factory=list)
