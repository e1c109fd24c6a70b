"""
Structured artifact schemas.

Pydantic models that parsed model output is validated against, one per
structured artifact kind. Unknown enum-like values are coerced to a safe
default instead of rejecting the whole list.

Dependencies: pydantic
System role: Artifact schema definitions
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ReferenceType = Literal["journal", "conference", "book", "website", "other"]
InsightCategory = Literal["methodology", "findings", "implications", "future_work", "limitations"]
Significance = Literal["high", "medium", "low"]


def _coerce_choice(value, choices: tuple[str, ...], default: str) -> str:
    if isinstance(value, str):
        normalized = value.strip().lower().replace(" ", "_").replace("-", "_")
        if normalized in choices:
            return normalized
    return default


class CodeSnippet(BaseModel):
    """Code or pseudocode found in the paper."""

    model_config = ConfigDict(extra="ignore")

    description: str = Field(default="", description="What the code does")
    code: str = Field(description="The code or pseudocode")
    language: str = Field(default="pseudocode", description="Programming language or 'pseudocode'")
    enhancement: str = Field(default="", description="Explanation or improvement suggestion")


class Reference(BaseModel):
    """Citation or related resource."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(description="Reference title")
    url: str = Field(default="Not available", description="URL if available")
    description: str = Field(default="", description="Why the reference is relevant")
    type: ReferenceType = Field(default="other", description="Kind of publication")

    @field_validator("url", mode="before")
    @classmethod
    def _default_url(cls, value):
        return value or "Not available"

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value):
        return _coerce_choice(value, ("journal", "conference", "book", "website", "other"), "other")


class Insight(BaseModel):
    """Key insight drawn from the paper."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(description="Insight title")
    description: str = Field(default="", description="Detailed explanation")
    category: InsightCategory = Field(default="findings")
    significance: Significance = Field(default="medium")

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value):
        return _coerce_choice(
            value,
            ("methodology", "findings", "implications", "future_work", "limitations"),
            "findings",
        )

    @field_validator("significance", mode="before")
    @classmethod
    def _coerce_significance(cls, value):
        return _coerce_choice(value, ("high", "medium", "low"), "medium")
