"""Presentation state recorded by the headless feedback projector."""

from typing import Literal

from pydantic import BaseModel, Field

FieldStatus = Literal["neutral", "valid", "not-valid"]


class FieldFeedback(BaseModel):
    """What a UI would currently show for one field."""

    status: FieldStatus = "neutral"
    hints: list[str] = Field(default_factory=list)  # Inline hint messages, announced politely
