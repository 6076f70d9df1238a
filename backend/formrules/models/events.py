"""Trigger events delivered to the form controller."""

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel


class BaseEvent(BaseModel):
    """Base model for all form events."""

    type: str
    timestamp: Optional[datetime] = None

    def model_post_init(self, __context):
        if self.timestamp is None:
            self.timestamp = datetime.now(timezone.utc)


class SubmitEvent(BaseEvent):
    """Form submission. The controller prevents the default action on failure."""

    type: Literal["submit"] = "submit"
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


class FieldEvent(BaseEvent):
    """User edited (input) or left (blur) a field."""

    type: Literal["input", "blur"] = "input"
    field_id: str
