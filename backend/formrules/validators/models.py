"""Validation models — rules, validators, error records and evaluation results.

Rules and validators are immutable once built. Results are fresh values produced
by every evaluation pass; nothing here holds state between passes.
"""

from typing import Any, Callable, Optional

from pydantic import BaseModel, Field

# A predicate receives the field's live state; a condition receives nothing.
Predicate = Callable[[Any], Any]
Condition = Callable[[], bool]


class Rule(BaseModel):
    """A single check for one field."""

    predicate: Predicate
    message: str
    condition: Optional[Condition] = None  # Rule is skipped when this returns False

    model_config = {"frozen": True}

    def applies(self) -> bool:
        """True when the rule has no condition or its condition holds right now."""
        return self.condition is None or bool(self.condition())


class Validator(BaseModel):
    """The ordered rule list bound to one field identifier."""

    field_id: str
    rules: tuple[Rule, ...] = ()

    model_config = {"frozen": True}


class FieldError(BaseModel):
    """A failed rule: which field, and the rule's message."""

    field_id: str
    message: str

    model_config = {"frozen": True}


class FieldResult(BaseModel):
    """Outcome of evaluating a single field's validator."""

    field_id: str
    valid: bool
    error: Optional[FieldError] = None
    rules_passed: int = 0
    rules_skipped: int = 0

    model_config = {"frozen": True}

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None


class FormResult(BaseModel):
    """Outcome of a full-form pass, in validator registration order."""

    errors: list[FieldError] = Field(default_factory=list)
    fields: list[FieldResult] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def field(self, field_id: str) -> Optional[FieldResult]:
        """Result for one field, or None if the field was not evaluated."""
        return next((f for f in self.fields if f.field_id == field_id), None)

    @classmethod
    def build(cls, fields: list[FieldResult]) -> "FormResult":
        """Build a form result from per-field results, keeping their order."""
        return cls(
            errors=[f.error for f in fields if f.error is not None],
            fields=list(fields),
        )
