"""Rule set document models — the JSON shape of a declarative rule set."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class RuleSetError(ValueError):
    """A rule set document that cannot be loaded or compiled."""


class WhenSpec(BaseModel):
    """Gate: the rule applies only while ``field`` has the value ``equals``."""

    field: str
    equals: str


class RuleSpec(BaseModel):
    """One rule: a builder name from RULE_BUILDERS, its arguments and message."""

    check: str
    message: str
    args: list[Any] = Field(default_factory=list)
    ignore_case: bool = False  # Only meaningful for "matches"
    when: Optional[WhenSpec] = None


class FieldRulesSpec(BaseModel):
    """All rules for one field, in evaluation order."""

    field: str
    rules: list[RuleSpec] = Field(default_factory=list)
    when: Optional[WhenSpec] = None  # Default gate for every rule of the field


class RuleSetSpec(BaseModel):
    """A complete form: its fields in registration order."""

    form: str
    description: str = ""
    realtime_fields: list[str] = Field(default_factory=list)
    fields: list[FieldRulesSpec] = Field(default_factory=list)
