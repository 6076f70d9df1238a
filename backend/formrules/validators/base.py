"""Field state providers — the engine's only window onto live form state.

The engine never reads a UI toolkit directly. It asks a provider for a field's
current state by identifier at evaluation time and hands that state, unopened,
to each rule's predicate. A browser bridge, a terminal UI or a test harness can
each supply its own provider.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel, Field


class FieldStateProvider(ABC):
    """Resolves a field identifier to its current value-bearing state.

    Contract:
        - get_field_state() reflects live state, never a registration-time copy
        - unknown identifiers raise KeyError (a broken rule set, not a validation failure)
    """

    @abstractmethod
    def get_field_state(self, field_id: str) -> Any:
        """Return the current state of the field.

        Args:
            field_id: Stable identifier of the form field

        Returns:
            Whatever the provider uses to describe the field; opaque to the engine
        """
        ...

    def get_value(self, field_id: str) -> str:
        """Convenience accessor for providers whose states expose a ``value``."""
        return getattr(self.get_field_state(field_id), "value", "")


class FieldState(BaseModel):
    """Headless description of a form control.

    Text inputs and selects use ``value``; checkboxes use ``checked``; groups
    (a fieldset of checkboxes) list their members in ``items``.
    """

    value: str = ""
    checked: bool = False
    items: list["FieldState"] = Field(default_factory=list)

    def checked_items(self) -> list["FieldState"]:
        """Members of a group that are currently checked."""
        return [item for item in self.items if item.checked]


class InMemoryFieldStateProvider(FieldStateProvider):
    """Mutable in-memory form model, for headless use and tests."""

    def __init__(self, fields: Optional[Mapping[str, FieldState]] = None):
        self._fields: dict[str, FieldState] = dict(fields or {})

    def get_field_state(self, field_id: str) -> FieldState:
        try:
            return self._fields[field_id]
        except KeyError:
            raise KeyError(f"No field with id '{field_id}' in form") from None

    def set_value(self, field_id: str, value: str) -> None:
        """Set a text/select field's value, creating the field if needed."""
        self._fields.setdefault(field_id, FieldState()).value = value

    def set_checked(self, field_id: str, checked: bool = True) -> None:
        """Check or uncheck a single checkbox field."""
        self._fields.setdefault(field_id, FieldState()).checked = checked

    def set_items(self, field_id: str, checked: Iterable[bool]) -> None:
        """Replace a group's members, one checkbox per flag."""
        self._fields[field_id] = FieldState(items=[FieldState(checked=c) for c in checked])

    def check_item(self, field_id: str, index: int, checked: bool = True) -> None:
        """Toggle one member of a checkbox group."""
        self.get_field_state(field_id).items[index].checked = checked

    def __contains__(self, field_id: str) -> bool:
        return field_id in self._fields
