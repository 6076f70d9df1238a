"""Feedback projectors — turn evaluation results into presentation state.

The projector is the boundary between the engine and whatever renders the
form. Implementations supply five primitives; project_form() and
project_field() sequence them so that a new pass always starts from cleared
feedback and stale hints never accumulate.
"""

from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Optional

import structlog

from formrules.config import get_settings
from formrules.feedback.models import FieldFeedback
from formrules.validators.models import FieldError, FieldResult, FormResult

logger = structlog.get_logger()


class FeedbackProjector(ABC):
    """Abstract sink for validation feedback."""

    @abstractmethod
    def clear_all(self) -> None:
        """Drop every hint, the error summary and any error-count title."""
        ...

    @abstractmethod
    def clear_field(self, field_id: str) -> None:
        """Drop the hints shown for one field."""
        ...

    @abstractmethod
    def mark_valid(self, field_id: str) -> None:
        ...

    @abstractmethod
    def mark_invalid(self, field_id: str, messages: list[str]) -> None:
        """Flag the field as not valid and show its hint message(s)."""
        ...

    @abstractmethod
    def show_summary(self, errors: list[FieldError]) -> None:
        """Render the aggregate list of errors for a failed submission."""
        ...

    # ── Sequencing ──

    def project_form(self, result: FormResult) -> None:
        """Replace all feedback with the outcome of a full-form pass."""
        self.clear_all()
        for field in result.fields:
            self._project(field)
        if not result.is_valid:
            self.show_summary(result.errors)

    def project_field(self, result: FieldResult) -> None:
        """Replace one field's feedback with the outcome of a real-time pass."""
        self.clear_field(result.field_id)
        self._project(result)

    def _project(self, result: FieldResult) -> None:
        if result.valid:
            self.mark_valid(result.field_id)
        else:
            self.mark_invalid(result.field_id, [result.error.message])


class HeadlessFeedbackProjector(FeedbackProjector):
    """Records presentation state in memory instead of drawing it.

    Mirrors what a browser form would show: per-field status and hints, an
    error summary panel, and a page title prefixed with the error count so
    screen readers announce it first.
    """

    def __init__(self, title: str = "Form", title_template: Optional[str] = None):
        self.original_title = title
        self.title = title
        self.title_template = title_template or get_settings().ERROR_TITLE_TEMPLATE
        self.summary: list[FieldError] = []
        self._fields: dict[str, FieldFeedback] = defaultdict(FieldFeedback)

    def clear_all(self) -> None:
        self.title = self.original_title
        self.summary = []
        self._fields.clear()

    def clear_field(self, field_id: str) -> None:
        if field_id in self._fields:
            self._fields[field_id].hints = []

    def mark_valid(self, field_id: str) -> None:
        self._fields[field_id].status = "valid"

    def mark_invalid(self, field_id: str, messages: list[str]) -> None:
        feedback = self._fields[field_id]
        feedback.status = "not-valid"
        feedback.hints.extend(messages)

    def show_summary(self, errors: list[FieldError]) -> None:
        self.summary = list(errors)
        self.title = self.title_template.format(count=len(errors), title=self.original_title)
        logger.debug("error_summary_shown", error_count=len(errors), title=self.title)

    # ── Inspection ──

    def feedback(self, field_id: str) -> FieldFeedback:
        """Current feedback for a field (neutral if never projected)."""
        return self._fields.get(field_id, FieldFeedback())

    def status(self, field_id: str) -> str:
        return self.feedback(field_id).status

    def hints(self, field_id: str) -> list[str]:
        return list(self.feedback(field_id).hints)
