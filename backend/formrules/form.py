"""Form controller — wires trigger events to the validator and the projector.

Submission runs a full-form pass and blocks the submit when anything fails.
Input and blur events on real-time fields run a single-field pass so the
edited field's hint appears, changes or clears as the user types.

Usage:
    controller = FormController.from_rule_set("registration", provider)
    event = SubmitEvent()
    controller.handle_submit(event)
    if not event.default_prevented:
        # Send the form
"""

from typing import Iterable, Optional

import structlog

from formrules.feedback.projector import FeedbackProjector, HeadlessFeedbackProjector
from formrules.models.events import FieldEvent, SubmitEvent
from formrules.rulesets.loader import compile_rule_set, load_rule_set
from formrules.rulesets.models import RuleSetError
from formrules.validators.base import FieldStateProvider
from formrules.validators.engine import FormValidator
from formrules.validators.models import FieldResult, FormResult

logger = structlog.get_logger()


class FormController:
    """Integration layer between a form's events and the validation engine."""

    def __init__(
        self,
        validator: FormValidator,
        projector: FeedbackProjector,
        realtime_fields: Iterable[str] = (),
    ):
        self.validator = validator
        self.projector = projector
        self.realtime_fields = frozenset(realtime_fields)

    @classmethod
    def from_rule_set(
        cls,
        name: str,
        provider: FieldStateProvider,
        projector: Optional[FeedbackProjector] = None,
    ) -> "FormController":
        """Load a named rule set, compile and freeze it, and build a controller.

        Raises:
            RuleSetError: if no rule set with that name exists
        """
        spec = load_rule_set(name)
        if spec is None:
            raise RuleSetError(f"Rule set '{name}' not found")

        registry = compile_rule_set(spec, provider)
        registry.freeze()
        return cls(
            validator=FormValidator(registry, provider),
            projector=projector or HeadlessFeedbackProjector(),
            realtime_fields=spec.realtime_fields,
        )

    def handle_submit(self, event: SubmitEvent) -> FormResult:
        """Validate the whole form; prevent submission if it is not valid."""
        result = self.validator.validate_form()
        self.projector.project_form(result)

        if not result.is_valid:
            event.prevent_default()
            logger.info("submit_blocked", error_count=result.error_count)

        return result

    def handle_field_event(self, event: FieldEvent) -> Optional[FieldResult]:
        """Validate a real-time field on input/blur.

        Returns:
            The field's result, or None when the field is not real-time or has
            no validator
        """
        if event.field_id not in self.realtime_fields:
            return None

        result = self.validator.validate_field(event.field_id)
        if result is not None:
            self.projector.project_field(result)
        return result
