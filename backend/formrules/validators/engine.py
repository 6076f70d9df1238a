"""Form validator — evaluates registered rules against live field state.

This is the main entry point for form validation. It walks the registry in
registration order and, per field, the rules in list order: a rule whose
condition is false is skipped, the first failing predicate wins and ends that
field's pass.

Usage:
    validator = FormValidator(registry, provider)
    result = validator.validate_form()
    if not result.is_valid:
        # Block submission and show result.errors

    field_result = validator.validate_field("email")  # None if not registered
"""

import time
from typing import Optional

import structlog

from formrules.validators.base import FieldStateProvider
from formrules.validators.models import FieldError, FieldResult, FormResult, Validator
from formrules.validators.registry import RuleRegistry

logger = structlog.get_logger()


class FormValidator:
    """Runs validators from a RuleRegistry and returns fresh results.

    Design principles:
        - Pure: never mutates the registry or the field state
        - Ordered: errors follow registration order, one per field at most
        - Honest: a rule that raises is logged and the exception propagates
    """

    def __init__(self, registry: RuleRegistry, provider: FieldStateProvider):
        self.registry = registry
        self.provider = provider

    def validate_form(self) -> FormResult:
        """Evaluate every registered field.

        Returns:
            FormResult with the ordered errors and one FieldResult per field
        """
        start_time = time.perf_counter()

        fields = [self._evaluate(validator) for validator in self.registry]
        result = FormResult.build(fields)

        logger.info(
            "form_validation_complete",
            is_valid=result.is_valid,
            error_count=result.error_count,
            field_count=len(fields),
            invalid_fields=[e.field_id for e in result.errors],
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return result

    def validate_field(self, field_id: str) -> Optional[FieldResult]:
        """Evaluate one field in isolation (real-time feedback).

        Args:
            field_id: Identifier the field was registered under

        Returns:
            FieldResult for the field, or None if no validator is registered
        """
        validator = self.registry.lookup(field_id)
        if validator is None:
            logger.warning("validator_not_found", field_id=field_id)
            return None

        result = self._evaluate(validator)
        logger.debug(
            "field_validated",
            field_id=field_id,
            valid=result.valid,
            message=result.message,
        )
        return result

    def _evaluate(self, validator: Validator) -> FieldResult:
        """Apply one validator's rules: condition gating, first failure wins."""
        passed = 0
        skipped = 0
        state = None
        state_loaded = False

        for index, rule in enumerate(validator.rules):
            try:
                if not rule.applies():
                    skipped += 1
                    continue

                # Read at most once per pass, and only once some rule applies
                if not state_loaded:
                    state = self.provider.get_field_state(validator.field_id)
                    state_loaded = True

                ok = rule.predicate(state)
            except Exception as e:
                logger.error(
                    "rule_evaluation_failed",
                    field_id=validator.field_id,
                    rule_index=index,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

            if not ok:
                return FieldResult(
                    field_id=validator.field_id,
                    valid=False,
                    error=FieldError(field_id=validator.field_id, message=rule.message),
                    rules_passed=passed,
                    rules_skipped=skipped,
                )
            passed += 1

        return FieldResult(
            field_id=validator.field_id,
            valid=True,
            rules_passed=passed,
            rules_skipped=skipped,
        )
