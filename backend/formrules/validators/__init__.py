"""Form validation engine — rule registry, evaluator and rule builders.

Usage:
    from formrules.validators import FormValidator, RuleRegistry, rules

    registry = RuleRegistry()
    registry.register("name", [rules.required("Name is required")])
    result = FormValidator(registry, provider).validate_form()
"""

from formrules.validators import rules
from formrules.validators.base import FieldState, FieldStateProvider, InMemoryFieldStateProvider
from formrules.validators.engine import FormValidator
from formrules.validators.models import FieldError, FieldResult, FormResult, Rule, Validator
from formrules.validators.registry import DuplicateFieldError, RegistryFrozenError, RuleRegistry

__all__ = [
    "rules",
    "FieldState",
    "FieldStateProvider",
    "InMemoryFieldStateProvider",
    "FormValidator",
    "FieldError",
    "FieldResult",
    "FormResult",
    "Rule",
    "Validator",
    "DuplicateFieldError",
    "RegistryFrozenError",
    "RuleRegistry",
]
