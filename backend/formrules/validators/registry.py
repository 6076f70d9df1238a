"""Rule registry — field identifier to validator, in registration order."""

from typing import Iterable, Iterator, Literal, Optional, get_args

import structlog

from formrules.config import get_settings
from formrules.validators.models import Rule, Validator

logger = structlog.get_logger()

DuplicatePolicy = Literal["reject", "replace", "merge"]


class DuplicateFieldError(ValueError):
    """Raised when a field is registered twice under the ``reject`` policy."""


class RegistryFrozenError(RuntimeError):
    """Raised when registering into a registry whose setup has ended."""


class RuleRegistry:
    """Holds one Validator per field identifier.

    Registration happens during setup; freeze() ends setup. Field identifiers
    are not checked against the form here, since live state is only resolved
    when a field is evaluated.

    Duplicate registrations follow ``duplicate_policy``:
        - reject:  raise DuplicateFieldError
        - replace: new rules replace the old ones, position is kept
        - merge:   new rules are appended after the existing ones
    """

    def __init__(self, duplicate_policy: Optional[DuplicatePolicy] = None):
        self.duplicate_policy = duplicate_policy or get_settings().DUPLICATE_FIELD_POLICY
        if self.duplicate_policy not in get_args(DuplicatePolicy):
            raise ValueError(
                f"Unknown duplicate policy '{self.duplicate_policy}'. "
                f"Use one of: {', '.join(get_args(DuplicatePolicy))}"
            )
        self._validators: dict[str, Validator] = {}
        self._frozen = False

    def register(self, field_id: str, rules: Iterable[Rule]) -> Validator:
        """Bind ``field_id`` to an ordered rule list (possibly empty).

        Returns:
            The Validator now stored for the field
        """
        if self._frozen:
            raise RegistryFrozenError(f"Registry is frozen; cannot register field '{field_id}'")

        rules = tuple(rules)
        existing = self._validators.get(field_id)

        if existing is not None:
            if self.duplicate_policy == "reject":
                raise DuplicateFieldError(f"Field '{field_id}' already has a validator")
            if self.duplicate_policy == "merge":
                rules = existing.rules + rules

        validator = Validator(field_id=field_id, rules=rules)
        self._validators[field_id] = validator

        logger.debug(
            "validator_registered",
            field_id=field_id,
            rule_count=len(validator.rules),
            duplicate=existing is not None,
        )
        return validator

    def lookup(self, field_id: str) -> Optional[Validator]:
        """Validator for ``field_id``, or None when the field is not registered."""
        return self._validators.get(field_id)

    def freeze(self) -> None:
        """End setup. Later register() calls raise RegistryFrozenError."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def field_ids(self) -> list[str]:
        return list(self._validators)

    def __iter__(self) -> Iterator[Validator]:
        return iter(list(self._validators.values()))

    def __len__(self) -> int:
        return len(self._validators)

    def __contains__(self, field_id: str) -> bool:
        return field_id in self._validators
