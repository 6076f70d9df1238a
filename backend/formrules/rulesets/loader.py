"""Rule set loader — reads JSON rule sets and compiles them into a registry.

Parsed documents are cached per directory, so repeated controller setup does
not re-read files from disk.
"""

import json
import re
from pathlib import Path
from typing import Optional

import structlog
from pydantic import ValidationError

from formrules.config import get_settings
from formrules.rulesets.models import RuleSetError, RuleSetSpec, RuleSpec, WhenSpec
from formrules.validators.base import FieldStateProvider
from formrules.validators.models import Rule
from formrules.validators.registry import RuleRegistry
from formrules.validators.rules import RULE_BUILDERS, field_equals

logger = structlog.get_logger()

RULESETS_DIR = Path(__file__).parent

_rule_set_cache: dict[Path, dict[str, RuleSetSpec]] = {}


def _rules_dir() -> Path:
    return get_settings().RULESETS_DIR or RULESETS_DIR


def _load_all(directory: Path) -> dict[str, RuleSetSpec]:
    """Load and cache every valid JSON rule set in ``directory``."""
    if directory in _rule_set_cache:
        return _rule_set_cache[directory]

    rule_sets: dict[str, RuleSetSpec] = {}
    for json_file in sorted(directory.glob("*.json")):
        try:
            spec = RuleSetSpec.model_validate(json.loads(json_file.read_text(encoding="utf-8")))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("rule_set_invalid", path=str(json_file), error=str(e))
            continue
        rule_sets[spec.form] = spec

    _rule_set_cache[directory] = rule_sets
    return rule_sets


def clear_cache() -> None:
    """Forget parsed rule sets (after editing files on disk)."""
    _rule_set_cache.clear()


def load_rule_set(name: str) -> Optional[RuleSetSpec]:
    """Load a rule set by its ``form`` name.

    Args:
        name: Form identifier (e.g., "registration")

    Returns:
        The parsed rule set, or None if not found
    """
    return _load_all(_rules_dir()).get(name)


def list_rule_sets() -> list[str]:
    """Names of all available rule sets."""
    return list(_load_all(_rules_dir()).keys())


def _condition(provider: FieldStateProvider, when: Optional[WhenSpec]):
    if when is None:
        return None
    return field_equals(provider, when.field, when.equals)


def build_rule(spec: RuleSpec, provider: FieldStateProvider, default_when: Optional[WhenSpec] = None) -> Rule:
    """Turn one RuleSpec into a Rule, resolving its gate against ``provider``."""
    if spec.check not in RULE_BUILDERS:
        raise RuleSetError(f"Unknown check '{spec.check}'. Use one of: {', '.join(sorted(RULE_BUILDERS))}")

    builder, arg_types = RULE_BUILDERS[spec.check]
    if len(spec.args) != len(arg_types):
        raise RuleSetError(f"Check '{spec.check}' takes {len(arg_types)} argument(s), got {len(spec.args)}")

    for position, (arg, expected) in enumerate(zip(spec.args, arg_types)):
        # bool is an int subclass but never a valid length
        if not isinstance(arg, expected) or isinstance(arg, bool):
            raise RuleSetError(
                f"Check '{spec.check}' argument {position + 1} must be {expected.__name__}, got {arg!r}"
            )

    condition = _condition(provider, spec.when or default_when)
    try:
        if spec.check == "matches":
            return builder(*spec.args, spec.message, ignore_case=spec.ignore_case, condition=condition)
        return builder(*spec.args, spec.message, condition=condition)
    except (TypeError, re.error) as e:
        raise RuleSetError(f"Check '{spec.check}' could not be built: {e}") from e


def compile_rule_set(
    spec: RuleSetSpec,
    provider: FieldStateProvider,
    registry: Optional[RuleRegistry] = None,
) -> RuleRegistry:
    """Register every field of ``spec`` into ``registry`` (a new one by default).

    Fields are registered in document order, which becomes evaluation order.
    The registry is returned unfrozen so callers can add extra fields.
    """
    registry = registry if registry is not None else RuleRegistry()
    for field_spec in spec.fields:
        registry.register(
            field_spec.field,
            [build_rule(rule_spec, provider, field_spec.when) for rule_spec in field_spec.rules],
        )

    logger.info("rule_set_compiled", form=spec.form, field_count=len(spec.fields))
    return registry
