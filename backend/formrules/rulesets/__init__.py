"""Declarative rule sets — JSON documents compiled into a RuleRegistry."""

from formrules.rulesets.loader import build_rule, clear_cache, compile_rule_set, list_rule_sets, load_rule_set
from formrules.rulesets.models import RuleSetError, RuleSetSpec

__all__ = [
    "build_rule",
    "clear_cache",
    "compile_rule_set",
    "list_rule_sets",
    "load_rule_set",
    "RuleSetError",
    "RuleSetSpec",
]
