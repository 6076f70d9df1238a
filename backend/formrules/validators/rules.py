"""Rule builders — reusable checks for common field shapes.

Every builder returns a Rule. String checks read the state's ``value`` (or the
state itself when a provider hands out plain strings); group checks read
``checked_items()``.
"""

import re
from typing import Any, Optional

from formrules.validators.base import FieldStateProvider
from formrules.validators.models import Condition, Rule

# Strings a browser's Number() converts to a number: ASCII decimals with an
# optional exponent, Infinity, and unsigned hex/octal/binary literals
NUMERIC_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|Infinity)"
    r"|0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+"
)


def _text(state: Any) -> str:
    if isinstance(state, str):
        return state
    return getattr(state, "value", "")


def _looks_numeric(text: str) -> bool:
    """Loose numeric test: blank counts as zero, surrounding whitespace is ignored."""
    text = text.strip()
    return not text or NUMERIC_PATTERN.fullmatch(text) is not None


def _browser_pattern(pattern: str) -> str:
    """Rewrite ``$`` outside character classes to ``\\Z``.

    Browser regexes only match ``$`` at the very end of the input; Python's
    also matches before a trailing newline.
    """
    out = []
    escaped = in_class = False
    for ch in pattern:
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif in_class:
            in_class = ch != "]"
        elif ch == "[":
            in_class = True
        elif ch == "$":
            out.append(r"\Z")
            continue
        out.append(ch)
    return "".join(out)


# ── Conditions ──

def field_equals(provider: FieldStateProvider, field_id: str, expected: str) -> Condition:
    """Condition that holds while another field's live value equals ``expected``."""
    return lambda: provider.get_value(field_id) == expected


# ── Text rules ──

def required(message: str, condition: Optional[Condition] = None) -> Rule:
    return Rule(predicate=lambda s: len(_text(s)) > 0, message=message, condition=condition)


def min_length(length: int, message: str, condition: Optional[Condition] = None) -> Rule:
    return Rule(predicate=lambda s: len(_text(s)) >= length, message=message, condition=condition)


def exact_length(length: int, message: str, condition: Optional[Condition] = None) -> Rule:
    return Rule(predicate=lambda s: len(_text(s)) == length, message=message, condition=condition)


def length_between(low: int, high: int, message: str, condition: Optional[Condition] = None) -> Rule:
    return Rule(predicate=lambda s: low <= len(_text(s)) <= high, message=message, condition=condition)


def matches(
    pattern: str,
    message: str,
    ignore_case: bool = False,
    condition: Optional[Condition] = None,
) -> Rule:
    """Passes when ``pattern`` is found in the value; anchor it for a full match.

    Patterns follow browser semantics: ``\\d``, ``\\w`` and case folding are
    ASCII-only and ``$`` matches only at the end of the value.
    """
    flags = re.ASCII | (re.IGNORECASE if ignore_case else 0)
    compiled = re.compile(_browser_pattern(pattern), flags)
    return Rule(predicate=lambda s: compiled.search(_text(s)) is not None, message=message, condition=condition)


def is_number(message: str, condition: Optional[Condition] = None) -> Rule:
    """Accepts any numeric literal (signed, decimal, exponent), so pair it with a digit pattern rule."""
    return Rule(predicate=lambda s: _looks_numeric(_text(s)), message=message, condition=condition)


# ── Character position rules ──

def contains(text: str, message: str, condition: Optional[Condition] = None) -> Rule:
    return Rule(predicate=lambda s: text in _text(s), message=message, condition=condition)


def not_starts_with(text: str, message: str, condition: Optional[Condition] = None) -> Rule:
    return Rule(predicate=lambda s: not _text(s).startswith(text), message=message, condition=condition)


def occurs_before(first: str, second: str, message: str, condition: Optional[Condition] = None) -> Rule:
    """First occurrence of ``first`` precedes the first occurrence of ``second``.

    Positions of missing substrings count as -1.
    """
    return Rule(
        predicate=lambda s: _text(s).find(first) < _text(s).find(second),
        message=message,
        condition=condition,
    )


def occurs_once(text: str, message: str, condition: Optional[Condition] = None) -> Rule:
    """At most one occurrence of ``text`` (first and last positions coincide)."""
    return Rule(
        predicate=lambda s: _text(s).find(text) == _text(s).rfind(text),
        message=message,
        condition=condition,
    )


# ── Group rules ──

def any_checked(message: str, condition: Optional[Condition] = None) -> Rule:
    """At least one member of a checkbox group is checked."""
    return Rule(predicate=lambda s: len(s.checked_items()) > 0, message=message, condition=condition)


# Builder name → (builder, positional argument types), used by rule set documents
RULE_BUILDERS: dict[str, tuple] = {
    "required": (required, ()),
    "min_length": (min_length, (int,)),
    "exact_length": (exact_length, (int,)),
    "length_between": (length_between, (int, int)),
    "matches": (matches, (str,)),
    "is_number": (is_number, ()),
    "contains": (contains, (str,)),
    "not_starts_with": (not_starts_with, (str,)),
    "occurs_before": (occurs_before, (str, str)),
    "occurs_once": (occurs_once, (str,)),
    "any_checked": (any_checked, ()),
}
