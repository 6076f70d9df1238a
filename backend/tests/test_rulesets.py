"""
Tests for rule set loading, compilation and the registration form rules
"""

import json

import pytest

from formrules.config import Settings
from formrules.rulesets import RuleSetError, RuleSetSpec, compile_rule_set, list_rule_sets, load_rule_set
from formrules.rulesets import loader
from formrules.validators import FormValidator, InMemoryFieldStateProvider


@pytest.fixture
def registration(provider):
    registry = compile_rule_set(load_rule_set("registration"), provider)
    return FormValidator(registry, provider)


class TestLoader:

    def test_bundled_registration_set(self):
        assert "registration" in list_rule_sets()

        spec = load_rule_set("registration")
        assert [f.field for f in spec.fields] == ["name", "email", "activities", "cc-num", "zip", "cvv"]
        assert spec.realtime_fields == ["name", "email"]

    def test_unknown_set_returns_none(self):
        assert load_rule_set("newsletter") is None

    def test_custom_directory_skips_invalid_files(self, tmp_path, monkeypatch):
        """Should load valid documents from RULESETS_DIR and skip broken ones"""
        (tmp_path / "contact.json").write_text(json.dumps({
            "form": "contact",
            "fields": [{"field": "email", "rules": [{"check": "required", "message": "Email is required"}]}],
        }))
        (tmp_path / "broken.json").write_text("{not json")
        (tmp_path / "wrong_shape.json").write_text(json.dumps({"fields": []}))
        monkeypatch.setattr(loader, "get_settings", lambda: Settings(RULESETS_DIR=tmp_path))

        assert list_rule_sets() == ["contact"]
        assert load_rule_set("contact").fields[0].field == "email"


class TestCompile:

    def _spec(self, rules, when=None):
        return RuleSetSpec.model_validate({
            "form": "test",
            "fields": [{"field": "code", "when": when, "rules": rules}],
        })

    def test_unknown_check(self):
        with pytest.raises(RuleSetError, match="Unknown check"):
            compile_rule_set(self._spec([{"check": "is_even", "message": "m"}]), InMemoryFieldStateProvider())

    def test_wrong_argument_count(self):
        with pytest.raises(RuleSetError, match="takes 1 argument"):
            compile_rule_set(self._spec([{"check": "min_length", "message": "m"}]), InMemoryFieldStateProvider())

    @pytest.mark.parametrize("rule", [
        {"check": "min_length", "args": ["3"], "message": "m"},
        {"check": "min_length", "args": [True], "message": "m"},
        {"check": "length_between", "args": [3, 4.5], "message": "m"},
        {"check": "contains", "args": [7], "message": "m"},
    ])
    def test_wrong_argument_type(self, rule):
        """Badly typed arguments fail at compile time, not on every evaluation"""
        with pytest.raises(RuleSetError, match="argument 1|argument 2"):
            compile_rule_set(self._spec([rule]), InMemoryFieldStateProvider())

    def test_invalid_pattern(self):
        with pytest.raises(RuleSetError, match="could not be built"):
            compile_rule_set(
                self._spec([{"check": "matches", "args": ["^[0-9"], "message": "m"}]),
                InMemoryFieldStateProvider(),
            )

    def test_rule_gate_overrides_field_gate(self):
        """A rule-level 'when' should replace the field-level one"""
        form = InMemoryFieldStateProvider()
        form.set_value("code", "")
        form.set_value("mode", "b")
        spec = self._spec(
            [
                {"check": "required", "message": "field gate"},
                {"check": "required", "message": "rule gate", "when": {"field": "mode", "equals": "b"}},
            ],
            when={"field": "mode", "equals": "a"},
        )

        result = FormValidator(compile_rule_set(spec, form), form).validate_field("code")

        assert result.message == "rule gate"
        assert result.rules_skipped == 1

    def test_registry_left_unfrozen(self, provider):
        registry = compile_rule_set(load_rule_set("registration"), provider)
        assert not registry.frozen
        registry.register("phone", [])
        assert registry.field_ids[-1] == "phone"


class TestRegistrationForm:
    """Behaviour of the bundled registration rules"""

    def test_filled_form_is_valid(self, registration):
        assert registration.validate_form().is_valid

    def test_empty_name(self, registration, provider):
        provider.set_value("name", "")
        result = registration.validate_form()

        assert [(e.field_id, e.message) for e in result.errors] == [("name", "Name is required")]

    def test_short_name(self, registration, provider):
        provider.set_value("name", "Al")
        assert registration.validate_field("name").message == "Name must be at least 3 characters long"

    def test_name_characters(self, registration, provider):
        provider.set_value("name", "R2-D2")
        assert registration.validate_field("name").message == (
            "Name should only contain letters, spaces, hyphens, periods, and apostrophes"
        )

    def test_double_at_sign(self, registration, provider):
        """Doubled '@' is reported before the format check is reached"""
        provider.set_value("email", "ab@@c.com")
        assert registration.validate_field("email").message == "The 'at' symbol should only appear once."

    def test_dot_before_at_reported_first(self, registration, provider):
        """With a dot ahead of the '@', the ordering rule fails earlier in the list"""
        provider.set_value("email", "a.b@@c.com")
        assert registration.validate_field("email").message == "The 'at' symbol must be before the 'dot' symbol."

    @pytest.mark.parametrize("value,message", [
        ("", "Email is required"),
        ("ada.example.com", "Enter the 'at' symbol in the email address."),
        ("@example.com", "The 'at' symbol should not appear at the beginning."),
        ("ada@example", "Enter the 'dot' symbol in the email address."),
        ("ada@example.c0m", "Email address must be formatted correctly"),
        ("ada@example.com\n", "Email address must be formatted correctly"),
    ])
    def test_email_messages(self, registration, provider, value, message):
        provider.set_value("email", value)
        assert registration.validate_field("email").message == message

    @pytest.mark.parametrize("payment", ["paypal", "bitcoin"])
    @pytest.mark.parametrize("field_id", ["cc-num", "zip", "cvv"])
    def test_card_fields_skipped_without_card(self, registration, provider, payment, field_id):
        """Card fields are valid whatever their value when not paying by card"""
        provider.set_value("payment", payment)
        provider.set_value(field_id, "")

        result = registration.validate_field(field_id)

        assert result.valid
        assert result.rules_skipped == 3

    @pytest.mark.parametrize("field_id,value,message", [
        ("cc-num", "", "Credit card number is required"),
        ("cc-num", "4111x", "Credit card number must be a number"),
        ("cc-num", "-4111111111111", "Credit card number must be between 13 - 16 digits"),
        ("zip", "1234", "Zip code must be 5 digits"),
        ("zip", "abcde", "Zip code must be a number"),
        ("cvv", "12", "CVV must be 3 digits"),
        ("cvv", "inf", "CVV must be a number"),
        ("zip", "12_34", "Zip code must be a number"),
        ("cc-num", "٤" * 16, "Credit card number must be a number"),
        ("cc-num", "4111111111111111\n", "Credit card number must be between 13 - 16 digits"),
    ])
    def test_card_fields_with_card(self, registration, provider, field_id, value, message):
        provider.set_value(field_id, value)
        assert registration.validate_field(field_id).message == message

    def test_errors_in_field_order(self, registration, provider):
        """Invalid name and activities give two errors, name first"""
        provider.set_value("name", "")
        provider.set_items("activities", [False, False])

        result = registration.validate_form()

        assert [e.field_id for e in result.errors] == ["name", "activities"]
        assert result.field("email").valid
