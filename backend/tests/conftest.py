"""Shared fixtures: a filled-in registration form and its controller."""

import pytest

from formrules.feedback import HeadlessFeedbackProjector
from formrules.form import FormController
from formrules.logging_config import configure_logging
from formrules.rulesets import clear_cache
from formrules.validators import InMemoryFieldStateProvider


@pytest.fixture(autouse=True, scope="session")
def _logging():
    configure_logging()


@pytest.fixture(autouse=True)
def _fresh_rule_set_cache():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def provider():
    """A registration form that passes every rule."""
    form = InMemoryFieldStateProvider()
    form.set_value("name", "Ada Lovelace")
    form.set_value("email", "ada@example.com")
    form.set_items("activities", [True, False, False])
    form.set_value("payment", "credit-card")
    form.set_value("cc-num", "4111111111111111")
    form.set_value("zip", "12345")
    form.set_value("cvv", "123")
    return form


@pytest.fixture
def projector():
    return HeadlessFeedbackProjector(title="Registration")


@pytest.fixture
def controller(provider, projector):
    return FormController.from_rule_set("registration", provider, projector)
