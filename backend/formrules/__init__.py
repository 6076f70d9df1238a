"""formrules — declarative, ordered validation rules for form fields."""

from formrules.form import FormController
from formrules.validators import FormValidator, RuleRegistry

__version__ = "1.0.0"

__all__ = ["FormController", "FormValidator", "RuleRegistry", "__version__"]
