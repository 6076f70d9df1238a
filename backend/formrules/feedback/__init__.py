"""Validation feedback — projectors that render engine results."""

from formrules.feedback.models import FieldFeedback
from formrules.feedback.projector import FeedbackProjector, HeadlessFeedbackProjector

__all__ = ["FieldFeedback", "FeedbackProjector", "HeadlessFeedbackProjector"]
