"""Errors raised by the Course Reviews domain beyond Protean's own.

Rating/comment problems use ``protean.exceptions.ValidationError`` and
missing reviews, votes or responses use ``ObjectNotFoundError``. The
classes here cover ownership, eligibility and the edit window.
"""


class ForbiddenError(Exception):
    """The caller neither owns the review nor acts as a moderator."""


class EligibilityError(Exception):
    """The learner may not review the course yet.

    ``reason`` is meant to be shown to the learner as-is.
    """

    def __init__(self, reason: str, completion_percentage: int = 0):
        super().__init__(reason)
        self.reason = reason
        self.completion_percentage = completion_percentage


class EditWindowExpiredError(Exception):
    """The review is older than the edit window allows."""
