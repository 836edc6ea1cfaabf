"""Cross-domain event contracts for Identity domain events.

Consumed by the Course Reviews domain to keep a learner's display name,
avatar, email verification and notification opt-out alongside reviews.
"""

from protean.core.event import BaseEvent
from protean.fields import Boolean, DateTime, Identifier, String


class LearnerRegistered(BaseEvent):
    """A new learner account was created."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True, max_length=255)
    name = String(max_length=100)
    surname = String(max_length=100)
    avatar = String(max_length=500)
    registered_at = DateTime(required=True)


class LearnerEmailVerified(BaseEvent):
    """The learner confirmed ownership of their email address."""

    __version__ = 1

    user_id = Identifier(required=True)
    verified_at = DateTime(required=True)


class LearnerProfileUpdated(BaseEvent):
    """The learner changed their profile or notification preferences.

    Fields left out of the event are unchanged.
    """

    __version__ = 1

    user_id = Identifier(required=True)
    name = String(max_length=100)
    surname = String(max_length=100)
    avatar = String(max_length=500)
    review_notifications = Boolean()
    updated_at = DateTime(required=True)
