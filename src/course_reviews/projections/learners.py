"""Learner — author profile and notification settings, one row per learner.

Populated by the Identity cross-domain event handler. Read when deciding
auto-approval, when decorating listed reviews with their author, and when
emailing moderation outcomes.
"""

from protean.fields import Boolean, DateTime, Identifier, String

from course_reviews.domain import course_reviews


@course_reviews.projection
class Learner:
    user_id = Identifier(identifier=True, required=True)
    email = String(max_length=255)
    email_verified = Boolean(default=False)
    name = String(max_length=100)
    surname = String(max_length=100)
    avatar = String(max_length=500)
    review_notifications = Boolean(default=True)
    registered_at = DateTime()
    updated_at = DateTime()
