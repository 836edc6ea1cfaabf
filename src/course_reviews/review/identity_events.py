"""Inbound cross-domain event handler — Course Reviews reacts to Identity events.

Maintains the Learner projection: display profile for review listings,
email verification for auto-approval, and the address and opt-out flag for
moderation emails.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.identity import (
    LearnerEmailVerified,
    LearnerProfileUpdated,
    LearnerRegistered,
)

from course_reviews.domain import course_reviews
from course_reviews.projections.learners import Learner
from course_reviews.review.review import Review

logger = structlog.get_logger(__name__)

course_reviews.register_external_event(LearnerRegistered, "Identity.LearnerRegistered.v1")
course_reviews.register_external_event(LearnerEmailVerified, "Identity.LearnerEmailVerified.v1")
course_reviews.register_external_event(LearnerProfileUpdated, "Identity.LearnerProfileUpdated.v1")


def _find_learner(user_id):
    try:
        return current_domain.repository_for(Learner).get(str(user_id))
    except ObjectNotFoundError:
        logger.warning("Learner not registered yet, skipping update", user_id=str(user_id))
        return None


@course_reviews.event_handler(part_of=Review, stream_category="identity::learner")
class IdentityEventsHandler:
    """Reacts to Identity domain events to keep learner profiles current."""

    @handle(LearnerRegistered)
    def on_learner_registered(self, event: LearnerRegistered) -> None:
        current_domain.repository_for(Learner).add(
            Learner(
                user_id=str(event.user_id),
                email=event.email,
                email_verified=False,
                name=event.name,
                surname=event.surname,
                avatar=event.avatar,
                review_notifications=True,
                registered_at=event.registered_at,
                updated_at=event.registered_at,
            )
        )

    @handle(LearnerEmailVerified)
    def on_learner_email_verified(self, event: LearnerEmailVerified) -> None:
        learner = _find_learner(event.user_id)
        if learner is None:
            return

        learner.email_verified = True
        learner.updated_at = event.verified_at
        current_domain.repository_for(Learner).add(learner)

    @handle(LearnerProfileUpdated)
    def on_learner_profile_updated(self, event: LearnerProfileUpdated) -> None:
        learner = _find_learner(event.user_id)
        if learner is None:
            return

        for field in ("name", "surname", "avatar", "review_notifications"):
            value = getattr(event, field)
            if value is not None:
                setattr(learner, field, value)
        learner.updated_at = event.updated_at
        current_domain.repository_for(Learner).add(learner)
