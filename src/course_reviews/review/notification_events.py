"""Moderation emails — tells authors when their review is approved or rejected.

Runs as an event handler on the Review stream, so moderation has already
been committed when it fires. Sending is best effort: a missing learner,
an opted-out learner or a failing adapter is logged and never raised.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from course_reviews.channel import get_email_channel
from course_reviews.domain import course_reviews
from course_reviews.projections.learners import Learner
from course_reviews.review.events import ReviewApproved, ReviewRejected
from course_reviews.review.review import Review
from course_reviews.review.templates import ReviewApprovedTemplate, ReviewRejectedTemplate

logger = structlog.get_logger(__name__)


def _notify_author(user_id, review_id, template_cls, context: dict) -> None:
    try:
        learner = current_domain.repository_for(Learner).get(str(user_id))
    except ObjectNotFoundError:
        logger.info("No learner profile for review author, skipping email", user_id=str(user_id))
        return

    if not learner.email:
        logger.info("Learner has no email address, skipping email", user_id=str(user_id))
        return
    if learner.review_notifications is False:
        logger.info("Learner opted out of review emails", user_id=str(user_id))
        return

    rendered = template_cls.render({"name": learner.name, **context})
    try:
        result = get_email_channel().send(to=learner.email, subject=rendered["subject"], body=rendered["body"])
    except Exception as exc:
        logger.error(
            "Moderation email raised during dispatch",
            review_id=str(review_id),
            user_id=str(user_id),
            error=str(exc),
        )
        return

    if result.get("status") != "sent":
        logger.warning(
            "Moderation email was not delivered",
            review_id=str(review_id),
            user_id=str(user_id),
            error=result.get("error"),
        )
        return

    logger.info("Moderation email sent", review_id=str(review_id), message_id=result.get("message_id"))


@course_reviews.event_handler(part_of=Review)
class ModerationNotificationsHandler:
    """Emails review authors about moderation decisions."""

    @handle(ReviewApproved)
    def on_review_approved(self, event: ReviewApproved) -> None:
        _notify_author(event.user_id, event.review_id, ReviewApprovedTemplate, {})

    @handle(ReviewRejected)
    def on_review_rejected(self, event: ReviewRejected) -> None:
        _notify_author(event.user_id, event.review_id, ReviewRejectedTemplate, {"reason": event.reason})
