"""ModerateReview / BulkModerateReviews — approve, reject or flag reviews.

Rejecting and flagging need a reason. A single approval keeps whatever
rejection reason was recorded before; a bulk approval clears it.

Bulk moderation reports an outcome per review id instead of skipping
missing or ineligible reviews silently.
"""

from enum import Enum

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, List, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from course_reviews.domain import course_reviews
from course_reviews.review.review import ACTION_TARGET_STATUS, ModerationAction, Review

logger = structlog.get_logger(__name__)


class BulkOutcome(Enum):
    SUCCEEDED = "succeeded"
    NOT_FOUND = "not_found"
    INVALID_TRANSITION = "invalid_transition"


def parse_action(value) -> ModerationAction:
    try:
        return ModerationAction(value)
    except ValueError:
        allowed = ", ".join(a.value for a in ModerationAction)
        raise ValidationError({"action": [f"Unknown moderation action '{value}', expected one of: {allowed}"]})


def _require_reason(action, reason):
    if action != ModerationAction.APPROVE and not reason:
        raise ValidationError({"reason": [f"A reason is required to {action.value} a review"]})


@course_reviews.command(part_of="Review")
class ModerateReview:
    review_id = Identifier(required=True)
    moderator_id = Identifier(required=True)
    action = String(required=True)  # "approve", "reject" or "flag"
    reason = String()  # Required for reject and flag


@course_reviews.command(part_of="Review")
class BulkModerateReviews:
    review_ids = List(content_type=String, required=True)
    moderator_id = Identifier(required=True)
    action = String(required=True)
    reason = String()


@course_reviews.command_handler(part_of=Review)
class ModerateReviewHandler:
    @handle(ModerateReview)
    def moderate_review(self, command):
        action = parse_action(command.action)
        _require_reason(action, command.reason)

        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        review.moderate(action, moderator_id=command.moderator_id, reason=command.reason)
        repo.add(review)

        logger.info(
            "Review moderated",
            review_id=str(review.id),
            action=action.value,
            moderator_id=str(command.moderator_id),
            status=review.status,
        )

    @handle(BulkModerateReviews)
    def bulk_moderate_reviews(self, command):
        if not command.review_ids:
            raise ValidationError({"review_ids": ["At least one review id is required"]})

        action = parse_action(command.action)
        _require_reason(action, command.reason)
        target = ACTION_TARGET_STATUS[action]

        repo = current_domain.repository_for(Review)
        results = {}

        for review_id in dict.fromkeys(command.review_ids):
            try:
                review = repo.get(review_id)
            except ObjectNotFoundError:
                results[review_id] = BulkOutcome.NOT_FOUND.value
                continue

            if not review.can_transition_to(target):
                results[review_id] = BulkOutcome.INVALID_TRANSITION.value
                continue

            review.moderate(
                action,
                moderator_id=command.moderator_id,
                reason=command.reason,
                clear_reason=True,
            )
            repo.add(review)
            results[review_id] = BulkOutcome.SUCCEEDED.value

        logger.info(
            "Bulk moderation applied",
            action=action.value,
            moderator_id=str(command.moderator_id),
            succeeded=sum(1 for outcome in results.values() if outcome == BulkOutcome.SUCCEEDED.value),
            requested=len(results),
        )
        return results
