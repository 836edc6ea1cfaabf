"""DeleteReview — delete a review together with its votes and admin response.

The author or a moderator may delete; anyone else is refused.
"""

import structlog
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from course_reviews.domain import course_reviews
from course_reviews.review.exceptions import ForbiddenError
from course_reviews.review.review import Review

logger = structlog.get_logger(__name__)


@course_reviews.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    is_admin = Boolean(default=False)


@course_reviews.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        if not command.is_admin and not review.is_owned_by(command.user_id):
            raise ForbiddenError("You can only delete your own reviews")

        review.discard(deleted_by=command.user_id)

        # Persist the cascade (and the ReviewDeleted event) before the row goes
        repo.add(review)
        repo._dao.delete(review)

        logger.info("Review deleted", review_id=str(review.id), deleted_by=str(command.user_id))
