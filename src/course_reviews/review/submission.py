"""SubmitReview — a learner reviews a course they bought and progressed through.

Content is validated first, then eligibility is evaluated against the
purchase and progress projections. Learners with a verified email and at
least two approved reviews skip the moderation queue.

One review per learner per course: the handler looks for an existing
review first, and the review id is derived from the (learner, course) pair
so a concurrent second submission collides in the store.
"""

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from course_reviews.domain import course_reviews
from course_reviews.projections.learners import Learner
from course_reviews.review.eligibility import check_eligibility
from course_reviews.review.exceptions import EligibilityError
from course_reviews.review.review import Review, validate_content

logger = structlog.get_logger(__name__)

AUTO_APPROVE_MIN_APPROVED_REVIEWS = 2


@course_reviews.command(part_of="Review")
class SubmitReview:
    course_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    title = String(max_length=200)
    comment = Text()
    pros = Text()
    cons = Text()
    would_recommend = Boolean()
    is_anonymous = Boolean(default=False)


def qualifies_for_auto_approval(user_id) -> bool:
    """Trusted reviewers: verified email and a track record of approved reviews."""
    try:
        learner = current_domain.repository_for(Learner).get(str(user_id))
    except ObjectNotFoundError:
        return False

    if not learner.email_verified:
        return False

    approved = current_domain.repository_for(Review).count_approved_by_user(user_id)
    return approved >= AUTO_APPROVE_MIN_APPROVED_REVIEWS


@course_reviews.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        validate_content(rating=command.rating, comment=command.comment)

        eligibility = check_eligibility(command.user_id, command.course_id)
        if not eligibility.can_review:
            raise EligibilityError(eligibility.reason, eligibility.completion_percentage)

        repo = current_domain.repository_for(Review)
        if repo.find_by_learner_and_course(command.user_id, command.course_id) is not None:
            raise ValidationError({"review": ["You have already reviewed this course"]})

        auto_approve = qualifies_for_auto_approval(command.user_id)

        review = Review.submit(
            user_id=command.user_id,
            course_id=command.course_id,
            rating=command.rating,
            completion_percentage=eligibility.completion_percentage,
            title=command.title,
            comment=command.comment,
            pros=command.pros,
            cons=command.cons,
            would_recommend=command.would_recommend,
            is_anonymous=command.is_anonymous,
            auto_approve=auto_approve,
        )
        repo.add(review)

        logger.info(
            "Review submitted",
            review_id=str(review.id),
            course_id=str(command.course_id),
            user_id=str(command.user_id),
            status=review.status,
        )
        return str(review.id)
