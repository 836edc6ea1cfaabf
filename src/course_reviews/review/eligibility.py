"""Review eligibility — may this learner review this course right now?

A learner needs a completed purchase and at least 20% of the chapters of
the course's active version completed. An existing review is reported
alongside the verdict but does not by itself make the learner ineligible;
the submission handler rejects duplicates separately.

Read-only: consults the CoursePurchase, ActiveCourseVersion and
ChapterProgress projections and the Review repository.
"""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from course_reviews.projections.active_course_versions import ActiveCourseVersion
from course_reviews.projections.chapter_progress import ChapterProgress
from course_reviews.projections.course_purchases import CoursePurchase, PurchaseStatus
from course_reviews.review.review import Review
from course_reviews.shared.rating import percentage

MIN_COMPLETION_PERCENTAGE = 20


@dataclass(frozen=True)
class Eligibility:
    can_review: bool
    completion_percentage: int = 0
    has_existing_review: bool = False
    reason: str | None = None

    def to_dict(self) -> dict:
        return {
            "can_review": self.can_review,
            "reason": self.reason,
            "completion_percentage": self.completion_percentage,
            "has_existing_review": self.has_existing_review,
        }


def _has_completed_purchase(user_id, course_id) -> bool:
    purchases = (
        current_domain.repository_for(CoursePurchase)
        ._dao.query.filter(
            user_id=str(user_id),
            course_id=str(course_id),
            status=PurchaseStatus.COMPLETED.value,
        )
        .all()
    )
    return purchases.total > 0


def _completed_chapters(user_id, version_id) -> int:
    return (
        current_domain.repository_for(ChapterProgress)
        ._dao.query.filter(user_id=str(user_id), version_id=str(version_id), is_completed=True)
        .all()
        .total
    )


def check_eligibility(user_id, course_id) -> Eligibility:
    if not _has_completed_purchase(user_id, course_id):
        return Eligibility(can_review=False, reason="You must purchase this course to leave a review")

    existing = current_domain.repository_for(Review).find_by_learner_and_course(user_id, course_id)
    has_existing_review = existing is not None

    try:
        active = current_domain.repository_for(ActiveCourseVersion).get(str(course_id))
    except ObjectNotFoundError:
        return Eligibility(can_review=False, reason="Course not found", has_existing_review=has_existing_review)

    if not active.chapter_count:
        return Eligibility(
            can_review=False,
            reason="Course has no chapters",
            has_existing_review=has_existing_review,
        )

    completion = percentage(_completed_chapters(user_id, active.version_id), active.chapter_count)

    if completion < MIN_COMPLETION_PERCENTAGE:
        return Eligibility(
            can_review=False,
            reason=(
                f"You need to complete at least {MIN_COMPLETION_PERCENTAGE}% of the course "
                f"to leave a review. Current progress: {completion}%"
            ),
            completion_percentage=completion,
            has_existing_review=has_existing_review,
        )

    return Eligibility(
        can_review=True,
        completion_percentage=completion,
        has_existing_review=has_existing_review,
    )
