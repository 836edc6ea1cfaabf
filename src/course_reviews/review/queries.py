"""Read-side queries over reviews: listings, the moderation queue and course statistics.

Listings are filtered, ordered and paged by the store. Every sort order
falls back to the same tie-breakers: ``created_at`` (newest first unless
the sort is ``oldest``) and then ``id``.
"""

import math
from enum import Enum

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from course_reviews.projections.learners import Learner
from course_reviews.review.review import Review, ReviewStatus
from course_reviews.shared.rating import average_stars, percentage, rating_distribution

DEFAULT_PAGE_SIZE = 10
MODERATION_QUEUE_PAGE_SIZE = 20


class ReviewSort(Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    RATING_HIGH = "rating_high"
    RATING_LOW = "rating_low"
    MOST_HELPFUL = "most_helpful"


_ORDERING = {
    ReviewSort.NEWEST: ["-created_at", "id"],
    ReviewSort.OLDEST: ["created_at", "id"],
    ReviewSort.RATING_HIGH: ["-rating", "-created_at", "id"],
    ReviewSort.RATING_LOW: ["rating", "-created_at", "id"],
    ReviewSort.MOST_HELPFUL: ["-helpful_count", "-created_at", "id"],
}


def _parse_sort(sort) -> ReviewSort:
    try:
        return ReviewSort(sort or ReviewSort.NEWEST.value)
    except ValueError:
        raise ValidationError({"sort": [f"Unknown sort '{sort}'"]})


def _parse_status(status) -> str | None:
    if status is None or isinstance(status, ReviewStatus):
        return status.value if status else None
    try:
        return ReviewStatus(status).value
    except ValueError:
        raise ValidationError({"status": [f"Unknown status '{status}'"]})


def _learners_by_id(user_ids) -> dict:
    repo = current_domain.repository_for(Learner)
    learners = {}
    for user_id in set(user_ids):
        try:
            learners[user_id] = repo.get(user_id)
        except ObjectNotFoundError:
            continue
    return learners


def _author(review, learners) -> dict | None:
    if review.is_anonymous:
        return None
    learner = learners.get(str(review.user_id))
    if learner is None:
        return {"id": str(review.user_id), "name": None, "surname": None, "avatar": None}
    return {
        "id": str(learner.user_id),
        "name": learner.name,
        "surname": learner.surname,
        "avatar": learner.avatar,
    }


def _response_to_dict(response) -> dict | None:
    if response is None:
        return None
    return {
        "id": str(response.id),
        "admin_id": str(response.admin_id),
        "content": response.content,
        "created_at": response.created_at,
        "updated_at": response.updated_at,
    }


def review_to_dict(review, learners=None) -> dict:
    learners = learners if learners is not None else _learners_by_id([str(review.user_id)])
    return {
        "id": str(review.id),
        "course_id": str(review.course_id),
        "user_id": None if review.is_anonymous else str(review.user_id),
        "author": _author(review, learners),
        "rating": review.rating,
        "title": review.title,
        "comment": review.comment,
        "pros": review.pros,
        "cons": review.cons,
        "would_recommend": review.would_recommend,
        "is_anonymous": bool(review.is_anonymous),
        "completion_percentage": review.completion_percentage,
        "status": review.status,
        "helpful_count": review.helpful_count or 0,
        "not_helpful_count": review.not_helpful_count or 0,
        "moderated_by_id": str(review.moderated_by_id) if review.moderated_by_id else None,
        "moderated_at": review.moderated_at,
        "rejection_reason": review.rejection_reason,
        "response": _response_to_dict(review.admin_response),
        "created_at": review.created_at,
        "updated_at": review.updated_at,
    }


def list_reviews(
    course_id=None,
    user_id=None,
    status=None,
    rating=None,
    min_rating=None,
    max_rating=None,
    sort=None,
    page=1,
    limit=DEFAULT_PAGE_SIZE,
) -> dict:
    """Filtered, sorted, paginated reviews with author and response attached."""
    page = page or 1
    limit = limit or DEFAULT_PAGE_SIZE
    if page < 1:
        raise ValidationError({"page": ["Page must be 1 or greater"]})
    if limit < 1:
        raise ValidationError({"limit": ["Limit must be 1 or greater"]})

    order = _parse_sort(sort)
    status = _parse_status(status)

    page_items, total = current_domain.repository_for(Review).page(
        _ORDERING[order],
        offset=(page - 1) * limit,
        limit=limit,
        course_id=str(course_id) if course_id else None,
        user_id=str(user_id) if user_id else None,
        status=status,
        rating=rating,
        rating__gte=min_rating,
        rating__lte=max_rating,
    )
    learners = _learners_by_id(str(r.user_id) for r in page_items if not r.is_anonymous)

    return {
        "items": [review_to_dict(r, learners) for r in page_items],
        "pagination": {
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": math.ceil(total / limit),
        },
    }


def pending_reviews(page=1, limit=MODERATION_QUEUE_PAGE_SIZE) -> dict:
    """The moderation queue, oldest submission first."""
    return list_reviews(
        status=ReviewStatus.PENDING.value,
        sort=ReviewSort.OLDEST.value,
        page=page,
        limit=limit or MODERATION_QUEUE_PAGE_SIZE,
    )


def get_review(review_id) -> dict:
    review = current_domain.repository_for(Review).get(str(review_id))
    return review_to_dict(review)


def course_review_stats(course_id) -> dict:
    """Rating summary of a course's approved reviews."""
    approved = current_domain.repository_for(Review).matching(
        course_id=str(course_id),
        status=ReviewStatus.APPROVED.value,
    )
    ratings = [r.rating for r in approved]
    answers = [r.would_recommend for r in approved if r.would_recommend is not None]

    return {
        "course_id": str(course_id),
        "total_reviews": len(approved),
        "average_rating": average_stars(ratings),
        "rating_distribution": rating_distribution(ratings),
        "would_recommend_percentage": percentage(sum(1 for a in answers if a), len(answers)),
    }
