"""FastAPI routes for the Course Reviews bounded context.

Each route translates between Pydantic schemas (external contract) and
Protean commands or read-side query functions (internal domain concepts).
"""

from datetime import datetime

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from course_reviews.api.schemas import (
    AdminResponseRequest,
    BulkModerateRequest,
    BulkModerationResponse,
    CourseReviewStatsResponse,
    EditReviewRequest,
    EligibilityResponse,
    ModerateReviewRequest,
    ReviewAnalyticsResponse,
    ReviewIdResponse,
    ReviewListResponse,
    ReviewSchema,
    StatusResponse,
    SubmitReviewRequest,
    VoteRequest,
)
from course_reviews.review.analytics import review_analytics
from course_reviews.review.editing import EditReview
from course_reviews.review.eligibility import check_eligibility
from course_reviews.review.moderation import BulkModerateReviews, ModerateReview
from course_reviews.review.queries import (
    DEFAULT_PAGE_SIZE,
    MODERATION_QUEUE_PAGE_SIZE,
    course_review_stats,
    get_review,
    list_reviews,
    pending_reviews,
)
from course_reviews.review.removal import DeleteReview
from course_reviews.review.response import DeleteAdminResponse, PostAdminResponse
from course_reviews.review.review import ReviewStatus
from course_reviews.review.submission import SubmitReview
from course_reviews.review.voting import RemoveVote, VoteOnReview

course_router = APIRouter(prefix="/courses", tags=["courses"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])
user_router = APIRouter(prefix="/users", tags=["users"])
admin_router = APIRouter(prefix="/admin/reviews", tags=["admin"])


# ---------------------------------------------------------------------------
# Course-scoped routes
# ---------------------------------------------------------------------------
@course_router.get("/{course_id}/can-review", response_model=EligibilityResponse)
async def can_review(course_id: str, user_id: str) -> EligibilityResponse:
    """Whether the learner may review the course, and why not."""
    return EligibilityResponse(**check_eligibility(user_id, course_id).to_dict())


@course_router.post("/{course_id}/reviews", status_code=201, response_model=ReviewIdResponse)
async def submit_review(course_id: str, body: SubmitReviewRequest) -> ReviewIdResponse:
    """Submit a review for a course."""
    command = SubmitReview(
        course_id=course_id,
        user_id=body.user_id,
        rating=body.rating,
        title=body.title,
        comment=body.comment,
        pros=body.pros,
        cons=body.cons,
        would_recommend=body.would_recommend,
        is_anonymous=body.is_anonymous,
    )
    review_id = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=review_id)


@course_router.get("/{course_id}/reviews", response_model=ReviewListResponse)
async def course_reviews_listing(
    course_id: str,
    rating: int | None = None,
    min_rating: int | None = None,
    max_rating: int | None = None,
    sort: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1),
):
    """Approved reviews of a course."""
    return list_reviews(
        course_id=course_id,
        status=ReviewStatus.APPROVED.value,
        rating=rating,
        min_rating=min_rating,
        max_rating=max_rating,
        sort=sort,
        page=page,
        limit=limit,
    )


@course_router.get("/{course_id}/reviews/stats", response_model=CourseReviewStatsResponse)
async def course_stats(course_id: str):
    """Average rating, star distribution and recommendation rate."""
    return course_review_stats(course_id)


# ---------------------------------------------------------------------------
# Review-scoped routes
# ---------------------------------------------------------------------------
@review_router.post("/bulk-moderate", response_model=BulkModerationResponse)
async def bulk_moderate(body: BulkModerateRequest) -> BulkModerationResponse:
    """Apply one moderation action to many reviews."""
    command = BulkModerateReviews(
        review_ids=body.review_ids,
        moderator_id=body.moderator_id,
        action=body.action,
        reason=body.reason,
    )
    results = current_domain.process(command, asynchronous=False)
    return BulkModerationResponse(results=results)


@review_router.get("/{review_id}", response_model=ReviewSchema)
async def review_detail(review_id: str):
    return get_review(review_id)


@review_router.patch("/{review_id}", response_model=StatusResponse)
async def edit_review(review_id: str, body: EditReviewRequest) -> StatusResponse:
    """Edit your own review. An explicit null clears an optional field."""
    supplied = body.model_dump(exclude_unset=True)
    command = EditReview(
        review_id=review_id,
        cleared=[field for field, value in supplied.items() if value is None],
        **{field: value for field, value in supplied.items() if value is not None},
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str, user_id: str, is_admin: bool = False) -> StatusResponse:
    """Delete a review as its author or as a moderator."""
    command = DeleteReview(review_id=review_id, user_id=user_id, is_admin=is_admin)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.post("/{review_id}/vote", response_model=StatusResponse)
async def vote_on_review(review_id: str, body: VoteRequest) -> StatusResponse:
    """Mark a review helpful or not helpful."""
    command = VoteOnReview(review_id=review_id, user_id=body.user_id, is_helpful=body.is_helpful)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.delete("/{review_id}/vote", response_model=StatusResponse)
async def remove_vote(review_id: str, user_id: str) -> StatusResponse:
    """Withdraw your vote on a review."""
    current_domain.process(RemoveVote(review_id=review_id, user_id=user_id), asynchronous=False)
    return StatusResponse()


@review_router.post("/{review_id}/moderate", response_model=StatusResponse)
async def moderate_review(review_id: str, body: ModerateReviewRequest) -> StatusResponse:
    """Approve, reject or flag a review."""
    command = ModerateReview(
        review_id=review_id,
        moderator_id=body.moderator_id,
        action=body.action,
        reason=body.reason,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.put("/{review_id}/response", response_model=StatusResponse)
async def post_admin_response(review_id: str, body: AdminResponseRequest) -> StatusResponse:
    """Create or replace the admin response to a review."""
    command = PostAdminResponse(review_id=review_id, admin_id=body.admin_id, content=body.content)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.delete("/{review_id}/response", response_model=StatusResponse)
async def delete_admin_response(review_id: str) -> StatusResponse:
    current_domain.process(DeleteAdminResponse(review_id=review_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# User-scoped routes
# ---------------------------------------------------------------------------
@user_router.get("/{user_id}/reviews", response_model=ReviewListResponse)
async def user_reviews(
    user_id: str,
    status: str | None = None,
    sort: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1),
):
    """All reviews written by a learner, in any status."""
    return list_reviews(user_id=user_id, status=status, sort=sort, page=page, limit=limit)


# ---------------------------------------------------------------------------
# Admin routes
# ---------------------------------------------------------------------------
@admin_router.get("", response_model=ReviewListResponse)
async def admin_reviews(
    course_id: str | None = None,
    user_id: str | None = None,
    status: str | None = None,
    rating: int | None = None,
    min_rating: int | None = None,
    max_rating: int | None = None,
    sort: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1),
):
    return list_reviews(
        course_id=course_id,
        user_id=user_id,
        status=status,
        rating=rating,
        min_rating=min_rating,
        max_rating=max_rating,
        sort=sort,
        page=page,
        limit=limit,
    )


@admin_router.get("/pending", response_model=ReviewListResponse)
async def moderation_queue(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=MODERATION_QUEUE_PAGE_SIZE, ge=1),
):
    """Pending reviews, oldest first."""
    return pending_reviews(page=page, limit=limit)


@admin_router.get("/analytics", response_model=ReviewAnalyticsResponse)
async def analytics(start_date: datetime | None = None, end_date: datetime | None = None):
    return review_analytics(start_date=start_date, end_date=end_date)
