"""Pydantic request/response schemas for the Course Reviews API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.

Ratings and comments are not range-checked here: the domain owns those
rules and their messages.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class SubmitReviewRequest(BaseModel):
    user_id: str
    rating: int
    title: str | None = Field(default=None, max_length=200)
    comment: str | None = None
    pros: str | None = None
    cons: str | None = None
    would_recommend: bool | None = None
    is_anonymous: bool = False


class EditReviewRequest(BaseModel):
    user_id: str
    rating: int | None = None
    title: str | None = Field(default=None, max_length=200)
    comment: str | None = None
    pros: str | None = None
    cons: str | None = None
    would_recommend: bool | None = None
    is_anonymous: bool | None = None


class VoteRequest(BaseModel):
    user_id: str
    is_helpful: bool


class ModerateReviewRequest(BaseModel):
    moderator_id: str
    action: str  # "approve", "reject" or "flag"
    reason: str | None = None


class BulkModerateRequest(BaseModel):
    review_ids: list[str]
    moderator_id: str
    action: str
    reason: str | None = None


class AdminResponseRequest(BaseModel):
    admin_id: str
    content: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ReviewIdResponse(BaseModel):
    review_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class EligibilityResponse(BaseModel):
    can_review: bool
    reason: str | None = None
    completion_percentage: int = 0
    has_existing_review: bool = False


class AuthorSchema(BaseModel):
    id: str
    name: str | None = None
    surname: str | None = None
    avatar: str | None = None


class AdminResponseSchema(BaseModel):
    id: str
    admin_id: str
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ReviewSchema(BaseModel):
    id: str
    course_id: str
    user_id: str | None = None
    author: AuthorSchema | None = None
    rating: int
    title: str | None = None
    comment: str | None = None
    pros: str | None = None
    cons: str | None = None
    would_recommend: bool | None = None
    is_anonymous: bool = False
    completion_percentage: int | None = None
    status: str
    helpful_count: int = 0
    not_helpful_count: int = 0
    moderated_by_id: str | None = None
    moderated_at: datetime | None = None
    rejection_reason: str | None = None
    response: AdminResponseSchema | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PaginationSchema(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class ReviewListResponse(BaseModel):
    items: list[ReviewSchema]
    pagination: PaginationSchema


class CourseReviewStatsResponse(BaseModel):
    course_id: str
    total_reviews: int
    average_rating: float
    rating_distribution: dict[int, int]
    would_recommend_percentage: int


class DailyCountSchema(BaseModel):
    date: str
    count: int


class ReviewAnalyticsResponse(BaseModel):
    start_date: datetime
    end_date: datetime
    total_reviews: int
    pending_reviews: int
    approved_reviews: int
    rejected_reviews: int
    flagged_reviews: int
    average_rating: float
    rating_distribution: dict[int, int]
    reviews_over_time: list[DailyCountSchema]
    approval_rate: int


class BulkModerationResponse(BaseModel):
    results: dict[str, str]
