"""Tests for Review creation — defaults, content validation and the submission event."""

import pytest
from course_reviews.review.events import ReviewSubmitted
from course_reviews.review.review import Review, ReviewStatus
from protean.exceptions import ValidationError


def _make_review(**overrides):
    defaults = {
        "user_id": "learner-001",
        "course_id": "course-001",
        "rating": 45,
        "completion_percentage": 60,
        "title": "Solid introduction",
        "comment": "Explains the fundamentals really well.",
    }
    defaults.update(overrides)
    return Review.submit(**defaults)


class TestSubmitDefaults:
    def test_new_review_is_pending(self):
        review = _make_review()
        assert review.status == ReviewStatus.PENDING.value

    def test_auto_approved_review_is_approved(self):
        review = _make_review(auto_approve=True)
        assert review.status == ReviewStatus.APPROVED.value

    def test_counters_start_at_zero(self):
        review = _make_review()
        assert review.helpful_count == 0
        assert review.not_helpful_count == 0
        assert len(review.votes) == 0

    def test_completion_percentage_is_stored(self):
        review = _make_review(completion_percentage=35)
        assert review.completion_percentage == 35

    def test_not_anonymous_by_default(self):
        assert _make_review().is_anonymous is False

    def test_would_recommend_may_be_unanswered(self):
        assert _make_review().would_recommend is None

    def test_timestamps_are_set(self):
        review = _make_review()
        assert review.created_at is not None
        assert review.updated_at == review.created_at

    def test_has_no_admin_response(self):
        assert _make_review().admin_response is None


class TestRatingRange:
    @pytest.mark.parametrize("rating", [10, 15, 30, 50])
    def test_ratings_within_range_are_accepted(self, rating):
        assert _make_review(rating=rating).rating == rating

    @pytest.mark.parametrize("rating", [0, 9, 51, 100])
    def test_ratings_outside_range_are_rejected(self, rating):
        with pytest.raises(ValidationError) as exc:
            _make_review(rating=rating)
        assert exc.value.messages["rating"] == ["Rating must be between 10 and 50 (1.0 to 5.0 stars)"]


class TestCommentLength:
    def test_short_comment_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_review(comment="Too short")
        assert exc.value.messages["comment"] == ["Review comment must be at least 10 characters"]

    def test_ten_characters_is_enough(self):
        assert _make_review(comment="0123456789").comment == "0123456789"

    def test_comment_is_optional(self):
        assert _make_review(comment=None).comment is None

    def test_empty_comment_counts_as_no_comment(self):
        review = _make_review(comment="")
        assert not review.comment


class TestSubmittedEvent:
    def test_raises_review_submitted(self):
        review = _make_review()
        assert len(review._events) == 1
        event = review._events[0]
        assert isinstance(event, ReviewSubmitted)
        assert event.review_id == str(review.id)
        assert event.rating == 45
        assert event.status == ReviewStatus.PENDING.value
        assert event.completion_percentage == 60

    def test_event_carries_auto_approved_status(self):
        review = _make_review(auto_approve=True)
        assert review._events[0].status == ReviewStatus.APPROVED.value
