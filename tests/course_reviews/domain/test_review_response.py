"""Tests for the admin response — create, upsert, withdraw."""

import pytest
from course_reviews.review.events import AdminResponseDeleted, AdminResponsePosted
from course_reviews.review.review import AdminResponse, Review
from protean.exceptions import ObjectNotFoundError, ValidationError


def _make_review():
    review = Review.submit(
        user_id="learner-001",
        course_id="course-001",
        rating=20,
        completion_percentage=30,
        comment="The audio quality was poor.",
    )
    review._events.clear()
    return review


class TestRespond:
    def test_creates_response(self):
        review = _make_review()
        review.respond(admin_id="admin-1", content="Thanks, we re-recorded chapter 3.")
        assert review.admin_response.content == "Thanks, we re-recorded chapter 3."
        assert str(review.admin_response.admin_id) == "admin-1"

    def test_second_response_updates_in_place(self):
        review = _make_review()
        first = review.respond(admin_id="admin-1", content="First answer")
        review.respond(admin_id="admin-2", content="Revised answer")

        assert len(review.response) == 1
        assert review.admin_response.id == first.id
        assert review.admin_response.content == "Revised answer"
        assert str(review.admin_response.admin_id) == "admin-2"

    def test_upsert_is_flagged_on_event(self):
        review = _make_review()
        review.respond(admin_id="admin-1", content="First answer")
        review.respond(admin_id="admin-1", content="Second answer")
        assert isinstance(review._events[0], AdminResponsePosted)
        assert review._events[0].replaced is False
        assert review._events[1].replaced is True

    @pytest.mark.parametrize("content", ["", "   ", None])
    def test_requires_content(self, content):
        review = _make_review()
        with pytest.raises(ValidationError):
            review.respond(admin_id="admin-1", content=content)

    def test_at_most_one_response(self):
        review = _make_review()
        review.respond(admin_id="admin-1", content="Answer")
        with pytest.raises(ValidationError):
            review.add_response(AdminResponse(admin_id="admin-2", content="Another", created_at=review.created_at))


class TestWithdrawResponse:
    def test_removes_response(self):
        review = _make_review()
        review.respond(admin_id="admin-1", content="Answer")
        review._events.clear()
        review.withdraw_response()
        assert review.admin_response is None
        assert isinstance(review._events[0], AdminResponseDeleted)

    def test_missing_response_raises_not_found(self):
        review = _make_review()
        with pytest.raises(ObjectNotFoundError):
            review.withdraw_response()
