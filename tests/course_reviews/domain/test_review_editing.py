"""Tests for owner edits — partial updates, re-moderation and the 30-day window."""

from datetime import UTC, datetime, timedelta

import pytest
from course_reviews.review.events import ReviewEdited
from course_reviews.review.exceptions import EditWindowExpiredError
from course_reviews.review.review import Review, ReviewStatus
from protean.exceptions import ValidationError


def _make_review(approved=False):
    review = Review.submit(
        user_id="learner-001",
        course_id="course-001",
        rating=40,
        completion_percentage=50,
        title="Good course",
        comment="Covers the basics in a clear way.",
        pros="Short videos",
    )
    if approved:
        review.approve(moderator_id="mod-001")
    review._events.clear()
    return review


class TestPartialUpdate:
    def test_only_supplied_fields_change(self):
        review = _make_review()
        review.edit(title="Great course")
        assert review.title == "Great course"
        assert review.rating == 40
        assert review.comment == "Covers the basics in a clear way."
        assert review.pros == "Short videos"

    def test_edit_raises_event(self):
        review = _make_review()
        review.edit(rating=50)
        event = review._events[0]
        assert isinstance(event, ReviewEdited)
        assert event.content_changed is True
        assert event.rating == 50

    def test_invalid_rating_is_rejected(self):
        review = _make_review()
        with pytest.raises(ValidationError) as exc:
            review.edit(rating=55)
        assert exc.value.messages["rating"] == ["Rating must be between 10 and 50 (1.0 to 5.0 stars)"]
        assert review.rating == 40

    def test_short_comment_is_rejected(self):
        review = _make_review()
        with pytest.raises(ValidationError):
            review.edit(comment="meh")


class TestReModeration:
    def test_rating_change_sends_approved_review_back_to_pending(self):
        review = _make_review(approved=True)
        review.edit(rating=20)
        assert review.status == ReviewStatus.PENDING.value

    def test_comment_change_sends_approved_review_back_to_pending(self):
        review = _make_review(approved=True)
        review.edit(comment="Changed my mind after finishing it.")
        assert review.status == ReviewStatus.PENDING.value
        assert review._events[0].previous_status == ReviewStatus.APPROVED.value

    def test_title_change_keeps_approval(self):
        review = _make_review(approved=True)
        review.edit(title="Still great")
        assert review.status == ReviewStatus.APPROVED.value
        assert review._events[0].content_changed is False

    def test_pending_review_stays_pending(self):
        review = _make_review()
        review.edit(rating=35)
        assert review.status == ReviewStatus.PENDING.value

    def test_rejected_review_stays_rejected(self):
        review = _make_review()
        review.reject(moderator_id="mod-001", reason="Spam")
        review.edit(comment="Rewritten without the links.")
        assert review.status == ReviewStatus.REJECTED.value


class TestEditWindow:
    def test_just_inside_window_is_editable(self):
        review = _make_review()
        now = datetime.now(UTC)
        review.created_at = now - timedelta(days=30) + timedelta(milliseconds=1)
        review.assert_editable(now)

    def test_exactly_thirty_days_is_editable(self):
        review = _make_review()
        now = datetime.now(UTC)
        review.created_at = now - timedelta(days=30)
        review.assert_editable(now)

    def test_just_outside_window_is_refused(self):
        review = _make_review()
        now = datetime.now(UTC)
        review.created_at = now - timedelta(days=30) - timedelta(milliseconds=1)
        with pytest.raises(EditWindowExpiredError):
            review.assert_editable(now)

    def test_edit_on_old_review_changes_nothing(self):
        review = _make_review()
        review.created_at = datetime.now(UTC) - timedelta(days=31)
        with pytest.raises(EditWindowExpiredError):
            review.edit(title="Too late")
        assert review.title == "Good course"
