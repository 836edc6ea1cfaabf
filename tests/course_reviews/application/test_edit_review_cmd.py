"""Application tests for the EditReview command handler."""

from datetime import UTC, datetime, timedelta

import pytest
from course_reviews.review.editing import EditReview
from course_reviews.review.exceptions import EditWindowExpiredError, ForbiddenError
from course_reviews.review.moderation import ModerateReview
from course_reviews.review.review import Review, ReviewStatus
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


def _edit(review_id, user_id="learner-1", **changes):
    current_domain.process(EditReview(review_id=review_id, user_id=user_id, **changes), asynchronous=False)
    return current_domain.repository_for(Review).get(review_id)


def _approve(review_id):
    current_domain.process(
        ModerateReview(review_id=review_id, moderator_id="mod-1", action="approve"),
        asynchronous=False,
    )


class TestEditReview:
    def test_partial_update_persists(self, submit):
        review_id = submit(title="Original title")
        review = _edit(review_id, title="New title")
        assert review.title == "New title"
        assert review.rating == 40
        assert review.comment == "Clear and well paced course."

    def test_content_change_returns_approved_review_to_queue(self, submit):
        review_id = submit()
        _approve(review_id)
        review = _edit(review_id, rating=20)
        assert review.status == ReviewStatus.PENDING.value

    def test_non_content_change_keeps_approval(self, submit):
        review_id = submit()
        _approve(review_id)
        review = _edit(review_id, would_recommend=False)
        assert review.status == ReviewStatus.APPROVED.value
        assert review.would_recommend is False

    def test_cleared_fields_are_emptied(self, submit):
        review_id = submit(title="Original title", would_recommend=True)
        review = _edit(review_id, cleared=["title", "would_recommend"])
        assert review.title is None
        assert review.would_recommend is None

    def test_clearing_the_comment_is_a_content_change(self, submit):
        review_id = submit()
        _approve(review_id)
        review = _edit(review_id, cleared=["comment"])
        assert review.comment is None
        assert review.status == ReviewStatus.PENDING.value

    def test_rating_cannot_be_cleared(self, submit):
        review_id = submit()
        with pytest.raises(ValidationError) as exc:
            _edit(review_id, cleared=["rating"])
        assert "rating" in exc.value.messages

    def test_invalid_rating(self, submit):
        review_id = submit()
        with pytest.raises(ValidationError):
            _edit(review_id, rating=60)
        assert current_domain.repository_for(Review).get(review_id).rating == 40


class TestEditGuards:
    def test_missing_review(self):
        with pytest.raises(ObjectNotFoundError):
            _edit("no-such-review", title="Anything")

    def test_other_learner_is_forbidden(self, submit):
        review_id = submit(user_id="learner-1")
        with pytest.raises(ForbiddenError):
            _edit(review_id, user_id="learner-2", title="Hijacked")
        assert current_domain.repository_for(Review).get(review_id).title is None

    def test_window_expired(self, submit):
        review_id = submit()
        repo = current_domain.repository_for(Review)
        review = repo.get(review_id)
        review.created_at = datetime.now(UTC) - timedelta(days=30, minutes=1)
        repo.add(review)

        with pytest.raises(EditWindowExpiredError):
            _edit(review_id, title="Too late")

    def test_inside_window(self, submit):
        review_id = submit()
        repo = current_domain.repository_for(Review)
        review = repo.get(review_id)
        review.created_at = datetime.now(UTC) - timedelta(days=29, hours=23)
        repo.add(review)

        assert _edit(review_id, title="Just in time").title == "Just in time"
