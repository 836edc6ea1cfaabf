"""Tests for Review state machine — every moderation action from every status."""

import pytest
from course_reviews.review.review import ModerationAction, Review, ReviewStatus
from protean.exceptions import ValidationError


def _make_review():
    return Review.submit(
        user_id="learner-001",
        course_id="course-001",
        rating=40,
        completion_percentage=50,
        comment="A thorough and practical course.",
    )


def _review_at_state(target_status):
    """Create a review and advance it to the desired state."""
    review = _make_review()

    if target_status == ReviewStatus.APPROVED:
        review.approve(moderator_id="mod-001")
    elif target_status == ReviewStatus.REJECTED:
        review.reject(moderator_id="mod-001", reason="Off topic")
    elif target_status == ReviewStatus.FLAGGED:
        review.flag(moderator_id="mod-001", reason="Possible spam")

    review._events.clear()
    assert review.status == target_status.value
    return review


ALLOWED = [
    (ReviewStatus.PENDING, ModerationAction.APPROVE, ReviewStatus.APPROVED),
    (ReviewStatus.PENDING, ModerationAction.REJECT, ReviewStatus.REJECTED),
    (ReviewStatus.PENDING, ModerationAction.FLAG, ReviewStatus.FLAGGED),
    (ReviewStatus.APPROVED, ModerationAction.APPROVE, ReviewStatus.APPROVED),
    (ReviewStatus.APPROVED, ModerationAction.REJECT, ReviewStatus.REJECTED),
    (ReviewStatus.APPROVED, ModerationAction.FLAG, ReviewStatus.FLAGGED),
    (ReviewStatus.REJECTED, ModerationAction.APPROVE, ReviewStatus.APPROVED),
    (ReviewStatus.FLAGGED, ModerationAction.APPROVE, ReviewStatus.APPROVED),
    (ReviewStatus.FLAGGED, ModerationAction.REJECT, ReviewStatus.REJECTED),
]

DISALLOWED = [
    (ReviewStatus.REJECTED, ModerationAction.REJECT),
    (ReviewStatus.REJECTED, ModerationAction.FLAG),
    (ReviewStatus.FLAGGED, ModerationAction.FLAG),
]


class TestAllowedTransitions:
    @pytest.mark.parametrize("start,action,expected", ALLOWED)
    def test_transition(self, start, action, expected):
        review = _review_at_state(start)
        review.moderate(action, moderator_id="mod-002", reason="Reviewed again")
        assert review.status == expected.value


class TestDisallowedTransitions:
    @pytest.mark.parametrize("start,action", DISALLOWED)
    def test_transition_is_refused(self, start, action):
        review = _review_at_state(start)
        with pytest.raises(ValidationError) as exc:
            review.moderate(action, moderator_id="mod-002", reason="Again")
        assert "status" in exc.value.messages
        assert review.status == start.value

    @pytest.mark.parametrize("start,action", DISALLOWED)
    def test_refused_transition_raises_no_event(self, start, action):
        review = _review_at_state(start)
        with pytest.raises(ValidationError):
            review.moderate(action, moderator_id="mod-002", reason="Again")
        assert review._events == []


class TestCanTransitionTo:
    def test_rejected_can_only_be_approved(self):
        review = _review_at_state(ReviewStatus.REJECTED)
        assert review.can_transition_to(ReviewStatus.APPROVED)
        assert not review.can_transition_to(ReviewStatus.FLAGGED)
        assert not review.can_transition_to(ReviewStatus.REJECTED)
