"""Review aggregate (CQRS) — the core of the Course Reviews domain.

The Review aggregate manages the full lifecycle of a learner's course
review: submission, owner edits, moderation, helpfulness votes, the single
admin response, and deletion.

CQRS (not event sourced) — reviews are write-once-mostly with simple state
transitions and no temporal query needs.

Ratings are stored in half-star units (10 = 1.0 star, 50 = 5.0 stars).

Helpfulness votes are child entities of the review and the two counters
sit on the review itself, so a vote row and its counter deltas are always
persisted by the same repository write.

State Machine (4 states):
    PENDING  → APPROVED | REJECTED | FLAGGED
    APPROVED → APPROVED | REJECTED | FLAGGED | PENDING (owner edits content)
    FLAGGED  → APPROVED | REJECTED
    REJECTED → APPROVED
"""

from datetime import UTC, datetime, timedelta
from enum import Enum
from uuid import UUID, uuid5

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from course_reviews.domain import course_reviews
from course_reviews.review.events import (
    AdminResponseDeleted,
    AdminResponsePosted,
    HelpfulnessVoteCast,
    HelpfulnessVoteRemoved,
    ReviewApproved,
    ReviewDeleted,
    ReviewEdited,
    ReviewFlagged,
    ReviewRejected,
    ReviewSubmitted,
    VoteCountersReconciled,
)
from course_reviews.review.exceptions import EditWindowExpiredError
from course_reviews.shared.rating import MAX_RATING, MIN_RATING
from course_reviews.shared.timeutils import as_utc

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

MIN_COMMENT_LENGTH = 10
EDIT_WINDOW = timedelta(days=30)

# Namespace for review identities derived from (learner, course)
REVIEW_NAMESPACE = UUID("6f1c2d0e-4b7a-5c39-9e21-8d3f5a7b0c44")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ReviewStatus(Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    FLAGGED = "FLAGGED"


class ModerationAction(Enum):
    APPROVE = "approve"
    REJECT = "reject"
    FLAG = "flag"


# ---------------------------------------------------------------------------
# State Machine
# ---------------------------------------------------------------------------
_VALID_TRANSITIONS = {
    ReviewStatus.PENDING: {ReviewStatus.APPROVED, ReviewStatus.REJECTED, ReviewStatus.FLAGGED},
    ReviewStatus.APPROVED: {
        ReviewStatus.APPROVED,  # Re-approval refreshes the moderator stamp
        ReviewStatus.REJECTED,
        ReviewStatus.FLAGGED,
        ReviewStatus.PENDING,  # Owner edited rating or comment
    },
    ReviewStatus.FLAGGED: {ReviewStatus.APPROVED, ReviewStatus.REJECTED},
    ReviewStatus.REJECTED: {ReviewStatus.APPROVED},
}

ACTION_TARGET_STATUS = {
    ModerationAction.APPROVE: ReviewStatus.APPROVED,
    ModerationAction.REJECT: ReviewStatus.REJECTED,
    ModerationAction.FLAG: ReviewStatus.FLAGGED,
}


def validate_content(rating=_UNSET, comment=_UNSET):
    """Check rating range and comment length before anything is written.

    Only the values that are supplied are checked. An empty comment counts
    as no comment.
    """
    if rating is not _UNSET and rating is not None and not (MIN_RATING <= rating <= MAX_RATING):
        raise ValidationError({"rating": ["Rating must be between 10 and 50 (1.0 to 5.0 stars)"]})

    if comment is not _UNSET and comment and len(comment) < MIN_COMMENT_LENGTH:
        raise ValidationError({"comment": ["Review comment must be at least 10 characters"]})


def review_key(user_id, course_id) -> str:
    """Identity of a learner's review of a course.

    A second review for the same pair collides with the first in the store.
    """
    return str(uuid5(REVIEW_NAMESPACE, f"{user_id}:{course_id}"))


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@course_reviews.entity(part_of="Review")
class ReviewVote:
    """One learner's helpfulness judgment on a review."""

    user_id = Identifier(required=True)
    is_helpful = Boolean(required=True)
    voted_at = DateTime(required=True)
    updated_at = DateTime()


@course_reviews.entity(part_of="Review")
class AdminResponse:
    """The platform's public answer to a review."""

    admin_id = Identifier(required=True)
    content = Text(required=True)
    created_at = DateTime(required=True)
    updated_at = DateTime()


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@course_reviews.aggregate
class Review:
    """A learner's review of a course they purchased.

    One review per learner per course; the uniqueness check lives in the
    submission handler because it spans aggregates.
    """

    # Core identifiers
    user_id = Identifier(required=True)
    course_id = Identifier(required=True)

    # Content
    rating = Integer(required=True)
    title = String(max_length=200)
    comment = Text()
    pros = Text()
    cons = Text()
    would_recommend = Boolean()
    is_anonymous = Boolean(default=False)

    # Frozen at submission
    completion_percentage = Integer(default=0)

    # Moderation
    status = String(choices=ReviewStatus, default=ReviewStatus.PENDING.value)
    moderated_by_id = Identifier()
    moderated_at = DateTime()
    rejection_reason = Text()

    # Voting
    votes = HasMany(ReviewVote)
    helpful_count = Integer(default=0)
    not_helpful_count = Integer(default=0)

    # Admin response (at most one)
    response = HasMany(AdminResponse)

    # Timestamps
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def rating_must_be_in_half_star_range(self):
        if self.rating is not None and not (MIN_RATING <= self.rating <= MAX_RATING):
            raise ValidationError({"rating": ["Rating must be between 10 and 50 (1.0 to 5.0 stars)"]})

    @invariant.post
    def comment_minimum_length(self):
        if self.comment and len(self.comment) < MIN_COMMENT_LENGTH:
            raise ValidationError({"comment": ["Review comment must be at least 10 characters"]})

    @invariant.post
    def vote_counters_cannot_be_negative(self):
        if (self.helpful_count or 0) < 0 or (self.not_helpful_count or 0) < 0:
            raise ValidationError({"votes": ["Vote counters cannot be negative"]})

    @invariant.post
    def at_most_one_admin_response(self):
        if len(self.response) > 1:
            raise ValidationError({"response": ["A review can have at most one admin response"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(
        cls,
        user_id,
        course_id,
        rating,
        completion_percentage,
        title=None,
        comment=None,
        pros=None,
        cons=None,
        would_recommend=None,
        is_anonymous=False,
        auto_approve=False,
    ):
        """Submit a new review. Auto-approved reviews skip the moderation queue."""
        validate_content(rating=rating, comment=comment)

        now = datetime.now(UTC)
        status = ReviewStatus.APPROVED if auto_approve else ReviewStatus.PENDING

        review = cls(
            id=review_key(user_id, course_id),
            user_id=user_id,
            course_id=course_id,
            rating=rating,
            title=title,
            comment=comment,
            pros=pros,
            cons=cons,
            would_recommend=would_recommend,
            is_anonymous=bool(is_anonymous),
            completion_percentage=completion_percentage,
            status=status.value,
            helpful_count=0,
            not_helpful_count=0,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                course_id=str(course_id),
                user_id=str(user_id),
                rating=rating,
                title=title,
                comment=comment,
                status=status.value,
                completion_percentage=completion_percentage,
                is_anonymous=bool(is_anonymous),
                submitted_at=now,
            )
        )

        return review

    # -------------------------------------------------------------------
    # Ownership / edit window
    # -------------------------------------------------------------------
    def is_owned_by(self, user_id) -> bool:
        return str(self.user_id) == str(user_id)

    def assert_editable(self, now=None):
        """Reviews can be edited for 30 days after they were posted."""
        now = as_utc(now or datetime.now(UTC))
        if now - as_utc(self.created_at) > EDIT_WINDOW:
            raise EditWindowExpiredError("Reviews can only be edited within 30 days of posting")

    def _assert_can_transition(self, target_status):
        """Validate state machine transition."""
        current = ReviewStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    # -------------------------------------------------------------------
    # Edit
    # -------------------------------------------------------------------
    def edit(
        self,
        rating=_UNSET,
        title=_UNSET,
        comment=_UNSET,
        pros=_UNSET,
        cons=_UNSET,
        would_recommend=_UNSET,
        is_anonymous=_UNSET,
    ):
        """Apply a partial update from the author.

        Changing the rating or the comment of an approved review sends it
        back to moderation. Other fields leave the status alone.
        """
        self.assert_editable()
        validate_content(rating=rating, comment=comment)

        now = datetime.now(UTC)
        previous = ReviewStatus(self.status)
        content_changed = rating is not _UNSET or comment is not _UNSET

        with atomic_change(self):
            if rating is not _UNSET:
                self.rating = rating
            if title is not _UNSET:
                self.title = title
            if comment is not _UNSET:
                self.comment = comment
            if pros is not _UNSET:
                self.pros = pros
            if cons is not _UNSET:
                self.cons = cons
            if would_recommend is not _UNSET:
                self.would_recommend = would_recommend
            if is_anonymous is not _UNSET:
                self.is_anonymous = bool(is_anonymous)

            if content_changed and previous == ReviewStatus.APPROVED:
                self.status = ReviewStatus.PENDING.value

            self.updated_at = now

        self.raise_(
            ReviewEdited(
                review_id=str(self.id),
                user_id=str(self.user_id),
                rating=rating if rating is not _UNSET else None,
                comment=comment if comment is not _UNSET else None,
                content_changed=content_changed,
                previous_status=previous.value,
                status=self.status,
                edited_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------
    def _stamp_moderation(self, target_status, moderator_id, now, reason=_UNSET):
        with atomic_change(self):
            self.status = target_status.value
            self.moderated_by_id = moderator_id
            self.moderated_at = now
            if reason is not _UNSET:
                self.rejection_reason = reason
            self.updated_at = now

    def approve(self, moderator_id, clear_reason=False):
        """Approve the review for public display.

        The previous rejection reason is kept unless ``clear_reason`` is set.
        """
        self._assert_can_transition(ReviewStatus.APPROVED)

        now = datetime.now(UTC)
        previous = self.status
        self._stamp_moderation(
            ReviewStatus.APPROVED,
            moderator_id,
            now,
            reason=None if clear_reason else _UNSET,
        )

        self.raise_(
            ReviewApproved(
                review_id=str(self.id),
                course_id=str(self.course_id),
                user_id=str(self.user_id),
                rating=self.rating,
                moderator_id=str(moderator_id),
                previous_status=previous,
                approved_at=now,
            )
        )

    def reject(self, moderator_id, reason):
        """Reject the review."""
        if not reason:
            raise ValidationError({"reason": ["Rejection reason is required"]})
        self._assert_can_transition(ReviewStatus.REJECTED)

        now = datetime.now(UTC)
        previous = self.status
        self._stamp_moderation(ReviewStatus.REJECTED, moderator_id, now, reason=reason)

        self.raise_(
            ReviewRejected(
                review_id=str(self.id),
                course_id=str(self.course_id),
                user_id=str(self.user_id),
                moderator_id=str(moderator_id),
                reason=reason,
                previous_status=previous,
                rejected_at=now,
            )
        )

    def flag(self, moderator_id, reason):
        """Flag the review for further inspection."""
        if not reason:
            raise ValidationError({"reason": ["Flag reason is required"]})
        self._assert_can_transition(ReviewStatus.FLAGGED)

        now = datetime.now(UTC)
        previous = self.status
        self._stamp_moderation(ReviewStatus.FLAGGED, moderator_id, now, reason=reason)

        self.raise_(
            ReviewFlagged(
                review_id=str(self.id),
                course_id=str(self.course_id),
                user_id=str(self.user_id),
                moderator_id=str(moderator_id),
                reason=reason,
                previous_status=previous,
                flagged_at=now,
            )
        )

    def moderate(self, action, moderator_id, reason=None, clear_reason=False):
        """Dispatch a moderation action to approve/reject/flag."""
        action = ModerationAction(action)
        if action == ModerationAction.APPROVE:
            self.approve(moderator_id=moderator_id, clear_reason=clear_reason)
        elif action == ModerationAction.REJECT:
            self.reject(moderator_id=moderator_id, reason=reason)
        else:
            self.flag(moderator_id=moderator_id, reason=reason)

    def can_transition_to(self, target_status) -> bool:
        return target_status in _VALID_TRANSITIONS.get(ReviewStatus(self.status), set())

    # -------------------------------------------------------------------
    # Voting
    # -------------------------------------------------------------------
    def vote_of(self, user_id):
        return next((v for v in self.votes if str(v.user_id) == str(user_id)), None)

    def _adjust_counters(self, helpful_delta, not_helpful_delta):
        self.helpful_count = (self.helpful_count or 0) + helpful_delta
        self.not_helpful_count = (self.not_helpful_count or 0) + not_helpful_delta

    def vote(self, user_id, is_helpful):
        """Record, keep, or flip a learner's helpfulness vote.

        Returns False when the learner already cast the same vote.
        """
        is_helpful = bool(is_helpful)
        existing = self.vote_of(user_id)
        if existing is not None and existing.is_helpful == is_helpful:
            return False

        now = datetime.now(UTC)
        delta = 1 if is_helpful else -1

        with atomic_change(self):
            if existing is None:
                self.add_votes(ReviewVote(user_id=user_id, is_helpful=is_helpful, voted_at=now, updated_at=now))
                if is_helpful:
                    self._adjust_counters(1, 0)
                else:
                    self._adjust_counters(0, 1)
            else:
                existing.is_helpful = is_helpful
                existing.updated_at = now
                self._adjust_counters(delta, -delta)
            self.updated_at = now

        self.raise_(
            HelpfulnessVoteCast(
                review_id=str(self.id),
                voter_id=str(user_id),
                is_helpful=is_helpful,
                flipped=existing is not None,
                helpful_count=self.helpful_count,
                not_helpful_count=self.not_helpful_count,
                voted_at=now,
            )
        )
        return True

    def remove_vote(self, user_id):
        """Withdraw a learner's vote and decrement the matching counter."""
        existing = self.vote_of(user_id)
        if existing is None:
            raise ObjectNotFoundError("Vote not found")

        now = datetime.now(UTC)
        was_helpful = existing.is_helpful

        with atomic_change(self):
            self.remove_votes(existing)
            if was_helpful:
                self._adjust_counters(-1, 0)
            else:
                self._adjust_counters(0, -1)
            self.updated_at = now

        self.raise_(
            HelpfulnessVoteRemoved(
                review_id=str(self.id),
                voter_id=str(user_id),
                was_helpful=was_helpful,
                helpful_count=self.helpful_count,
                not_helpful_count=self.not_helpful_count,
                removed_at=now,
            )
        )

    def reconcile_vote_counters(self) -> bool:
        """Rewrite the counters from the vote rows. Returns True if they had drifted."""
        helpful = sum(1 for v in self.votes if v.is_helpful)
        not_helpful = len(self.votes) - helpful
        if helpful == self.helpful_count and not_helpful == self.not_helpful_count:
            return False

        now = datetime.now(UTC)
        previous_helpful, previous_not_helpful = self.helpful_count, self.not_helpful_count

        with atomic_change(self):
            self.helpful_count = helpful
            self.not_helpful_count = not_helpful
            self.updated_at = now

        self.raise_(
            VoteCountersReconciled(
                review_id=str(self.id),
                previous_helpful_count=previous_helpful or 0,
                previous_not_helpful_count=previous_not_helpful or 0,
                helpful_count=helpful,
                not_helpful_count=not_helpful,
                reconciled_at=now,
            )
        )
        return True

    # -------------------------------------------------------------------
    # Admin response
    # -------------------------------------------------------------------
    @property
    def admin_response(self):
        return self.response[0] if self.response else None

    def respond(self, admin_id, content):
        """Create the admin response, or rewrite it in place if one exists."""
        if not content or not content.strip():
            raise ValidationError({"content": ["Response content is required"]})

        now = datetime.now(UTC)
        existing = self.admin_response

        with atomic_change(self):
            if existing is None:
                self.add_response(AdminResponse(admin_id=admin_id, content=content, created_at=now, updated_at=now))
            else:
                existing.admin_id = admin_id
                existing.content = content
                existing.updated_at = now
            self.updated_at = now

        self.raise_(
            AdminResponsePosted(
                review_id=str(self.id),
                admin_id=str(admin_id),
                content=content,
                replaced=existing is not None,
                posted_at=now,
            )
        )
        return self.admin_response

    def withdraw_response(self):
        existing = self.admin_response
        if existing is None:
            raise ObjectNotFoundError("Response not found")

        now = datetime.now(UTC)
        with atomic_change(self):
            self.remove_response(existing)
            self.updated_at = now

        self.raise_(AdminResponseDeleted(review_id=str(self.id), deleted_at=now))

    # -------------------------------------------------------------------
    # Deletion
    # -------------------------------------------------------------------
    def discard(self, deleted_by):
        """Drop votes and the response ahead of deleting the review itself."""
        now = datetime.now(UTC)

        with atomic_change(self):
            for vote in list(self.votes):
                self.remove_votes(vote)
            if self.response:
                self.remove_response(self.response[0])
            self.helpful_count = 0
            self.not_helpful_count = 0

        self.raise_(
            ReviewDeleted(
                review_id=str(self.id),
                course_id=str(self.course_id),
                user_id=str(self.user_id),
                deleted_by=str(deleted_by),
                status=self.status,
                deleted_at=now,
            )
        )
