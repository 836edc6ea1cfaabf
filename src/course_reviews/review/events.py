"""Domain events for the Review aggregate.

All events are versioned, immutable facts representing state changes.
Events are used for:
- Triggering side effects such as moderation emails via event handlers
- Cross-domain communication (e.g. course rating badges in the Catalogue)
"""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from course_reviews.domain import course_reviews


@course_reviews.event(part_of="Review")
class ReviewSubmitted:
    """A learner submitted a review for a course."""

    __version__ = 1

    review_id = Identifier(required=True)
    course_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    title = String()
    comment = Text()
    status = String(required=True)
    completion_percentage = Integer(required=True)
    is_anonymous = Boolean(default=False)
    submitted_at = DateTime(required=True)


@course_reviews.event(part_of="Review")
class ReviewEdited:
    """The author changed their review."""

    __version__ = 1

    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer()
    comment = Text()
    content_changed = Boolean(default=False)
    previous_status = String(required=True)
    status = String(required=True)
    edited_at = DateTime(required=True)


@course_reviews.event(part_of="Review")
class ReviewApproved:
    """A moderator approved the review for public display."""

    __version__ = 1

    review_id = Identifier(required=True)
    course_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    moderator_id = Identifier(required=True)
    previous_status = String(required=True)
    approved_at = DateTime(required=True)


@course_reviews.event(part_of="Review")
class ReviewRejected:
    """A moderator rejected the review."""

    __version__ = 1

    review_id = Identifier(required=True)
    course_id = Identifier(required=True)
    user_id = Identifier(required=True)
    moderator_id = Identifier(required=True)
    reason = String(required=True)
    previous_status = String(required=True)
    rejected_at = DateTime(required=True)


@course_reviews.event(part_of="Review")
class ReviewFlagged:
    """A moderator flagged the review for further inspection."""

    __version__ = 1

    review_id = Identifier(required=True)
    course_id = Identifier(required=True)
    user_id = Identifier(required=True)
    moderator_id = Identifier(required=True)
    reason = String(required=True)
    previous_status = String(required=True)
    flagged_at = DateTime(required=True)


@course_reviews.event(part_of="Review")
class ReviewDeleted:
    """The review was deleted by its author or a moderator."""

    __version__ = 1

    review_id = Identifier(required=True)
    course_id = Identifier(required=True)
    user_id = Identifier(required=True)
    deleted_by = Identifier(required=True)
    status = String(required=True)
    deleted_at = DateTime(required=True)


@course_reviews.event(part_of="Review")
class HelpfulnessVoteCast:
    """A learner voted a review helpful or not helpful, or flipped their vote."""

    __version__ = 1

    review_id = Identifier(required=True)
    voter_id = Identifier(required=True)
    is_helpful = Boolean(required=True)
    flipped = Boolean(default=False)
    helpful_count = Integer(required=True)
    not_helpful_count = Integer(required=True)
    voted_at = DateTime(required=True)


@course_reviews.event(part_of="Review")
class HelpfulnessVoteRemoved:
    """A learner withdrew their helpfulness vote."""

    __version__ = 1

    review_id = Identifier(required=True)
    voter_id = Identifier(required=True)
    was_helpful = Boolean(required=True)
    helpful_count = Integer(required=True)
    not_helpful_count = Integer(required=True)
    removed_at = DateTime(required=True)


@course_reviews.event(part_of="Review")
class VoteCountersReconciled:
    """Stored vote counters disagreed with the vote rows and were rewritten."""

    __version__ = 1

    review_id = Identifier(required=True)
    previous_helpful_count = Integer(required=True)
    previous_not_helpful_count = Integer(required=True)
    helpful_count = Integer(required=True)
    not_helpful_count = Integer(required=True)
    reconciled_at = DateTime(required=True)


@course_reviews.event(part_of="Review")
class AdminResponsePosted:
    """An admin posted or rewrote the response to a review."""

    __version__ = 1

    review_id = Identifier(required=True)
    admin_id = Identifier(required=True)
    content = Text(required=True)
    replaced = Boolean(default=False)
    posted_at = DateTime(required=True)


@course_reviews.event(part_of="Review")
class AdminResponseDeleted:
    """The admin response on a review was deleted."""

    __version__ = 1

    review_id = Identifier(required=True)
    deleted_at = DateTime(required=True)
