"""EditReview — the author changes their review.

Only the author can edit, and only within 30 days of posting. Changing the
rating or the comment of an approved review sends it back to moderation.
Fields left out of the command are unchanged. Optional fields named in
``cleared`` are set to nothing; rating and anonymity always keep a value.
"""

import structlog
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, Integer, List, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from course_reviews.domain import course_reviews
from course_reviews.review.exceptions import ForbiddenError
from course_reviews.review.review import Review

logger = structlog.get_logger(__name__)

_EDITABLE_FIELDS = ("rating", "title", "comment", "pros", "cons", "would_recommend", "is_anonymous")
_CLEARABLE_FIELDS = ("title", "comment", "pros", "cons", "would_recommend")


@course_reviews.command(part_of="Review")
class EditReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)  # Must match original author
    rating = Integer()
    title = String(max_length=200)
    comment = Text()
    pros = Text()
    cons = Text()
    would_recommend = Boolean()
    is_anonymous = Boolean()
    cleared = List(content_type=String)  # Fields explicitly set to null


@course_reviews.command_handler(part_of=Review)
class EditReviewHandler:
    @handle(EditReview)
    def edit_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        if not review.is_owned_by(command.user_id):
            raise ForbiddenError("You can only edit your own reviews")

        # Only forward fields that were actually supplied
        changes = {}
        for field in _EDITABLE_FIELDS:
            value = getattr(command, field)
            if value is not None:
                changes[field] = value

        for field in command.cleared or []:
            if field not in _CLEARABLE_FIELDS:
                raise ValidationError({field: [f"{field} cannot be cleared"]})
            changes[field] = None

        review.edit(**changes)
        repo.add(review)

        logger.info("Review edited", review_id=str(review.id), status=review.status, fields=sorted(changes))
