"""VoteOnReview / RemoveVote — learners mark reviews helpful or not helpful.

A learner holds at most one vote per review. Repeating the same vote is a
no-op; voting the other way flips the existing vote. The vote row and the
counter deltas on the review are written together by one repository add.
"""

from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from course_reviews.domain import course_reviews
from course_reviews.review.review import Review


@course_reviews.command(part_of="Review")
class VoteOnReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    is_helpful = Boolean(required=True)


@course_reviews.command(part_of="Review")
class RemoveVote:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)


@course_reviews.command_handler(part_of=Review)
class VotingHandler:
    @handle(VoteOnReview)
    def vote_on_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        if review.vote(user_id=command.user_id, is_helpful=command.is_helpful):
            repo.add(review)

    @handle(RemoveVote)
    def remove_vote(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        review.remove_vote(user_id=command.user_id)
        repo.add(review)
