"""ReconcileVoteCounters — rebuild a review's vote counters from its vote rows.

A repair tool for counters that drifted, run from ``manage.py
reconcile-votes``. Normal voting never calls it.
"""

import structlog
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from course_reviews.domain import course_reviews
from course_reviews.review.review import Review

logger = structlog.get_logger(__name__)


@course_reviews.command(part_of="Review")
class ReconcileVoteCounters:
    review_id = Identifier(required=True)


@course_reviews.command_handler(part_of=Review)
class ReconcileVoteCountersHandler:
    @handle(ReconcileVoteCounters)
    def reconcile_vote_counters(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        drifted = review.reconcile_vote_counters()
        if drifted:
            repo.add(review)
            logger.warning(
                "Vote counters drifted and were rebuilt",
                review_id=str(review.id),
                helpful_count=review.helpful_count,
                not_helpful_count=review.not_helpful_count,
            )
        return drifted
