"""Inbound cross-domain event handler — Course Reviews reacts to Commerce events.

Keeps the CoursePurchase projection current so the eligibility check can
require a completed purchase before a learner reviews a course.

Cross-domain events are imported from shared.events.commerce and registered
as external events via course_reviews.register_external_event().
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.commerce import PurchaseCompleted, PurchaseRefunded

from course_reviews.domain import course_reviews
from course_reviews.projections.course_purchases import CoursePurchase, PurchaseStatus
from course_reviews.review.review import Review

logger = structlog.get_logger(__name__)

course_reviews.register_external_event(PurchaseCompleted, "Commerce.PurchaseCompleted.v1")
course_reviews.register_external_event(PurchaseRefunded, "Commerce.PurchaseRefunded.v1")


@course_reviews.event_handler(part_of=Review, stream_category="commerce::purchase")
class CommerceEventsHandler:
    """Reacts to Commerce domain events to track course purchases."""

    @handle(PurchaseCompleted)
    def on_purchase_completed(self, event: PurchaseCompleted) -> None:
        repo = current_domain.repository_for(CoursePurchase)
        repo.add(
            CoursePurchase(
                purchase_id=str(event.purchase_id),
                user_id=str(event.user_id),
                course_id=str(event.course_id),
                status=PurchaseStatus.COMPLETED.value,
                completed_at=event.completed_at,
            )
        )
        logger.info(
            "Course purchase recorded",
            purchase_id=str(event.purchase_id),
            user_id=str(event.user_id),
            course_id=str(event.course_id),
        )

    @handle(PurchaseRefunded)
    def on_purchase_refunded(self, event: PurchaseRefunded) -> None:
        repo = current_domain.repository_for(CoursePurchase)
        try:
            purchase = repo.get(str(event.purchase_id))
        except ObjectNotFoundError:
            logger.warning("Refund for unknown purchase, skipping", purchase_id=str(event.purchase_id))
            return

        purchase.status = PurchaseStatus.REFUNDED.value
        purchase.refunded_at = event.refunded_at
        repo.add(purchase)
