"""CoursePurchase — which learners bought which courses.

Populated by the Commerce cross-domain event handler. A refund flips the
row to REFUNDED rather than deleting it.
"""

from enum import Enum

from protean.fields import DateTime, Identifier, String

from course_reviews.domain import course_reviews


class PurchaseStatus(Enum):
    COMPLETED = "COMPLETED"
    REFUNDED = "REFUNDED"


@course_reviews.projection
class CoursePurchase:
    purchase_id = Identifier(identifier=True, required=True)
    user_id = String(required=True)
    course_id = String(required=True)
    status = String(choices=PurchaseStatus, default=PurchaseStatus.COMPLETED.value)
    completed_at = DateTime()
    refunded_at = DateTime()
