"""Cross-domain event contracts for Commerce domain events.

These classes define the event shape for consumption by other domains
(e.g., the Course Reviews domain to gate review submission on a completed
purchase). They are registered as external events via
domain.register_external_event() with matching __type__ strings so
Protean's stream deserialization works correctly.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Identifier


class PurchaseCompleted(BaseEvent):
    """A learner's payment for a course was captured."""

    __version__ = 1

    purchase_id = Identifier(required=True)
    user_id = Identifier(required=True)
    course_id = Identifier(required=True)
    completed_at = DateTime(required=True)


class PurchaseRefunded(BaseEvent):
    """A completed course purchase was refunded."""

    __version__ = 1

    purchase_id = Identifier(required=True)
    user_id = Identifier(required=True)
    course_id = Identifier(required=True)
    refunded_at = DateTime(required=True)
