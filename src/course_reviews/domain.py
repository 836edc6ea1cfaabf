"""Course Reviews bounded context — learner reviews, helpfulness votes and moderation.

Handles the review lifecycle (CQRS), eligibility gating on purchase and
course progress, helpfulness voting with denormalized counters, admin
moderation and responses, and aggregate review analytics. Purchases,
course versions, chapter progress and learner profiles arrive from other
domains as events and are kept here as read-only projections.
"""

import structlog
from protean.domain import Domain

course_reviews = Domain(name="course_reviews")

logger = structlog.get_logger(__name__)
