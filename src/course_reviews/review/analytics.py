"""Platform-wide review analytics over a window of submission dates.

The window covers ``created_at`` and includes both ends. When no bounds
are given it spans the last 30 days up to now.
"""

from collections import Counter
from datetime import UTC, datetime, timedelta

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from course_reviews.review.review import Review, ReviewStatus
from course_reviews.shared.rating import mean_stars, percentage, rating_distribution
from course_reviews.shared.timeutils import as_utc

DEFAULT_WINDOW = timedelta(days=30)


def _window(start_date, end_date):
    end = as_utc(end_date) if end_date else datetime.now(UTC)
    start = as_utc(start_date) if start_date else end - DEFAULT_WINDOW
    if start > end:
        raise ValidationError({"start_date": ["Start date must not be after end date"]})
    return start, end


def review_analytics(start_date=None, end_date=None) -> dict:
    start, end = _window(start_date, end_date)

    in_window = current_domain.repository_for(Review).matching(created_at__gte=start, created_at__lte=end)

    by_status = Counter(review.status for review in in_window)
    approved_ratings = [r.rating for r in in_window if r.status == ReviewStatus.APPROVED.value]
    per_day = Counter(as_utc(r.created_at).date().isoformat() for r in in_window)

    total = len(in_window)
    approved = by_status[ReviewStatus.APPROVED.value]

    return {
        "start_date": start,
        "end_date": end,
        "total_reviews": total,
        "pending_reviews": by_status[ReviewStatus.PENDING.value],
        "approved_reviews": approved,
        "rejected_reviews": by_status[ReviewStatus.REJECTED.value],
        "flagged_reviews": by_status[ReviewStatus.FLAGGED.value],
        "average_rating": mean_stars(approved_ratings),
        "rating_distribution": rating_distribution(approved_ratings),
        "reviews_over_time": [{"date": day, "count": per_day[day]} for day in sorted(per_day)],
        "approval_rate": percentage(approved, total),
    }
