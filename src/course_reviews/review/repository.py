"""Repository for the Review aggregate.

The base repository provides standard CRUD operations. The methods here
cover the cross-aggregate lookups used by submission and the filtered,
ordered and paged reads behind the listing and analytics queries. Ordering
and paging happen in the store so a page never loads the whole table.
"""

from course_reviews.domain import course_reviews
from course_reviews.review.review import Review, ReviewStatus


@course_reviews.repository(part_of=Review)
class ReviewRepository:
    def _filtered(self, criteria):
        """Queryset for the given lookups. ``None`` values are dropped."""
        lookups = {key: value for key, value in criteria.items() if value is not None}
        return self._dao.query.filter(**lookups) if lookups else self._dao.query

    def _fetch_all(self, queryset) -> list[Review]:
        """Materialize every match, not only the DAO's default page."""
        total = queryset.all().total
        return list(queryset.limit(max(total, 1)).all().items)

    def find_by_learner_and_course(self, user_id, course_id) -> Review | None:
        """The learner's review of a course, if they wrote one."""
        result = self._dao.query.filter(user_id=str(user_id), course_id=str(course_id)).all()
        return result.items[0] if result.items else None

    def count_approved_by_user(self, user_id) -> int:
        return self._dao.query.filter(user_id=str(user_id), status=ReviewStatus.APPROVED.value).all().total

    def page(self, ordering: list[str], offset: int, limit: int, **criteria) -> tuple[list[Review], int]:
        """One page of matching reviews plus the total number of matches."""
        result = self._filtered(criteria).order_by(ordering).offset(offset).limit(limit).all()
        return list(result.items), result.total

    def matching(self, **criteria) -> list[Review]:
        """All reviews matching the given lookups (``created_at__gte=...`` etc.)."""
        return self._fetch_all(self._filtered(criteria))

    def everything(self) -> list[Review]:
        return self._fetch_all(self._dao.query)
