"""Inbound cross-domain event handler — Course Reviews reacts to Catalogue events.

Maintains the ActiveCourseVersion projection: one row per course holding
the live version and its chapter count.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.catalogue import ChapterCountChanged, CourseVersionActivated

from course_reviews.domain import course_reviews
from course_reviews.projections.active_course_versions import ActiveCourseVersion
from course_reviews.review.review import Review

logger = structlog.get_logger(__name__)

course_reviews.register_external_event(CourseVersionActivated, "Catalogue.CourseVersionActivated.v1")
course_reviews.register_external_event(ChapterCountChanged, "Catalogue.ChapterCountChanged.v1")


@course_reviews.event_handler(part_of=Review, stream_category="catalogue::course")
class CatalogueEventsHandler:
    """Reacts to Catalogue domain events to track each course's active version."""

    @handle(CourseVersionActivated)
    def on_course_version_activated(self, event: CourseVersionActivated) -> None:
        repo = current_domain.repository_for(ActiveCourseVersion)
        try:
            active = repo.get(str(event.course_id))
            active.version_id = str(event.version_id)
            active.title = event.title
            active.slug = event.slug
            active.chapter_count = event.chapter_count
            active.activated_at = event.activated_at
            active.updated_at = event.activated_at
        except ObjectNotFoundError:
            active = ActiveCourseVersion(
                course_id=str(event.course_id),
                version_id=str(event.version_id),
                title=event.title,
                slug=event.slug,
                chapter_count=event.chapter_count,
                activated_at=event.activated_at,
                updated_at=event.activated_at,
            )
        repo.add(active)

    @handle(ChapterCountChanged)
    def on_chapter_count_changed(self, event: ChapterCountChanged) -> None:
        repo = current_domain.repository_for(ActiveCourseVersion)
        try:
            active = repo.get(str(event.course_id))
        except ObjectNotFoundError:
            logger.info("Chapter count for a course with no active version", course_id=str(event.course_id))
            return

        # Only the live version's chapter count matters for eligibility
        if active.version_id != str(event.version_id):
            return

        active.chapter_count = event.chapter_count
        active.updated_at = event.changed_at
        repo.add(active)
