"""Inbound cross-domain event handler — Course Reviews reacts to Learning events."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.learning import ChapterCompleted, ChapterProgressReset

from course_reviews.domain import course_reviews
from course_reviews.projections.chapter_progress import ChapterProgress, progress_key
from course_reviews.review.review import Review

logger = structlog.get_logger(__name__)

course_reviews.register_external_event(ChapterCompleted, "Learning.ChapterCompleted.v1")
course_reviews.register_external_event(ChapterProgressReset, "Learning.ChapterProgressReset.v1")


@course_reviews.event_handler(part_of=Review, stream_category="learning::progress")
class LearningEventsHandler:
    """Keeps chapter completion marks used to compute course progress."""

    @handle(ChapterCompleted)
    def on_chapter_completed(self, event: ChapterCompleted) -> None:
        repo = current_domain.repository_for(ChapterProgress)
        key = progress_key(event.user_id, event.version_id, event.chapter_id)
        try:
            progress = repo.get(key)
        except ObjectNotFoundError:
            progress = ChapterProgress(
                progress_id=key,
                user_id=str(event.user_id),
                course_id=str(event.course_id),
                version_id=str(event.version_id),
                chapter_id=str(event.chapter_id),
            )
        progress.is_completed = True
        progress.completed_at = event.completed_at
        repo.add(progress)

    @handle(ChapterProgressReset)
    def on_chapter_progress_reset(self, event: ChapterProgressReset) -> None:
        repo = current_domain.repository_for(ChapterProgress)
        try:
            progress = repo.get(progress_key(event.user_id, event.version_id, event.chapter_id))
        except ObjectNotFoundError:
            return

        progress.is_completed = False
        progress.completed_at = None
        repo.add(progress)
