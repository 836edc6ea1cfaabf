"""ChapterProgress — per-learner completion marks on the chapters of a course version."""

from protean.fields import Boolean, DateTime, Identifier, String

from course_reviews.domain import course_reviews


def progress_key(user_id, version_id, chapter_id) -> str:
    return f"{user_id}:{version_id}:{chapter_id}"


@course_reviews.projection
class ChapterProgress:
    progress_id = Identifier(identifier=True, required=True)
    user_id = String(required=True)
    course_id = String()
    version_id = String(required=True)
    chapter_id = String(required=True)
    is_completed = Boolean(default=False)
    completed_at = DateTime()
