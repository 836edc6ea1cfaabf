"""Cross-domain event contracts for Learning domain events."""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Identifier


class ChapterCompleted(BaseEvent):
    """A learner finished a chapter of a course version."""

    __version__ = 1

    user_id = Identifier(required=True)
    course_id = Identifier(required=True)
    version_id = Identifier(required=True)
    chapter_id = Identifier(required=True)
    completed_at = DateTime(required=True)


class ChapterProgressReset(BaseEvent):
    """A learner's completion mark on a chapter was cleared."""

    __version__ = 1

    user_id = Identifier(required=True)
    course_id = Identifier(required=True)
    version_id = Identifier(required=True)
    chapter_id = Identifier(required=True)
    reset_at = DateTime(required=True)
