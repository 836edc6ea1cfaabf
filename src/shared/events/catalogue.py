"""Cross-domain event contracts for Catalogue domain events.

Consumed by the Course Reviews domain to know which version of a course is
active and how many chapters it has, which together decide a learner's
completion percentage.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Identifier, Integer, String


class CourseVersionActivated(BaseEvent):
    """A course version became the live version of its course.

    Activating a version replaces whichever version was active before.
    """

    __version__ = 1

    course_id = Identifier(required=True)
    version_id = Identifier(required=True)
    title = String(max_length=255)
    slug = String(max_length=255)
    chapter_count = Integer(required=True, min_value=0)
    activated_at = DateTime(required=True)


class ChapterCountChanged(BaseEvent):
    """Chapters were added to or removed from a course version."""

    __version__ = 1

    course_id = Identifier(required=True)
    version_id = Identifier(required=True)
    chapter_count = Integer(required=True, min_value=0)
    changed_at = DateTime(required=True)
