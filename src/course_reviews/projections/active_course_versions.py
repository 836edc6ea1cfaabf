"""ActiveCourseVersion — the live version of each course and its chapter count.

Keyed by course: a course has at most one active version, and activating a
new one overwrites the row.
"""

from protean.fields import DateTime, Identifier, Integer, String

from course_reviews.domain import course_reviews


@course_reviews.projection
class ActiveCourseVersion:
    course_id = Identifier(identifier=True, required=True)
    version_id = String(required=True)
    title = String(max_length=255)
    slug = String(max_length=255)
    chapter_count = Integer(default=0)
    activated_at = DateTime()
    updated_at = DateTime()
