from datetime import UTC, datetime

import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def course_reviews_bed():
    from course_reviews.domain import course_reviews
    from course_reviews.utils.db import drop_db, setup_db

    bed = DomainFixture(course_reviews)
    bed.setup()
    setup_db(course_reviews)
    yield bed
    drop_db(course_reviews)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(course_reviews_bed):
    from protean import current_domain

    from course_reviews.channel import reset_email_channel
    from course_reviews.utils.db import reset_data

    with course_reviews_bed.domain_context():
        yield
        reset_data(current_domain)
    reset_email_channel()


@pytest.fixture()
def sent_emails():
    """Messages recorded by the fake email adapter during the test."""
    from course_reviews.channel import get_email_channel

    return get_email_channel().sent_emails


@pytest.fixture()
def enroll():
    """Make a learner able (or not) to review a course.

    Records a completed purchase, an active course version with
    ``chapters`` chapters and ``completed`` of them finished, and a learner
    profile. Returns the active version id.
    """
    from protean import current_domain

    from course_reviews.projections.active_course_versions import ActiveCourseVersion
    from course_reviews.projections.chapter_progress import ChapterProgress, progress_key
    from course_reviews.projections.course_purchases import CoursePurchase
    from course_reviews.projections.learners import Learner

    def _enroll(
        user_id,
        course_id,
        completed=5,
        chapters=10,
        purchased=True,
        email_verified=False,
        email=None,
        name="Ada",
        surname="Lovelace",
    ):
        now = datetime.now(UTC)
        version_id = f"{course_id}-v1"

        if purchased:
            current_domain.repository_for(CoursePurchase).add(
                CoursePurchase(
                    purchase_id=f"purchase-{user_id}-{course_id}",
                    user_id=user_id,
                    course_id=course_id,
                    completed_at=now,
                )
            )

        if chapters is not None:
            current_domain.repository_for(ActiveCourseVersion).add(
                ActiveCourseVersion(
                    course_id=course_id,
                    version_id=version_id,
                    chapter_count=chapters,
                    activated_at=now,
                )
            )

        for index in range(completed):
            chapter_id = f"{version_id}-ch{index}"
            current_domain.repository_for(ChapterProgress).add(
                ChapterProgress(
                    progress_id=progress_key(user_id, version_id, chapter_id),
                    user_id=user_id,
                    course_id=course_id,
                    version_id=version_id,
                    chapter_id=chapter_id,
                    is_completed=True,
                    completed_at=now,
                )
            )

        current_domain.repository_for(Learner).add(
            Learner(
                user_id=user_id,
                email=email if email is not None else f"{user_id}@example.com",
                email_verified=email_verified,
                name=name,
                surname=surname,
            )
        )
        return version_id

    return _enroll


@pytest.fixture()
def submit(enroll):
    """Enroll the learner and submit a review through the command handler."""
    from protean import current_domain

    from course_reviews.review.submission import SubmitReview

    def _submit(user_id="learner-1", course_id="course-1", rating=40, comment="Clear and well paced course.", **fields):
        enroll_options = {
            key: fields.pop(key) for key in ("completed", "chapters", "email_verified", "email") if key in fields
        }
        enroll(user_id, course_id, **enroll_options)
        return current_domain.process(
            SubmitReview(user_id=user_id, course_id=course_id, rating=rating, comment=comment, **fields),
            asynchronous=False,
        )

    return _submit
