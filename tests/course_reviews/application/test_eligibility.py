"""Application tests for the review eligibility check."""

from course_reviews.review.eligibility import check_eligibility


class TestPurchaseGate:
    def test_no_purchase(self, enroll):
        enroll("learner-1", "course-1", purchased=False)
        result = check_eligibility("learner-1", "course-1")
        assert result.can_review is False
        assert result.reason == "You must purchase this course to leave a review"
        assert result.completion_percentage == 0
        assert result.has_existing_review is False

    def test_refunded_purchase_does_not_count(self, enroll):
        from course_reviews.projections.course_purchases import CoursePurchase, PurchaseStatus
        from protean import current_domain

        enroll("learner-1", "course-1")
        repo = current_domain.repository_for(CoursePurchase)
        purchase = repo.get("purchase-learner-1-course-1")
        purchase.status = PurchaseStatus.REFUNDED.value
        repo.add(purchase)

        assert check_eligibility("learner-1", "course-1").can_review is False


class TestCourseGate:
    def test_course_without_active_version(self, enroll):
        enroll("learner-1", "course-1", completed=0, chapters=None)
        result = check_eligibility("learner-1", "course-1")
        assert result.can_review is False
        assert result.reason == "Course not found"
        assert result.completion_percentage == 0

    def test_course_without_chapters(self, enroll):
        enroll("learner-1", "course-1", completed=0, chapters=0)
        result = check_eligibility("learner-1", "course-1")
        assert result.can_review is False
        assert result.reason == "Course has no chapters"


class TestProgressGate:
    def test_below_threshold(self, enroll):
        enroll("learner-1", "course-1", completed=1, chapters=10)
        result = check_eligibility("learner-1", "course-1")
        assert result.can_review is False
        assert result.completion_percentage == 10
        assert result.reason == (
            "You need to complete at least 20% of the course to leave a review. Current progress: 10%"
        )

    def test_exactly_at_threshold(self, enroll):
        enroll("learner-1", "course-1", completed=2, chapters=10)
        result = check_eligibility("learner-1", "course-1")
        assert result.can_review is True
        assert result.completion_percentage == 20
        assert result.reason is None

    def test_half_percent_rounds_up_to_threshold(self, enroll):
        # 39 of 200 chapters is 19.5%, which rounds to 20%
        enroll("learner-1", "course-1", completed=39, chapters=200)
        result = check_eligibility("learner-1", "course-1")
        assert result.completion_percentage == 20
        assert result.can_review is True

    def test_just_below_rounds_down(self, enroll):
        enroll("learner-1", "course-1", completed=19, chapters=100)
        result = check_eligibility("learner-1", "course-1")
        assert result.completion_percentage == 19
        assert result.can_review is False

    def test_progress_on_other_learner_is_ignored(self, enroll):
        enroll("learner-2", "course-1", completed=10, chapters=10)
        enroll("learner-1", "course-1", completed=0, chapters=10)
        assert check_eligibility("learner-1", "course-1").completion_percentage == 0

    def test_only_active_version_counts(self, enroll):
        from course_reviews.projections.active_course_versions import ActiveCourseVersion
        from protean import current_domain

        enroll("learner-1", "course-1", completed=5, chapters=10)
        repo = current_domain.repository_for(ActiveCourseVersion)
        active = repo.get("course-1")
        active.version_id = "course-1-v2"
        repo.add(active)

        result = check_eligibility("learner-1", "course-1")
        assert result.completion_percentage == 0
        assert result.can_review is False


class TestExistingReview:
    def test_existing_review_is_reported_but_not_blocking(self, submit):
        submit(user_id="learner-1", course_id="course-1")
        result = check_eligibility("learner-1", "course-1")
        assert result.can_review is True
        assert result.has_existing_review is True
