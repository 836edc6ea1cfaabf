"""Course Reviews API package."""

from course_reviews.api.errors import register_review_exception_handlers
from course_reviews.api.routes import admin_router, course_router, review_router, user_router

__all__ = [
    "course_router",
    "review_router",
    "user_router",
    "admin_router",
    "register_review_exception_handlers",
]
