"""PostAdminResponse / DeleteAdminResponse — the platform answers a review.

A review carries at most one admin response. Posting again rewrites the
existing response in place.
"""

import structlog
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from course_reviews.domain import course_reviews
from course_reviews.review.review import Review

logger = structlog.get_logger(__name__)


@course_reviews.command(part_of="Review")
class PostAdminResponse:
    review_id = Identifier(required=True)
    admin_id = Identifier(required=True)
    content = Text(required=True)


@course_reviews.command(part_of="Review")
class DeleteAdminResponse:
    review_id = Identifier(required=True)


@course_reviews.command_handler(part_of=Review)
class AdminResponseHandler:
    @handle(PostAdminResponse)
    def post_admin_response(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        response = review.respond(admin_id=command.admin_id, content=command.content)
        repo.add(review)

        logger.info("Admin response posted", review_id=str(review.id), admin_id=str(command.admin_id))
        return str(response.id)

    @handle(DeleteAdminResponse)
    def delete_admin_response(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        review.withdraw_response()
        repo.add(review)
