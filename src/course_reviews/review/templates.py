"""Email templates for moderation outcomes."""


class ReviewApprovedTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("name") or "there"
        return {
            "subject": "Your review has been published",
            "body": (
                f"Hi {name},\n\n"
                "Great news! Your course review has been approved and is now "
                "visible to other learners.\n\n"
                "Thank you for sharing your experience."
            ),
        }


class ReviewRejectedTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("name") or "there"
        reason = context.get("reason") or "It did not meet our community guidelines"
        return {
            "subject": "Update on your review",
            "body": (
                f"Hi {name},\n\n"
                "We were unable to publish your course review.\n\n"
                f"Reason: {reason}\n\n"
                "You can edit your review and it will be checked again."
            ),
        }
