"""Email channel registry for moderation notices.

Provides singleton access to the configured email adapter. The fake adapter
is the default; ``EMAIL_ADAPTER`` selects another adapter by name.
"""

import os

_email_instance = None


def get_email_channel():
    """Return the configured email adapter (singleton)."""
    global _email_instance
    if _email_instance is None:
        adapter = os.environ.get("EMAIL_ADAPTER", "fake").lower()
        if adapter == "fake":
            from course_reviews.channel.fake_email import FakeEmailAdapter

            _email_instance = FakeEmailAdapter()
        else:
            raise ValueError(f"Unknown email adapter: {adapter}")

    return _email_instance


def reset_email_channel():
    """Reset the email singleton (useful for testing)."""
    global _email_instance
    _email_instance = None
