"""Protean Engine runner for the Course Reviews domain.

In production the domain processes events asynchronously; the Engine runs
the workers that deliver them:
- OutboxProcessor: publishes committed events to the broker
- StreamSubscriptions: invokes event handlers (inbound projections,
  moderation emails)

Usage:
    python src/server.py
"""

import asyncio

from protean.server.engine import Engine


async def run():
    from course_reviews.domain import course_reviews
    from course_reviews.utils.logging import configure_logging

    configure_logging()
    course_reviews.init()
    await Engine(course_reviews).run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
