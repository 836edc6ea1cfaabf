"""Course Reviews management CLI.

Creates and drops the database schema, and repairs helpfulness vote
counters that drifted from the stored votes.

Usage:
    python src/manage.py setup-db                        # Create all tables
    python src/manage.py drop-db                         # Drop all tables
    python src/manage.py reconcile-votes                 # Rebuild vote counters on every review
    python src/manage.py reconcile-votes --review-id ID  # ...or only on the given reviews
"""

import argparse
import sys


def _initialized_domain():
    from course_reviews.domain import course_reviews

    course_reviews.init()
    return course_reviews


def setup_database(domain):
    from course_reviews.utils.db import setup_db

    print("Creating course_reviews database schema...")
    setup_db(domain)
    print("Done.")


def drop_database(domain):
    from course_reviews.utils.db import drop_db

    print("Dropping course_reviews database schema...")
    drop_db(domain)
    print("Done.")


def reconcile_votes(domain, review_ids=None):
    """Rebuild vote counters for the given reviews (default: all). Returns the drifted ids."""
    from course_reviews.review.reconciliation import ReconcileVoteCounters
    from course_reviews.review.review import Review

    drifted = []

    with domain.domain_context():
        if not review_ids:
            review_ids = [str(r.id) for r in domain.repository_for(Review).everything()]

        for review_id in review_ids:
            if domain.process(ReconcileVoteCounters(review_id=review_id), asynchronous=False):
                drifted.append(review_id)

    print(f"Checked {len(review_ids)} review(s); {len(drifted)} had drifted counters.")
    for review_id in drifted:
        print(f"  repaired {review_id}")
    return drifted


def main():
    parser = argparse.ArgumentParser(description="Course Reviews management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    reconcile_parser = subparsers.add_parser("reconcile-votes", help="Rebuild helpfulness vote counters")
    reconcile_parser.add_argument(
        "--review-id",
        dest="review_ids",
        action="append",
        help="Specific review(s) to reconcile (default: all)",
    )

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database(_initialized_domain())
    elif args.command == "drop-db":
        drop_database(_initialized_domain())
    elif args.command == "reconcile-votes":
        reconcile_votes(_initialized_domain(), args.review_ids)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
