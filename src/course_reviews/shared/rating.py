"""Rating arithmetic shared by the lifecycle, statistics and analytics code.

Ratings are integers in half-star units: 10 is one star, 45 is four and a
half stars, 50 is five stars. All rounding is half-up, so 2.5 becomes 3 and
a rating of 15 lands in the two-star bucket.
"""

import math

MIN_RATING = 10
MAX_RATING = 50
STAR_BUCKETS = (5, 4, 3, 2, 1)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round half away from zero for non-negative values (0.5 → 1)."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def percentage(part: int, whole: int) -> int:
    """Whole-number percentage of ``part`` in ``whole``; 0 when ``whole`` is 0."""
    if whole == 0:
        return 0
    return int(round_half_up(part * 100 / whole))


def star_bucket(rating: int) -> int:
    """Map a half-star rating to its whole-star bucket (15 → 2, 44 → 4)."""
    return int(round_half_up(rating / 10))


def empty_distribution() -> dict[int, int]:
    return {star: 0 for star in STAR_BUCKETS}


def rating_distribution(ratings) -> dict[int, int]:
    """Count ratings per whole-star bucket. Buckets outside 1..5 are ignored."""
    distribution = empty_distribution()
    for rating in ratings:
        star = star_bucket(rating)
        if star in distribution:
            distribution[star] += 1
    return distribution


def mean_stars(ratings) -> float:
    """Unrounded mean rating in stars; 0 for no ratings."""
    ratings = list(ratings)
    if not ratings:
        return 0
    return sum(ratings) / len(ratings) / 10


def average_stars(ratings) -> float:
    """Average rating in stars with one decimal place; 0 for no ratings.

    The mean of the half-star units is rounded to a whole unit and then
    scaled down, which keeps exactly one decimal in the result.
    """
    ratings = list(ratings)
    if not ratings:
        return 0
    return round_half_up(sum(ratings) / len(ratings)) / 10
