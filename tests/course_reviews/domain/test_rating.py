"""Tests for half-star rating arithmetic."""

import pytest
from course_reviews.shared.rating import (
    average_stars,
    mean_stars,
    percentage,
    rating_distribution,
    round_half_up,
    star_bucket,
)


class TestRoundHalfUp:
    @pytest.mark.parametrize("value,expected", [(2.5, 3), (3.5, 4), (2.4999, 2), (0.5, 1), (0, 0)])
    def test_whole_numbers(self, value, expected):
        assert round_half_up(value) == expected

    def test_one_decimal(self):
        assert round_half_up(3.25, 1) == 3.3


class TestStarBucket:
    @pytest.mark.parametrize(
        "rating,star",
        [(10, 1), (14, 1), (15, 2), (25, 3), (35, 4), (44, 4), (45, 5), (50, 5)],
    )
    def test_half_stars_round_up(self, rating, star):
        assert star_bucket(rating) == star


class TestDistribution:
    def test_all_buckets_present(self):
        assert rating_distribution([]) == {5: 0, 4: 0, 3: 0, 2: 0, 1: 0}

    def test_counts_per_bucket(self):
        assert rating_distribution([50, 45, 40, 15, 10]) == {5: 2, 4: 1, 3: 0, 2: 1, 1: 1}

    def test_out_of_range_ratings_are_ignored(self):
        assert sum(rating_distribution([3, 60]).values()) == 0


class TestAverages:
    def test_average_is_rounded_to_one_decimal(self):
        # (45 + 40 + 40) / 3 = 41.67 → 42 → 4.2
        assert average_stars([45, 40, 40]) == 4.2

    def test_average_rounds_half_up(self):
        # (40 + 45) / 2 = 42.5 → 43 → 4.3
        assert average_stars([40, 45]) == 4.3

    def test_average_of_nothing_is_zero(self):
        assert average_stars([]) == 0

    def test_mean_is_unrounded(self):
        assert mean_stars([40, 45]) == pytest.approx(4.25)


class TestPercentage:
    def test_rounds_half_up(self):
        assert percentage(39, 200) == 20

    def test_zero_whole(self):
        assert percentage(3, 0) == 0

    def test_one_in_three(self):
        assert percentage(1, 3) == 33
