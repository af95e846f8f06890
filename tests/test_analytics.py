"""Tests for the pure analytics helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from jobportal.utils.analytics import (
    count_skills,
    last_month_keys,
    month_key,
    month_start,
    percent,
    percentage_change,
    round_half_up,
    time_ago,
    top_skills,
    trend,
)

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


class TestRounding:
    @pytest.mark.parametrize("value,expected", [(0.5, 1), (1.5, 2), (2.5, 3), (2.49, 2), (0, 0)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_percent(self):
        assert percent(2, 3) == 67
        assert percent(1, 8) == 13
        assert percent(1, 4) == 25

    def test_percent_of_nothing(self):
        assert percent(0, 0) == 0
        assert percent(3, 0) == 0


class TestChange:
    def test_percentage_change(self):
        assert percentage_change(3, 2) == 50.0
        assert percentage_change(1, 3) == -66.67

    def test_from_zero(self):
        assert percentage_change(4, 0) == 100.0
        assert percentage_change(0, 0) == 0.0

    def test_trend(self):
        assert trend(2, 1) == "up"
        assert trend(1, 2) == "down"
        assert trend(1, 1) == "stable"


class TestMonths:
    def test_month_key(self):
        assert month_key(NOW) == "2024-03"

    def test_naive_values_are_utc(self):
        assert month_key(datetime(2024, 1, 31, 23, 59)) == "2024-01"

    def test_last_month_keys_wraps_year(self):
        assert last_month_keys(6, now=NOW) == ["2023-10", "2023-11", "2023-12", "2024-01", "2024-02", "2024-03"]

    def test_month_start(self):
        assert month_start(NOW) == datetime(2024, 3, 1, tzinfo=timezone.utc)
        assert month_start(NOW, months_back=5) == datetime(2023, 10, 1, tzinfo=timezone.utc)


class TestTimeAgo:
    @pytest.mark.parametrize("delta,expected", [
        (timedelta(seconds=30), "just now"),
        (timedelta(minutes=1), "1 minute ago"),
        (timedelta(minutes=45), "45 minutes ago"),
        (timedelta(hours=1, minutes=20), "1 hour ago"),
        (timedelta(hours=5), "5 hours ago"),
        (timedelta(days=1, hours=2), "1 day ago"),
        (timedelta(days=12), "12 days ago"),
    ])
    def test_buckets(self, delta, expected):
        assert time_ago(NOW - delta, now=NOW) == expected


class TestSkills:
    def test_case_insensitive_substring(self):
        counts = count_skills(["We use python and DOCKER", "Python, SQL"])

        assert counts["Python"] == 2
        assert counts["Docker"] == 1
        assert counts["SQL"] == 1

    def test_java_also_matches_javascript(self):
        counts = count_skills(["Senior JavaScript developer"])

        assert counts["JavaScript"] == 1
        assert counts["Java"] == 1

    def test_each_text_counts_once(self):
        assert count_skills(["Python python PYTHON"])["Python"] == 1

    def test_empty_texts(self):
        assert count_skills([None, ""]) == {}

    def test_top_skills_limit(self):
        texts = ["Python SQL AWS Docker Git Kubernetes", "Python SQL", "Python"]

        result = top_skills(texts)

        assert len(result) == 5
        assert result[0] == {"skill": "Python", "count": 3}
        assert result[1] == {"skill": "SQL", "count": 2}
