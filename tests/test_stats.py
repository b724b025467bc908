import unittest
from datetime import date, datetime, timezone

from tests.in_memory_collection import InMemoryCollection
from wishes_admin.schemas.listing import DailyCount
from wishes_admin.services.query_engine.predicates import MATCH_ALL, Equals
from wishes_admin.services.query_engine.stats import aggregate, daily_series, fill_days, safe_average


def _wish(i, status, views, day):
    return {
        "id": i,
        "status": status,
        "views": views,
        "is_active": views > 0,
        "created_at": datetime(2026, 3, day, 10, tzinfo=timezone.utc),
    }


WISHES = [
    _wish(1, "sent", 4, 1),
    _wish(2, "sent", 0, 1),
    _wish(3, "viewed", 7, 2),
    _wish(4, "pending", 0, 4),
    _wish(5, "viewed", 1, 4),
]


class AggregateTests(unittest.TestCase):
    def test_flags_groups_sums(self):
        stats = aggregate(
            InMemoryCollection(WISHES),
            MATCH_ALL,
            ("status",),
            flag_fields=("is_active",),
            sum_fields=("views",),
        )
        self.assertEqual(stats.total, 5)
        self.assertEqual(stats.flags["is_active"].true, 3)
        self.assertEqual(stats.flags["is_active"].false, 2)
        self.assertEqual(
            [(group.key, group.count) for group in stats.groups["status"]],
            [("sent", 2), ("viewed", 2), ("pending", 1)],
        )
        self.assertEqual(stats.sums["views"], 12.0)
        self.assertEqual(stats.averages["views"], 2.4)

    def test_same_predicate_applies_to_every_figure(self):
        stats = aggregate(
            InMemoryCollection(WISHES),
            Equals("status", "viewed"),
            ("status",),
            flag_fields=("is_active",),
            sum_fields=("views",),
        )
        self.assertEqual(stats.total, 2)
        self.assertEqual(stats.flags["is_active"].true, 2)
        self.assertEqual(stats.flags["is_active"].false, 0)
        self.assertEqual(stats.sums["views"], 8.0)

    def test_no_matches_gives_zeros(self):
        stats = aggregate(
            InMemoryCollection(WISHES),
            Equals("status", "expired"),
            ("status",),
            flag_fields=("is_active",),
            sum_fields=("views",),
        )
        self.assertEqual(stats.total, 0)
        self.assertEqual(stats.groups, {"status": []})
        self.assertEqual(stats.flags["is_active"].true, 0)
        self.assertEqual(stats.averages, {"views": 0.0})

    def test_safe_average(self):
        self.assertEqual(safe_average(0, 0), 0.0)
        self.assertEqual(safe_average(10, 3), 3.3)
        self.assertEqual(safe_average(10, 3, digits=2), 3.33)


class DailySeriesTests(unittest.TestCase):
    def test_daily_series_with_sum(self):
        series = daily_series(InMemoryCollection(WISHES), MATCH_ALL, sum_field="views")
        self.assertEqual(
            [(point.date, point.count, point.sum) for point in series],
            [("2026-03-01", 2, 4.0), ("2026-03-02", 1, 7.0), ("2026-03-04", 2, 1.0)],
        )

    def test_fill_days_zero_fills_gaps(self):
        series = [DailyCount(date="2026-03-02", count=3)]
        filled = fill_days(series, last_day=date(2026, 3, 4), days=4)
        self.assertEqual(
            [(point.date, point.count) for point in filled],
            [("2026-03-01", 0), ("2026-03-02", 3), ("2026-03-03", 0), ("2026-03-04", 0)],
        )
