import unittest
from datetime import datetime, timezone

from wishes_admin.schemas.listing import DateRange, FilterSpec
from wishes_admin.services.query_engine.errors import InvalidFilter
from wishes_admin.services.query_engine.predicates import MATCH_ALL, And, Equals, Or, Range, Regex
from wishes_admin.services.query_engine.query_builder import (
    build,
    coerce_bool,
    coerce_choice,
    coerce_datetime,
)


class CoercionTests(unittest.TestCase):
    def test_boolean_spellings(self):
        for raw in ("true", "TRUE", "1", "yes"):
            self.assertIs(coerce_bool("status", raw), True)
        for raw in ("false", "0", "No"):
            self.assertIs(coerce_bool("status", raw), False)

    def test_absent_boolean_is_not_false(self):
        self.assertIsNone(coerce_bool("status", None))
        self.assertIsNone(coerce_bool("status", ""))
        self.assertIsNone(coerce_bool("status", "   "))

    def test_invalid_boolean_names_the_parameter(self):
        with self.assertRaises(InvalidFilter) as ctx:
            coerce_bool("status", "maybe")
        self.assertEqual(ctx.exception.field, "status")

    def test_only_listed_boolean_spellings_are_accepted(self):
        for raw in ("y", "n", "on", "off", "t", "f"):
            with self.assertRaises(InvalidFilter):
                coerce_bool("status", raw)

    def test_choice_is_normalized_and_validated(self):
        self.assertEqual(coerce_choice("platform", " iOS ", ("android", "ios", "both")), "ios")
        self.assertIsNone(coerce_choice("platform", "", ("android", "ios", "both")))
        with self.assertRaises(InvalidFilter) as ctx:
            coerce_choice("platform", "windows", ("android", "ios", "both"))
        self.assertEqual(ctx.exception.field, "platform")

    def test_free_choice_keeps_case(self):
        self.assertEqual(coerce_choice("category", " Birthday "), "Birthday")

    def test_date_only_end_bound_is_end_of_day(self):
        start = coerce_datetime("startDate", "2026-03-05")
        end = coerce_datetime("endDate", "2026-03-05", end_of_day=True)
        self.assertEqual(start, datetime(2026, 3, 5, tzinfo=timezone.utc))
        self.assertEqual(end, datetime(2026, 3, 5, 23, 59, 59, 999999, tzinfo=timezone.utc))

    def test_day_month_year_and_iso_datetime(self):
        self.assertEqual(coerce_datetime("startDate", "05/03/2026"), datetime(2026, 3, 5, tzinfo=timezone.utc))
        value = coerce_datetime("startDate", "2026-03-05T10:15:00Z")
        self.assertEqual(value, datetime(2026, 3, 5, 10, 15, tzinfo=timezone.utc))

    def test_naive_datetime_is_treated_as_utc(self):
        value = coerce_datetime("startDate", "2026-03-05T10:15:00")
        self.assertEqual(value.tzinfo, timezone.utc)

    def test_invalid_dates(self):
        for raw in ("not-a-date", "2026-13-01", "31/02/2026"):
            with self.assertRaises(InvalidFilter) as ctx:
                coerce_datetime("endDate", raw)
            self.assertEqual(ctx.exception.field, "endDate")


class BuildTests(unittest.TestCase):
    def test_empty_spec_matches_everything(self):
        self.assertEqual(build(FilterSpec()), MATCH_ALL)

    def test_search_only_is_or_of_regex(self):
        predicate = build(FilterSpec(search_fields=("title", "category"), search="bday"))
        self.assertEqual(predicate, Or((Regex("title", "bday"), Regex("category", "bday"))))

    def test_blank_search_is_ignored(self):
        self.assertEqual(build(FilterSpec(search_fields=("title",), search="   ")), MATCH_ALL)

    def test_unset_equals_values_are_skipped(self):
        predicate = build(FilterSpec(equals={"is_active": None, "category": "A"}))
        self.assertEqual(predicate, Equals("category", "A"))

    def test_false_is_a_real_condition(self):
        predicate = build(FilterSpec(equals={"is_active": False}))
        self.assertEqual(predicate, Equals("is_active", False))

    def test_everything_is_anded(self):
        start = datetime(2026, 3, 1, tzinfo=timezone.utc)
        end = datetime(2026, 3, 31, 23, 59, tzinfo=timezone.utc)
        predicate = build(
            FilterSpec(
                search_fields=("title",),
                search="x",
                equals={"is_active": True},
                date_range=DateRange(field="created_at", start=start, end=end),
            )
        )
        self.assertIsInstance(predicate, And)
        self.assertEqual(
            predicate.items,
            (
                Regex("title", "x"),
                Equals("is_active", True),
                Range("created_at", start, end),
            ),
        )

    def test_open_ended_range(self):
        start = datetime(2026, 3, 1, tzinfo=timezone.utc)
        predicate = build(FilterSpec(date_range=DateRange(start=start)))
        self.assertEqual(predicate, Range("created_at", start, None))

    def test_inverted_range_is_rejected(self):
        spec = FilterSpec(
            date_range=DateRange(
                start=datetime(2026, 3, 2, tzinfo=timezone.utc),
                end=datetime(2026, 3, 1, tzinfo=timezone.utc),
            )
        )
        with self.assertRaises(InvalidFilter) as ctx:
            build(spec)
        self.assertEqual(ctx.exception.field, "startDate")
