"""
Tests for the filter predicate builder.
"""

import pytest

from app.catalog.errors import ParseSkip
from app.catalog.filters import build_predicate, parse_year_bound
from app.catalog.records import normalize_book
from app.catalog.schemas import FilterSpec


def matching_ids(books, **spec):
    predicate = build_predicate(FilterSpec(**spec))
    return [b.id for b in books if predicate(b)]


class TestBuildPredicate:
    """Each filter dimension, alone and combined."""

    def test_default_spec_matches_everything(self, scenario_books):
        assert matching_ids(scenario_books) == ["1", "2", "3"]

    def test_category_filter(self, scenario_books):
        assert matching_ids(scenario_books, categories={"DB"}, year="all") == ["1", "3"]

    def test_category_match_is_exact(self, scenario_books):
        assert matching_ids(scenario_books, categories={"db"}) == []

    def test_tags_match_any_overlap(self, scenario_books):
        assert matching_ids(scenario_books, tags={"react", "admin"}) == ["2", "3"]

    def test_author_filter(self, record_factory):
        books = [
            normalize_book(record_factory("1", author="Maria Sidorova")),
            normalize_book(record_factory("2", author="Ivan Smirnov")),
        ]
        assert matching_ids(books, authors={"Ivan Smirnov"}) == ["2"]

    def test_search_is_case_insensitive_over_three_fields(self, record_factory):
        books = [
            normalize_book(record_factory("1", title="PostgreSQL for Developers")),
            normalize_book(record_factory("2", author="Anna Postgres")),
            normalize_book(record_factory("3", description="Tuning POSTGRES queries")),
            normalize_book(record_factory("4", title="React", tags=["postgres"])),
        ]
        assert matching_ids(books, search="postgres") == ["1", "2", "3"]

    def test_empty_search_is_inactive(self, scenario_books):
        assert matching_ids(scenario_books, search="") == ["1", "2", "3"]

    def test_search_is_not_stripped(self, record_factory):
        """Surrounding whitespace is part of the query."""
        books = [
            normalize_book(record_factory("1", title="SQL Basics")),
            normalize_book(record_factory("2", title="NoSQL")),
        ]
        assert matching_ids(books, search="sql ") == ["1"]
        assert matching_ids(books, search=" sql") == []

    def test_whitespace_only_search_still_filters(self, record_factory):
        books = [
            normalize_book(record_factory("1", title="Refactoring", author="Fowler")),
            normalize_book(record_factory("2", title="Clean Code", author="Martin")),
        ]
        assert matching_ids(books, search=" ") == ["2"]

    @pytest.mark.parametrize(
        "bucket,expected",
        [("all", ["1", "2", "3"]), ("2025", ["2"]), ("2024", ["1"]), ("2023-2021", []), ("old", ["3"])],
    )
    def test_year_buckets(self, scenario_books, bucket, expected):
        assert matching_ids(scenario_books, year=bucket) == expected

    def test_year_range_bucket_bounds_are_inclusive(self, record_factory):
        books = [normalize_book(record_factory(str(y), year=y)) for y in range(2019, 2026)]
        assert matching_ids(books, year="2023-2021") == ["2021", "2022", "2023"]

    def test_year_from(self, scenario_books):
        assert matching_ids(scenario_books, year_from="2021") == ["1", "2"]

    def test_year_to_accepts_integers(self, scenario_books):
        assert matching_ids(scenario_books, year_to=2024) == ["1", "3"]

    def test_year_range_both_bounds(self, scenario_books):
        assert matching_ids(scenario_books, year_from="2021", year_to="2024") == ["1"]

    @pytest.mark.parametrize("bound", ["abc", "", "  ", "year", "٢٠٢١"])
    def test_unparsable_bound_is_ignored(self, scenario_books, bound):
        assert matching_ids(scenario_books, year_from=bound, year_to=bound) == ["1", "2", "3"]

    @pytest.mark.parametrize("bound", [2021.5, ["2021"], {"year": 2021}, True])
    def test_bound_of_any_type_is_accepted_and_skipped(self, scenario_books, bound):
        """Bounds that are neither ints nor text never fail the FilterSpec."""
        spec = FilterSpec(year_from=bound, year_to=bound)
        predicate = build_predicate(spec)
        assert [b.id for b in scenario_books if predicate(b)] == ["1", "2", "3"]

    def test_leading_integer_is_used(self, scenario_books):
        assert matching_ids(scenario_books, year_from="2021abc") == ["1", "2"]

    def test_bucket_and_range_both_narrow(self, scenario_books):
        assert matching_ids(scenario_books, year="2024", year_from="2025") == []
        assert matching_ids(scenario_books, year="old", year_to="2022") == ["3"]

    def test_adding_dimensions_never_increases_matches(self, scenario_books):
        steps = [
            {},
            {"tags": {"sql", "js"}},
            {"tags": {"sql", "js"}, "year_from": "2021"},
            {"tags": {"sql", "js"}, "year_from": "2021", "categories": {"DB"}},
            {"tags": {"sql", "js"}, "year_from": "2021", "categories": {"DB"}, "search": "zzz"},
        ]
        counts = [len(matching_ids(scenario_books, **s)) for s in steps]
        assert counts == sorted(counts, reverse=True)
        assert counts[-1] == 0

    def test_predicate_is_pure(self, scenario_books):
        predicate = build_predicate(FilterSpec(categories={"DB"}))
        first = [b for b in scenario_books if predicate(b)]
        second = [b for b in scenario_books if predicate(b)]
        assert first == second


class TestParseYearBound:
    """Parsing of year bounds typed into the form."""

    @pytest.mark.parametrize("value,expected", [(2021, 2021), ("2021", 2021), (" 2021 ", 2021), ("1999x", 1999)])
    def test_parses(self, value, expected):
        assert parse_year_bound(value) == expected

    @pytest.mark.parametrize("value", ["", "abc", None, True, 20.5, "٢٠٢١", "２０２１"])
    def test_rejects(self, value):
        with pytest.raises(ParseSkip):
            parse_year_bound(value)
