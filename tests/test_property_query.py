"""
Tests for the property search query builder.
Covers clause order, parameter order, price conversion and the
WHERE/AND grammar for every subset of filters.
"""

import itertools
import re

import pytest

from repositories.property_query import PropertySearchFilters, build_property_search_query
from utils.exceptions import InvalidInputError

ALL_FILTERS = {
    "city": "Vancouver",
    "owner_id": 3,
    "minimum_price_per_night": 50,
    "maximum_price_per_night": 100,
    "minimum_rating": 4,
}


def clause_positions(sql: str) -> list:
    keywords = ["SELECT", "FROM", "JOIN", "WHERE", "GROUP BY", "HAVING", "ORDER BY", "LIMIT"]
    return [sql.find(k) for k in keywords if k in sql]


class TestClauseAssembly:
    """Clause order and grammar."""

    def test_no_filters(self):
        """Only the mandatory clauses are emitted."""
        sql, params = build_property_search_query({})

        assert "WHERE" not in sql
        assert "HAVING" not in sql
        assert "AND" not in sql
        assert "GROUP BY properties.id" in sql
        assert "ORDER BY properties.cost_per_night" in sql
        assert sql.rstrip().endswith("LIMIT %s;")
        assert params == [10]

    def test_all_filters_in_order(self):
        """Every clause appears in the fixed order."""
        sql, params = build_property_search_query(ALL_FILTERS, 20)

        positions = clause_positions(sql)
        assert positions == sorted(positions)
        assert len(positions) == 8
        assert params == ["%Vancouver%", 3, 5000, 10000, 4, 20]

    def test_owner_only_opens_where(self):
        """Without a city, the owner filter opens the WHERE clause."""
        sql, params = build_property_search_query({"owner_id": 7})

        assert "WHERE properties.owner_id = %s" in sql
        assert not re.search(r"JOIN[^\n]*\n\s*AND", sql)
        assert params == [7, 10]

    @pytest.mark.parametrize(
        "keys",
        [combo for n in range(len(ALL_FILTERS) + 1) for combo in itertools.combinations(ALL_FILTERS, n)],
    )
    def test_every_filter_subset_is_well_formed(self, keys):
        """WHERE appears once before any AND, and placeholders match parameters."""
        options = {k: ALL_FILTERS[k] for k in keys}
        sql, params = build_property_search_query(options)

        assert sql.count("%s") == len(params)
        where_filters = set(keys) - {"minimum_rating"}
        if where_filters:
            assert sql.count("WHERE") == 1
            assert sql.count(" AND ") == len(where_filters) - 1
            assert sql.find("WHERE") < sql.find("GROUP BY")
        else:
            assert "WHERE" not in sql
            assert " AND " not in sql
        assert ("HAVING" in sql) == ("minimum_rating" in keys)
        assert params[-1] == 10

    def test_rating_bound_after_group_by(self):
        """minimum_rating filters the aggregate in HAVING."""
        sql, params = build_property_search_query({"city": "van", "minimum_rating": "3.5"})

        assert sql.find("GROUP BY") < sql.find("HAVING AVG(property_reviews.rating) >= %s")
        assert params == ["%van%", 3.5, 10]

    def test_city_is_case_insensitive_substring(self):
        sql, params = build_property_search_query({"city": "  vancouver "})

        assert "properties.city ILIKE %s" in sql
        assert params[0] == "%vancouver%"

    @pytest.mark.parametrize("city, bound", [
        ("%", "%\\%%"),
        ("st_jean", "%st\\_jean%"),
        ("a\\b", "%a\\\\b%"),
    ])
    def test_city_wildcards_match_literally(self, city, bound):
        """LIKE wildcards typed into the city box do not widen the match."""
        _, params = build_property_search_query({"city": city})
        assert params[0] == bound


class TestParameters:
    """Parameter coercion and conversion."""

    def test_prices_converted_to_cents(self):
        _, params = build_property_search_query(
            {"minimum_price_per_night": "50", "maximum_price_per_night": "100"}
        )
        assert params == [5000, 10000, 10]

    def test_fractional_price(self):
        _, params = build_property_search_query({"minimum_price_per_night": "0.29"})
        assert params[0] == 29

    def test_numeric_strings_coerced(self):
        _, params = build_property_search_query({"owner_id": "12"}, "5")
        assert params == [12, 5]

    def test_falsy_filters_ignored(self):
        sql, params = build_property_search_query(
            {"city": "", "owner_id": 0, "minimum_price_per_night": "", "minimum_rating": None}
        )
        assert "WHERE" not in sql
        assert params == [10]

    def test_unknown_options_ignored(self):
        sql, params = build_property_search_query({"color": "blue", "city": "Paris"})
        assert params == ["%Paris%", 10]

    @pytest.mark.parametrize("limit", [None, 0, ""])
    def test_falsy_limit_defaults(self, limit):
        _, params = build_property_search_query({}, limit)
        assert params == [10]

    def test_negative_limit_rejected(self):
        with pytest.raises(InvalidInputError):
            build_property_search_query({}, -1)

    @pytest.mark.parametrize("key", ["owner_id", "minimum_price_per_night", "maximum_price_per_night", "minimum_rating"])
    def test_non_numeric_filter_rejected(self, key):
        with pytest.raises(InvalidInputError) as exc_info:
            build_property_search_query({key: "abc"})
        assert exc_info.value.field == key


class TestPropertySearchFilters:
    """Building filters from caller options."""

    def test_from_options(self):
        filters = PropertySearchFilters.from_options({
            "city": "Vancouver",
            "owner_id": "3",
            "minimum_price_per_night": "50",
            "maximum_price_per_night": "",
            "minimum_rating": "4",
        })
        assert filters == PropertySearchFilters(
            city="Vancouver", owner_id=3, minimum_price_per_night=50, minimum_rating=4
        )

    def test_from_none(self):
        assert PropertySearchFilters.from_options(None) == PropertySearchFilters()

    def test_dataclass_input(self):
        filters = PropertySearchFilters(owner_id=4, maximum_price_per_night=80)
        sql, params = build_property_search_query(filters, 3)

        assert "WHERE properties.owner_id = %s\n  AND properties.cost_per_night <= %s" in sql
        assert params == [4, 8000, 3]
