"""
repositories/property_query.py
------------------------------
Builds the parameterized SELECT behind property search.

Clause order is fixed:
    SELECT .. FROM .. JOIN -> WHERE (filters) -> GROUP BY
    -> HAVING (minimum rating) -> ORDER BY cost -> LIMIT

Filters are collected as a list of predicates first and joined afterwards,
so any subset of them yields valid SQL.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from config import DEFAULT_RESULT_LIMIT
from utils.validators import Number, optional_str, to_cents, to_int, to_limit, to_number

BASE_SELECT = """
SELECT properties.*, AVG(property_reviews.rating) AS average_rating
FROM properties
JOIN property_reviews ON property_reviews.property_id = properties.id
""".strip()


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the text matches literally (backslash is the default escape)."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass
class PropertySearchFilters:
    """
    Optional property search filters. A filter is applied only when truthy.

    Attributes:
        city: Substring of the city name, matched case-insensitively.
            `%` and `_` are matched literally.
        owner_id: Only properties owned by this user.
        minimum_price_per_night: Lower price bound in major currency units.
        maximum_price_per_night: Upper price bound in major currency units.
        minimum_rating: Lower bound on the average review rating.
    """
    city: Optional[str] = None
    owner_id: Optional[int] = None
    minimum_price_per_night: Optional[Number] = None
    maximum_price_per_night: Optional[Number] = None
    minimum_rating: Optional[Number] = None

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]]) -> "PropertySearchFilters":
        """
        Build filters from a caller's options dict (typically a parsed query string).

        Unknown keys are ignored and blank values count as absent.

        Raises:
            InvalidInputError: If a numeric filter is not a number.
        """
        options = options or {}

        def number(key):
            value = options.get(key)
            if isinstance(value, str):
                value = value.strip()
            return to_number(value, key) if value else None

        owner_id = options.get("owner_id")
        if isinstance(owner_id, str):
            owner_id = owner_id.strip()
        return cls(
            city=optional_str(options.get("city")),
            owner_id=to_int(owner_id, "owner_id") if owner_id else None,
            minimum_price_per_night=number("minimum_price_per_night"),
            maximum_price_per_night=number("maximum_price_per_night"),
            minimum_rating=number("minimum_rating"),
        )


def build_property_search_query(
    filters: Union[PropertySearchFilters, Mapping[str, Any], None] = None,
    limit=DEFAULT_RESULT_LIMIT,
) -> tuple[str, list]:
    """
    Compose the search statement and its bound parameters.

    Parameters are appended in evaluation order (city, owner, minimum
    price, maximum price, minimum rating, limit), which is the order of
    their %s placeholders in the returned SQL.

    Args:
        filters: A PropertySearchFilters or a raw options dict.
        limit: Maximum number of rows; falsy values fall back to the default.

    Returns:
        (sql, params) ready for cursor.execute().
    """
    if not isinstance(filters, PropertySearchFilters):
        filters = PropertySearchFilters.from_options(filters)

    params: list = []
    predicates: list[str] = []

    if filters.city:
        params.append(f"%{escape_like(filters.city)}%")
        predicates.append("properties.city ILIKE %s")

    if filters.owner_id:
        params.append(to_int(filters.owner_id, "owner_id"))
        predicates.append("properties.owner_id = %s")

    if filters.minimum_price_per_night:
        params.append(to_cents(filters.minimum_price_per_night, "minimum_price_per_night"))
        predicates.append("properties.cost_per_night >= %s")

    if filters.maximum_price_per_night:
        params.append(to_cents(filters.maximum_price_per_night, "maximum_price_per_night"))
        predicates.append("properties.cost_per_night <= %s")

    clauses = [BASE_SELECT]
    if predicates:
        clauses.append("WHERE " + "\n  AND ".join(predicates))

    clauses.append("GROUP BY properties.id")

    if filters.minimum_rating:
        params.append(to_number(filters.minimum_rating, "minimum_rating"))
        clauses.append("HAVING AVG(property_reviews.rating) >= %s")

    clauses.append("ORDER BY properties.cost_per_night")

    params.append(to_limit(limit, default=DEFAULT_RESULT_LIMIT))
    clauses.append("LIMIT %s;")

    return "\n".join(clauses), params
