"""
repositories/property_repo.py
------------------------------
Data access layer for property listings: search and insert.
"""

from typing import Any, Mapping, Optional, Union

from psycopg2 import extras

from config import DEFAULT_RESULT_LIMIT
from db.connection import Database
from models.property import PROPERTY_COLUMNS, Property
from repositories.property_query import PropertySearchFilters, build_property_search_query
from utils.logger import get_logger

logger = get_logger(__name__)


class PropertyRepository:
    """Repository for search and inserts on the properties table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def add(self, prop: Property) -> Property:
        """
        Insert a new property listing.

        Returns:
            The inserted property, with its `id` populated.
        """
        columns = ", ".join(PROPERTY_COLUMNS)
        placeholders = ", ".join(["%s"] * len(PROPERTY_COLUMNS))
        sql = f"INSERT INTO properties ({columns}) VALUES ({placeholders}) RETURNING *;"
        params = prop.insert_params()
        logger.debug(f"{sql} {params}")

        with self.db.connection() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, params)
                created = row_to_property(cur.fetchone())
        logger.info(f"Added property #{created.id} for owner {created.owner_id}")
        return created

    # ── READ ──────────────────────────────────────────────

    def search(
        self,
        filters: Union[PropertySearchFilters, Mapping[str, Any], None] = None,
        limit=DEFAULT_RESULT_LIMIT,
    ) -> list[Property]:
        """
        Search properties, cheapest first.

        Args:
            filters: PropertySearchFilters or a raw options dict.
            limit: Maximum number of results.

        Returns:
            List of Property objects with `average_rating` set; empty if nothing matches.
        """
        sql, params = build_property_search_query(filters, limit)
        with self.db.connection() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, params)
                return [row_to_property(r) for r in cur.fetchall()]


def row_to_property(row: Mapping[str, Any]) -> Property:
    """Convert a database row (dict-like) to a Property domain object."""
    return Property(
        id=row["id"],
        owner_id=row["owner_id"],
        title=row["title"],
        description=row.get("description"),
        thumbnail_photo_url=row["thumbnail_photo_url"],
        cover_photo_url=row["cover_photo_url"],
        cost_per_night=row["cost_per_night"],
        parking_spaces=row["parking_spaces"],
        number_of_bathrooms=row["number_of_bathrooms"],
        number_of_bedrooms=row["number_of_bedrooms"],
        country=row["country"],
        street=row["street"],
        city=row["city"],
        province=row["province"],
        post_code=row["post_code"],
        active=row.get("active", True),
        average_rating=_to_float(row.get("average_rating")),
    )


def _to_float(value) -> Optional[float]:
    return float(value) if value is not None else None
