"""
repositories/reservation_repo.py
---------------------------------
Data access layer for reservations. Read-only.
"""

from psycopg2 import extras

from config import DEFAULT_RESULT_LIMIT
from db.connection import Database
from models.reservation import Reservation
from repositories.property_repo import row_to_property
from utils.logger import get_logger
from utils.validators import to_int, to_limit

logger = get_logger(__name__)


class ReservationRepository:
    """Repository for reading the reservations table."""

    def __init__(self, db: Database):
        self.db = db

    def get_all_for_guest(self, guest_id, limit=DEFAULT_RESULT_LIMIT) -> list[Reservation]:
        """
        Fetch a guest's reservations, earliest start date first.

        Each reservation carries its property and the property's average rating.
        Properties without any review are not returned (inner join on reviews).

        Args:
            guest_id: ID of the guest.
            limit: Maximum number of results; falsy values fall back to the default.

        Returns:
            List of Reservation objects.
        """
        sql = """
            SELECT
              reservations.id AS reservation_id,
              reservations.start_date,
              reservations.end_date,
              reservations.guest_id,
              properties.*,
              AVG(property_reviews.rating) AS average_rating
            FROM reservations
            JOIN properties ON reservations.property_id = properties.id
            JOIN property_reviews ON property_reviews.property_id = properties.id
            JOIN users ON reservations.guest_id = users.id
            WHERE reservations.guest_id = %s
            GROUP BY properties.id, reservations.id
            ORDER BY reservations.start_date
            LIMIT %s;
        """
        params = (to_int(guest_id, "guest_id"), to_limit(limit, default=DEFAULT_RESULT_LIMIT))
        with self.db.connection() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, params)
                reservations = [self._row_to_reservation(r) for r in cur.fetchall()]
        logger.debug(f"Fetched {len(reservations)} reservations for guest {params[0]}")
        return reservations

    @staticmethod
    def _row_to_reservation(row: dict) -> Reservation:
        """Convert a joined reservation/property row to a Reservation domain object."""
        prop = row_to_property(row)
        return Reservation(
            id=row["reservation_id"],
            guest_id=row["guest_id"],
            property_id=prop.id,
            start_date=row["start_date"],
            end_date=row["end_date"],
            listing=prop,
            average_rating=prop.average_rating,
        )
