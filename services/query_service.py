"""
services/query_service.py
--------------------------
The operations the web layer calls: user lookup and sign-up,
reservation listing, property search and property creation.
"""

from typing import Any, Mapping, Optional, Union

from config import DEFAULT_RESULT_LIMIT
from db.connection import Database
from models.property import Property
from models.reservation import Reservation
from models.user import User
from repositories.property_query import PropertySearchFilters
from repositories.property_repo import PropertyRepository
from repositories.reservation_repo import ReservationRepository
from repositories.user_repo import UserRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class QueryService:
    """
    Facade over the repositories.

    Every method runs a single statement on a pooled connection. Lookups
    return None when nothing matches; store failures raise StoreError
    subclasses and bad input raises InvalidInputError.
    """

    def __init__(self, db: Database):
        self.db = db
        self.users = UserRepository(db)
        self.properties = PropertyRepository(db)
        self.reservations = ReservationRepository(db)

    # ── Users ─────────────────────────────────────────────

    def get_user_with_email(self, email: str) -> Optional[User]:
        """Get a single user given their email (case-insensitive)."""
        return self.users.get_by_email(email)

    def get_user_with_id(self, user_id) -> Optional[User]:
        """Get a single user given their id."""
        return self.users.get_by_id(user_id)

    def add_user(self, user: Union[User, Mapping[str, Any]]) -> User:
        """
        Add a new user.

        Args:
            user: A User, or a dict with name, email and password.

        Returns:
            The created user, including its new id.
        """
        if not isinstance(user, User):
            user = User.from_dict(user)
        return self.users.add(user)

    # ── Reservations ──────────────────────────────────────

    def get_all_reservations(self, guest_id, limit=DEFAULT_RESULT_LIMIT) -> list[Reservation]:
        """Get a guest's reservations, ordered by start date."""
        return self.reservations.get_all_for_guest(guest_id, limit)

    # ── Properties ────────────────────────────────────────

    def get_all_properties(
        self,
        options: Union[PropertySearchFilters, Mapping[str, Any], None] = None,
        limit=DEFAULT_RESULT_LIMIT,
    ) -> list[Property]:
        """
        Search properties, cheapest first.

        Args:
            options: Filters: city, owner_id, minimum_price_per_night,
                maximum_price_per_night (major currency units), minimum_rating.
            limit: Maximum number of results.
        """
        return self.properties.search(options, limit)

    def add_property(self, prop: Union[Property, Mapping[str, Any]]) -> Property:
        """
        Add a property listing.

        Returns:
            The created property, including its new id.
        """
        if not isinstance(prop, Property):
            prop = Property.from_dict(prop)
        return self.properties.add(prop)
