"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Optional

from psycopg2 import extras

from db.connection import Database
from models.user import User
from utils.exceptions import InvalidInputError
from utils.logger import get_logger
from utils.validators import to_int

logger = get_logger(__name__)


class UserRepository:
    """Repository for lookups and inserts on the users table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def add(self, user: User) -> User:
        """
        Insert a new user. The email is lower-cased, the password stored as given.

        Returns:
            The inserted user, with its `id` populated.

        Raises:
            ConstraintViolationError: If the email is already registered.
        """
        sql = """
            INSERT INTO users (name, email, password)
            VALUES (%s, %s, %s)
            RETURNING *;
        """
        params = (user.name, _normalize_email(user.email), user.password)
        with self.db.connection() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, params)
                created = self._row_to_user(cur.fetchone())
        logger.info(f"Added user #{created.id}")
        return created

    # ── READ ──────────────────────────────────────────────

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Fetch a user by email, ignoring letter case.

        Returns:
            User or None.
        """
        sql = "SELECT * FROM users WHERE LOWER(users.email) = %s LIMIT 1;"
        email = _normalize_email(email)
        with self.db.connection() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (email,))
                row = cur.fetchone()
        return self._row_to_user(row) if row else None

    def get_by_id(self, user_id) -> Optional[User]:
        """
        Fetch a user by primary key. String ids (from sessions, URLs) are coerced.

        Returns:
            User or None.
        """
        sql = "SELECT * FROM users WHERE users.id = %s LIMIT 1;"
        user_id = to_int(user_id, "id")
        with self.db.connection() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (user_id,))
                row = cur.fetchone()
        return self._row_to_user(row) if row else None

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_user(row: dict) -> User:
        """Convert a database row to a User domain object."""
        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password=row["password"],
        )


def _normalize_email(email) -> str:
    if not isinstance(email, str) or not email.strip():
        raise InvalidInputError("email", email, "required")
    return email.strip().lower()
