"""
models/user.py
--------------
Domain model for LightBnB users (hosts and guests alike).
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from utils.exceptions import InvalidInputError


@dataclass
class User:
    """
    Represents a registered user.

    Attributes:
        id: Database primary key (None for new records).
        name: Display name.
        email: Unique login email, always stored lower-cased.
        password: Opaque credential, stored exactly as given.
    """
    name: str
    email: str
    password: str
    id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "User":
        """Build a User from a posted form; name, email and password are required."""
        missing = [key for key in ("name", "email", "password") if not data.get(key)]
        if missing:
            raise InvalidInputError(missing[0], data.get(missing[0]), "required")
        return cls(
            name=str(data["name"]),
            email=str(data["email"]),
            password=str(data["password"]),
            id=data.get("id"),
        )

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, name={self.name!r}, email={self.email!r})"
