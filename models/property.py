"""
models/property.py
------------------
Domain model for rental property listings.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from utils.exceptions import InvalidInputError
from utils.validators import to_int

# Column order shared by INSERT statements and row mapping.
PROPERTY_COLUMNS = (
    "owner_id",
    "title",
    "description",
    "thumbnail_photo_url",
    "cover_photo_url",
    "cost_per_night",
    "parking_spaces",
    "number_of_bathrooms",
    "number_of_bedrooms",
    "country",
    "street",
    "city",
    "province",
    "post_code",
)

_INT_FIELDS = ("owner_id", "cost_per_night", "parking_spaces", "number_of_bathrooms", "number_of_bedrooms")
_REQUIRED_FIELDS = (
    "owner_id", "title", "thumbnail_photo_url", "cover_photo_url",
    "country", "street", "city", "province", "post_code",
)


@dataclass
class Property:
    """
    Represents a property listed for rent.

    Attributes:
        id: Database primary key (None for new records).
        owner_id: ID of the owning user.
        cost_per_night: Nightly price in cents.
        average_rating: Mean review rating; only set by search queries.
        active: Whether the listing is visible.
    """
    owner_id: int
    title: str
    thumbnail_photo_url: str
    cover_photo_url: str
    country: str
    street: str
    city: str
    province: str
    post_code: str
    description: Optional[str] = None
    cost_per_night: int = 0
    parking_spaces: int = 0
    number_of_bathrooms: int = 0
    number_of_bedrooms: int = 0
    active: bool = True
    id: Optional[int] = None
    average_rating: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Property":
        """
        Build a Property from a posted form.

        Numeric fields arrive as strings from HTML forms and are coerced;
        `cost_per_night` is taken as already being in cents.

        Raises:
            InvalidInputError: If a required field is missing or a number is malformed.
        """
        for key in _REQUIRED_FIELDS:
            if data.get(key) in (None, ""):
                raise InvalidInputError(key, data.get(key), "required")
        values = {key: data.get(key) for key in PROPERTY_COLUMNS}
        for key in _INT_FIELDS:
            values[key] = to_int(values[key], key) if values[key] not in (None, "") else 0
        return cls(**values, id=data.get("id"))

    def insert_params(self) -> tuple:
        """Parameter tuple in PROPERTY_COLUMNS order."""
        return tuple(getattr(self, column) for column in PROPERTY_COLUMNS)

    @property
    def price_per_night(self) -> float:
        """Nightly price in major currency units."""
        return self.cost_per_night / 100

    def __str__(self) -> str:
        return f"{self.title} | {self.city} | {self.price_per_night:.2f}/night"
