"""
models/reservation.py
---------------------
Domain model for a guest's reservation of a property.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from models.property import Property


@dataclass
class Reservation:
    """
    Represents one reservation, joined with the reserved property.

    Attributes:
        id: Database primary key.
        guest_id: ID of the guest who booked.
        property_id: ID of the booked property.
        start_date: First night.
        end_date: Checkout day.
        listing: The reserved property, as joined by the listing query.
        average_rating: Mean review rating of the property.
    """
    id: int
    guest_id: int
    property_id: int
    start_date: date
    end_date: date
    listing: Optional[Property] = None
    average_rating: Optional[float] = None

    @property
    def nights(self) -> int:
        return (self.end_date - self.start_date).days

    def __str__(self) -> str:
        title = self.listing.title if self.listing else f"property #{self.property_id}"
        return f"{title}: {self.start_date} -> {self.end_date}"
