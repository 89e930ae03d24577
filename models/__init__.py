"""
models/ - Domain Models
=======================
Plain dataclasses returned by the repositories.
"""

from models.property import Property
from models.reservation import Reservation
from models.user import User

__all__ = ["Property", "Reservation", "User"]
