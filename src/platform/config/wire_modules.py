"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.rental.app.command import create_reservation_use_case, return_book_use_case
from src.service.rental.app.query import get_reservation_use_case, list_reservations_use_case


WIRE_MODULES: list[ModuleType] = [
    create_reservation_use_case,
    return_book_use_case,
    get_reservation_use_case,
    list_reservations_use_case,
]
