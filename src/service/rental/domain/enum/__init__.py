"""Rental Domain Enums"""

from src.service.rental.domain.enum.reservation_status import ReservationStatus

__all__ = ['ReservationStatus']
