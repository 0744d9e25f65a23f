"""Rental Domain Value Objects"""

from src.service.rental.domain.value_object.rental_pricing import RentalPricing

__all__ = ['RentalPricing']
