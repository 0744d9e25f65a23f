from enum import StrEnum


class ReservationStatus(StrEnum):
    ACTIVE = 'ACTIVE'
    RETURNED = 'RETURNED'  # terminal
