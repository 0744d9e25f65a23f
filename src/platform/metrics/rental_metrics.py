from decimal import Decimal

from prometheus_client import Counter, Histogram


class RentalMetrics:
    """
    Library Rental Core Metrics Collector

    Tracks reservation lifecycle and late-fee business metrics
    """

    def __init__(self):
        # ========== Reservation Business Metrics ==========
        self.reservation_requests = Counter(
            'rental_reservation_requests_total',
            'Total reservation requests',
            ['result'],  # result: created/unavailable/rejected
        )

        self.reservation_duration = Histogram(
            'rental_reservation_duration_seconds',
            'Reservation processing time',
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0],
        )

        self.books_returned = Counter(
            'rental_books_returned_total',
            'Total returned books',
            ['timeliness'],  # timeliness: on_time/late
        )

        self.late_fees_charged = Counter(
            'rental_late_fees_charged_total',
            'Sum of charged late fees',
        )

    # ========== Helper Methods ==========

    def record_reservation(self, *, result: str, duration: float):
        self.reservation_requests.labels(result=result).inc()
        self.reservation_duration.observe(duration)

    def record_return(self, *, late_fee: Decimal | None):
        if late_fee is None:
            self.books_returned.labels(timeliness='on_time').inc()
            return

        self.books_returned.labels(timeliness='late').inc()
        self.late_fees_charged.inc(float(late_fee))


# Global metrics instance
metrics = RentalMetrics()
