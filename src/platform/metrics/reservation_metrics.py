from prometheus_client import Counter, Gauge, Histogram


class ReservationMetrics:
    """
    Reservation Engine Core Metrics Collector

    Tracks reservation outcomes per show, cancellations, seat availability
    and persistence health.
    """

    def __init__(self):
        # ========== Seat Reservation Business Metrics ==========
        self.seat_reservation_requests = Counter(
            'seat_reservation_requests_total',
            'Total seat reservation requests',
            ['show_id', 'result'],  # result: success/unavailable/unknown_seat/...
        )

        self.seat_reservation_duration = Histogram(
            'seat_reservation_duration_seconds',
            'Seat reservation processing time',
            ['show_id'],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 2.0],
        )

        self.booking_cancellations = Counter(
            'booking_cancellations_total',
            'Total booking cancellations',
            ['show_id', 'result'],
        )

        self.seats_booked = Gauge(
            'seats_booked',
            'Booked seats per show',
            ['show_id'],
        )

        # ========== Persistence Metrics ==========
        self.ledger_saves = Counter(
            'ledger_saves_total',
            'Booking ledger save attempts',
            ['result'],
        )

        self.ledger_save_duration = Histogram(
            'ledger_save_duration_seconds',
            'Booking ledger save duration',
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
        )

    # ========== Helper Methods ==========

    def record_seat_reservation(self, *, show_id: str, result: str, duration: float):
        self.seat_reservation_requests.labels(show_id=show_id, result=result).inc()
        self.seat_reservation_duration.labels(show_id=show_id).observe(duration)

    def record_cancellation(self, *, show_id: str, result: str):
        self.booking_cancellations.labels(show_id=show_id, result=result).inc()

    def update_seats_booked(self, *, show_id: str, count: int):
        self.seats_booked.labels(show_id=show_id).set(count)

    def record_ledger_save(self, *, result: str, duration: float):
        self.ledger_saves.labels(result=result).inc()
        self.ledger_save_duration.observe(duration)


# Global metrics instance
metrics = ReservationMetrics()
