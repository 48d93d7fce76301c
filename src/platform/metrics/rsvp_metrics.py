from prometheus_client import Counter, Gauge, Histogram


class RsvpMetrics:
    """
    Reservation / attendance ledger metrics

    `result` labels: success, already_reserved, capacity_exceeded,
    window_closed, not_reserved, already_checked_in, not_found.
    """

    def __init__(self) -> None:
        # ========== Ledger Write Metrics ==========
        self.reservation_requests = Counter(
            'rsvp_reservation_requests_total',
            'Reserve calls by outcome',
            ['result'],
        )

        self.cancellation_requests = Counter(
            'rsvp_cancellation_requests_total',
            'Cancel calls by outcome',
            ['result'],
        )

        self.check_in_requests = Counter(
            'rsvp_check_in_requests_total',
            'Check-in calls by outcome',
            ['result', 'walk_in'],
        )

        self.ledger_write_duration = Histogram(
            'rsvp_ledger_write_duration_seconds',
            'Reserve / cancel / check-in processing time',
            ['operation'],
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
        )

        # ========== Live Feed Metrics ==========
        self.live_feed_subscribers = Gauge(
            'rsvp_live_feed_subscribers',
            'Connected live feed observers',
            ['event_id'],
        )

        self.live_feed_dropped = Counter(
            'rsvp_live_feed_dropped_total',
            'Notifications dropped because an observer buffer was full',
            ['event_id'],
        )

    # ========== Helper Methods ==========

    def record_reservation(self, *, result: str, duration: float) -> None:
        self.reservation_requests.labels(result=result).inc()
        self.ledger_write_duration.labels(operation='reserve').observe(duration)

    def record_cancellation(self, *, result: str, duration: float) -> None:
        self.cancellation_requests.labels(result=result).inc()
        self.ledger_write_duration.labels(operation='cancel').observe(duration)

    def record_check_in(self, *, result: str, walk_in: bool, duration: float) -> None:
        self.check_in_requests.labels(result=result, walk_in=str(walk_in).lower()).inc()
        self.ledger_write_duration.labels(operation='check_in').observe(duration)


# Global metrics instance
metrics = RsvpMetrics()
