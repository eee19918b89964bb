"""Wall-clock timestamps since the Unix epoch."""

import time


def timestamp_ns():
    """Nanoseconds since the epoch."""
    return time.time_ns()


def timestamp_us():
    """Microseconds since the epoch."""
    return time.time_ns() // 1_000


def timestamp_ms():
    """Milliseconds since the epoch."""
    return time.time_ns() // 1_000_000