"""Timers delivered through a file descriptor (timerfd)."""

import datetime
import os
import struct
import time

from ringmaster.conversion import narrow_cast
from ringmaster.exceptions import UnixError
from ringmaster.file_descriptor import FileDescriptor


def _to_ns(value):
    if isinstance(value, datetime.timedelta):
        return (value // datetime.timedelta(microseconds=1)) * 1_000
    return round(value * 1_000_000_000)


class Timerfd(FileDescriptor):
    """A timer whose expirations are read from its descriptor."""

    def __init__(self, clockid=time.CLOCK_MONOTONIC, flags=os.TFD_NONBLOCK):
        try:
            fd = os.timerfd_create(clockid, flags=flags)
        except OSError as exc:
            raise UnixError(exc.errno or 0, "timerfd_create()") from exc
        try:
            super().__init__(fd)
        except OSError:
            os.close(fd)
            raise

    def set_time(self, initial_expiration, interval):
        """Arm the timer.

        Both values are seconds or timedeltas; an initial expiration of zero
        disarms the timer and an interval of zero makes it fire once.
        """
        try:
            os.timerfd_settime_ns(
                self.fileno(),
                initial=_to_ns(initial_expiration),
                interval=_to_ns(interval),
            )
        except OSError as exc:
            raise UnixError(exc.errno or 0, "timerfd_settime()") from exc

    def read_expirations(self):
        """Return the number of expirations since the last read."""
        try:
            data = os.read(self.fileno(), 8)
        except OSError as exc:
            raise UnixError(exc.errno or 0, "Timerfd.read_expirations()") from exc
        if len(data) != 8:
            raise RuntimeError("read error in timerfd")
        (count,) = struct.unpack("=Q", data)
        return narrow_cast(count, 32, signed=False)