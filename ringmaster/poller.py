"""Callback dispatch over poll(2)."""

import enum
import select


class Flag(enum.IntFlag):
    """Events a callback can be registered for."""

    IN = select.POLLIN
    OUT = select.POLLOUT


def _fd_number(fd):
    return fd if isinstance(fd, int) else fd.fileno()


class Poller:
    """Runs registered callbacks when their descriptors become ready."""

    def __init__(self):
        self._roster = {}  # fd -> {flag -> callback}
        self._active_events = {}  # fd -> active event mask
        self._to_deregister = set()

    def register_event(self, fd, flag, callback):
        """Register ``callback`` for one event on ``fd``; the event starts active."""
        fd = _fd_number(fd)
        flag = Flag(flag)
        callbacks = self._roster.get(fd)
        if callbacks is None:
            self._roster[fd] = {flag: callback}
            self._active_events[fd] = int(flag)
            return
        if flag in callbacks:
            raise ValueError("attempted to register the same event")
        callbacks[flag] = callback
        self._active_events[fd] |= flag

    def activate(self, fd, flag):
        """Start watching an event on a registered fd (safe to repeat)."""
        self._active_events[_fd_number(fd)] |= Flag(flag)

    def deactivate(self, fd, flag):
        """Stop watching an event on a registered fd (safe to repeat)."""
        self._active_events[_fd_number(fd)] &= ~Flag(flag)

    def deregister(self, fd):
        """Schedule ``fd`` to be removed before the next poll."""
        self._to_deregister.add(_fd_number(fd))

    def _do_deregister(self):
        for fd in self._to_deregister:
            self._roster.pop(fd, None)
            self._active_events.pop(fd, None)
        self._to_deregister.clear()

    def poll(self, timeout_ms=-1):
        """Wait up to ``timeout_ms`` (negative: forever) and run ready callbacks."""
        self._do_deregister()

        poll_object = select.poll()
        for fd, events in self._active_events.items():
            if events:
                poll_object.register(fd, events)

        ready = poll_object.poll(timeout_ms if timeout_ms >= 0 else None)

        for fd, revents in ready:
            requested = self._active_events.get(fd, 0)
            for flag, callback in list(self._roster.get(fd, {}).items()):
                if revents & flag and requested & flag:
                    callback()