"""Callback dispatch over epoll(7)."""

import enum
import select

_MAX_EVENTS = 32


class Flag(enum.IntFlag):
    """Events a callback can be registered for."""

    IN = select.EPOLLIN
    OUT = select.EPOLLOUT


def _fd_number(fd):
    return fd if isinstance(fd, int) else fd.fileno()


class Epoller:
    """Runs registered callbacks when their descriptors become ready."""

    def __init__(self):
        self._epoll = select.epoll()  # created close-on-exec
        self._roster = {}  # fd -> {flag -> callback}
        self._active_events = {}  # fd -> active event mask
        self._to_deregister = set()

    def fileno(self):
        """The epoll instance's descriptor."""
        return self._epoll.fileno()

    @property
    def closed(self):
        return self._epoll.closed

    def close(self):
        """Close the epoll instance."""
        self._epoll.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def register_event(self, fd, flag, callback):
        """Register ``callback`` for one event on ``fd``; the event starts active."""
        fd = _fd_number(fd)
        flag = Flag(flag)
        callbacks = self._roster.get(fd)
        if callbacks is None:
            self._roster[fd] = {flag: callback}
            self._active_events[fd] = int(flag)
            self._epoll.register(fd, int(flag))
            return
        if flag in callbacks:
            raise ValueError("attempted to register the same event")
        callbacks[flag] = callback
        self._active_events[fd] |= flag
        self._epoll.modify(fd, self._active_events[fd])

    def activate(self, fd, flag):
        """Start watching an event on a registered fd (safe to repeat)."""
        fd = _fd_number(fd)
        events = self._active_events[fd]
        if not events & flag:
            self._active_events[fd] = events | Flag(flag)
            self._epoll.modify(fd, self._active_events[fd])

    def deactivate(self, fd, flag):
        """Stop watching an event on a registered fd (safe to repeat)."""
        fd = _fd_number(fd)
        events = self._active_events[fd]
        if events & flag:
            self._active_events[fd] = events & ~Flag(flag)
            self._epoll.modify(fd, self._active_events[fd])

    def deregister(self, fd):
        """Schedule ``fd`` to be removed before the next poll."""
        self._to_deregister.add(_fd_number(fd))

    def _do_deregister(self):
        pending, self._to_deregister = self._to_deregister, set()
        for fd in pending:
            self._roster.pop(fd, None)
            self._active_events.pop(fd, None)
            self._epoll.unregister(fd)

    def poll(self, timeout_ms=-1):
        """Wait up to ``timeout_ms`` (negative: forever) and run ready callbacks."""
        self._do_deregister()

        timeout = timeout_ms / 1000 if timeout_ms >= 0 else -1
        ready = self._epoll.poll(timeout, _MAX_EVENTS)

        for fd, revents in ready:
            for flag, callback in list(self._roster[fd].items()):
                if revents & flag:
                    callback()