import os
import select
import socket

import pytest

from ringmaster.file_descriptor import FileDescriptor
from ringmaster.poller import Flag, Poller


@pytest.fixture
def pipe():
    r, w = os.pipe()
    yield r, w
    for fd in (r, w):
        try:
            os.close(fd)
        except OSError:
            pass


def test_flags_built_from_poll_constants_drive_poller(pipe):
    r, w = pipe
    calls = []
    poller = Poller()
    poller.register_event(r, Flag(select.POLLIN), lambda: calls.append("in"))
    poller.register_event(w, Flag(select.POLLOUT), lambda: calls.append("out"))
    os.write(w, b"x")
    poller.poll(0)
    assert sorted(calls) == ["in", "out"]


def test_readable_callback_runs(pipe):
    r, w = pipe
    calls = []
    poller = Poller()
    poller.register_event(r, Flag.IN, lambda: calls.append("in"))
    poller.poll(0)
    assert calls == []
    os.write(w, b"x")
    poller.poll(0)
    assert calls == ["in"]


def test_writable_callback_runs(pipe):
    _, w = pipe
    calls = []
    poller = Poller()
    poller.register_event(w, Flag.OUT, lambda: calls.append("out"))
    poller.poll(0)
    assert calls == ["out"]


def test_duplicate_registration_raises(pipe):
    r, _ = pipe
    poller = Poller()
    poller.register_event(r, Flag.IN, lambda: None)
    with pytest.raises(ValueError):
        poller.register_event(r, Flag.IN, lambda: None)


def test_deactivate_and_activate(pipe):
    r, w = pipe
    calls = []
    poller = Poller()
    poller.register_event(r, Flag.IN, lambda: calls.append(1))
    os.write(w, b"x")
    poller.deactivate(r, Flag.IN)
    poller.deactivate(r, Flag.IN)
    poller.poll(0)
    assert calls == []
    poller.activate(r, Flag.IN)
    poller.activate(r, Flag.IN)
    poller.poll(0)
    assert calls == [1]


def test_deregister_removes_fd(pipe):
    r, w = pipe
    calls = []
    poller = Poller()
    poller.register_event(r, Flag.IN, lambda: calls.append(1))
    os.write(w, b"x")
    poller.deregister(r)
    poller.poll(0)
    assert calls == []
    with pytest.raises(KeyError):
        poller.activate(r, Flag.IN)


def test_unknown_fd_raises():
    poller = Poller()
    with pytest.raises(KeyError):
        poller.activate(12345, Flag.IN)
    with pytest.raises(KeyError):
        poller.deactivate(12345, Flag.OUT)


def test_both_events_on_one_socket():
    left, right = socket.socketpair()
    try:
        calls = []
        poller = Poller()
        poller.register_event(left, Flag.IN, lambda: calls.append("in"))
        poller.register_event(left, Flag.OUT, lambda: calls.append("out"))
        right.send(b"x")
        poller.poll(0)
        assert sorted(calls) == ["in", "out"]
    finally:
        left.close()
        right.close()


def test_accepts_file_descriptor_objects(pipe):
    r, w = pipe
    reader = FileDescriptor(os.dup(r))
    try:
        calls = []
        poller = Poller()
        poller.register_event(reader, Flag.IN, lambda: calls.append(reader.read()))
        os.write(w, b"data")
        poller.poll(0)
        assert calls == [b"data"]
    finally:
        reader.close()