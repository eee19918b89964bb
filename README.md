# ringmaster

Small building blocks for network programs on Linux. The package wraps
file descriptors, TCP and UDP sockets, `poll` and `epoll` callback loops,
`timerfd` timers and memory maps, and adds helpers for big-endian wire
formats, strict integer parsing and timestamps. It uses only the standard
library.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `ringmaster.exceptions`: `UnixError` (an `OSError` with an optional
  `tag`), `check_syscall(return_value, tag=None)` and
  `check_call(actual_return, expected_return, error_msg="check_call")`.
- `ringmaster.conversion`: `strict_stoi` and `strict_stoll` parse 32- and
  64-bit signed integers and reject trailing characters;
  `double_to_string(value, precision=2)` formats in fixed notation;
  `narrow_cast(value, bits, signed=True)` raises `OverflowError` when a
  value does not fit the given width.
- `ringmaster.split`: `split(text, separator)` splits on a non-empty
  separator; a trailing separator adds no empty field.
- `ringmaster.timestamp`: `timestamp_ns`, `timestamp_us`, `timestamp_ms`,
  wall-clock time since the epoch.
- `ringmaster.serialization`: `put_number(value, size)`,
  `get_number(data, size)`, `get_uint8` … `get_uint64`,
  `get_bits(number, bit_offset, bit_len, total_bits)` (bits numbered from
  the most significant, starting at 0), and `WireParser`, which reads
  `read_uint8` … `read_uint64`, `read_string(length=None)` and `skip` in
  order and reports `remaining` bytes. Reading past the end raises
  `IndexError`.
- `ringmaster.address`: `Address(ip, port)`, an IPv4 address resolved at
  construction, with `Address.from_sockaddr`, `ip_port()`, `ip`, `port`,
  `sock_addr` and `str()` as `"ip:port"`.
- `ringmaster.file_descriptor`: `FileDescriptor`, which owns a descriptor
  (set close-on-exec) and offers `read`, `write`, `readn`, `writen`,
  `write_all`, `getline`, `seek`, `reset_offset`, `file_size`, the
  `blocking` and `eof` properties, and use as a context manager. Data is
  `bytes`; `write` returns 0 when a non-blocking write would block.
- `ringmaster.memory_map`: `MMap(length, prot, flags, fd, offset=0)`,
  a mapping exposed as `data` and unmapped by `close()` or on leaving a
  `with` block. Pass `fd=-1` for anonymous memory.
- `ringmaster.poller`: `Poller` and `Flag` (`IN`, `OUT`), built on `poll`.
- `ringmaster.epoller`: `Epoller` and `Flag` (`IN`, `OUT`), built on
  `epoll`; also a context manager.

  Both pollers offer `register_event(fd, flag, callback)`,
  `activate`, `deactivate`, `deregister` (applied before the next poll)
  and `poll(timeout_ms=-1)`, which runs the callbacks of ready events.
  A descriptor may be an `int` or any object with `fileno()`.
- `ringmaster.sockets`: `Socket`, `TCPSocket` (`listen`, `accept`, `send`,
  `recv`, `sendn`, `send_all`, `recvn`) and `UDPSocket` (`send`, `sendto`,
  `recv`, `recvfrom`), all with `bind`, `connect`, `local_address`,
  `peer_address` and `set_reuseaddr`. In non-blocking mode the UDP calls
  return `False` or `None` instead of blocking; a truncated datagram
  raises `RuntimeError`.
- `ringmaster.timerfd`: `Timerfd(clockid=time.CLOCK_MONOTONIC,
  flags=os.TFD_NONBLOCK)` with `set_time(initial_expiration, interval)`,
  given in seconds or as `timedelta`, and `read_expirations()`.

## Example

```python
from ringmaster.address import Address
from ringmaster.serialization import WireParser, put_number
from ringmaster.sockets import UDPSocket

receiver = UDPSocket()
receiver.bind(Address("127.0.0.1", 0))

sender = UDPSocket()
sender.sendto(receiver.local_address(), put_number(42, 4) + b"hello")

source, payload = receiver.recvfrom()
parser = WireParser(payload)
print(source, parser.read_uint32(), parser.read_string())
```

Errors from the operating system are raised as `UnixError`. Bad arguments
raise the usual Python exceptions, such as `ValueError` or `IndexError`.

## What it does not do

ringmaster is a library only. It installs no commands and has no
application built on it: there is no video capture, encoding, decoding or
display, and no sender or receiver program. It also needs Linux, since
`epoll` and `timerfd` are Linux interfaces.