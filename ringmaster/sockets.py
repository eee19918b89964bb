"""TCP and UDP sockets built on the owning file-descriptor wrapper."""

import contextlib
import errno
import socket

from ringmaster.address import Address
from ringmaster.exceptions import UnixError
from ringmaster.file_descriptor import MAX_BUF_SIZE, FileDescriptor

UDP_MTU = 65536  # bytes


def _unix_error(exc, tag):
    return UnixError(exc.errno or 0, tag)


class Socket(FileDescriptor):
    """A socket that owns its descriptor.

    With no ``fd`` a new socket of the given domain and type is created;
    otherwise ``fd`` is adopted after checking that its domain and type match.
    """

    def __init__(self, domain, sock_type, fd=None):
        if fd is None:
            try:
                fd = socket.socket(domain, sock_type).detach()
            except OSError as exc:
                raise _unix_error(exc, "socket()") from exc
            super().__init__(fd)
            return

        super().__init__(fd)
        actual_domain = self._getsockopt(socket.SO_DOMAIN)
        actual_type = self._getsockopt(socket.SO_TYPE)
        if actual_domain != domain:
            self.close()
            raise RuntimeError("socket domain mismatch")
        if actual_type != sock_type:
            self.close()
            raise RuntimeError("socket type mismatch")

    @contextlib.contextmanager
    def _borrowed(self):
        """Lend a socket object over our descriptor without giving up ownership."""
        if self.fileno() < 0:
            raise UnixError(errno.EBADF, "socket is closed")
        sock = socket.socket(fileno=self.fileno())
        try:
            yield sock
        finally:
            sock.detach()

    def _getsockopt(self, option, level=socket.SOL_SOCKET):
        with self._borrowed() as sock:
            try:
                return sock.getsockopt(level, option)
            except OSError as exc:
                raise _unix_error(exc, "getsockopt()") from exc

    def _setsockopt(self, option, value, level=socket.SOL_SOCKET):
        with self._borrowed() as sock:
            try:
                sock.setsockopt(level, option, value)
            except OSError as exc:
                raise _unix_error(exc, "setsockopt()") from exc

    def bind(self, local_addr):
        """Bind the socket to a local Address."""
        with self._borrowed() as sock:
            try:
                sock.bind(local_addr.sock_addr)
            except OSError as exc:
                raise _unix_error(exc, "bind()") from exc

    def connect(self, peer_addr):
        """Connect the socket to a peer Address."""
        with self._borrowed() as sock:
            try:
                sock.connect(peer_addr.sock_addr)
            except OSError as exc:
                raise _unix_error(exc, "connect()") from exc

    def local_address(self):
        """The Address the socket is bound to."""
        with self._borrowed() as sock:
            try:
                return Address.from_sockaddr(sock.getsockname())
            except OSError as exc:
                raise _unix_error(exc, "getsockname()") from exc

    def peer_address(self):
        """The Address of the connected peer."""
        with self._borrowed() as sock:
            try:
                return Address.from_sockaddr(sock.getpeername())
            except OSError as exc:
                raise _unix_error(exc, "getpeername()") from exc

    def set_reuseaddr(self):
        """Allow the local address to be reused sooner."""
        self._setsockopt(socket.SO_REUSEADDR, 1)


class TCPSocket(Socket):
    """An IPv4 stream socket."""

    def __init__(self):
        super().__init__(socket.AF_INET, socket.SOCK_STREAM)

    @classmethod
    def _from_fd(cls, fd):
        tcp_socket = cls.__new__(cls)
        Socket.__init__(tcp_socket, socket.AF_INET, socket.SOCK_STREAM, fd)
        return tcp_socket

    def listen(self, backlog=16):
        """Start listening for incoming connections."""
        with self._borrowed() as sock:
            try:
                sock.listen(backlog)
            except OSError as exc:
                raise _unix_error(exc, "listen()") from exc

    def accept(self):
        """Accept a new connection and return it as a TCPSocket."""
        with self._borrowed() as sock:
            try:
                conn, _ = sock.accept()
            except OSError as exc:
                raise _unix_error(exc, "accept()") from exc
        return TCPSocket._from_fd(conn.detach())

    def send(self, data):
        """Send once and return the bytes sent; 0 means it would block."""
        return self.write(data)

    def recv(self, limit=MAX_BUF_SIZE):
        """Receive up to ``limit`` bytes; an empty result marks end of stream."""
        return self.read(limit)

    def sendn(self, data, n):
        """Blocking mode only: send exactly the first ``n`` bytes of ``data``."""
        self.writen(data, n)

    def send_all(self, data):
        """Blocking mode only: send all of ``data``."""
        self.write_all(data)

    def recvn(self, n, allow_partial_read=True):
        """Blocking mode only: try to receive ``n`` bytes."""
        return self.readn(n, allow_partial_read)


class UDPSocket(Socket):
    """An IPv4 datagram socket."""

    def __init__(self):
        super().__init__(socket.AF_INET, socket.SOCK_DGRAM)

    @staticmethod
    def _check_sent(sent, target):
        if sent != target:
            raise RuntimeError("UDPSocket failed to deliver target number of bytes")
        return True

    def send(self, data):
        """Send a datagram to the connected peer.

        Returns True when sent whole and False when it would block.
        """
        if not data:
            raise ValueError("attempted to send empty data")
        with self._borrowed() as sock:
            try:
                sent = sock.send(data)
            except BlockingIOError:
                return False
            except OSError as exc:
                raise _unix_error(exc, "UDPSocket.send()") from exc
        return self._check_sent(sent, len(data))

    def sendto(self, dst_addr, data):
        """Send a datagram to ``dst_addr``; False means it would block."""
        if not data:
            raise ValueError("attempted to send empty data")
        with self._borrowed() as sock:
            try:
                sent = sock.sendto(data, dst_addr.sock_addr)
            except BlockingIOError:
                return False
            except OSError as exc:
                raise _unix_error(exc, "UDPSocket.sendto()") from exc
        return self._check_sent(sent, len(data))

    def _receive(self, tag):
        with self._borrowed() as sock:
            try:
                data, _, msg_flags, source = sock.recvmsg(UDP_MTU)
            except BlockingIOError:
                return None, None
            except OSError as exc:
                raise _unix_error(exc, tag) from exc
        if msg_flags & socket.MSG_TRUNC:
            raise RuntimeError(f"{tag}: datagram truncated")
        return source, data

    def recv(self):
        """Receive one datagram; None means it would block."""
        _, data = self._receive("UDPSocket.recv()")
        return data

    def recvfrom(self):
        """Receive one datagram with its source Address.

        Returns ``(address, data)``, or ``(None, None)`` when it would block.
        """
        source, data = self._receive("UDPSocket.recvfrom()")
        if data is None:
            return None, None
        return Address.from_sockaddr(source), data