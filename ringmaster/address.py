"""IPv4 socket addresses."""

import socket


class Address:
    """An IPv4 address and port, resolved once at construction."""

    def __init__(self, ip, port):
        if not 0 <= port <= 0xFFFF:
            raise ValueError(f"port out of range: {port}")
        results = socket.getaddrinfo(ip, port, family=socket.AF_INET)
        self._sockaddr = tuple(results[0][4])

    @classmethod
    def from_sockaddr(cls, sockaddr):
        """Build an Address from an AF_INET ``(host, port)`` socket address."""
        sockaddr = tuple(sockaddr)
        if len(sockaddr) != 2:
            raise ValueError("invalid sockaddr size")
        address = cls.__new__(cls)
        address._sockaddr = sockaddr
        return address

    @property
    def sock_addr(self):
        """The address in the form the socket module expects."""
        return self._sockaddr

    def ip_port(self):
        """Return the numeric IP string and the port number."""
        host, port = socket.getnameinfo(
            self._sockaddr, socket.NI_NUMERICHOST | socket.NI_NUMERICSERV
        )
        return host, int(port)

    @property
    def ip(self):
        return self.ip_port()[0]

    @property
    def port(self):
        return self.ip_port()[1]

    def __str__(self):
        ip, port = self.ip_port()
        return f"{ip}:{port}"

    def __repr__(self):
        return f"Address({str(self)!r})"

    def __eq__(self, other):
        if not isinstance(other, Address):
            return NotImplemented
        return self._sockaddr == other._sockaddr

    def __hash__(self):
        return hash(self._sockaddr)