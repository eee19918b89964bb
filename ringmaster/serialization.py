"""Big-endian (network byte order) encoding and decoding of integers."""

_SIZES = (1, 2, 4, 8)


def _check_size(size):
    if size not in _SIZES:
        raise ValueError(f"unsupported integer size: {size} bytes")


def put_number(value, size):
    """Encode an unsigned integer as ``size`` bytes in network byte order."""
    _check_size(size)
    return value.to_bytes(size, "big")


def get_number(data, size):
    """Decode an unsigned integer from the first ``size`` bytes of ``data``."""
    _check_size(size)
    if size > len(data):
        raise IndexError("get_number(): read past end")
    return int.from_bytes(bytes(data[:size]), "big")


def get_uint8(data):
    """Decode a uint8 from the start of ``data``."""
    return get_number(data, 1)


def get_uint16(data):
    """Decode a big-endian uint16 from the start of ``data``."""
    return get_number(data, 2)


def get_uint32(data):
    """Decode a big-endian uint32 from the start of ``data``."""
    return get_number(data, 4)


def get_uint64(data):
    """Decode a big-endian uint64 from the start of ``data``."""
    return get_number(data, 8)


def get_bits(number, bit_offset, bit_len, total_bits):
    """Return a bit range of a ``total_bits``-wide number, numbered MSB 0.

    For example, in the 8-bit value 0x01 the set bit has index 7.
    """
    if bit_offset + bit_len > total_bits:
        raise IndexError("get_bits(): read past end")
    return (number >> (total_bits - bit_offset - bit_len)) & ((1 << bit_len) - 1)


class WireParser:
    """Sequential reader of big-endian fields from a byte string."""

    def __init__(self, data):
        self._view = memoryview(bytes(data))

    @property
    def remaining(self):
        """Number of bytes not yet consumed."""
        return len(self._view)

    def _take(self, length, what):
        if length > len(self._view):
            raise IndexError(f"WireParser.{what}(): attempted to read past end")
        chunk = self._view[:length]
        self._view = self._view[length:]
        return chunk

    def _read(self, size):
        return int.from_bytes(self._take(size, "read"), "big")

    def read_uint8(self):
        return self._read(1)

    def read_uint16(self):
        return self._read(2)

    def read_uint32(self):
        return self._read(4)

    def read_uint64(self):
        return self._read(8)

    def read_string(self, length=None):
        """Read ``length`` bytes, or everything left when no length is given."""
        if length is None:
            length = len(self._view)
        return bytes(self._take(length, "read_string"))

    def skip(self, length):
        """Move ``length`` bytes ahead."""
        self._take(length, "skip")