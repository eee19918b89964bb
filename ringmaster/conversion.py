"""Strict string-to-integer parsing and numeric formatting helpers."""

_WHITESPACE = " \t\n\v\f\r"
_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1
_LLONG_MIN, _LLONG_MAX = -(2**63), 2**63 - 1


def _digit_value(char):
    index = _DIGITS.find(char.lower()) if char.isascii() else -1
    return index if index >= 0 else len(_DIGITS)


def _parse_integer(text, base, low, high, name):
    if base != 0 and not 2 <= base <= 36:
        raise ValueError(f"{name}: invalid base {base}")

    length = len(text)
    pos = 0
    while pos < length and text[pos] in _WHITESPACE:
        pos += 1

    negative = False
    if pos < length and text[pos] in "+-":
        negative = text[pos] == "-"
        pos += 1

    has_hex_prefix = (
        text[pos:pos + 2].lower() == "0x"
        and pos + 2 < length
        and _digit_value(text[pos + 2]) < 16
    )
    if base in (0, 16) and has_hex_prefix:
        pos += 2
        base = 16
    elif base == 0:
        base = 8 if text[pos:pos + 1] == "0" else 10

    start = pos
    value = 0
    while pos < length:
        digit = _digit_value(text[pos])
        if digit >= base:
            break
        value = value * base + digit
        pos += 1

    if pos == start:
        raise ValueError(f"{name}: no conversion could be performed")

    if negative:
        value = -value
    if not low <= value <= high:
        raise OverflowError(f"{name}: {text!r} is out of range")
    if pos != length:
        raise ValueError(f"strict_{name}")
    return value


def strict_stoi(text, base=10):
    """Parse a 32-bit signed integer, rejecting any trailing characters."""
    return _parse_integer(text, base, _INT_MIN, _INT_MAX, "stoi")


def strict_stoll(text, base=10):
    """Parse a 64-bit signed integer, rejecting any trailing characters."""
    return _parse_integer(text, base, _LLONG_MIN, _LLONG_MAX, "stoll")


def double_to_string(value, precision=2):
    """Format ``value`` in fixed notation with ``precision`` decimal places."""
    return f"{value:.{precision}f}"


def narrow_cast(value, bits, signed=True):
    """Return ``value`` if it fits an integer of the given width, else raise."""
    if bits <= 0:
        raise ValueError("narrow_cast: width must be positive")
    wrapped = value & ((1 << bits) - 1)
    if signed and wrapped >= 1 << (bits - 1):
        wrapped -= 1 << bits
    if wrapped != value:
        raise OverflowError(f"narrow_cast: {value} != {wrapped}")
    return wrapped