"""Splitting strings on a multi-character separator."""


def split(text, separator):
    """Split ``text`` on ``separator``; a trailing separator adds no empty field."""
    if not separator:
        raise ValueError("empty separator")
    parts = text.split(separator)
    if parts[-1] == "":
        parts.pop()
    return parts