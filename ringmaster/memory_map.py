"""Memory-mapped regions that are unmapped when closed."""

import mmap


class MMap:
    """A memory mapping of ``length`` bytes; pass fd -1 for anonymous memory."""

    def __init__(self, length, prot, flags, fd, offset=0):
        if length <= 0:
            raise RuntimeError("mmap failed")
        try:
            self._map = mmap.mmap(fd, length, flags=flags, prot=prot, offset=offset)
        except (OSError, ValueError) as exc:
            raise RuntimeError("mmap failed") from exc
        self._length = length

    @property
    def data(self):
        """The mapped buffer, or None once closed."""
        return self._map

    @property
    def length(self):
        """Length of the mapping in bytes; 0 once closed."""
        return self._length

    def __len__(self):
        return self._length

    def close(self):
        """Unmap the region; closing twice does nothing."""
        if self._map is not None:
            self._map.close()
            self._map = None
            self._length = 0

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def __del__(self):
        if getattr(self, "_map", None) is not None:
            self.close()