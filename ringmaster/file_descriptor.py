"""An owning wrapper around a Unix file descriptor with blocking I/O helpers."""

import fcntl
import os

from ringmaster.exceptions import UnixError

MAX_BUF_SIZE = 1024 * 1024  # 1 MB


def _unix_error(exc, tag=None):
    return UnixError(exc.errno or 0, tag)


class FileDescriptor:
    """Owns a file descriptor and closes it when closed, exited or collected."""

    MAX_BUF_SIZE = MAX_BUF_SIZE

    def __init__(self, fd):
        self._fd = -1
        self._eof = False
        try:
            # close-on-exec by default so descriptors do not leak
            fcntl.fcntl(fd, fcntl.F_SETFD, fcntl.FD_CLOEXEC)
        except OSError as exc:
            raise _unix_error(exc, "FileDescriptor()") from exc
        self._fd = fd

    def __del__(self):
        if getattr(self, "_fd", -1) >= 0:
            try:
                os.close(self._fd)
            except OSError:
                pass
            self._fd = -1

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def fileno(self):
        """The descriptor number, or -1 once closed."""
        return self._fd

    @property
    def eof(self):
        """True once a read has hit end of file."""
        return self._eof

    @property
    def blocking(self):
        """Whether the descriptor is in blocking I/O mode."""
        try:
            return os.get_blocking(self._fd)
        except OSError as exc:
            raise _unix_error(exc, "get_blocking()") from exc

    @blocking.setter
    def blocking(self, value):
        try:
            os.set_blocking(self._fd, bool(value))
        except OSError as exc:
            raise _unix_error(exc, "set_blocking()") from exc

    def close(self):
        """Close the descriptor; closing twice does nothing."""
        if self._fd < 0:
            return
        fd, self._fd = self._fd, -1
        try:
            os.close(fd)
        except OSError as exc:
            raise _unix_error(exc, "close()") from exc

    def write(self, data):
        """Write once and return the bytes written; 0 means it would block."""
        if not data:
            raise ValueError("attempted to write empty data")
        try:
            written = os.write(self._fd, data)
        except BlockingIOError:
            return 0
        except OSError as exc:
            raise _unix_error(exc, "FileDescriptor.write()") from exc
        if written <= 0:
            raise UnixError(0, "FileDescriptor.write()")
        return written

    def read(self, limit=MAX_BUF_SIZE):
        """Read up to ``limit`` bytes; an empty result marks end of file."""
        try:
            data = os.read(self._fd, min(MAX_BUF_SIZE, limit))
        except OSError as exc:
            raise _unix_error(exc, "FileDescriptor.read()") from exc
        if not data:
            self._eof = True
        return data

    def writen(self, data, n):
        """Blocking mode only: write exactly the first ``n`` bytes of ``data``."""
        if not data or n == 0:
            raise ValueError("attempted to write empty data")
        if len(data) < n:
            raise ValueError("data size is smaller than n")
        view = memoryview(data)[:n]
        while view:
            try:
                written = os.write(self._fd, view)
            except OSError as exc:
                raise _unix_error(exc, "FileDescriptor.writen()") from exc
            if written <= 0:
                raise UnixError(0, "FileDescriptor.writen()")
            view = view[written:]

    def write_all(self, data):
        """Blocking mode only: write all of ``data``."""
        self.writen(data, len(data))

    def readn(self, n, allow_partial_read=False):
        """Blocking mode only: read exactly ``n`` bytes.

        At end of file the bytes read so far are returned when
        ``allow_partial_read`` is true; otherwise EOFError is raised.
        """
        if n == 0:
            raise ValueError("attempted to read 0 bytes")
        chunks = []
        total = 0
        while total != n:
            try:
                chunk = os.read(self._fd, n - total)
            except OSError as exc:
                raise _unix_error(exc, "FileDescriptor.readn()") from exc
            if not chunk:
                self._eof = True
                if allow_partial_read:
                    break
                raise EOFError("FileDescriptor.readn(): unexpected EOF")
            chunks.append(chunk)
            total += len(chunk)
        return b"".join(chunks)

    def getline(self):
        """Blocking mode only: read one line, without its newline."""
        line = bytearray()
        while True:
            char = self.read(1)
            if self._eof or char == b"\n":
                break
            line += char
        return bytes(line)

    def seek(self, offset, whence):
        """Move the file offset and return the new one."""
        try:
            return os.lseek(self._fd, offset, whence)
        except OSError as exc:
            raise _unix_error(exc, "FileDescriptor.seek()") from exc

    def reset_offset(self):
        """Go back to the start of the file and clear the end-of-file mark."""
        self.seek(0, os.SEEK_SET)
        self._eof = False

    def file_size(self):
        """Size of the file, leaving the current offset unchanged."""
        saved = self.seek(0, os.SEEK_CUR)
        size = self.seek(0, os.SEEK_END)
        self.seek(saved, os.SEEK_SET)
        return size