"""Error types and helpers for checking the results of system calls."""

import os


class UnixError(OSError):
    """A failed system call, carrying its errno value and an optional tag."""

    def __init__(self, errno_value=0, tag=None):
        message = os.strerror(errno_value) if errno_value else "system call failed"
        if tag:
            message = f"{tag}: {message}"
        super().__init__(errno_value, message)
        self.tag = tag


def check_syscall(return_value, tag=None):
    """Return ``return_value`` if it is non-negative, otherwise raise UnixError.

    A value of -1 reports failure without a code; any other negative value
    is taken as a negated errno code.
    """
    if return_value >= 0:
        return return_value
    errno_value = -return_value if return_value < -1 else 0
    raise UnixError(errno_value, tag)


def check_call(actual_return, expected_return, error_msg="check_call"):
    """Raise RuntimeError with ``error_msg`` unless the two values are equal."""
    if actual_return != expected_return:
        raise RuntimeError(error_msg)