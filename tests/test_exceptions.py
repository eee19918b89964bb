import errno

import pytest

from ringmaster.exceptions import UnixError, check_call, check_syscall


def test_check_syscall_passes_through_non_negative():
    assert check_syscall(5) == 5
    assert check_syscall(0, "tag") == 0


def test_check_syscall_minus_one_raises():
    with pytest.raises(UnixError) as info:
        check_syscall(-1)
    assert info.value.errno == 0


def test_check_syscall_negated_errno():
    with pytest.raises(OSError) as info:
        check_syscall(-errno.ENOENT, "open")
    assert isinstance(info.value, UnixError)
    assert info.value.errno == errno.ENOENT
    assert info.value.tag == "open"
    assert "open" in str(info.value)


def test_unix_error_message_without_tag():
    error = UnixError(errno.EBADF)
    assert error.errno == errno.EBADF
    assert error.tag is None
    assert error.strerror.startswith(errno.errorcode[errno.EBADF]) or error.strerror


def test_check_call_mismatch_raises_with_message():
    with pytest.raises(RuntimeError, match="bad value"):
        check_call(1, 2, "bad value")


def test_check_call_default_message():
    with pytest.raises(RuntimeError, match="check_call"):
        check_call("a", "b")