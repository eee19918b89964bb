import mmap
import os

import pytest

from ringmaster.memory_map import MMap

RW = mmap.PROT_READ | mmap.PROT_WRITE


def test_anonymous_mapping_read_write():
    with MMap(4096, RW, mmap.MAP_PRIVATE, -1, 0) as region:
        assert region.length == 4096
        assert len(region) == 4096
        region.data[:5] = b"hello"
        assert bytes(region.data[:5]) == b"hello"


def test_file_mapping_reads_content(tmp_path):
    path = tmp_path / "f.bin"
    path.write_bytes(b"mapped content")
    fd = os.open(path, os.O_RDONLY)
    try:
        with MMap(14, mmap.PROT_READ, mmap.MAP_SHARED, fd, 0) as region:
            assert bytes(region.data[:14]) == b"mapped content"
    finally:
        os.close(fd)


def test_shared_write_reaches_file(tmp_path):
    path = tmp_path / "f.bin"
    path.write_bytes(b"aaaa")
    fd = os.open(path, os.O_RDWR)
    try:
        region = MMap(4, RW, mmap.MAP_SHARED, fd, 0)
        region.data[:4] = b"bbbb"
        region.data.flush()
        region.close()
    finally:
        os.close(fd)
    assert path.read_bytes() == b"bbbb"


def test_close_releases_mapping():
    region = MMap(4096, RW, mmap.MAP_PRIVATE, -1, 0)
    region.close()
    region.close()
    assert region.length == 0
    assert region.data is None


def test_zero_length_fails():
    with pytest.raises(RuntimeError):
        MMap(0, RW, mmap.MAP_PRIVATE, -1, 0)


def test_bad_descriptor_fails():
    r, w = os.pipe()
    os.close(r)
    os.close(w)
    with pytest.raises(RuntimeError):
        MMap(4096, mmap.PROT_READ, mmap.MAP_SHARED, r, 0)