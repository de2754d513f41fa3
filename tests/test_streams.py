import io

import pytest

from pngchunks.exceptions import TruncatedChunkException
from pngchunks.streams import SequentialReader, read_exact


def test_sequential_reader_order():
    reader = SequentialReader([io.BytesIO(b'AB'), io.BytesIO(b''), io.BytesIO(b'CD')])

    assert reader.read(10) == b'AB'
    # the empty source is skipped in the same call
    assert reader.read(10) == b'CD'

    for _ in range(3):
        assert reader.read(10) == b''
        assert reader.readinto(bytearray(4)) == 0

    assert reader.current is None


def test_sequential_reader_byte_by_byte():
    reader = SequentialReader([b'AB', b'', b'CD'])

    assert [reader.read(1) for _ in range(6)] == [b'A', b'B', b'C', b'D', b'', b'']


def test_sequential_reader_read_all():
    reader = SequentialReader([b'---- HEADER ----\n', b'content\n', bytearray(b'---- FOOTER ----\n')])

    assert reader.read() == b'---- HEADER ----\ncontent\n---- FOOTER ----\n'


def test_sequential_reader_single_source():
    data = bytes(range(0x100))
    direct = io.BytesIO(data)
    reader = SequentialReader([io.BytesIO(data)])

    for size in (1, 7, 0x10, 0x80, 0x100):
        assert reader.read(size) == direct.read(size)


def test_sequential_reader_no_sources():
    reader = SequentialReader([])

    assert reader.current is None
    assert reader.read(4) == b''
    assert reader.read() == b''


def test_sequential_reader_empty_buffer():
    """Asking for zero bytes is not the same as exhausting a source."""
    reader = SequentialReader([b'AB', b'CD'])
    first = reader.current

    assert reader.readinto(bytearray()) == 0
    assert reader.current is first
    assert reader.pending == 1
    assert reader.read() == b'ABCD'


def test_sequential_reader_error_keeps_position(faulty_reader):
    faulty = faulty_reader(b'CD')
    reader = SequentialReader([b'', faulty, b'EF'])

    with pytest.raises(OSError):
        reader.read(4)

    assert reader.current is faulty
    assert reader.pending == 1

    assert reader.read() == b'CDEF'


def test_sequential_reader_read_only_sources():
    class OnlyRead(object):
        def __init__(self, data):
            self._data = io.BytesIO(data)

        def read(self, n=-1):
            return self._data.read(n)

    reader = SequentialReader([OnlyRead(b'AB'), OnlyRead(b''), OnlyRead(b'CD')])

    assert reader.read() == b'ABCD'


def test_sequential_reader_paths(tmp_path):
    path = tmp_path / 'data'
    path.write_bytes(b'\x01\x02\x03')

    with SequentialReader([str(path), b'\x04']) as reader:
        f = reader.current

        assert read_exact(reader, 3) == b'\x01\x02\x03'
        assert reader.read(1) == b'\x04'
        # the file is closed once exhausted
        assert f.closed
        assert reader.read(1) == b''


def test_sequential_reader_close(tmp_path):
    path = tmp_path / 'data'
    path.write_bytes(b'\x01\x02\x03')

    reader = SequentialReader([str(path)])
    f = reader.current
    reader.close()

    assert f.closed
    assert reader.closed


def test_read_exact(short_reader):
    assert read_exact(short_reader(b'\x01\x02\x03\x04'), 3) == b'\x01\x02\x03'
    assert read_exact(io.BytesIO(b''), 0) == b''

    with pytest.raises(TruncatedChunkException) as excinfo:
        read_exact(io.BytesIO(b'\x01\x02'), 3, chain=['field'])

    assert excinfo.value.obtained == 2
    assert str(excinfo.value) == 'field: expected 3 bytes, stream ended after 2'


def test_sequential_reader_non_blocking_source():
    """A source without data ready yet is not exhausted."""
    class NotReady(object):
        def __init__(self):
            self.ready = False

        def read(self, n=-1):
            return b'AB' if self.ready else None

    source = NotReady()
    reader = SequentialReader([source, b'CD'])

    assert reader.read(4) is None
    assert reader.current is source
    assert reader.pending == 1

    source.ready = True
    assert reader.read(4) == b'AB'


def test_sequential_reader_read_after_close():
    source = io.BytesIO(b'AB')
    reader = SequentialReader([source, b'CD'])
    reader.close()

    assert reader.current is None
    assert reader.pending == 0

    with pytest.raises(ValueError):
        reader.read(2)

    # only the sources opened by the reader are closed
    assert not source.closed
