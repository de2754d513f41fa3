import io
import logging
from collections import deque

from .exceptions import TruncatedChunkException


logger = logging.getLogger(__name__)


def read_exact(stream, n, chain=None):
    '''Read exactly n bytes from the stream, retrying on short reads.

    It raises TruncatedChunkException if the stream ends before; the exception
    keeps track of how many bytes were actually obtained.'''
    data = bytearray()
    while len(data) < n:
        b = stream.read(n - len(data))
        if not b:
            raise TruncatedChunkException(chain or [], expected=n, obtained=len(data))
        data += b

    return bytes(data)


class SequentialReader(io.RawIOBase):
    '''Concatenate multiple sources into a single stream.

    The sources are drained in order: when the current one returns no data
    the next one is promoted. Like in the following example where the
    signature of a PNG file is placed in front of its chunks

        reader = SequentialReader([PNG_SIGNATURE, open('chunks.bin', 'rb')])
        data = reader.read()

    A source can be a file object, raw bytes or a path.
    '''

    def __init__(self, sources):
        super().__init__()
        self._owned = []
        self._sources = deque()
        self.current = None
        self._sources.extend(self._normalize(_) for _ in sources)
        self.current = self._sources.popleft() if self._sources else None

    def __repr__(self):
        return '<%s(current=%r, pending=%d)>' % (self.__class__.__name__, self.current, len(self._sources))

    def _normalize(self, obj):
        init_method = getattr(self, 'init_%s' % obj.__class__.__name__, None)

        return init_method(obj) if init_method else obj

    def init_str(self, obj):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % obj)
        f = open(obj, 'rb')
        self._owned.append(f)
        return f

    def init_bytes(self, obj):
        '''We think these are raw bytes'''
        return io.BytesIO(obj)

    init_bytearray = init_bytes
    init_memoryview = init_bytes

    @property
    def pending(self):
        '''Number of sources not started yet.'''
        return len(self._sources)

    def readable(self):
        return True

    def _read_current(self, buffer):
        if hasattr(self.current, 'readinto'):
            return self.current.readinto(buffer)

        data = self.current.read(len(buffer))
        if data is None:
            return None

        n = len(data)
        buffer[:n] = data
        return n

    def _advance(self):
        exhausted = self.current
        self.current = self._sources.popleft() if self._sources else None
        logger.debug('source %r exhausted, %d still pending' % (exhausted, len(self._sources)))

        if exhausted in self._owned:
            self._owned.remove(exhausted)
            exhausted.close()

    def readinto(self, buffer):
        if self.closed:
            raise ValueError('I/O operation on closed file.')

        buffer = memoryview(buffer).cast('B')
        if len(buffer) == 0:
            return 0

        while self.current is not None:
            n = self._read_current(buffer)
            if n is None or n > 0:  # None is a non-blocking source without data yet
                return n

            self._advance()

        return 0

    def close(self):
        for f in self._owned:
            f.close()
        self._owned.clear()
        self._sources.clear()
        self.current = None
        super().close()
