'''
# Portable Network Graphics

Format created to replace patent-emcumbered GIF files.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html>.

After the 8 bytes of signature a PNG file is a sequence of chunks, each one
with the following layout (every integer is big-endian)

    +--------+--------+----------------+--------+
    | length |  type  |      data      |  crc   |
    +--------+--------+----------------+--------+
        4        4         length          4

Here we only handle the structure of the chunks, the meaning of the data
is left to the caller.
'''
import logging
import struct

from ...common.crc import crc32, chunk_crc
from ...exceptions import (
    TruncatedChunkException,
    UndisplayablePayloadException,
)
from ...streams import read_exact


logger = logging.getLogger(__name__)

PNG_SIGNATURE = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'


class PNGChunkType(object):
    '''The 4 bytes identifying the kind of a chunk.

    The case of each letter has a meaning (critical/ancillary, public/private, etc...)
    but we don't interpret it.'''
    __slots__ = ('_raw',)

    TEXT = b'tEXt'

    def __init__(self, raw):
        raw = bytes(raw)
        if len(raw) != 4:
            raise ValueError(f"a chunk type must be 4 bytes long, not {len(raw)}")

        object.__setattr__(self, '_raw', raw)

    def __setattr__(self, name, value):
        raise AttributeError(f"'{self.__class__.__name__}' is immutable")

    @property
    def raw(self) -> bytes:
        return self._raw

    def __bytes__(self):
        return self._raw

    def __eq__(self, other):
        if isinstance(other, PNGChunkType):
            return self._raw == other._raw

        return NotImplemented

    def __hash__(self):
        return hash(self._raw)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self._raw)

    def __str__(self):
        return self._raw.decode('latin1')

    def is_text(self) -> bool:
        return self._raw == self.TEXT


class PNGChunk(object):
    '''This is the main data structure of the format: the 4 fields represent
    a chunk into the file.

    The crc field is stored as it is found, it's never checked against the data
    nor recalculated when packing.

    NOTE: the text chunks built with PNGChunk.text() have the CRC computed over the
    data only, without the chunk type as the PNG specification would want; pass
    covers_type=True to obtain the standard one.
    '''
    length_format = '>I'

    def __init__(self, length: int, type: PNGChunkType, data: bytes, crc: bytes):
        if len(crc) != 4:
            raise ValueError(f"the crc must be 4 bytes long, not {len(crc)}")

        self.length = length
        self.type = type
        self.data = bytes(data)
        self.crc = bytes(crc)

    @classmethod
    def text(cls, text: str, covers_type=False) -> "PNGChunk":
        '''Build a "tEXt" chunk containing the given text.'''
        data = text.encode('utf-8')
        type = PNGChunkType(PNGChunkType.TEXT)
        crc = chunk_crc(type.raw, data) if covers_type else crc32(data)

        return cls(len(data), type, data, struct.pack('>I', crc))

    @classmethod
    def unpack(cls, stream):
        '''Read a chunk from the stream.

        Returns None if the stream ends exactly where a chunk would start,
        raises TruncatedChunkException if it ends in the middle of one.'''
        length = cls.unpack_length(stream)
        if length is None:
            logger.debug('end of stream reached')
            return None

        type = PNGChunkType(read_exact(stream, 4, chain=['type']))
        logger.debug('unpacking chunk \'%s\' with length %d' % (type, length))
        data = read_exact(stream, length, chain=['data'])
        crc = read_exact(stream, 4, chain=['crc'])

        return cls(length, type, data, crc)

    @classmethod
    def unpack_length(cls, stream):
        try:
            raw = read_exact(stream, struct.calcsize(cls.length_format), chain=['length'])
        except TruncatedChunkException as e:
            if e.obtained == 0:
                return None
            raise

        return struct.unpack(cls.length_format, raw)[0]

    def pack(self) -> bytes:
        '''Encode the chunk, every field is written as it is.'''
        logger.debug('packing chunk \'%s\'' % self.type)
        return b''.join([
            struct.pack(self.length_format, self.length),
            self.type.raw,
            self.data,
            self.crc,
        ])

    __bytes__ = pack

    @property
    def crc_value(self) -> int:
        return struct.unpack('>I', self.crc)[0]

    def calculate_crc(self, covers_type=False) -> int:
        '''Compute again the checksum of the data, nothing is modified.'''
        return chunk_crc(self.type.raw, self.data) if covers_type else crc32(self.data)

    def describe(self) -> str:
        msg = 'Chunk type: %s, Data len: %d, CRC: 0x%X' % (self.type, self.length, self.crc_value)

        if self.type.is_text():
            try:
                text = self.data.decode('utf-8')
            except UnicodeDecodeError as e:
                raise UndisplayablePayloadException(['data'], msg=f'text chunk is not valid UTF-8 ({e.reason})') from e
            msg += ' - "%s"' % text

        return msg

    def __str__(self):
        return self.describe()

    def __repr__(self):
        return '<%s(length=%d,type=%r,crc=0x%08x)>' % (
            self.__class__.__name__, self.length, self.type, self.crc_value)

    def __eq__(self, other):
        if not isinstance(other, PNGChunk):
            return NotImplemented

        return (self.length, self.type, self.data, self.crc) == (other.length, other.type, other.data, other.crc)
