import logging

from . import PNGChunk, PNG_SIGNATURE
from ...streams import SequentialReader, read_exact


logger = logging.getLogger(__name__)


def iter_chunks(stream):
    '''Unpack chunks until the stream ends at a chunk boundary.'''
    while (chunk := PNGChunk.unpack(stream)) is not None:
        yield chunk


def get_chunk_by_name(chunks, name):
    chunk = list(filter(lambda x: str(x.type) == name, chunks))

    if len(chunk) == 0:
        raise ValueError(f'no chunk with name {name}')

    return chunk if len(chunk) > 1 else chunk[0]


def png_stream(path):
    '''Open the file at path and return a stream positioned at its first chunk.

    The signature is not checked, only skipped.'''
    reader = SequentialReader([path])
    try:
        signature = read_exact(reader, len(PNG_SIGNATURE), chain=['signature'])
    except Exception:
        reader.close()
        raise
    logger.debug('skipped signature %r' % signature)

    return reader


def pack_png(chunks) -> SequentialReader:
    '''Assemble signature and chunks into a single stream ready to be written.'''
    return SequentialReader([PNG_SIGNATURE] + [chunk.pack() for chunk in chunks])


def insert_text(chunks, text, covers_type=False):
    '''Return a new list of chunks with a "tEXt" chunk placed before the last one
    (that should be the IEND).'''
    chunks = list(chunks)
    comment = PNGChunk.text(text, covers_type=covers_type)
    position = max(len(chunks) - 1, 0)

    return chunks[:position] + [comment] + chunks[position:]
