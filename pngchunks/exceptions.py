class PNGChunksException(Exception):
    '''Base class to extend in order to throw exception in pngchunks.

    It takes as first argument the chain of the fields that caused the
    exception, the outermost first.
    '''

    def __init__(self, chain, msg=None):
        self.chain = chain
        self.msg = msg
        super().__init__(msg or '.'.join(chain))

    def __str__(self):
        location = '.'.join(self.chain)
        if not self.msg:
            return location

        return f'{location}: {self.msg}' if location else self.msg


class UnpackException(PNGChunksException):
    pass


class TruncatedChunkException(UnpackException, EOFError):
    '''The stream ended before a field of the chunk was completely read.'''

    def __init__(self, chain, expected, obtained):
        self.expected = expected
        self.obtained = obtained
        super().__init__(chain, msg=f'expected {expected} bytes, stream ended after {obtained}')


class UndisplayablePayloadException(PNGChunksException):
    '''A chunk tagged as text doesn't contain valid text.'''
    pass
