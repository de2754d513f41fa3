import io

import pytest
from PIL import Image
from PIL.PngImagePlugin import PngInfo


@pytest.fixture
def png_path(tmp_path):
    """A real 5x5 red PNG written by Pillow."""
    path = tmp_path / 'red.png'
    Image.new('RGB', (5, 5), color='red').save(path)

    return path


@pytest.fixture
def png_commented_path(tmp_path):
    info = PngInfo()
    info.add_text('Comment', 'kebab')

    path = tmp_path / 'commented.png'
    Image.new('P', (5, 5)).save(path, pnginfo=info)

    return path


class ShortReader(io.RawIOBase):
    """Gives back at most one byte for each read."""

    def __init__(self, data):
        super().__init__()
        self._data = io.BytesIO(data)

    def readable(self):
        return True

    def readinto(self, buffer):
        b = self._data.read(1)
        buffer[:len(b)] = b
        return len(b)


class FaultyReader(object):
    """Raises OSError for the first `faults` reads, then behaves like BytesIO."""

    def __init__(self, data, faults=1):
        self._data = io.BytesIO(data)
        self.faults = faults

    def read(self, n=-1):
        if self.faults:
            self.faults -= 1
            raise OSError('device not ready')

        return self._data.read(n)


@pytest.fixture
def short_reader():
    return ShortReader


@pytest.fixture
def faulty_reader():
    return FaultyReader
