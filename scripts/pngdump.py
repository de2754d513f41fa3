#!/usr/bin/env python3
'''
List the chunks of a PNG file, optionally writing a copy with a comment added

 $ pngdump.py image.png
 $ pngdump.py image.png 'made with love' commented.png
'''
import logging
import os
import shutil
import sys

from pngchunks.images.png.utils import (
    iter_chunks,
    png_stream,
    pack_png,
    insert_text,
)


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'usage: {progname} <png file path> [<comment> <output path>]')
    sys.exit(1)


def dump_chunks(chunks):
    for idx, chunk in enumerate(chunks):
        print(f'[{idx:02d}] {chunk}')


def main(argv):
    if len(argv) not in (2, 4):
        usage(argv[0])

    filepath = argv[1]

    with png_stream(filepath) as stream:
        chunks = list(iter_chunks(stream))

    dump_chunks(chunks)

    if len(argv) == 4:
        comment, output = argv[2], argv[3]
        logger.info('writing %s with comment %r' % (output, comment))
        with pack_png(insert_text(chunks, comment)) as src, open(output, 'wb') as dst:
            shutil.copyfileobj(src, dst)


if __name__ == '__main__':
    main(sys.argv)
