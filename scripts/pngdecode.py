#!/usr/bin/env python3
'''
Decode a PNG down to its pixels and write them back as an RGBA PNG.

 $ pngdecode.py images/lenna.png output.png
'''
import logging
import os
import sys

from rawpng.exceptions import RawPNGException
from rawpng.images.png.decoder import decode, encode_image


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'usage: {progname} <png file path> [output path]')
    sys.exit(1)


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    filepath = sys.argv[1]
    output_path = sys.argv[2] if len(sys.argv) > 2 else 'output.png'

    try:
        pixels = decode(filepath, logger=logger)
    except (RawPNGException, OSError) as e:
        logger.error(f'{filepath}: {e}')
        sys.exit(1)

    with open(output_path, 'wb') as output:
        output.write(encode_image(pixels))

    print('Complete')
