#!/usr/bin/env python3
'''
List the chunks of a PNG, the filter types of its scanlines and then show it.

 $ convert -size 5x5 xc:red -size 5x5 xc:green -append show:
'''
import collections
import logging
import sys
import os

from rawpng.exceptions import RawPNGException
from rawpng.images.png.decoder import decode_payload, inflate
from rawpng.images.png.filters import get_filter_type
from rawpng.images.png.parser import read_png, extract
from rawpng.images.png.utils import iter_scanlines


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
logger.setLevel(level=logging.INFO if 'DEBUG' not in os.environ else logging.DEBUG)


def usage(progname):
    print(f'usage: {progname} <png file path>')
    sys.exit(1)


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    filepath = sys.argv[1]

    try:
        png = read_png(filepath)

        for idx, chunk in enumerate(png.iter_chunks()):
            print(f'[{idx:02d}] {chunk.tag} {chunk.length.value:8d} {"critical" if chunk.isCritical() else "ancillary"}')

        header, payload = extract(png, logger=logger)
        print(f'image: {header} color type {header.color}')

        data = inflate(payload)
        filters = collections.Counter(ft for ft, _ in iter_scanlines(data, header.width, header.bits_per_pixel))
        for ft, count in sorted(filters.items()):
            name = get_filter_type(ft).name
            print(f'filter {name:5s}: {count} scanlines')

        pixels = decode_payload(header, payload, logger=logger)
    except (RawPNGException, OSError) as e:
        logger.error(f'{filepath}: {e}')
        sys.exit(1)

    pixels.to_image().show()
