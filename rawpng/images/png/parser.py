'''
Walk the chunks of a PNG stream and extract what is needed to decode the image.
'''
import logging

from rawpng.enum import DEFAULT_COMPLIANT
from rawpng.streams import Stream

from . import PNGFile
from .utils import get_IDAT_data


logger = logging.getLogger(__name__)


def read_png(data, compliant=DEFAULT_COMPLIANT) -> PNGFile:
    '''Unpack the chunks; a file opened from a path is closed before returning'''
    png = PNGFile(compliant=compliant)

    if isinstance(data, Stream):
        png.unpack(data)
    else:
        with Stream(data) as stream:
            png.unpack(stream)

    return png


def extract(png, logger=logger):
    '''From an unpacked PNGFile obtain the header and the IDAT payload'''
    header = png.ihdr.Data.to_header()
    logger.info('width: %d height: %d depth: %d colorType: %d interlace: %s',
                header.width, header.height, header.depth, header.color, header.is_interlaced)

    for chunk in png.iter_chunks():
        logger.info('chunk: %s length: %d %s', chunk.tag, chunk.length.value,
                    'critical' if chunk.isCritical() else 'ancillary')

    payload = get_IDAT_data(png.chunks)
    logger.info('data length: %d', len(payload))

    return header, payload


def parse(data, logger=logger, compliant=DEFAULT_COMPLIANT):
    '''Returns the header of the image and the concatenation of the payloads of the
    IDAT chunks (still compressed).

    "data" can be some bytes, a path or a Stream; the diagnostics are emitted
    via the logger passed as argument.'''
    return extract(read_png(data, compliant=compliant), logger=logger)
