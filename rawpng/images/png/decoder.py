'''
The whole decoding pipeline:

    bytes -> parse() -> inflate() -> defilter() -> assemble() -> PixelBuffer

Each stage completes before the following one starts and any error aborts
the decoding.
'''
import io
import logging
import zlib

from rawpng.enum import Compliant, DEFAULT_COMPLIANT
from rawpng.exceptions import DecompressionError, UnsupportedProfile

from .enum import PNGColorType
from .filters import defilter
from .parser import parse
from .pixels import assemble


logger = logging.getLogger(__name__)

SUPPORTED_COLORS = (PNGColorType.RGB.value, PNGColorType.RGBA.value)
SUPPORTED_DEPTH = 8


def inflate(payload: bytes) -> bytes:
    try:
        return zlib.decompress(payload)
    except zlib.error as e:
        raise DecompressionError(message=str(e)) from e


def check_profile(header, logger=logger, compliant=DEFAULT_COMPLIANT):
    '''The pixels are expanded correctly only for non interlaced, 8 bit, truecolor images'''
    reasons = []
    if header.is_interlaced:
        reasons.append('interlaced images are not supported')
    if header.depth != SUPPORTED_DEPTH:
        reasons.append(f'bit depth {header.depth} is not supported')
    if header.color not in SUPPORTED_COLORS:
        reasons.append(f'color type {PNGColorType(header.color).name} is not supported')

    if not reasons:
        return

    message = ', '.join(reasons)

    if compliant & Compliant.PROFILE:
        raise UnsupportedProfile(message=message)

    logger.warning('%s: the pixels will not be decoded correctly', message)


def decode(data, logger=logger, compliant=DEFAULT_COMPLIANT):
    '''Decode a PNG (bytes, path or Stream) into a PixelBuffer'''
    header, payload = parse(data, logger=logger, compliant=compliant)

    return decode_payload(header, payload, logger=logger, compliant=compliant)


def decode_payload(header, payload, logger=logger, compliant=DEFAULT_COMPLIANT):
    '''The stages following the parsing, given the header and the IDAT payload'''
    bits_per_pixel = header.bits_per_pixel
    bytes_per_pixel = header.bytes_per_pixel

    check_profile(header, logger=logger, compliant=compliant)

    data = inflate(payload)
    logger.info('uncompressed data length: %d', len(data))

    data = defilter(data, header.width, header.height, bits_per_pixel, bytes_per_pixel)
    logger.info('applied filter type data length: %d', len(data))

    return assemble(data, header.width, header.height, bytes_per_pixel)


def encode_image(buffer) -> bytes:
    '''Re-encode the pixels as a PNG'''
    output = io.BytesIO()
    buffer.to_image().save(output, format='PNG')

    return output.getvalue()
