'''
# Filtering

Before the compression each scanline is transformed by one of the filter types
(see <http://www.libpng.org/pub/png/spec/1.2/PNG-Filters.html>) chosen by the
encoder; the type is stored in the first byte of the scanline.

To reconstruct a scanline the filters use the bytes of the corresponding sample
in the pixel on the left (a), above (b) and above on the left (c); all of them
are zero outside the image. All the arithmetic is modulo 256.
'''
import logging

from rawpng.exceptions import FormatError, RangeError
from .enum import PNGFilterAdaptiveType
from .geometry import scanline_size


logger = logging.getLogger(__name__)


def paeth_predictor(a: int, b: int, c: int) -> int:
    '''Returns the neighbour closest to a + b - c, ties are solved in the order a, b, c'''
    pa = abs(b - c)
    pb = abs(a - c)
    pc = abs(a + b - 2 * c)

    if pa <= pb and pa <= pc:
        return a
    elif pb <= pc:
        return b

    return c


def _unfilter_none(scanline, previous, bpp):
    pass


def _unfilter_sub(scanline, previous, bpp):
    for i in range(bpp, len(scanline)):
        scanline[i] = (scanline[i] + scanline[i - bpp]) & 0xff


def _unfilter_up(scanline, previous, bpp):
    for i in range(len(scanline)):
        scanline[i] = (scanline[i] + previous[i]) & 0xff


def _unfilter_avg(scanline, previous, bpp):
    for i in range(min(bpp, len(scanline))):
        scanline[i] = (scanline[i] + previous[i] // 2) & 0xff

    for i in range(bpp, len(scanline)):
        scanline[i] = (scanline[i] + (scanline[i - bpp] + previous[i]) // 2) & 0xff


def _unfilter_paeth(scanline, previous, bpp):
    for i in range(min(bpp, len(scanline))):
        # no pixel on the left: the predictor is always the one above
        scanline[i] = (scanline[i] + paeth_predictor(0, previous[i], 0)) & 0xff

    for i in range(bpp, len(scanline)):
        predictor = paeth_predictor(scanline[i - bpp], previous[i], previous[i - bpp])
        scanline[i] = (scanline[i] + predictor) & 0xff


UNFILTERS = {
    PNGFilterAdaptiveType.NONE: _unfilter_none,
    PNGFilterAdaptiveType.SUB: _unfilter_sub,
    PNGFilterAdaptiveType.UP: _unfilter_up,
    PNGFilterAdaptiveType.AVG: _unfilter_avg,
    PNGFilterAdaptiveType.PAETH: _unfilter_paeth,
}


def get_filter_type(value) -> PNGFilterAdaptiveType:
    try:
        return PNGFilterAdaptiveType(value)
    except ValueError:
        raise FormatError(message='bad filter type') from None


def unfilter_scanline(filter_type, scanline: bytearray, previous, bpp: int) -> None:
    '''Reconstruct in place the scanline (without the filter type byte) given
    the reconstructed scanline above it'''
    UNFILTERS[get_filter_type(filter_type)](scanline, previous, bpp)


def iter_defiltered(data, width, height, bits_per_pixel, bytes_per_pixel):
    '''Yield the reconstructed scanlines, top to bottom.

    Each row depends on the one above so they must be processed in order;
    a row yielded is never modified afterwards.'''
    n_byte_scanline = scanline_size(width, bits_per_pixel)

    if len(data) < n_byte_scanline * height:
        raise RangeError(message=f'{len(data)} bytes of data, {n_byte_scanline * height} needed '
                                 f'for {height} scanlines of {n_byte_scanline} bytes')

    previous = bytearray(n_byte_scanline - 1)  # the first row has nothing above

    for y in range(height):
        offset = y * n_byte_scanline
        filter_type = data[offset]
        current = bytearray(data[offset + 1:offset + n_byte_scanline])

        try:
            unfilter_scanline(filter_type, current, previous, bytes_per_pixel)
        except FormatError as e:
            e.chain.append(f'scanline[{y}]')
            raise

        logger.debug('scanline %d: filter type %d', y, filter_type)

        yield bytes(current)

        previous = current


def defilter(data, width, height, bits_per_pixel, bytes_per_pixel) -> bytes:
    '''Reverse the filters of all the scanlines and return the raw samples'''
    return b''.join(iter_defiltered(data, width, height, bits_per_pixel, bytes_per_pixel))


def _filter_sub(scanline, previous, bpp):
    return [
        (scanline[i] - (scanline[i - bpp] if i >= bpp else 0)) & 0xff for i in range(len(scanline))
    ]


def _filter_up(scanline, previous, bpp):
    return [(scanline[i] - previous[i]) & 0xff for i in range(len(scanline))]


def _filter_avg(scanline, previous, bpp):
    return [
        (scanline[i] - ((scanline[i - bpp] if i >= bpp else 0) + previous[i]) // 2) & 0xff
        for i in range(len(scanline))
    ]


def _filter_paeth(scanline, previous, bpp):
    return [
        (scanline[i] - paeth_predictor(
            scanline[i - bpp] if i >= bpp else 0,
            previous[i],
            previous[i - bpp] if i >= bpp else 0,
        )) & 0xff
        for i in range(len(scanline))
    ]


FILTERS = {
    PNGFilterAdaptiveType.NONE: lambda scanline, previous, bpp: list(scanline),
    PNGFilterAdaptiveType.SUB: _filter_sub,
    PNGFilterAdaptiveType.UP: _filter_up,
    PNGFilterAdaptiveType.AVG: _filter_avg,
    PNGFilterAdaptiveType.PAETH: _filter_paeth,
}


def filter_scanline(filter_type, scanline, previous, bpp: int) -> bytes:
    '''The encoder side: returns the filtered scanline with the filter type byte prefixed.
    "previous" is the raw (not filtered) scanline above.'''
    filter_type = get_filter_type(filter_type)

    return bytes([filter_type.value] + FILTERS[filter_type](scanline, previous, bpp))
