'''
Mapping between the format of the image and the layout of its samples.

The number of bits per pixel depends on the color type and on the bit depth:
the scanlines always start at a byte boundary and the filters work on a
stride of whole bytes (one byte for depths smaller than 8).
'''
from typing import NamedTuple

from rawpng.exceptions import FormatError
from .enum import PNGColorType


SAMPLES_PER_PIXEL = {
    PNGColorType.GRAYSCALE: 1,
    PNGColorType.RGB: 3,
    PNGColorType.RGB_PALETTE: 1,
    PNGColorType.GS_ALPHA: 2,
    PNGColorType.RGBA: 4,
}


def bits_per_pixel(color, depth: int) -> int:
    try:
        color = PNGColorType(color)
    except ValueError:
        raise FormatError(message='unknown color type') from None

    return depth * SAMPLES_PER_PIXEL[color]


def bytes_per_pixel(bits: int) -> int:
    return (bits + 7) // 8


def scanline_size(width: int, bits: int) -> int:
    '''Bytes of a scanline, the leading filter type byte included'''
    return 1 + (bits * width + 7) // 8


class ImageHeader(NamedTuple):
    width: int
    height: int
    depth: int
    color: int
    interlace: int

    @property
    def bits_per_pixel(self) -> int:
        return bits_per_pixel(self.color, self.depth)

    @property
    def bytes_per_pixel(self) -> int:
        return bytes_per_pixel(self.bits_per_pixel)

    @property
    def scanline_size(self) -> int:
        return scanline_size(self.width, self.bits_per_pixel)

    @property
    def is_interlaced(self) -> bool:
        return self.interlace != 0

    def __str__(self):
        return '%dx%dx%d' % (self.width, self.height, self.depth)
