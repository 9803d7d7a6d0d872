'''
Expansion of the raw samples into a buffer with a fixed format: 4 bytes
per pixel (R, G, B, A), rows one after the other.

Only 8 bit truecolor images (with or without alpha) are represented correctly:
the first three samples of each pixel are taken as R, G and B while the
alpha is always opaque.
'''
import logging

from rawpng.exceptions import RangeError


logger = logging.getLogger(__name__)


OPAQUE = 0xff


class PixelBuffer(object):

    def __init__(self, width, height, pix=None):
        self.width = width
        self.height = height
        self.pix = pix if pix is not None else bytearray(width * height * 4)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.width}x{self.height})>'

    @property
    def stride(self):
        return self.width * 4

    def pixel(self, x, y):
        offset = y * self.stride + x * 4
        return tuple(self.pix[offset:offset + 4])

    def to_image(self):
        '''Returns a Pillow image with the same content'''
        from PIL import Image

        return Image.frombytes('RGBA', (self.width, self.height), bytes(self.pix))


def assemble(raw, width, height, bytes_per_pixel) -> PixelBuffer:
    needed = bytes_per_pixel * width * height
    if needed > len(raw):
        raise RangeError(message=f'{len(raw)} bytes of samples, {needed} needed for {width}x{height} pixels')

    if bytes_per_pixel < 3:
        raise RangeError(message=f'{bytes_per_pixel} bytes per pixel can\'t hold an RGB sample')

    buffer = PixelBuffer(width, height)

    for y in range(height):
        for x in range(width):
            offset = bytes_per_pixel * (width * y + x)
            idx = y * buffer.stride + x * 4
            buffer.pix[idx:idx + 3] = raw[offset:offset + 3]
            buffer.pix[idx + 3] = OPAQUE

    logger.debug('assembled %r from %d bytes of samples', buffer, len(raw))

    return buffer
