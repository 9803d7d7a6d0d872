import struct
import zlib
import pytest


PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'


class PNGBuilder(object):
    '''Builds PNG streams chunk by chunk, the scanlines are taken as they are (filter byte included).'''

    signature = PNG_SIGNATURE

    @staticmethod
    def chunk(tag: bytes, data: bytes = b'') -> bytes:
        return struct.pack('>I', len(data)) + tag + data + struct.pack('>I', zlib.crc32(tag + data))

    def ihdr(self, width, height, depth=8, color=2, compression=0, filter=0, interlace=0):
        return self.chunk(b'IHDR', struct.pack('>IIBBBBB', width, height, depth, color, compression, filter, interlace))

    def build(self, width, height, scanlines, extra=(), n_idat=1, **ihdr):
        '''"extra" chunks are put between IHDR and the first IDAT'''
        compressed = zlib.compress(scanlines)
        bounds = [len(compressed) * _ // n_idat for _ in range(n_idat + 1)]
        idats = [compressed[start:end] for start, end in zip(bounds, bounds[1:])]

        return b''.join([
            self.signature,
            self.ihdr(width, height, **ihdr),
            *extra,
            *[self.chunk(b'IDAT', _) for _ in idats],
            self.chunk(b'IEND'),
        ])

    @staticmethod
    def unfiltered(rows) -> bytes:
        '''Prefix each row with the filter type NONE'''
        return b''.join(b'\x00' + bytes(row) for row in rows)


@pytest.fixture
def png_builder():
    return PNGBuilder()


@pytest.fixture
def rgb_2x2():
    '''The pixels of a 2x2 truecolor image, row by row'''
    return [
        [(10, 20, 30), (40, 50, 60)],
        [(70, 80, 90), (100, 110, 120)],
    ]


@pytest.fixture
def rgb_2x2_png(png_builder, rgb_2x2):
    rows = [bytes(sample for pixel in row for sample in pixel) for row in rgb_2x2]
    return png_builder.build(2, 2, png_builder.unfiltered(rows))
