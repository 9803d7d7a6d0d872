'''
# Portable Network Graphics

Format created to replace patent-encumbered GIF files.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html> and
is available a full test-suite with a lot of PNG images covering all
the possible cases at <http://www.schaik.com/pngsuite/>.

A file is the signature followed by a sequence of chunks: the first one
must be IHDR, the last one IEND.
'''
from rawpng.core import Chunk
from rawpng import fields
from rawpng.meta import Endianess
from rawpng.properties import Dependency

from .enum import (
    PNGColorType,
    PNGCompressionType,
    PNGFilterType,
    PNGInterlaceType,
    PNGFilterAdaptiveType,
)
from .geometry import ImageHeader


PNG_SIGNATURE = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'
IHDR_SIZE = 13
IEND = b'IEND'

VALID_DEPTHS = (1, 2, 4, 8, 16)


class IHDRData(Chunk):
    '''
    Width and height give the image dimensions in pixels.
    Bit depth is a single-byte integer giving the number of bits per sample or per palette index (not per pixel).
    Color type is a single-byte integer that describes the interpretation of the image data,
    it's kept as a number since an unknown value is detected only when the pixels are needed.
    '''
    width       = fields.StructField('I', endianess=Endianess.BIG_ENDIAN)
    height      = fields.StructField('I', endianess=Endianess.BIG_ENDIAN)
    depth       = fields.StructField('B', default=8)
    color       = fields.StructField('B', default=PNGColorType.RGB.value)
    compression = fields.StructField('B', enum=PNGCompressionType, default=PNGCompressionType.DEFLATE)
    filter      = fields.StructField('B', enum=PNGFilterType, default=PNGFilterType.ADAPTIVE)
    interlace   = fields.StructField('B', enum=PNGInterlaceType, default=PNGInterlaceType.NONE)

    def __str__(self):
        return '%dx%dx%d' % (
            self.width.value,
            self.height.value,
            self.depth.value,
        )

    def validate(self):
        if self.width.value == 0 or self.height.value == 0:
            self.logger.warning('image with size %s', self)
            return False

        if self.depth.value not in VALID_DEPTHS:
            self.logger.warning('bit depth %d is not valid', self.depth.value)
            return False

        return True

    def to_header(self) -> ImageHeader:
        return ImageHeader(
            width=self.width.value,
            height=self.height.value,
            depth=self.depth.value,
            color=self.color.integer,
            interlace=self.interlace.integer,
        )


class PNGHeader(Chunk):
    magic = fields.StringField(8, default=PNG_SIGNATURE, is_magic=True)


class PNGChunk(Chunk):
    '''This is the main data structure of the format: the 4 fields represent
    a chunk into the file. Each field is intended big-endian.

    A chunk is defined as critical or ancillary depending on the case of the
    starting letter of the type field.

    The crc field is network-byte-order CRC-32 computed over the chunk type and chunk data,
    but not the length. It's read but never checked.

    # Critical chunks

     1. IHDR: contains image's width, height, bit depth, color type, compression method, filter method and interlace method
     2. PLTE: contains the palette data
     3. IDAT: contains the actual image data (compressed)
     4. IEND: is the terminator chunk

    The stream ends with the IEND type: its declared length, payload and crc
    are not read.
    '''
    length = fields.StructField('I', endianess=Endianess.BIG_ENDIAN)
    type   = fields.StringField(4)
    Data   = fields.StringField(Dependency('.length'))
    crc    = fields.StructField('I', endianess=Endianess.BIG_ENDIAN)

    def is_unpack_complete(self, field_name):
        return field_name == 'type' and self.isTerminator()

    def isTerminator(self):
        return self.type.value == IEND

    def isCritical(self):
        return chr(self.type.value[0]).isupper()

    @property
    def tag(self) -> str:
        return self.type.value.decode('latin1')


class IHDRChunk(PNGChunk):
    '''The mandatory first chunk: it has a fixed size payload.'''
    type = fields.StringField(4, default=b'IHDR', is_magic=True)
    Data = IHDRData()

    def validate(self):
        if self.length.value != IHDR_SIZE:
            self.logger.warning('IHDR declares %d bytes instead of %d', self.length.value, IHDR_SIZE)
            return False

        return True


class PNGFile(Chunk):
    header = PNGHeader()
    ihdr   = IHDRChunk()
    chunks = fields.ArrayField(PNGChunk(), canary=lambda x: x.isTerminator())

    def iter_chunks(self):
        yield self.ihdr
        yield from self.chunks
