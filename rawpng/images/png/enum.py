from enum import Enum


class PNGColorType(Enum):
    '''The color type definition of the PNG is a little tricky and doesn't seem
    to follow a bit-mask. We are going to list all the valid cases.'''
    GRAYSCALE   = 0x00
    RGB         = 0x02
    RGB_PALETTE = 0x03
    GS_ALPHA    = 0x04
    RGBA        = 0x06


class PNGCompressionType(Enum):
    '''There is only one method of compression'''
    DEFLATE = 0x00


class PNGFilterType(Enum):
    '''This indicates the preprocessing method applied to the image data before compression.
    At present, only filter method 0 is defined'''
    ADAPTIVE = 0x00


class PNGInterlaceType(Enum):
    NONE  = 0x00
    ADAM7 = 0x01


class PNGFilterAdaptiveType(Enum):
    '''The filter type byte prefixed to every scanline'''
    NONE  = 0x00
    SUB   = 0x01
    UP    = 0x02
    AVG   = 0x03
    PAETH = 0x04
