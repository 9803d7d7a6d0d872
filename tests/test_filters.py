import pytest

from rawpng.exceptions import FormatError, RangeError
from rawpng.images.png.enum import PNGFilterAdaptiveType, PNGColorType
from rawpng.images.png.filters import (
    defilter,
    filter_scanline,
    iter_defiltered,
    paeth_predictor,
)
from rawpng.images.png.geometry import bits_per_pixel, bytes_per_pixel, scanline_size
from rawpng.images.png.utils import iter_samples, iter_scanlines


# two rows of two RGB pixels, chosen so that the arithmetic wraps around
ROWS = [
    bytes([250, 5, 128, 3, 255, 64]),
    bytes([1, 200, 127, 255, 0, 66]),
]


@pytest.mark.parametrize('color, depth, bits', [
    (0, 8, 8),
    (2, 8, 24),
    (3, 4, 4),
    (4, 16, 32),
    (6, 8, 32),
    (PNGColorType.RGBA, 16, 64),
    (2, 1, 3),
])
def test_bits_per_pixel(color, depth, bits):
    assert bits_per_pixel(color, depth) == bits


@pytest.mark.parametrize('color', [1, 5, 7, 255])
def test_bits_per_pixel_unknown_color(color):
    with pytest.raises(FormatError, match='unknown color type'):
        bits_per_pixel(color, 8)


@pytest.mark.parametrize('bits, expected', [
    (1, 1),
    (4, 1),
    (8, 1),
    (24, 3),
    (32, 4),
    (48, 6),
])
def test_bytes_per_pixel(bits, expected):
    assert bytes_per_pixel(bits) == expected


def test_scanline_size():
    assert scanline_size(2, 24) == 7
    assert scanline_size(10, 1) == 3
    assert scanline_size(3, 4) == 3


@pytest.mark.parametrize('filter_type', list(PNGFilterAdaptiveType))
def test_defilter_reverse_filter(filter_type):
    data = filter_scanline(filter_type, ROWS[0], bytes(6), 3) + filter_scanline(filter_type, ROWS[1], ROWS[0], 3)

    assert data[0] == filter_type.value
    assert data[7] == filter_type.value
    assert defilter(data, 2, 2, 24, 3) == ROWS[0] + ROWS[1]


def test_defilter_sub():
    data = b'\x01' + bytes([1, 2, 3, 10, 20, 30])

    assert defilter(data, 2, 1, 24, 3) == bytes([1, 2, 3, 11, 22, 33])


def test_defilter_up_first_row():
    """The row above the first one is made of zeros."""
    data = b'\x02' + bytes([1, 2, 3])

    assert defilter(data, 1, 1, 24, 3) == bytes([1, 2, 3])


def test_defilter_avg():
    data = b'\x00' + bytes([100, 100, 100]) + b'\x03' + bytes([1, 1, 1])

    assert defilter(data, 1, 2, 24, 3) == bytes([100, 100, 100, 51, 51, 51])


def test_defilter_mixed_filters():
    rows = [bytes((x * 7 + y * 13) & 0xff for x in range(12)) for y in range(5)]
    previous = bytes(12)
    data = b''
    for y, row in enumerate(rows):
        data += filter_scanline(y % 5, row, previous, 4)
        previous = row

    assert defilter(data, 3, 5, 32, 4) == b''.join(rows)


def test_paeth_predictor():
    assert paeth_predictor(7, 7, 7) == 7
    assert paeth_predictor(0, 0, 0) == 0
    # closest to a + b - c
    assert paeth_predictor(10, 20, 10) == 20
    assert paeth_predictor(20, 10, 10) == 20
    assert paeth_predictor(10, 20, 30) == 10
    assert paeth_predictor(50, 60, 55) == 55


def test_defilter_paeth_same_neighbours():
    """When left, above and upper left are the same the predictor is the left one."""
    data = b'\x00' + bytes([9, 9, 9, 9, 9, 9]) + b'\x04' + bytes([0, 0, 0, 1, 2, 3])

    assert defilter(data, 2, 2, 24, 3) == bytes([9] * 6 + [9, 9, 9, 10, 11, 12])


def test_defilter_bad_filter_type():
    data = b'\x01' + bytes([1, 2, 3, 4, 5, 6]) + b'\x05' + bytes(6)

    rows = iter_defiltered(data, 2, 2, 24, 3)
    first = next(rows)

    with pytest.raises(FormatError, match='bad filter type') as excinfo:
        next(rows)

    assert excinfo.value.chain == ['scanline[1]']
    assert first == bytes([1, 2, 3, 5, 7, 9])

    with pytest.raises(FormatError):
        defilter(data, 2, 2, 24, 3)


def test_defilter_short_data():
    with pytest.raises(RangeError):
        defilter(b'\x00' + bytes(6), 2, 2, 24, 3)


def test_defilter_sub_byte_depth():
    """With 1 bit per pixel the filters work on a stride of one byte."""
    data = b'\x01' + bytes([0b10000000, 0b00000001])

    assert defilter(data, 16, 1, 1, 1) == bytes([0b10000000, 0b10000001])


def test_filter_scanline_bad_type():
    with pytest.raises(FormatError):
        filter_scanline(9, ROWS[0], bytes(6), 3)


def test_iter_scanlines():
    data = b'\x00abc\x01def\x04ghi'

    assert list(iter_scanlines(data, 1, 24)) == [
        (0, b'abc'),
        (1, b'def'),
        (4, b'ghi'),
    ]


@pytest.mark.parametrize('depth, samples', [
    (1, [1, 0, 1, 1, 0, 1, 0, 0]),
    (2, [2, 3, 1, 0]),
    (4, [0xb, 0x4]),
    (8, [0xb4]),
])
def test_iter_samples(depth, samples):
    assert list(iter_samples(bytes([0b10110100]), depth)) == samples


def test_iter_samples_16bit():
    assert list(iter_samples(b'\x01\x02\xff\xfe', 16)) == [0x0102, 0xfffe]
