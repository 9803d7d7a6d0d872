import logging

from .geometry import scanline_size


logger = logging.getLogger(__name__)


def iter_scanlines(data, width, bits):
    '''Split the decompressed data into couples (filter type, filtered scanline)'''
    n_byte_scanline = scanline_size(width, bits)

    logger.debug(f'iterating over scanlines of {n_byte_scanline} bytes for width {width} and {bits} bits per pixel')
    for idx in range(0, len(data) - n_byte_scanline + 1, n_byte_scanline):
        scanline = data[idx:idx + n_byte_scanline]
        yield scanline[0], scanline[1:]


def iter_samples(scanline, depth):
    '''Yield the samples packed into a (defiltered) scanline, whatever the depth'''
    from bitstring import BitArray

    bits = BitArray(bytes(scanline))

    for offset in range(0, len(bits) - depth + 1, depth):
        yield bits[offset:offset + depth].uint


def get_chunk_by_name(chunks, name):
    chunk = [_ for _ in chunks if _.tag == name]

    if len(chunk) == 0:
        raise ValueError(f'no chunk with name {name}')

    return chunk if len(chunk) > 1 else chunk[0]


def get_IDAT_data(chunks):
    '''In a PNG file, the concatenation of the contents of all the IDAT chunks makes up a zlib datastream,
    the boundaries between IDAT chunks are arbitrary and can fall anywhere in the zlib datastream.
    '''
    return b''.join(chunk.Data.value for chunk in chunks if chunk.type.value == b'IDAT')
