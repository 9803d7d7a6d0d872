"""
# rawpng: PNG images down to their pixels.

The format is described declaratively: a file format is a tree of chunks
whose leaves are fields, i.e. something with a direct binary representation
(an integer, a sequence of bytes). Unpacking a chunk means unpacking its
fields in order from a stream; a field can depend on another one (like the
payload of a PNG chunk with respect to its length).

On top of that the pixels are obtained via the following steps

 1. parse(): validate the signature, read the IHDR chunk and collect the
    payload of the IDAT chunks
 2. inflate(): decompress the payload
 3. defilter(): reverse the filter applied to each scanline
 4. assemble(): expand the samples into an RGBA buffer

see rawpng.images.png.decoder.decode().

An instance representing a file format can be in one of the following states

 1. INIT
 2. UNPACKING
 3. RELAYOUTING
 4. DONE

"""
