class RawPNGException(Exception):
    '''Base class to extend in order to throw exception in rawpng.

    It takes as first argument the chain of the fields that caused
    the exception (outermost last) and optionally a message.
    '''

    def __init__(self, chain=None, message=None):
        self.chain = chain if chain is not None else []
        self.message = message
        super().__init__(message or '')

    def __str__(self):
        msg = self.message or self.__class__.__name__
        if self.chain:
            return '%s (at %s)' % (msg, '.'.join(reversed(self.chain)))

        return msg


class FormatError(RawPNGException):
    '''The data doesn't follow the format'''
    pass


class UnpackException(FormatError):
    pass


class MagicException(FormatError):
    pass


class ChunkUnpackException(FormatError):
    pass


class UnsupportedProfile(FormatError):
    '''The image is valid but the pixel pipeline can't represent it.'''
    pass


class DecompressionError(RawPNGException):
    pass


class RangeError(RawPNGException):
    '''The raw data is shorter than what the geometry implies.'''
    pass
