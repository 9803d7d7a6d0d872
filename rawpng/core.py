"""
Core module for the abstraction of a file format

"""
from typing import Tuple, List, Dict

from .enum import Compliant
from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import (
    ChunkUnpackException,
    UnpackException,
    MagicException,
)
from .properties import (
    get_root_from_chunk,
    Dependency,
    ChunkPhase,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: its main attributes
    are offset and size that identify a Chunk.

    A Chunk can contain sub-chunks, declared as class attributes in the order
    they appear in the stream.

    Passing a path or some bytes to the constructor unpacks them right away.
    """

    def __init__(self, filepath=None, **kwargs):
        super().__init__(**kwargs)

        if filepath is not None:
            with Stream(filepath) as stream:
                self.logger.debug('unpacking \'%s\' from %s', self.__class__.__name__, stream)
                self.unpack(stream)
        else:
            self.relayout()

    def init(self):
        pass

    def _get_value(self):
        return self

    def _set_value(self, value):
        raise AttributeError(f'a {self.__class__.__name__} can\'t be assigned a value')

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def get_dependencies(self) -> Dict[str, Dependency]:
        dep = super().get_dependencies()

        for field_name, field in self.get_fields():
            for key, value in field.get_dependencies().items():
                dep.update({f'{field_name}.{key}': value})

        return dep

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    @property
    def root(self):
        '''Obtain the final father of this chunk'''
        return get_root_from_chunk(self)

    @property
    def isRoot(self):
        return self.root is self

    def _get_size(self):
        '''the size is derived from the subchunks'''
        return sum(field.size for _, field in self.get_fields())

    def _get_raw(self):
        return b''.join(field.raw for _, field in self.get_fields())

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def relayout(self, offset=0):
        '''Reset the offsets of the children so that they are contiguous
        starting from the offset passed as argument.'''
        phase_old = self._phase
        self._phase = ChunkPhase.RELAYOUTING
        self.offset = offset

        size = 0
        for field_name, field_instance in self.get_fields():
            self.logger.debug('relayouting %s.%s', self.__class__.__name__, field_name)
            size += field_instance.relayout(offset=offset + size)

        self._phase = phase_old

        return size

    def validate(self):
        '''Override to check the consistency of the chunk once unpacked'''
        return True

    def is_unpack_complete(self, field_name) -> bool:
        '''Called after each field is unpacked: returning True the remaining
        fields are not read from the stream (they keep their defaults).'''
        return False

    def unpack(self, stream):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        The fields are unpacked in order; when one of them fails the exception
        raised carries in "chain" the path of the fields involved.
        '''
        self._phase = ChunkPhase.UNPACKING
        self.offset = stream.tell()

        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s at offset %d', self.__class__.__name__, field_name, stream.tell())

            field.offset = stream.tell()

            try:
                field.unpack(stream)
            except (UnpackException, ChunkUnpackException) as e:
                e.chain.append(field_name)
                raise ChunkUnpackException(chain=e.chain, message=e.message) from e
            except MagicException as e:
                e.chain.append(field_name)
                raise

            if self.is_unpack_complete(field_name):
                self.logger.debug('%s complete after field \'%s\'', self.__class__.__name__, field_name)
                break

        self._phase = ChunkPhase.DONE

        if not self.validate():
            self.logger.warning(f'validation for \'{self.name or self.__class__.__name__}\' failed')
            if self.is_compliant(Compliant.MAGIC):
                raise MagicException(chain=[], message=f'{self.__class__.__name__} is not consistent')
