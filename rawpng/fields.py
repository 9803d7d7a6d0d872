"""
A Field is "fundamental" datatype from the format point of view, something directly
unpackable from a stream without need of sub-components.
"""
import logging
import struct
from enum import Enum
from typing import Dict

from .enum import Compliant
from .meta import FieldBase, Endianess
from .properties import Dependency, ChunkPhase, PropertyDescriptor
from .exceptions import UnpackException, MagicException, ChunkUnpackException


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, *args, name=None, father=None, default=None, offset=None,
                 endianess=Endianess.LITTLE_ENDIAN, compliant=Compliant.INHERIT, is_magic=False):
        super().__init__()
        self._phase = ChunkPhase.INIT
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.endianess = endianess
        self.compliant = compliant
        self.is_magic = is_magic

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def get_dependencies(self) -> Dict[str, Dependency]:
        """Return the dictionary containing as key the attribute depending on another field"""
        instance_dict = self.__dict__
        return {_k: _v for _k, _v in instance_dict.items() if isinstance(_v, Dependency)}

    def is_compliant(self, level):
        '''Returns True if this field, or the first ancestor not inheriting, requires the level'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    def _get_value(self):
        return self._value

    def _set_value(self, value):
        self._value = value

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    def _set_raw(self, value) -> None:
        raise NotImplementedError(f"method {self.__class__.__name__}._set_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
        fset=lambda self, value: self._set_raw(value),
    )

    def relayout(self, offset=0):
        self.offset = offset

        return self.size

    def read(self, stream, size) -> bytes:
        '''Read exactly size bytes from the stream'''
        data = stream.read(size)

        if len(data) != size:
            message = f'unexpected end of data: needed {size} bytes, got {len(data)}'
            self.logger.debug(message)
            exc = MagicException if self.is_magic and self.is_compliant(Compliant.MAGIC) else UnpackException
            raise exc(chain=[], message=message)

        return data

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module unpacking
    integers from bytes.

    The main advantage is the possibility to indicate via the "enum" argument some subclass
    of enum.Enum so to have directly a representation of the integer value of the field itself.
    """

    def __init__(self, format, default=0, enum=None, **kw):
        self.format = format
        self.enum = enum
        super().__init__(default=default, **kw)

    def __repr__(self):
        if not self.enum or not isinstance(self.value, Enum):
            return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

        return f'<{self.__class__.__name__}({self.value!r})>'

    def __str__(self):
        width = self.size * 2
        formatter = '0x%%0%dx' % width
        return formatter % (self.integer,)

    @property
    def integer(self) -> int:
        return self.value.value if isinstance(self.value, Enum) else self.value

    def value_from_default(self):
        if not self.enum:
            return super().value_from_default()

        return self.enum(self.default)

    def get_format(self):
        return '%s%s' % (self.endianess.struct_prefix, self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _get_raw(self) -> bytes:
        return struct.pack(self.get_format(), self.integer)

    def _set_raw(self, raw: bytes) -> None:
        self.value = self._unpack(raw)

    def _unpack_struct(self, value: bytes) -> int:
        try:
            unpacked_value = struct.unpack(self.get_format(), value)[0]
        except struct.error as e:
            self.logger.error(e)
            exc = MagicException if self.is_magic and self.is_compliant(Compliant.MAGIC) else UnpackException
            raise exc(chain=[], message=str(e))

        return unpacked_value

    def _unpack_enum(self, value: int):
        try:
            return self.enum(value)
        except ValueError:
            if self.is_compliant(Compliant.ENUM):
                raise UnpackException(chain=[], message=f'{value} is not a valid {self.enum.__name__}')

            self.logger.warning(f'enum {self.enum!r} doesn\'t have element with value 0x{value:x} in it')

        return value

    def _unpack(self, raw):
        value = self._unpack_struct(raw)
        if self.enum:
            value = self._unpack_enum(value)

        if self.is_magic and value != self.value_from_default():
            self.logger.warning('the magic doesn\'t correspond')
            if self.is_compliant(Compliant.MAGIC):
                raise MagicException(chain=[], message=f'bad magic {value!r}')

        return value

    def unpack(self, stream):
        self._phase = ChunkPhase.UNPACKING
        self.value = self._unpack(self.read(stream, self.size))
        self._phase = ChunkPhase.DONE


class StringField(Field):
    """Represent a contiguous chunk of bytes.

    The length can be a Dependency: in that case setting a value of a different
    size updates the field the length depends on."""

    length = PropertyDescriptor('length', int)

    def __init__(self, n=None, **kw):
        if n is None and kw.get('default') is None:
            raise ValueError("StringField must have 'n' or 'default' indicated!")

        self.length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def __len__(self):
        return len(self.value)

    def value_from_default(self):
        return b'\x00' * (self.length or 0) if self.default is None else self.default

    def _get_size(self):
        return len(self.value)

    def _set_value(self, value) -> None:
        """The StringField has the size as a parameter and we must follow that indication
        unless it's a Dependency, in that case we are going to write back the length."""
        length = len(value)
        if StringField.length.is_dependency(self):
            self.length = length
        elif length != self.length:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self.length} bytes)')

        self._value = bytes(value)

    def _get_raw(self):
        return self.value

    def unpack(self, stream):
        self._phase = ChunkPhase.UNPACKING
        length = self.length
        if length is None:
            raise UnpackException(chain=[], message=f'length of \'{self.name}\' can\'t be resolved')

        raw = self.read(stream, length)

        if self.is_magic and raw != self.default:
            self.logger.warning('the magic for \'%s\' doesn\'t correspond: %r', self.name, raw)
            if self.is_compliant(Compliant.MAGIC):
                raise MagicException(chain=[], message=f'expected {self.default!r}, found {raw!r}')

        self._value = raw
        self._phase = ChunkPhase.DONE


class ArrayField(Field):
    '''Unpack an array of Chunks.

    You can indicate an explicit number of elements via the parameter named "n"
    or you can indicate with a callable returning True which element is the terminator
    for the list via the parameter named "canary" (the terminator is part of the array).

    This class must behave like a list in python, obviously cannot implement all the methods.
    '''

    def __init__(self, field_cls, n=0, canary=None, **kw):
        self.field_cls = field_cls
        if n and not isinstance(n, (Dependency, int)):
            raise ValueError('n is \'%s\' must be of the right type' % n.__class__.__name__)

        self._n = n
        self._canary = canary

        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def init(self):
        super().init()
        self.relayout(offset=self.offset or 0)

    def value_from_default(self):
        n = self._n if isinstance(self._n, int) else 0
        return [self.instance_element() for _ in range(n)]

    def clear(self):
        self.value.clear()

    def _get_raw(self):
        return b''.join(element.raw for element in self.value)

    def _get_size(self):
        return sum(element.size for element in self.value)

    def relayout(self, offset=0):
        self.offset = offset
        size = 0
        for field in self.value:
            size += field.relayout(offset=offset + size)

        return size

    def instance_element(self):
        return self.field_cls.create(father=self)  # pass the father so that we don't lose the hierarchy

    def unpack_element(self, element, stream):
        element.unpack(stream)

    def append(self, element):
        element.father = self
        self.value.append(element)

    def unpack(self, stream):
        self._phase = ChunkPhase.UNPACKING
        self.value = []

        n = self._n.resolve(self) if isinstance(self._n, Dependency) else self._n

        self.logger.debug('unpacking array \'%s\' with n=%s canary=%s', self.name, n, self._canary)

        idx = 0
        while self._canary or idx < n:
            element = self.instance_element()
            element.offset = stream.tell()
            try:
                self.unpack_element(element, stream)
            except (UnpackException, ChunkUnpackException, MagicException) as e:
                e.chain.append(f'[{idx}]')
                raise

            self.value.append(element)
            idx += 1

            if self._canary and self._canary(element):
                break

        self._phase = ChunkPhase.DONE
