from enum import Enum, auto

import pytest

from rawpng.core import Chunk
from rawpng.enum import Compliant
from rawpng.exceptions import UnpackException, MagicException, ChunkUnpackException
from rawpng.fields import StructField, StringField, ArrayField
from rawpng.meta import Endianess
from rawpng.streams import Stream


def test_structfield_conversion_raw_value():
    """Check that the attributes "value" and "raw" are the analogous
    of the integers and bytes representation for a field."""
    field = StructField('I')

    assert field.size == 4
    assert field.raw == b'\x00\x00\x00\x00'
    assert field.value == 0

    field.value = 0xcafe

    assert field.value == 0xcafe
    assert field.raw == b'\xfe\xca\x00\x00'


def test_structfield_set_raw():
    field = StructField('I')

    field.raw = b'\x01\x02\x03\x04'
    assert field.value == 0x04030201

    field = StructField('I', endianess=Endianess.BIG_ENDIAN)

    field.raw = b'\x01\x02\x03\x04'
    assert field.value == 0x01020304
    assert str(field) == '0x01020304'


def test_structfield_enum():
    class DummyEnum(Enum):
        NONE = 0
        FIRST = auto()
        SECOND = auto()

    field = StructField('I', enum=DummyEnum, compliant=Compliant.ENUM)

    assert field.value == DummyEnum.NONE

    field.value = DummyEnum.SECOND

    assert field.value == DummyEnum.SECOND
    assert field.raw == b'\x02\x00\x00\x00'

    with pytest.raises(UnpackException):
        field.raw = b'\x04\x00\x00\x00'


def test_structfield_enum_not_compliant():
    """Without compliance an unknown value is kept as an integer."""
    class DummyEnum(Enum):
        NONE = 0

    field = StructField('B', enum=DummyEnum, compliant=Compliant.NONE)

    field.raw = b'\x07'

    assert field.value == 7
    assert field.integer == 7


def test_structfield_unpack_truncated():
    field = StructField('I')

    with pytest.raises(UnpackException):
        field.unpack(Stream(b'\x01\x02'))


def test_stringfield():
    field = StringField(0x10)

    assert field.size == 0x10
    assert len(field.raw) == field.size
    assert field.raw == b'\x00' * field.size

    with pytest.raises(ValueError):
        field.value = b'kebab'

    data = b''.join([bytes([_]) for _ in range(0x10)])

    field.value = data

    assert field.value == data
    assert field.raw == data


def test_stringfield_needs_length():
    with pytest.raises(ValueError):
        StringField()


def test_stringfield_magic():
    field = StringField(default=b'MAGIC', is_magic=True, compliant=Compliant.MAGIC)

    field.unpack(Stream(b'MAGIC'))
    assert field.value == b'MAGIC'

    with pytest.raises(MagicException):
        field.unpack(Stream(b'MAGI!'))

    with pytest.raises(MagicException):
        field.unpack(Stream(b'MA'))


def test_stringfield_magic_not_compliant(caplog):
    """Without compliance a wrong magic is only reported."""
    field = StringField(default=b'MAGIC', is_magic=True, compliant=Compliant.NONE)

    field.unpack(Stream(b'NOPE!'))

    assert field.value == b'NOPE!'
    assert 'doesn\'t correspond' in caplog.text


def test_arrayfield():
    length = 10
    array = ArrayField(StructField('I'), n=length)

    # check some basic property
    assert isinstance(array.value, list)
    assert len(array.value) == length
    assert len(array) == length

    # check that the elements are not duplicated
    assert array[0] is not array[1]

    # check the offsets make sens
    assert array[0].offset == 0
    assert array[1].offset == 4
    assert array[9].offset == 36

    # check the value are all zero
    for _ in range(len(array)):
        field = array[_]
        assert field.value == 0

    # set one and check is actually changed
    array[3].value = 0xcafebabe
    assert [_.value for _ in array] == [
        0, 0, 0, 0xcafebabe, 0, 0, 0, 0, 0, 0,
    ]

    array.clear()

    assert len(array) == 0


class Record(Chunk):
    tag = StringField(1)
    count = StructField('B')


def test_arrayfield_canary():
    """The element satisfying the canary is the last one unpacked."""
    array = ArrayField(Record(), canary=lambda x: x.tag.value == b'Z')

    stream = Stream(b'A\x01B\x02Z\x00trailing')
    array.unpack(stream)

    assert [(_.tag.value, _.count.value) for _ in array] == [
        (b'A', 1),
        (b'B', 2),
        (b'Z', 0),
    ]
    assert [_.offset for _ in array] == [0, 2, 4]
    assert stream.tell() == 6


def test_arrayfield_canary_missing():
    array = ArrayField(Record(), canary=lambda x: x.tag.value == b'Z')

    with pytest.raises(ChunkUnpackException) as excinfo:
        array.unpack(Stream(b'A\x01B\x02'))

    assert excinfo.value.chain == ['tag', '[2]']
