import logging
from enum import Enum, auto


class ChunkPhase(Enum):
    '''Enum to state the actual phase of a chunk'''
    INIT        = 0
    RELAYOUTING = auto()
    UNPACKING   = auto()
    DONE        = auto()


def get_root_from_chunk(instance):
    while instance.father is not None:
        instance = instance.father

    return instance


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class Simple(Chunk):
            length = fields.StructField('I')
            data = fields.StringField(Dependency('.length'))

    and have the length of the string contained in the field named 'data'
    strictly connected to the value of the field named 'length'.

    The expression follows the module resolution syntax:

     - '.length' indicates a field at the same level (i.e. a sibling)
     - 'header.length' starts from the root of the hierarchy

    The instance keeps no state about a resolution so that the same
    Dependency can be shared between fields.
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        '''Returns the field the expression points to, None if the
        instance is not attached to a hierarchy yet.'''
        if instance.father is None:
            return None

        fields_path = self.expression.split('.')
        # '.length'.split('.') -> ['', 'length']
        if fields_path[0] == '':
            field = instance.father
            fields_path = fields_path[1:]
        else:
            field = get_root_from_chunk(instance)

        for component_name in fields_path:
            field = getattr(field, component_name)

        self.logger.debug('resolved \'%s\' as field %s', self.expression, field.__class__.__name__)

        return field

    def resolve(self, instance):
        field = self.resolve_field(instance)

        return field.value if field is not None else None

    def resolve_and_set(self, instance, value):
        field = self.resolve_field(instance)

        if field is None:
            return

        field.value = value


class PropertyDescriptor(object):
    """Attribute of a field that can be a plain value or a Dependency:
    in the latter case reading and writing go through the field referenced."""

    def __init__(self, name: str, _type: type):
        self.name = name
        self.type = _type

    def __get__(self, instance, owner=None):
        if instance is None:
            return self

        data = instance.__dict__
        if self.name not in data:
            raise AttributeError(f"no '{self.name}' here!")

        value = data[self.name]

        if isinstance(value, Dependency):
            return value.resolve(instance)

        return value

    def __set__(self, instance, value):
        data = instance.__dict__
        attribute = data.get(self.name)

        if isinstance(attribute, Dependency) and not isinstance(value, Dependency):
            attribute.resolve_and_set(instance, value)
            return

        if not isinstance(value, (self.type, Dependency)):
            raise ValueError(f"A property must be of type {self.type} or a Dependency")

        data[self.name] = value

    def is_dependency(self, instance):
        return isinstance(instance.__dict__.get(self.name), Dependency)
