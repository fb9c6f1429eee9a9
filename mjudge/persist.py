'''Serialization of election definitions and evaluators to JSON-ready dicts.

Every configurable object in mjudge (elections, candidates, evaluators,
validators) can describe itself as a dictionary with a ``class`` key naming
its scoped class and the remaining keys holding its constructor parameters.
The :func:`from_dict` function reconstructs the object from such a
description.

Besides JSON atoms and such object descriptions, only two value types occur
in the parameters: grades (and other enumeration members), stored as
``{'type': <scoped enum class>, 'value': <member name>}``, and candidate sets,
stored as ``{'type': 'frozenset', 'value': [...]}`` sorted by name.
'''

import sys
import enum
import inspect
import importlib
from typing import Any, Dict, List


def simple_serialization(class_: type) -> type:
    '''A decorator to provide a simple to_dict() serialization method.

    The resulting method will serialize all object attributes corresponding
    to the class's constructor parameter names, so the class must store all
    its parameters under the same names (or list the ones to store in a
    ``serialize_params`` class attribute).

    :param class_: The class to add the method to.
    '''
    if hasattr(class_, 'serialize_params'):
        param_names = class_.serialize_params
    else:
        param_names = [
            name for name in inspect.signature(class_.__init__).parameters
            if name != 'self'
        ]

    def to_dict(self) -> Dict[str, Any]:
        out_dict = {'class': scoped_class_name(self)}
        for attr in param_names:
            out_dict[attr] = serialize_value(getattr(self, attr))
        return out_dict

    class_.to_dict = to_dict
    return class_


def serialize_value(value: Any) -> Any:
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    elif isinstance(value, enum.Enum):
        return {'type': scoped_class_name(value), 'value': value.name}
    elif isinstance(value, tuple(ATOMIC_TYPES)):
        return value
    elif isinstance(value, frozenset):
        return {
            'type': 'frozenset',
            'value': [serialize_value(v) for v in sorted(value, key=str)],
        }
    else:
        raise ValueError(f'cannot serialize {value!r} to dict format')


def deserialize_value(value: Any) -> Any:
    if isinstance(value, tuple(ATOMIC_TYPES)):
        return value
    elif not isinstance(value, dict):
        raise ValueError(f'cannot deserialize {value!r}, type unknown')
    elif value.get('type') == 'frozenset':
        return frozenset(deserialize_value(v) for v in value['value'])
    elif is_scoped_identifier(value.get('type')):
        return _deserialize_enum(value)
    elif is_scoped_identifier(value.get('class')):
        return _deserialize_class(value)
    else:
        raise ValueError(f'cannot deserialize {value!r}, type unknown')


def _deserialize_enum(typedef: Dict[str, Any]) -> enum.Enum:
    enum_cls = get_object(typedef['type'])
    if not (isinstance(enum_cls, type) and issubclass(enum_cls, enum.Enum)):
        raise ValueError(f'not an enumeration: {typedef["type"]}')
    try:
        return enum_cls[typedef['value']]
    except KeyError as e:
        raise ValueError(
            f'invalid {enum_cls.__name__} member: {typedef["value"]!r}'
        ) from e


def _deserialize_class(clsdef: Dict[str, Any]) -> Any:
    cls = get_object(clsdef['class'])
    return cls(**{
        key: deserialize_value(val)
        for key, val in clsdef.items() if key != 'class'
    })


def get_object(identifier: str) -> Any:
    module, name = identifier.rsplit('.', 1)
    if module not in sys.modules:
        importlib.import_module(module)
    return getattr(sys.modules[module], name)


def from_dict(value: Dict[str, Any]) -> Any:
    """Reconstruct an mjudge object from a JSON-like dictionary.

    :param value: A dictionary created by :func:`to_dict`.
    """
    if not isinstance(value, dict):
        raise ValueError('invalid mjudge object def: dict expected, '
                         f'got {value!r}')
    elif 'class' not in value:
        raise ValueError('invalid mjudge object def: must have a class key')
    elif not is_scoped_identifier(value['class']):
        inval_cls = value['class']
        raise ValueError(f"invalid mjudge class def: {inval_cls}")
    else:
        return deserialize_value(value)


def to_dict(obj: Any) -> Dict[str, Any]:
    """Serialize an mjudge object to a JSON-ready dictionary.

    :param obj: An election, evaluator or similar object providing
        a `to_dict()` method.
    """
    return serialize_value(obj)


def is_scoped_identifier(value: Any) -> bool:
    return (
        isinstance(value, str)
        and '.' in value
        and all(chunk.isidentifier() for chunk in value.split('.'))
    )


def scoped_class_name(value: Any) -> str:
    cls = value.__class__
    return '.'.join((cls.__module__, cls.__name__))


ATOMIC_TYPES: List[type] = [
    str, int, float, bool, type(None),
]
