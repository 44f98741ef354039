"""Convert raw JSON containers to homogeneous typed containers.

Every converter takes the raw value together with the key it was read from,
so errors point back to the config entry.
"""

from .common import compat_typing as t
from .errors import ERR_NOT_LIST_OF, ERR_NOT_MAP_OF, WrongTypeError

T = t.TypeVar('T')


def is_bool(value: t.Any) -> bool:
    return isinstance(value, bool)


def is_float(value: t.Any) -> bool:
    # bool is a subclass of int, never treat it as a number
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_str(value: t.Any) -> bool:
    return isinstance(value, str)


_CHECKERS: t.Dict[str, t.Callable[[t.Any], bool]] = {
    'bool': is_bool,
    'float64': is_float,
    'string': is_str,
}


def _convert_map(data: t.Mapping[str, t.Any], key: str, kind: str, cast_to: t.Callable[[t.Any], T]) -> t.Dict[str, T]:
    check = _CHECKERS[kind]
    result: t.Dict[str, T] = {}
    for k, v in data.items():
        if not check(v):
            raise WrongTypeError(ERR_NOT_MAP_OF.format(key=key, kind=kind), key)
        result[k] = cast_to(v)
    return result


def _convert_list(data: t.Sequence[t.Any], key: str, kind: str, cast_to: t.Callable[[t.Any], T]) -> t.List[T]:
    check = _CHECKERS[kind]
    result: t.List[T] = []
    for v in data:
        if not check(v):
            raise WrongTypeError(ERR_NOT_LIST_OF.format(key=key, kind=kind), key)
        result.append(cast_to(v))
    return result


def map_bool(data: t.Mapping[str, t.Any], key: str = '') -> t.Dict[str, bool]:
    return _convert_map(data, key, 'bool', bool)


def map_float(data: t.Mapping[str, t.Any], key: str = '') -> t.Dict[str, float]:
    return _convert_map(data, key, 'float64', float)


def map_str(data: t.Mapping[str, t.Any], key: str = '') -> t.Dict[str, str]:
    return _convert_map(data, key, 'string', str)


def list_bool(data: t.Sequence[t.Any], key: str = '') -> t.List[bool]:
    return _convert_list(data, key, 'bool', bool)


def list_float(data: t.Sequence[t.Any], key: str = '') -> t.List[float]:
    return _convert_list(data, key, 'float64', float)


def list_str(data: t.Sequence[t.Any], key: str = '') -> t.List[str]:
    return _convert_list(data, key, 'string', str)
