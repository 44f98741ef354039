import collections.abc
import os
import pathlib

from . import convert
from .common import compat_typing as t
from .errors import (
    ERR_NOT_BOOL,
    ERR_NOT_FLOAT,
    ERR_NOT_LIST,
    ERR_NOT_MAP,
    ERR_NOT_STRING,
    ConfigError,
    ConfigPanic,
    InvalidTargetError,
    KeyNotFoundError,
    WrongTypeError,
)
from .logger import get_logger

logger = get_logger('config')

T = t.TypeVar('T')

# marks an always_* call made without a default
_UNSET: t.Any = object()


class ConfigFile:
    """Typed read-only access to a loaded config document.

    Every typed value can be fetched in three ways:

        - ``get_<type>(key)``: raise a ``ConfigError`` subclass on failure.
        - ``must_<type>(key)``: raise ``ConfigPanic`` on failure, for values the
          program cannot run without.
        - ``always_<type>(key, default)``: never raise, fall back to ``default``
          or to the zero value of the type.

    Numbers are always ``float``, the document is never modified after load.

    Example usage:

        ```python
        config = load_json_file('config.json')
        debug = config.always_bool('debug', False)
        port = int(config.must_float('port'))
        ```

    ``load()`` without argument finds the file from (first match wins):
        - env variable: GCONFIG_FILE
        - <current working directory>/config.json
        - <PROJECT_ROOT_DIR>/config.json
        - <PROJECT_ROOT_DIR>/config/config.json
    """

    DEFAULT_FILE_BASE_NAME = 'config.json'
    # Set config file directly
    GCONFIG_FILE = os.getenv('GCONFIG_FILE', '')
    # CI_PROJECT_DIR was set by gitlab CI
    PROJECT_ROOT_DIR = os.getenv('PROJECT_ROOT_DIR') or os.getenv('CI_PROJECT_DIR', '')

    def __init__(self, file: str, data: t.Dict[str, t.Any]) -> None:
        self._file = file
        self._data = data

    def __repr__(self) -> str:
        return f'<ConfigFile {self._file!r} ({len(self._data)} keys)>'

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    @property
    def file(self) -> str:
        return self._file

    def keys(self) -> t.KeysView[str]:
        return self._data.keys()

    @classmethod
    def _reload(cls) -> None:
        """Reload to accept new environment variables. Mainly used in unit tests."""
        cls.GCONFIG_FILE = os.getenv('GCONFIG_FILE', '')
        cls.PROJECT_ROOT_DIR = os.getenv('PROJECT_ROOT_DIR') or os.getenv('CI_PROJECT_DIR', '')

    @classmethod
    def _search_dirs(cls) -> t.List[str]:
        search_dirs = [pathlib.Path('.')]
        if cls.PROJECT_ROOT_DIR:
            _proj_path = pathlib.Path(cls.PROJECT_ROOT_DIR)
            search_dirs.append(_proj_path)
            search_dirs.append(_proj_path / 'config')
        return [str(d) for d in search_dirs if d.is_dir()]

    @classmethod
    def find_file(cls) -> str:
        """Locate the default config file

        Raises:
            FileNotFoundError: no candidate exists.

        Returns:
            str: path of the config file
        """
        if cls.GCONFIG_FILE:
            return cls.GCONFIG_FILE
        for _dir in cls._search_dirs():
            config_file = os.path.join(_dir, cls.DEFAULT_FILE_BASE_NAME)
            if os.path.isfile(config_file):
                return config_file
        _msg = f'Can not find config file {cls.DEFAULT_FILE_BASE_NAME} from:\n' + '\n'.join(cls._search_dirs())
        logger.warning(_msg)
        raise FileNotFoundError(_msg)

    # raw layer

    def get(self, key: str) -> t.Any:
        if key in self._data:
            return self._data[key]
        raise KeyNotFoundError(key)

    def get_bool(self, key: str) -> bool:
        v = self.get(key)
        if not convert.is_bool(v):
            raise WrongTypeError(ERR_NOT_BOOL.format(key=key), key)
        return t.cast(bool, v)

    def get_float(self, key: str) -> float:
        v = self.get(key)
        if not convert.is_float(v):
            raise WrongTypeError(ERR_NOT_FLOAT.format(key=key), key)
        return float(v)

    def get_str(self, key: str) -> str:
        v = self.get(key)
        if not convert.is_str(v):
            raise WrongTypeError(ERR_NOT_STRING.format(key=key), key)
        return t.cast(str, v)

    def get_map(self, key: str) -> t.Dict[str, t.Any]:
        v = self.get(key)
        if not isinstance(v, dict):
            raise WrongTypeError(ERR_NOT_MAP.format(key=key), key)
        return v

    def get_list(self, key: str) -> t.List[t.Any]:
        v = self.get(key)
        if not isinstance(v, list):
            raise WrongTypeError(ERR_NOT_LIST.format(key=key), key)
        return v

    # conversion layer

    def get_map_bool(self, key: str) -> t.Dict[str, bool]:
        return convert.map_bool(self.get_map(key), key)

    def get_map_float(self, key: str) -> t.Dict[str, float]:
        return convert.map_float(self.get_map(key), key)

    def get_map_str(self, key: str) -> t.Dict[str, str]:
        return convert.map_str(self.get_map(key), key)

    def get_list_bool(self, key: str) -> t.List[bool]:
        return convert.list_bool(self.get_list(key), key)

    def get_list_float(self, key: str) -> t.List[float]:
        return convert.list_float(self.get_list(key), key)

    def get_list_str(self, key: str) -> t.List[str]:
        return convert.list_str(self.get_list(key), key)

    # must-getting

    @staticmethod
    def _must(getter: t.Callable[[str], T], key: str) -> T:
        try:
            return getter(key)
        except ConfigError as e:
            logger.error(str(e))
            raise ConfigPanic(str(e)) from e

    def must_bool(self, key: str) -> bool:
        return self._must(self.get_bool, key)

    def must_float(self, key: str) -> float:
        return self._must(self.get_float, key)

    def must_str(self, key: str) -> str:
        return self._must(self.get_str, key)

    def must_map_bool(self, key: str) -> t.Dict[str, bool]:
        return self._must(self.get_map_bool, key)

    def must_map_float(self, key: str) -> t.Dict[str, float]:
        return self._must(self.get_map_float, key)

    def must_map_str(self, key: str) -> t.Dict[str, str]:
        return self._must(self.get_map_str, key)

    def must_list_bool(self, key: str) -> t.List[bool]:
        return self._must(self.get_list_bool, key)

    def must_list_float(self, key: str) -> t.List[float]:
        return self._must(self.get_list_float, key)

    def must_list_str(self, key: str) -> t.List[str]:
        return self._must(self.get_list_str, key)

    # always-getting

    @staticmethod
    def _always(getter: t.Callable[[str], T], key: str, default: t.Any, zero: t.Any) -> t.Any:
        try:
            return getter(key)
        except ConfigError as e:
            logger.debug(f'{e}, using default')
            return zero if default is _UNSET else default

    def always_bool(self, key: str, default: bool = _UNSET) -> bool:
        return t.cast(bool, self._always(self.get_bool, key, default, False))

    def always_float(self, key: str, default: float = _UNSET) -> float:
        return t.cast(float, self._always(self.get_float, key, default, 0.0))

    def always_str(self, key: str, default: str = _UNSET) -> str:
        return t.cast(str, self._always(self.get_str, key, default, ''))

    def always_map_bool(
        self, key: str, default: t.Optional[t.Dict[str, bool]] = _UNSET
    ) -> t.Optional[t.Dict[str, bool]]:
        return self._always(self.get_map_bool, key, default, None)  # type: ignore

    def always_map_float(
        self, key: str, default: t.Optional[t.Dict[str, float]] = _UNSET
    ) -> t.Optional[t.Dict[str, float]]:
        return self._always(self.get_map_float, key, default, None)  # type: ignore

    def always_map_str(
        self, key: str, default: t.Optional[t.Dict[str, str]] = _UNSET
    ) -> t.Optional[t.Dict[str, str]]:
        return self._always(self.get_map_str, key, default, None)  # type: ignore

    def always_list_bool(self, key: str, default: t.Optional[t.List[bool]] = _UNSET) -> t.Optional[t.List[bool]]:
        return self._always(self.get_list_bool, key, default, None)  # type: ignore

    def always_list_float(self, key: str, default: t.Optional[t.List[float]] = _UNSET) -> t.Optional[t.List[float]]:
        return self._always(self.get_list_float, key, default, None)  # type: ignore

    def always_list_str(self, key: str, default: t.Optional[t.List[str]] = _UNSET) -> t.Optional[t.List[str]]:
        return self._always(self.get_list_str, key, default, None)  # type: ignore

    # generic setter

    def set(self, key: str, holder: t.Any, name: str) -> None:
        """Copy the value of ``key`` into an existing slot of ``holder``

        The slot is an item when holder is a mutable mapping, otherwise an
        attribute. Its current value must have exactly the type of the config
        value, e.g. a float slot for a number.

        Args:
            key (str): config key to read
            holder (Any): mapping or object owning the slot
            name (str): item or attribute name

        Raises:
            InvalidTargetError: holder is None, has no such slot or the slot is read-only
            KeyNotFoundError: key is not in the document
            WrongTypeError: slot and value types differ
        """
        if holder is None:
            raise InvalidTargetError(holder, name)
        is_mapping = isinstance(holder, collections.abc.MutableMapping)
        if is_mapping:
            if name not in holder:
                raise InvalidTargetError(holder, name)
            current = holder[name]
        else:
            if not hasattr(holder, name):
                raise InvalidTargetError(holder, name)
            current = getattr(holder, name)

        value = self.get(key)
        if type(current) is not type(value):  # pylint: disable=unidiomatic-typecheck
            raise WrongTypeError(
                f'gconfig: set() target is a `{type(current).__name__}`, not a `{type(value).__name__}`', key
            )
        try:
            if is_mapping:
                holder[name] = value
            else:
                setattr(holder, name, value)
        except (AttributeError, TypeError) as e:
            # frozen dataclass, read-only property, namedtuple field ...
            raise InvalidTargetError(holder, name) from e

    def must(self, key: str, holder: t.Any, name: str) -> None:
        try:
            self.set(key, holder, name)
        except ConfigError as e:
            logger.error(str(e))
            raise ConfigPanic(str(e)) from e

    def always(self, key: str, holder: t.Any, name: str) -> bool:
        """Like ``set`` but leave the slot untouched on failure.

        Returns:
            bool: whether the slot was assigned
        """
        try:
            self.set(key, holder, name)
        except ConfigError as e:
            logger.debug(f'{e}, slot {name!r} unchanged')
            return False
        return True
