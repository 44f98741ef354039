from .common import compat_typing as t

ERR_KEY_NOT_FOUND = "gconfig: key '{key}' is not found"
ERR_NOT_BOOL = "gconfig: key '{key}' is not a bool"
ERR_NOT_FLOAT = "gconfig: key '{key}' is not a float64"
ERR_NOT_STRING = "gconfig: key '{key}' is not a string"
ERR_NOT_MAP = "gconfig: key '{key}' is not a map"
ERR_NOT_MAP_OF = "gconfig: key '{key}' is not a map of {kind}"
ERR_NOT_LIST = "gconfig: key '{key}' is not a list"
ERR_NOT_LIST_OF = "gconfig: key '{key}' is not a list of {kind}"


class ConfigError(Exception):
    """Base class of every lookup or load failure raised by gconfig."""

    def __init__(self, message: str, key: str = '') -> None:
        super().__init__(message)
        self.message = message
        self.key = key

    def __str__(self) -> str:
        return self.message


class KeyNotFoundError(ConfigError, KeyError):
    def __init__(self, key: str) -> None:
        super().__init__(ERR_KEY_NOT_FOUND.format(key=key), key)


class WrongTypeError(ConfigError, TypeError):
    pass


class InvalidTargetError(ConfigError, TypeError):
    """An invalid target passed to ``ConfigFile.set``, ``must`` or ``always``.

    Args:
        holder (Any): the object (or mapping) that should receive the value.
        name (str): attribute or item name on the holder.
    """

    def __init__(self, holder: t.Any, name: str = '') -> None:
        if holder is None:
            message = 'gconfig: set (nil)'
        else:
            message = f'gconfig: set(no slot {name!r} on {type(holder).__name__})'
        super().__init__(message)
        self.holder = holder
        self.name = name


class ConfigParseError(ConfigError, ValueError):
    def __init__(self, file: str, reason: str) -> None:
        super().__init__(f'gconfig: failed to parse {file}: {reason}')
        self.file = file
        self.reason = reason


class ConfigPanic(RuntimeError):
    """Raised by the ``must*`` accessors. The original ConfigError is kept as ``__cause__``."""
