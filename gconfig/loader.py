"""Load config documents from disk into a ``ConfigFile``.

JSON files may contain ``//`` line comments, they are erased before decoding.
"""

import json
import os
import re

import yaml

from .common import compat_typing as t
from .config_file import ConfigFile
from .errors import ConfigParseError
from .logger import get_logger

logger = get_logger('loader')

# A string literal is matched first so that "http://host" survives.
_COMMENT_RE = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*')

YAML_SUFFIXES = ('.yml', '.yaml')


def strip_comments(text: str) -> str:
    """Erase ``//`` comments up to the end of line, keeping the line breaks."""
    return _COMMENT_RE.sub(lambda m: m.group(1) if m.group(1) is not None else '', text)


def _floats(value: t.Any) -> t.Any:
    if isinstance(value, dict):
        return {k: _floats(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_floats(v) for v in value]
    if isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    return value


def _reject_constant(name: str) -> t.Any:
    raise ValueError(f'{name} is not valid JSON')


def _has_non_str_key(value: t.Any) -> bool:
    if isinstance(value, dict):
        return any(not isinstance(k, str) or _has_non_str_key(v) for k, v in value.items())
    if isinstance(value, list):
        return any(_has_non_str_key(v) for v in value)
    return False


def _read_text(file: str) -> str:
    with open(file, 'r', encoding='utf-8') as f:
        try:
            return f.read()
        except UnicodeDecodeError as e:
            raise ConfigParseError(file, str(e)) from e


def _to_config_file(file: str, data: t.Any) -> ConfigFile:
    if not isinstance(data, dict):
        raise ConfigParseError(file, f'top level is a {type(data).__name__}, not an object')
    if _has_non_str_key(data):
        raise ConfigParseError(file, 'map keys must be strings')
    logger.info(f'Loaded config {file} with {len(data)} keys')
    return ConfigFile(file, data)


def load_json_file(file: t.StrPath) -> ConfigFile:
    """Load a JSON config file

    Args:
        file (StrPath): path of the file, read as utf-8

    Raises:
        OSError: the file can not be read
        ConfigParseError: the content is not a JSON object

    Returns:
        ConfigFile: the loaded document
    """
    file = os.fspath(file)
    content = strip_comments(_read_text(file))
    try:
        data = json.loads(content, parse_int=float, parse_constant=_reject_constant)
    except ValueError as e:
        # JSONDecodeError, or NaN / Infinity rejected above
        raise ConfigParseError(file, str(e)) from e
    return _to_config_file(file, data)


def load_yaml_file(file: t.StrPath) -> ConfigFile:
    """Load a YAML config file, integers are turned into floats like the JSON loader does."""
    file = os.fspath(file)
    content = _read_text(file)
    try:
        data = yaml.load(content, Loader=yaml.FullLoader)
    except yaml.YAMLError as e:
        raise ConfigParseError(file, str(e)) from e
    return _to_config_file(file, _floats(data))


def load(file: t.Optional[t.StrPath] = None) -> ConfigFile:
    """Load a config file by its extension, ``.yml`` / ``.yaml`` as YAML, anything else as JSON.

    Without ``file`` the path comes from ``ConfigFile.find_file()``.
    """
    if file is None:
        file = ConfigFile.find_file()
    file = os.fspath(file)
    if file.lower().endswith(YAML_SUFFIXES):
        return load_yaml_file(file)
    return load_json_file(file)
