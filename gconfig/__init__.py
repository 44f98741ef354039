"""
gconfig - typed access to JSON config files.

This module provides:
- load_json_file / load_yaml_file / load: read a config document from disk.
- ConfigFile: checked (get_*), must (must_*) and always (always_*) accessors.
- convert: typed map / list conversion of raw values.
"""

# ruff: noqa: F401
from .config_file import ConfigFile
from .errors import (
    ConfigError,
    ConfigPanic,
    ConfigParseError,
    InvalidTargetError,
    KeyNotFoundError,
    WrongTypeError,
)
from .loader import load, load_json_file, load_yaml_file, strip_comments
from .logger import get_logger

__version__ = '0.1.0'
