# pylint: disable=unused-import
# flake8: noqa: F401
# ruff: noqa: F401
from os import PathLike
from typing import (
    Any,
    Callable,
    Dict,
    KeysView,
    List,
    Mapping,
    Optional,
    Sequence,
    TypeVar,
    Union,
    cast,
)

StrPath = Union[str, 'PathLike[str]']
