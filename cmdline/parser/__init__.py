"""
cmdline

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .completion import CompletionResult, CompletionSink, completion_clip_point
from .flag import Argument, Flag
from .observer import ErrorSink, ParseObserver
from .token_parser import TokenParser, complete, parse
from .value_handler import (
    BoundValueHandler,
    ValueHandler,
    ValueParser,
    increment,
    set_false,
    set_true,
)
from .values import EnumParser, FilePath, Int32, Int64, IntParser, String, StringParser

__all__ = [
    "Argument",
    "BoundValueHandler",
    "CompletionResult",
    "CompletionSink",
    "EnumParser",
    "ErrorSink",
    "FilePath",
    "Flag",
    "Int32",
    "Int64",
    "IntParser",
    "ParseObserver",
    "String",
    "StringParser",
    "TokenParser",
    "ValueHandler",
    "ValueParser",
    "complete",
    "completion_clip_point",
    "increment",
    "parse",
    "set_false",
    "set_true",
]
