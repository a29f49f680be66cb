"""
cmdline

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .app import App
from .completer import CmdlineCompleter
from .exceptions import CmdlineError, ConfigurationError, ParseError
from .parser import (
    Argument,
    EnumParser,
    FilePath,
    Flag,
    Int32,
    Int64,
    IntParser,
    String,
    StringParser,
    increment,
    set_false,
    set_true,
)

logger = logging.getLogger("cmdline")


__all__ = [
    "App",
    "Argument",
    "CmdlineCompleter",
    "CmdlineError",
    "ConfigurationError",
    "EnumParser",
    "FilePath",
    "Flag",
    "Int32",
    "Int64",
    "IntParser",
    "ParseError",
    "String",
    "StringParser",
    "increment",
    "set_false",
    "set_true",
]
