# cmdline — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ParseMode`, the two ways a token sequence can be scanned.
"""
from enum import Enum


class ParseMode(Enum):
    PARSE = "parse"
    COMPLETE = "complete"
