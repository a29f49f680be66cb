# cmdline — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Flag` and `Argument` dataclasses an `App` is declared with.

A `Flag` has a long name (`--verbose`), a short name (`-v`) or both. It either
takes a value, delivered through its `value` handler, or takes none and fires
its `call` callback. `min`/`max` bound how many times it may be used; `max`
also stops completion from offering a flag that is used up.

An `Argument` is a positional slot bound to one value handler. Required
arguments are filled in declaration order; an optional excess argument
absorbs everything after them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from cmdline.parser.value_handler import ValueHandler


@dataclass
class Flag:
    """
    Represents a command-line flag.

    Attributes:
        long (str): Long name without the leading `--`.
        short (str): Single-character short name without the leading `-`.
        value (ValueHandler | None): Handler for the flag's value; None for flags
            that take no value.
        call (Callable[[], None] | None): Invoked each time a no-value flag is used.
        default (str): Text given to `value` after parsing if the flag was never used.
        min (int): Minimum number of uses; 1 or more makes the flag required.
        max (int | None): Maximum number of uses offered by completion; None is unbounded.
        help (str): Help text.
    """

    long: str = ""
    short: str = ""
    value: ValueHandler | None = None
    call: Callable[[], None] | None = None
    default: str = ""
    min: int = 0
    max: int | None = None
    help: str = ""
    use_count: int = field(default=0, init=False, compare=False)

    @property
    def name(self) -> str:
        if self.long and self.short:
            return f"-{self.short}/--{self.long}"
        if self.long:
            return f"--{self.long}"
        return f"-{self.short}"

    @property
    def takes_value(self) -> bool:
        return self.value is not None

    def required(self) -> Flag:
        """Require the flag at least once."""
        if self.min < 1:
            self.min = 1
        return self

    def can_accept_more(self) -> bool:
        return self.max is None or self.use_count < self.max


@dataclass
class Argument:
    """A positional argument slot."""

    name: str
    value: ValueHandler
    help: str = ""
