# cmdline — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value handlers turn the raw text bound to a flag or positional argument into
a typed value and deliver it somewhere.

The work is split in two:
- a `ValueParser[T]` knows the type: how to parse text, how to complete a
  partial fragment and what to call the type in help output;
- a sink (any `Callable[[T], None]`) knows where the value goes.

`BoundValueHandler` joins the two and is what flags and arguments hold. The
factories on `ValueParser` (`call`, `store`, `collect`) build it:

    verbosity = Namespace()
    Int32.store(verbosity, "level")       # setattr(verbosity, "level", value)
    Int32.call(print)                     # print(value)
    Int32.collect(numbers)                # numbers.append(value)

A conversion failure is reported to the error sink and, unless the handler is
`fatal`, the scan goes on so that several bad values can be reported at once.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

from cmdline.exceptions import ValueConversionError
from cmdline.parser.completion import CompletionSink
from cmdline.parser.observer import ErrorSink

T = TypeVar("T")


class ValueHandler(ABC):
    """What the application needs from a flag or argument value."""

    @abstractmethod
    def notify(self, text: str, errors: ErrorSink) -> bool:
        """
        Convert and deliver `text`.

        Returns:
            bool: False if parsing must stop.
        """

    @abstractmethod
    def complete(self, text: str, sink: CompletionSink) -> None: ...

    @property
    @abstractmethod
    def type_name(self) -> str: ...


class ValueParser(ABC, Generic[T]):
    """Typed conversion from text, plus completion for partial text."""

    @abstractmethod
    def parse(self, text: str) -> T:
        """
        Raises:
            ValueConversionError: If `text` is not a valid value.
        """

    def complete(self, text: str, sink: CompletionSink) -> None:
        """Offer candidates for `text`. Free-form values offer none."""

    @property
    @abstractmethod
    def type_name(self) -> str: ...

    def call(self, callback: Callable[[T], Any], fatal: bool = False) -> ValueHandler:
        """Deliver each parsed value to `callback`."""
        return BoundValueHandler(self, callback, fatal=fatal)

    def store(self, target: Any, attribute: str, fatal: bool = False) -> ValueHandler:
        """Store each parsed value as `target.<attribute>`."""

        def _store(value: T) -> None:
            setattr(target, attribute, value)

        return BoundValueHandler(self, _store, fatal=fatal)

    def collect(self, values: list[T], fatal: bool = False) -> ValueHandler:
        """Append each parsed value to `values`."""
        return BoundValueHandler(self, values.append, fatal=fatal)


class BoundValueHandler(ValueHandler, Generic[T]):
    """A `ValueParser` bound to a sink."""

    def __init__(
        self,
        parser: ValueParser[T],
        sink: Callable[[T], Any],
        fatal: bool = False,
    ) -> None:
        self.parser = parser
        self.sink = sink
        self.fatal = fatal

    def notify(self, text: str, errors: ErrorSink) -> bool:
        try:
            value = self.parser.parse(text)
        except ValueConversionError as error:
            errors.error(error)
            return not self.fatal
        self.sink(value)
        return True

    def complete(self, text: str, sink: CompletionSink) -> None:
        self.parser.complete(text, sink)

    @property
    def type_name(self) -> str:
        return self.parser.type_name

    def __repr__(self) -> str:
        return f"BoundValueHandler(type={self.type_name!r}, fatal={self.fatal})"


def set_true(target: Any, attribute: str) -> Callable[[], None]:
    """Callback for a no-value flag that sets `target.<attribute>` to True."""

    def _set() -> None:
        setattr(target, attribute, True)

    return _set


def set_false(target: Any, attribute: str) -> Callable[[], None]:
    """Callback for a no-value flag that sets `target.<attribute>` to False."""

    def _set() -> None:
        setattr(target, attribute, False)

    return _set


def increment(target: Any, attribute: str) -> Callable[[], None]:
    """Callback for a no-value flag that counts its occurrences."""

    def _increment() -> None:
        setattr(target, attribute, getattr(target, attribute, 0) + 1)

    return _increment
