# cmdline — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the boundary between the token parser and the application around it.

The token parser knows only the shape of the grammar. Everything it needs to
know about concrete flags and arguments, and everything it produces, goes
through a `ParseObserver`:

- queries: does a flag exist, does it take a value, are positional
  arguments still accepted;
- notifications: a flag fired, a flag fired with a value, a positional
  argument arrived. Each returns False to stop the scan;
- completion callbacks: offer candidates for a flag name, a flag value or a
  positional argument to a `CompletionSink`.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from cmdline.exceptions import ParseError
from cmdline.parser.completion import CompletionSink


class ErrorSink(ABC):
    """Receives user-visible parse errors."""

    @abstractmethod
    def error(self, error: ParseError) -> None:
        """Record an error."""

    @property
    @abstractmethod
    def num_errors(self) -> int:
        """Number of errors recorded so far."""


class ParseObserver(ErrorSink):
    """Everything the token parser asks of, and tells to, its application."""

    @abstractmethod
    def long_flag_info(self, name: str) -> tuple[bool, bool]:
        """Return `(exists, takes_value)` for a long flag name."""

    @abstractmethod
    def short_flag_info(self, name: str) -> tuple[bool, bool]:
        """Return `(exists, takes_value)` for a single-character flag name."""

    @abstractmethod
    def notify_long_flag(self, name: str) -> bool: ...

    @abstractmethod
    def notify_long_flag_value(self, name: str, value: str) -> bool: ...

    @abstractmethod
    def notify_short_flag(self, name: str) -> bool: ...

    @abstractmethod
    def notify_short_flag_value(self, name: str, value: str) -> bool: ...

    @abstractmethod
    def notify_arg(self, value: str) -> bool: ...

    @abstractmethod
    def complete_long_flag(self, prefix: str, sink: CompletionSink) -> None:
        """Offer every long flag name starting with `prefix`."""

    @abstractmethod
    def complete_long_flag_value(
        self, name: str, value: str, sink: CompletionSink
    ) -> None: ...

    @abstractmethod
    def complete_short_flag(self, sink: CompletionSink) -> None:
        """Offer every short flag that can still be used."""

    @abstractmethod
    def complete_short_flag_value(
        self, name: str, value: str, sink: CompletionSink
    ) -> None: ...

    @abstractmethod
    def complete_arg(self, prefix: str, sink: CompletionSink) -> None: ...

    @abstractmethod
    def accepting_args(self) -> bool:
        """True if another positional argument would be accepted."""
