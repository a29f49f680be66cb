# cmdline — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Built-in value parsers.

- `IntParser`: bounded signed integers (`Int32`, `Int64`), radix prefixes allowed.
- `StringParser`: identity (`String`).
- `EnumParser`: one of a fixed, case-sensitive set of strings.
- `FilePath`: a path, optionally required to exist, with directory-aware
  completion.

Each of them is a `ValueParser`, so `Int32.store(ns, "jobs")` or
`EnumParser(["arm", "x64"]).call(callback)` produce ready-to-use handlers.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterable

from cmdline.exceptions import ValueConversionError
from cmdline.logger import logger
from cmdline.parser.completion import CompletionSink
from cmdline.parser.value_handler import ValueParser


class IntParser(ValueParser[int]):
    """
    Signed integer that fits in `bits` bits.

    Accepted literals follow Python's integer syntax: an optional sign, then
    decimal digits or a `0x`, `0o` or `0b` prefixed number, with `_` allowed
    between digits. Only ASCII digits are accepted. A leading zero on a
    decimal number (`012`) is rejected rather than read as octal.
    """

    def __init__(self, bits: int = 32) -> None:
        if bits < 2:
            raise ValueError("bits must be at least 2")
        self.bits = bits
        self.minimum = -(1 << (bits - 1))
        self.maximum = (1 << (bits - 1)) - 1

    def parse(self, text: str) -> int:
        try:
            if text != text.strip():
                raise ValueError("surrounding whitespace")
            if not text.isascii():
                raise ValueError("non-ASCII digits")
            value = int(text, 0)
        except ValueError:
            raise ValueConversionError(
                f"{text!r} cannot be converted into an {self.type_name}"
            ) from None
        if not self.minimum <= value <= self.maximum:
            raise ValueConversionError(
                f"{text!r} cannot be converted into an {self.type_name}"
            )
        return value

    @property
    def type_name(self) -> str:
        return f"int{self.bits}"


class StringParser(ValueParser[str]):
    def parse(self, text: str) -> str:
        return text

    @property
    def type_name(self) -> str:
        return "string"


class EnumParser(ValueParser[str]):
    """Exactly one of `choices`; completes to the members with the typed prefix."""

    def __init__(self, choices: Iterable[str]) -> None:
        self.choices: list[str] = list(choices)
        if not self.choices:
            raise ValueError("EnumParser needs at least one choice")

    def parse(self, text: str) -> str:
        if text in self.choices:
            return text
        raise ValueConversionError(f"{text!r} is not in {self.type_name}")

    def complete(self, text: str, sink: CompletionSink) -> None:
        for choice in self.choices:
            if choice.startswith(text):
                sink.final(choice)

    @property
    def type_name(self) -> str:
        return f"{{{','.join(self.choices)}}}"


class FilePath(ValueParser[Path]):
    """
    A filesystem path, relative to `root` when one is given.

    Args:
        root (str): Directory the typed path is relative to.
        must_exist (bool): Reject paths that do not exist.
        file_filter (Callable[[Path], bool] | None): Decides which directory
            entries are offered as completions.
    """

    def __init__(
        self,
        root: str = "",
        must_exist: bool = False,
        file_filter: Callable[[Path], bool] | None = None,
    ) -> None:
        self.root = root
        self.must_exist = must_exist
        self.file_filter = file_filter

    def effective_path(self, text: str) -> Path:
        if self.root:
            # An absolute text still resolves under root.
            return Path(self.root) / text.lstrip("/")
        if text:
            return Path(text)
        return Path(".")

    def parse(self, text: str) -> Path:
        full_path = self.effective_path(text)
        try:
            os.stat(full_path)
        except FileNotFoundError:
            if self.must_exist:
                raise ValueConversionError(
                    f"{full_path}: no such file or directory"
                ) from None
        except OSError as error:
            logger.debug("Could not stat %s: %s", full_path, error)
        return Path(text)

    def complete(self, text: str, sink: CompletionSink) -> None:
        head, separator, prefix = text.rpartition("/")
        directory = head + separator
        try:
            entries = sorted(
                self.effective_path(directory).iterdir(), key=lambda entry: entry.name
            )
        except OSError as error:
            logger.debug("No completions under %r: %s", directory, error)
            return
        for entry in entries:
            if not entry.name.startswith(prefix):
                continue
            try:
                if self.file_filter is not None and not self.file_filter(entry):
                    continue
                is_dir = entry.is_dir()
            except OSError as error:
                logger.debug("Skipping %s: %s", entry, error)
                continue
            candidate = directory + entry.name
            if is_dir:
                sink.partial(candidate + "/")
            else:
                sink.final(candidate)

    @property
    def type_name(self) -> str:
        name = "existing file" if self.must_exist else "file path"
        if self.root:
            name += f" in {self.root}"
        return name


Int32 = IntParser(32)
Int64 = IntParser(64)
String = StringParser()
