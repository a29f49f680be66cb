# cmdline — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements `TokenParser`, the single-pass state machine that classifies argv
tokens and drives a `ParseObserver`.

The same transitions serve two consumers:

- `parse(tokens, observer)` notifies the observer of every flag, flag value
  and positional argument and returns whether the scan succeeded.
- `complete(tokens, observer)` runs the identical scan, but when the cursor
  reaches the last token it asks the observer for candidates instead of
  notifying it, and returns a `CompletionResult`.

Token shapes:
- `--name`, `--name=value`, `--name value`: long flag
- `--`: escape, every following token is positional
- `-abc`, `-cVALUE`, `-c VALUE`: short flag cluster
- `-`: stray dash (offers every flag when completing)
- anything else: positional argument

Every transition returns an explicit status. False means a structural error
was reported (or the observer asked to stop) and the scan ends there.
"""
from __future__ import annotations

from typing import Sequence

from cmdline.exceptions import (
    FlagTakesNoArgument,
    MissingFlagValue,
    StrayDash,
    UnrecognizedFlag,
)
from cmdline.logger import logger
from cmdline.mode import ParseMode
from cmdline.parser.completion import CompletionResult, CompletionSink
from cmdline.parser.observer import ParseObserver


class TokenParser(CompletionSink):
    """
    Scan state for one invocation.

    The parser is also the `CompletionSink` handed to the observer, so it can
    prepend the literal text already typed (`--`, `--name=`, `-ab`) to each
    candidate and rebuild the whole word.
    """

    def __init__(
        self,
        tokens: Sequence[str],
        observer: ParseObserver,
        mode: ParseMode = ParseMode.PARSE,
    ) -> None:
        self.tokens: list[str] = list(tokens)
        self.observer: ParseObserver = observer
        self.mode: ParseMode = mode
        self.cursor: int = 0
        self.prepend: str = ""
        self.completions: list[str] = []
        self.is_partial: bool = False

    def has_next(self) -> bool:
        return self.cursor < len(self.tokens)

    def next_token(self) -> str:
        token = self.tokens[self.cursor]
        self.cursor += 1
        return token

    def should_complete(self) -> bool:
        """True while completing and the token just read was the last one."""
        return self.mode == ParseMode.COMPLETE and not self.has_next()

    def partial(self, candidate: str) -> None:
        self.completions.append(self.prepend + candidate)
        self.is_partial = True

    def final(self, candidate: str) -> None:
        self.completions.append(self.prepend + candidate)

    def run(self) -> bool:
        while self.has_next():
            if not self._step(self.next_token()):
                return False
        return True

    def _step(self, token: str) -> bool:
        if token.startswith("--"):
            if len(token) > 2:
                return self._long_flag(token[2:])
            if self.should_complete():
                self._complete_long_flag("")
                return True
            return self._escape()
        if token.startswith("-"):
            if len(token) > 1:
                return self._short_flags(token[1:])
            if self.should_complete():
                self._complete_any_flag()
                return True
            self.observer.error(StrayDash())
            return False
        if self.should_complete():
            if not token and not self.observer.accepting_args():
                self._complete_any_flag()
            else:
                self.prepend = ""
                self.observer.complete_arg(token, self)
            return True
        return self.observer.notify_arg(token)

    def _escape(self) -> bool:
        while self.has_next():
            token = self.next_token()
            if self.should_complete():
                self.prepend = ""
                self.observer.complete_arg(token, self)
                return True
            if not self.observer.notify_arg(token):
                return False
        return True

    def _long_flag(self, body: str) -> bool:
        name, equals, value = body.partition("=")
        exists, takes_value = self.observer.long_flag_info(name)

        if equals:
            if not exists:
                self.observer.error(UnrecognizedFlag(f"--{name}"))
                return False
            if not takes_value:
                self.observer.error(FlagTakesNoArgument(f"--{name}"))
                return False
            self.prepend = f"--{name}="
            return self._long_flag_value(name, value)

        if self.should_complete():
            self._complete_long_flag(name)
            return True
        if not exists:
            self.observer.error(UnrecognizedFlag(f"--{name}"))
            return False
        if not takes_value:
            return self.observer.notify_long_flag(name)
        if not self.has_next():
            self.observer.error(MissingFlagValue(f"--{name}"))
            return False
        value = self.next_token()
        self.prepend = ""
        return self._long_flag_value(name, value)

    def _long_flag_value(self, name: str, value: str) -> bool:
        if self.should_complete():
            self.observer.complete_long_flag_value(name, value, self)
            return True
        return self.observer.notify_long_flag_value(name, value)

    def _short_flags(self, cluster: str) -> bool:
        for index, name in enumerate(cluster):
            exists, takes_value = self.observer.short_flag_info(name)
            if not exists:
                self.observer.error(UnrecognizedFlag(f"-{name}"))
                return False
            if not takes_value:
                if not self.observer.notify_short_flag(name):
                    return False
                continue

            # A value-taking flag always ends the cluster.
            remainder = cluster[index + 1 :]
            if remainder:
                self.prepend = f"-{cluster[: index + 1]}"
                return self._short_flag_value(name, remainder)
            if self.has_next():
                self.prepend = ""
                return self._short_flag_value(name, self.next_token())
            if self.should_complete():
                self.prepend = ""
                self.final(f"-{cluster}")
                return True
            self.observer.error(MissingFlagValue(f"-{name}"))
            return False

        if self.should_complete():
            self._complete_short_flag(f"-{cluster}")
        return True

    def _short_flag_value(self, name: str, value: str) -> bool:
        if self.should_complete():
            self.observer.complete_short_flag_value(name, value, self)
            return True
        return self.observer.notify_short_flag_value(name, value)

    def _complete_long_flag(self, prefix: str) -> None:
        self.prepend = "--"
        if not prefix and self.observer.accepting_args():
            self.final("")
        self.observer.complete_long_flag(prefix, self)

    def _complete_short_flag(self, current: str) -> None:
        self.prepend = current
        if len(current) > 1:
            self.final("")
        self.observer.complete_short_flag(self)

    def _complete_any_flag(self) -> None:
        self._complete_short_flag("-")
        self._complete_long_flag("")


def parse(tokens: Sequence[str], observer: ParseObserver) -> bool:
    """
    Scan `tokens`, notifying `observer` of every flag and argument.

    Returns:
        bool: True if the scan ran to the end and no error was recorded.
    """
    parser = TokenParser(tokens, observer, ParseMode.PARSE)
    ok = parser.run()
    logger.debug(
        "Parsed %d token(s): ok=%s errors=%d", len(parser.tokens), ok, observer.num_errors
    )
    return ok and observer.num_errors == 0


def complete(tokens: Sequence[str], observer: ParseObserver) -> CompletionResult:
    """
    Scan `tokens` and gather candidates for the last one.

    Returns:
        CompletionResult: The candidates and whether any of them is partial.
    """
    parser = TokenParser(tokens, observer, ParseMode.COMPLETE)
    parser.run()
    logger.debug(
        "Completed %r: %d candidate(s), partial=%s",
        parser.tokens[-1] if parser.tokens else "",
        len(parser.completions),
        parser.is_partial,
    )
    return CompletionResult(parser.completions, parser.is_partial)
