# cmdline — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `App`, the registry of flags and positional arguments
that sits around the token parser.

`App` is the `ParseObserver` the token parser talks to: it answers whether a
flag exists and takes a value, routes notifications to the value handlers and
callbacks, counts flag usage, fills positional slots and offers completion
candidates. Around a scan it adds what the grammar alone does not know about:
defaults, required flags and arguments, help output and the bash integration.

Public Interface:
- `add_flags(...)`, `add_arguments(...)`, `set_excess_argument(...)`: declare
  the command line. Inconsistent declarations raise `ConfigurationError`.
- `parse(args)`: scan and validate, returning True on success.
- `complete(args)`: candidates for the last token of `args`.
- `format_help()` / `render_help()`: plain and rich help output.
- `run(argv)`: process entry point handling the completion markers.

Example Usage:
    options = Namespace(verbose=False, jobs=0)
    app = App("build")
    app.add_flags([
        Flag(long="verbose", short="v", call=set_true(options, "verbose")),
        Flag(long="jobs", short="j", value=Int32.store(options, "jobs"), default="4"),
    ])
    app.run()

Bash integration:
    eval "$(build --bash-completion-script)"
"""
from __future__ import annotations

import sys
from typing import Sequence

from rich.console import Console
from rich.markup import escape

from cmdline.console import console, error_console
from cmdline.exceptions import (
    ConfigurationError,
    ExtraArgument,
    MissingRequiredArgument,
    MissingRequiredFlag,
    ParseError,
)
from cmdline.logger import logger
from cmdline.mode import ParseMode
from cmdline.parser import token_parser
from cmdline.parser.completion import (
    DEFAULT_WORD_BREAKS,
    CompletionResult,
    CompletionSink,
)
from cmdline.parser.flag import Argument, Flag
from cmdline.parser.observer import ParseObserver

COMPLETION_MARKER = "--generate-bash-completion"
SCRIPT_MARKER = "--bash-completion-script"

SCRIPT_TEMPLATE = """\
# Usage: eval "$(%(name)s --bash-completion-script)"
_%(function)s_bash_autocomplete() {
    local cur args opts
    COMPREPLY=()
    cur="${COMP_WORDS[COMP_CWORD]}"
    COMP_WORDS+=("")
    args=("${COMP_WORDS[0]}" "--generate-bash-completion" "${COMP_WORDBREAKS}" "${COMP_WORDS[@]:1:$COMP_CWORD}")
    opts=$("${args[@]}")
    local IFS=$'\\n'
    COMPREPLY=($(compgen -W "${opts}"))
    return 0
}
complete -o nospace -F _%(function)s_bash_autocomplete %(name)s
"""


class App(ParseObserver):
    """
    A command line made of flags, required positional arguments and an
    optional excess argument.

    The registry keeps per-invocation state (flag use counts, the next
    positional slot, recorded errors). It is reset at the start of every
    `parse` or `complete` call, so an `App` can be reused but not shared
    between concurrent calls.
    """

    def __init__(
        self,
        name: str,
        flags: Sequence[Flag] | None = None,
        arguments: Sequence[Argument] | None = None,
        excess: Argument | None = None,
        help_text: str = "",
    ) -> None:
        self.name: str = name
        self.help_text: str = help_text
        self.console: Console = console
        self.error_console: Console = error_console
        self._flags: list[Flag] = []
        self._long: dict[str, Flag] = {}
        self._short: dict[str, Flag] = {}
        self._arguments: list[Argument] = []
        self._excess: Argument | None = None
        self._current_argument: int = 0
        self.mode: ParseMode = ParseMode.PARSE
        self.errors: list[ParseError] = []
        if flags:
            self.add_flags(flags)
        if arguments:
            self.add_arguments(arguments)
        if excess:
            self.set_excess_argument(excess)

    @property
    def flags(self) -> list[Flag]:
        return list(self._flags)

    @property
    def arguments(self) -> list[Argument]:
        return list(self._arguments)

    @property
    def excess_argument(self) -> Argument | None:
        return self._excess

    def _validate_flag(
        self, flag: Flag, long_names: dict[str, Flag], short_names: dict[str, Flag]
    ) -> None:
        if not flag.long and not flag.short:
            raise ConfigurationError("Flag has no name")
        if flag.short and (len(flag.short) != 1 or flag.short in "-="):
            raise ConfigurationError(
                f"Short flag {flag.short!r} must be a single character other than '-' or '='"
            )
        if flag.long and (flag.long.startswith("-") or "=" in flag.long):
            raise ConfigurationError(
                f"Long flag {flag.long!r} must not start with '-' or contain '='"
            )
        if flag.long in long_names:
            raise ConfigurationError(f"Tried to redefine --{flag.long}")
        if flag.short in short_names:
            raise ConfigurationError(f"Tried to redefine -{flag.short}")
        if flag.value is None and flag.call is None:
            raise ConfigurationError(f"{flag.name} has no effect")
        if flag.value is not None and flag.call is not None:
            raise ConfigurationError(
                f"{flag.name} has both a value handler and a callback"
            )
        if flag.value is None and flag.default:
            raise ConfigurationError(
                f"{flag.name} has a default value but no value handler"
            )
        if flag.min < 0:
            raise ConfigurationError(f"{flag.name} has a negative minimum")
        if flag.max is not None and flag.max < flag.min:
            raise ConfigurationError(
                f"{flag.name} has max={flag.max} below min={flag.min}"
            )

    def add_flags(self, flags: Sequence[Flag]) -> None:
        """
        Register flags.

        Either every flag is registered or, if one of them is invalid, none is.

        Raises:
            ConfigurationError: On a nameless, duplicate or ineffective flag.
        """
        long_names = dict(self._long)
        short_names = dict(self._short)
        for flag in flags:
            self._validate_flag(flag, long_names, short_names)
            if flag.long:
                long_names[flag.long] = flag
            if flag.short:
                short_names[flag.short] = flag
        self._flags.extend(flags)
        self._long = long_names
        self._short = short_names
        logger.debug("[%s] Registered %d flag(s)", self.name, len(flags))

    def _validate_argument(self, argument: Argument) -> None:
        if not argument.name:
            raise ConfigurationError("Argument has no name")
        if argument.value is None:
            raise ConfigurationError(f"Argument {argument.name!r} has no value handler")
        names = [existing.name for existing in self._arguments]
        if self._excess:
            names.append(self._excess.name)
        if argument.name in names:
            raise ConfigurationError(f"Tried to redefine argument {argument.name!r}")

    def add_arguments(self, arguments: Sequence[Argument]) -> None:
        """Append required positional arguments, filled in this order."""
        for argument in arguments:
            self._validate_argument(argument)
            self._arguments.append(argument)

    def set_excess_argument(self, argument: Argument) -> None:
        """Set the argument that absorbs positional tokens past the required ones."""
        if self._excess is not None:
            raise ConfigurationError("Excess argument is already set")
        self._validate_argument(argument)
        self._excess = argument

    def _reset(self, mode: ParseMode) -> None:
        self.mode = mode
        self.errors = []
        self._current_argument = 0
        for flag in self._flags:
            flag.use_count = 0

    def error(self, error: ParseError) -> None:
        self.errors.append(error)
        logger.debug(
            "[%s] %s (%s): %s", self.name, self.mode.value, type(error).__name__, error
        )

    @property
    def num_errors(self) -> int:
        return len(self.errors)

    def long_flag_info(self, name: str) -> tuple[bool, bool]:
        flag = self._long.get(name)
        if flag is None:
            return False, False
        return True, flag.takes_value

    def short_flag_info(self, name: str) -> tuple[bool, bool]:
        flag = self._short.get(name)
        if flag is None:
            return False, False
        return True, flag.takes_value

    def _fire(self, flag: Flag) -> bool:
        flag.use_count += 1
        assert flag.call is not None, "no-value flag must have a callback"
        flag.call()
        return True

    def _fire_value(self, flag: Flag, value: str) -> bool:
        flag.use_count += 1
        assert flag.value is not None, "value flag must have a value handler"
        return flag.value.notify(value, self)

    def notify_long_flag(self, name: str) -> bool:
        return self._fire(self._long[name])

    def notify_long_flag_value(self, name: str, value: str) -> bool:
        return self._fire_value(self._long[name], value)

    def notify_short_flag(self, name: str) -> bool:
        return self._fire(self._short[name])

    def notify_short_flag_value(self, name: str, value: str) -> bool:
        return self._fire_value(self._short[name], value)

    def _active_argument(self) -> Argument | None:
        if self._current_argument < len(self._arguments):
            return self._arguments[self._current_argument]
        return self._excess

    def notify_arg(self, value: str) -> bool:
        argument = self._active_argument()
        if argument is None:
            self.error(ExtraArgument(value))
            return False
        if self._current_argument < len(self._arguments):
            self._current_argument += 1
        return argument.value.notify(value, self)

    def accepting_args(self) -> bool:
        return self._active_argument() is not None

    def complete_long_flag(self, prefix: str, sink: CompletionSink) -> None:
        for flag in self._flags:
            if flag.long and flag.can_accept_more() and flag.long.startswith(prefix):
                sink.final(flag.long)

    def complete_short_flag(self, sink: CompletionSink) -> None:
        for flag in self._flags:
            if not flag.short or not flag.can_accept_more():
                continue
            if flag.takes_value:
                sink.final(flag.short)
            else:
                sink.partial(flag.short)

    def complete_long_flag_value(
        self, name: str, value: str, sink: CompletionSink
    ) -> None:
        handler = self._long[name].value
        if handler is not None:
            handler.complete(value, sink)

    def complete_short_flag_value(
        self, name: str, value: str, sink: CompletionSink
    ) -> None:
        handler = self._short[name].value
        if handler is not None:
            handler.complete(value, sink)

    def complete_arg(self, prefix: str, sink: CompletionSink) -> None:
        argument = self._active_argument()
        if argument is not None:
            argument.value.complete(prefix, sink)

    def _post_parse(self) -> bool:
        for flag in self._flags:
            if flag.default and flag.use_count == 0 and flag.value is not None:
                flag.value.notify(flag.default, self)
            if flag.min > flag.use_count:
                self.error(MissingRequiredFlag(flag.name))
        for argument in self._arguments[self._current_argument :]:
            self.error(MissingRequiredArgument(argument.name))
        return self.num_errors == 0

    def parse(self, args: Sequence[str]) -> bool:
        """
        Parse `args`, delivering values to the declared handlers.

        Returns:
            bool: True if no error was recorded. Errors are in `self.errors`.
        """
        self._reset(ParseMode.PARSE)
        ok = token_parser.parse(args, self)
        if ok:
            ok = self._post_parse()
        return ok

    def complete(self, args: Sequence[str]) -> CompletionResult:
        """Return completion candidates for the last token of `args`."""
        self._reset(ParseMode.COMPLETE)
        return token_parser.complete(args, self)

    def completion_lines(self, word_breaks: str, args: Sequence[str]) -> list[str]:
        """Candidates for `args` formatted for the bash completion function."""
        result = self.complete(args)
        current = args[-1] if args else ""
        return result.to_lines(current, word_breaks)

    def get_usage(self) -> str:
        usage = f"usage: {self.name}"
        if self._flags:
            usage += " [<flags>]"
        for argument in self._arguments:
            usage += f" <{argument.name}>"
        if self._excess:
            usage += f" [<{self._excess.name}>...]"
        return usage

    def _flag_lines(self) -> list[str]:
        lines = []
        for flag in self._flags:
            line = f"    {flag.name}"
            if flag.value is not None:
                line += f"   {flag.value.type_name}"
            if flag.default:
                line += f"   default={flag.default}"
            if flag.min > 0:
                line += "   required"
            if flag.help:
                line += f"   {flag.help}"
            lines.append(line)
        return lines

    def _argument_lines(self) -> list[str]:
        slots = [(argument.name, argument) for argument in self._arguments]
        if self._excess:
            slots.append((f"<{self._excess.name}>...", self._excess))
        lines = []
        for display, argument in slots:
            line = f"    {display}   {argument.value.type_name}"
            if argument.help:
                line += f"   {argument.help}"
            lines.append(line)
        return lines

    def format_help(self) -> str:
        """Plain-text help: usage line, then the flags and arguments."""
        out = [self.get_usage()]
        if self.help_text:
            out.extend(["", self.help_text])
        flag_lines = self._flag_lines()
        if flag_lines:
            out.extend(["", "Flags:", *flag_lines])
        argument_lines = self._argument_lines()
        if argument_lines:
            out.extend(["", "Args:", *argument_lines])
        return "\n".join(out) + "\n"

    def render_help(self) -> None:
        """Print help through the rich console."""
        self.console.print(f"[bold]{escape(self.get_usage())}[/bold]")
        if self.help_text:
            self.console.print(f"\n{escape(self.help_text)}")
        flag_lines = self._flag_lines()
        if flag_lines:
            self.console.print("\n[bold]Flags:[/bold]")
            for line in flag_lines:
                self.console.print(escape(line))
        argument_lines = self._argument_lines()
        if argument_lines:
            self.console.print("\n[bold]Args:[/bold]")
            for line in argument_lines:
                self.console.print(escape(line))

    def bash_completion_script(self) -> str:
        function = "".join(char if char.isalnum() else "_" for char in self.name)
        return SCRIPT_TEMPLATE % {"name": self.name, "function": function}

    def run(self, argv: Sequence[str] | None = None) -> None:
        """
        Process entry point.

        `--generate-bash-completion <wordbreaks> <tokens...>` prints one
        candidate per line and exits 0. `--bash-completion-script` prints the
        bash glue and exits 0. Anything else is parsed; on failure the errors
        and the help are printed and the process exits with status 1.
        """
        args = list(sys.argv[1:] if argv is None else argv)
        if args and args[0] == COMPLETION_MARKER:
            word_breaks = args[1] if len(args) > 1 else DEFAULT_WORD_BREAKS
            for line in self.completion_lines(word_breaks, args[2:]):
                sys.stdout.write(f"{line}\n")
            sys.exit(0)
        if args and args[0] == SCRIPT_MARKER:
            sys.stdout.write(self.bash_completion_script())
            sys.exit(0)

        if not self.parse(args):
            for error in self.errors:
                self.error_console.print(f"[bold red]ERROR[/bold red] {escape(str(error))}")
            self.console.print()
            self.render_help()
            sys.exit(1)

    def __str__(self) -> str:
        required = sum(flag.min > 0 for flag in self._flags)
        return (
            f"App(name={self.name!r}, flags={len(self._flags)}, "
            f"arguments={len(self._arguments)}, excess={self._excess is not None}, "
            f"required_flags={required})"
        )

    def __repr__(self) -> str:
        return str(self)
