# cmdline — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by cmdline.

There are two families. `ConfigurationError` is raised while an application
declares its flags and arguments, before any token is scanned. `ParseError`
and its subclasses describe problems with the user's command line; they are
reported through an `ErrorSink` instead of being raised, so a single pass can
collect several of them. `ValueConversionError` is the one parse error that is
raised, by `ValueParser.parse`, and converted into a report by the bound
value handler.

Exception Hierarchy:
- CmdlineError
    ├── ConfigurationError
    └── ParseError
        ├── UnrecognizedFlag
        ├── FlagTakesNoArgument
        ├── MissingFlagValue
        ├── ExtraArgument
        ├── StrayDash
        ├── MissingRequiredFlag
        ├── MissingRequiredArgument
        └── ValueConversionError

`structural` tells whether the error stops the scan on its own. Value
conversion failures are not structural unless the handler is marked fatal.
"""


class CmdlineError(Exception):
    """Base exception for cmdline."""


class ConfigurationError(CmdlineError):
    """Raised when flags or arguments are declared inconsistently."""


class ParseError(CmdlineError):
    """A user-visible problem with the command line."""

    structural: bool = True

    @property
    def message(self) -> str:
        return str(self)


class UnrecognizedFlag(ParseError):
    """Unknown long or short flag name."""

    def __init__(self, flag: str):
        super().__init__(f"unrecognized flag {flag}")
        self.flag = flag


class FlagTakesNoArgument(ParseError):
    """A value was attached with `=` to a flag that takes none."""

    def __init__(self, flag: str):
        super().__init__(f"{flag} does not take an argument")
        self.flag = flag


class MissingFlagValue(ParseError):
    """A value-taking flag with nothing left to consume."""

    def __init__(self, flag: str):
        super().__init__(f"{flag} requires an argument")
        self.flag = flag


class ExtraArgument(ParseError):
    """A positional token with no slot left to receive it."""

    def __init__(self, value: str):
        super().__init__(f"extra argument: {value}")
        self.value = value


class StrayDash(ParseError):
    """A bare `-` outside completion mode."""

    def __init__(self):
        super().__init__("stray dash")


class MissingRequiredFlag(ParseError):
    """A flag was used fewer times than its minimum."""

    def __init__(self, flag: str):
        super().__init__(f"{flag} is required")
        self.flag = flag


class MissingRequiredArgument(ParseError):
    """A required positional slot was never filled."""

    def __init__(self, name: str):
        super().__init__(f"argument {name!r} is required")
        self.name = name


class ValueConversionError(ParseError):
    """Text could not be converted by a value parser."""

    structural = False
