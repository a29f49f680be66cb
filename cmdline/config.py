# cmdline — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Declarative loader for cmdline applications.

An application can be described in YAML or TOML instead of Python:

    name: deploy
    flags:
      - long: verbose
        short: v
      - long: jobs
        short: j
        type: int32
        default: 4
      - long: arch
        type: enum
        choices: [arm64, x64]
        required: true
    arguments:
      - name: target
        type: path
        must_exist: true
    excess:
      name: extra

`loader` returns the `App` together with the `Namespace` that receives the
parsed values: boolean flags become `True`, value flags and arguments hold
their converted value and the excess argument collects a list.
"""
from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from typing import Any, Literal

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from cmdline.app import App
from cmdline.exceptions import ConfigurationError
from cmdline.logger import logger
from cmdline.parser.flag import Argument, Flag
from cmdline.parser.value_handler import ValueParser, set_true
from cmdline.parser.values import EnumParser, FilePath, Int32, Int64, String

ValueType = Literal["int32", "int64", "string", "enum", "path"]


def build_value_parser(
    value_type: ValueType,
    choices: list[str] | None = None,
    root: str = "",
    must_exist: bool = False,
) -> ValueParser:
    """Return the built-in value parser named by `value_type`."""
    if value_type == "int32":
        return Int32
    if value_type == "int64":
        return Int64
    if value_type == "string":
        return String
    if value_type == "enum":
        return EnumParser(choices or [])
    if value_type == "path":
        return FilePath(root=root, must_exist=must_exist)
    raise ConfigurationError(f"Unknown value type: {value_type}")


class RawValue(BaseModel):
    """Settings shared by flag values and positional arguments."""

    choices: list[str] = Field(default_factory=list)
    root: str = ""
    must_exist: bool = False
    fatal: bool = False
    help: str = ""

    @field_validator("choices", mode="before")
    @classmethod
    def stringify_choices(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [str(choice) for choice in value]
        return value


class RawFlag(RawValue):
    """Raw flag model for cmdline configuration."""

    long: str = ""
    short: str = ""
    dest: str = ""
    type: ValueType | None = None
    default: str = ""
    required: bool = False
    min: int = 0
    max: int | None = None

    @field_validator("default", mode="before")
    @classmethod
    def stringify_default(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @model_validator(mode="after")
    def validate_value_settings(self) -> RawFlag:
        if not self.long and not self.short:
            raise ValueError("a flag needs a long or a short name")
        if self.type is None and self.default:
            raise ValueError(f"flag {self.get_dest()!r} has a default but no type")
        if self.type == "enum" and not self.choices:
            raise ValueError(f"enum flag {self.get_dest()!r} needs choices")
        if self.type != "enum" and self.choices:
            raise ValueError(f"choices are only valid for enum flags ({self.get_dest()!r})")
        return self

    def get_dest(self) -> str:
        if self.dest:
            return self.dest
        return (self.long or self.short).replace("-", "_")

    def to_flag(self, namespace: Namespace) -> Flag:
        dest = self.get_dest()
        minimum = max(self.min, 1) if self.required else self.min
        if self.type is None:
            setattr(namespace, dest, False)
            return Flag(
                long=self.long,
                short=self.short,
                call=set_true(namespace, dest),
                min=minimum,
                max=self.max,
                help=self.help,
            )
        setattr(namespace, dest, None)
        parser = build_value_parser(self.type, self.choices, self.root, self.must_exist)
        return Flag(
            long=self.long,
            short=self.short,
            value=parser.store(namespace, dest, fatal=self.fatal),
            default=self.default,
            min=minimum,
            max=self.max,
            help=self.help,
        )


class RawArgument(RawValue):
    """Raw positional argument model for cmdline configuration."""

    name: str
    type: ValueType = "string"

    @model_validator(mode="after")
    def validate_value_settings(self) -> RawArgument:
        if self.type == "enum" and not self.choices:
            raise ValueError(f"enum argument {self.name!r} needs choices")
        return self

    def get_dest(self) -> str:
        return self.name.replace("-", "_")

    def get_parser(self) -> ValueParser:
        return build_value_parser(self.type, self.choices, self.root, self.must_exist)

    def to_argument(self, namespace: Namespace) -> Argument:
        setattr(namespace, self.get_dest(), None)
        return Argument(
            name=self.name,
            value=self.get_parser().store(namespace, self.get_dest(), fatal=self.fatal),
            help=self.help,
        )

    def to_excess_argument(self, namespace: Namespace) -> Argument:
        values: list[Any] = []
        setattr(namespace, self.get_dest(), values)
        return Argument(
            name=self.name,
            value=self.get_parser().collect(values, fatal=self.fatal),
            help=self.help,
        )


class AppConfig(BaseModel):
    """cmdline application configuration model."""

    name: str
    help_text: str = ""
    flags: list[RawFlag] = Field(default_factory=list)
    arguments: list[RawArgument] = Field(default_factory=list)
    excess: RawArgument | None = None

    def to_app(self) -> tuple[App, Namespace]:
        namespace = Namespace()
        app = App(self.name, help_text=self.help_text)
        app.add_flags([raw_flag.to_flag(namespace) for raw_flag in self.flags])
        app.add_arguments(
            [raw_argument.to_argument(namespace) for raw_argument in self.arguments]
        )
        if self.excess:
            app.set_excess_argument(self.excess.to_excess_argument(namespace))
        return app, namespace


def loader(file_path: Path | str) -> tuple[App, Namespace]:
    """
    Load a cmdline application from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the config file (YAML or TOML).

    Returns:
        tuple[App, Namespace]: The application and the namespace its values
        are stored into.

    Raises:
        ConfigurationError: If the file is missing, has an unsupported format
            or does not describe a valid application.
    """
    if not isinstance(file_path, (str, Path)):
        raise TypeError("file_path must be a string or Path object.")
    path = Path(file_path)
    if not path.is_file():
        raise ConfigurationError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        try:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise ConfigurationError(f"Unsupported config format: {suffix}")
        except (yaml.YAMLError, toml.TomlDecodeError) as error:
            raise ConfigurationError(f"Could not read {path}: {error}") from error

    if not isinstance(raw_config, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping.\n"
            "Example:\n"
            "name: 'deploy'\n"
            "flags:\n"
            "  - long: 'verbose'\n"
            "    short: 'v'"
        )

    try:
        config = AppConfig.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(f"Invalid configuration in {path}:\n{error}") from error

    logger.debug(
        "Loaded %s from %s: %d flag(s), %d argument(s)",
        config.name,
        path,
        len(config.flags),
        len(config.arguments),
    )
    return config.to_app()
