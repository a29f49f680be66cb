"""
cmdline

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import os
import sys
from argparse import Namespace

from rich.table import Table

from cmdline.app import App
from cmdline.config import loader
from cmdline.console import console, error_console
from cmdline.exceptions import ConfigurationError
from cmdline.parser import Argument, EnumParser, FilePath, Flag, Int32, set_true
from cmdline.utils import setup_logging


def build_playground() -> tuple[App, Namespace]:
    """The demo application used when no configuration file is given."""
    values = Namespace(foo=False, bar=0, verbosity=0, jobs=0, arch="", files=[])
    arch = EnumParser(["arm", "arm64", "ia32", "x64"])
    app = App(
        "cmdline-playground",
        help_text="Try the parser and the bash completion.",
        excess=Argument("files", FilePath().collect(values.files), help="Input files."),
    )
    app.add_flags(
        [
            Flag(long="foo", short="f", call=set_true(values, "foo")),
            Flag(
                long="bar", short="b", value=Int32.store(values, "bar"), min=1, max=1
            ),
            Flag(
                long="verbosity",
                short="v",
                value=Int32.store(values, "verbosity"),
                default="0",
            ),
            Flag(long="jobs", short="j", value=Int32.store(values, "jobs"), default="32"),
            Flag(long="arch", value=arch.store(values, "arch"), default="arm64"),
        ]
    )
    return app, values


def main() -> None:
    setup_logging()
    config_path = os.environ.get("CMDLINE_CONFIG")
    try:
        if config_path:
            app, values = loader(config_path)
        else:
            app, values = build_playground()
    except ConfigurationError as error:
        error_console.print(f"[bold red]Invalid configuration:[/bold red] {error}")
        sys.exit(2)

    app.run(sys.argv[1:])

    table = Table("name", "value", title=app.name)
    for name, value in vars(values).items():
        table.add_row(name, repr(value))
    console.print(table)


if __name__ == "__main__":
    main()
