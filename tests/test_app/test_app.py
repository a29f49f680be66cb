from argparse import Namespace

import pytest

from cmdline.app import App
from cmdline.exceptions import (
    ConfigurationError,
    ExtraArgument,
    MissingRequiredArgument,
    MissingRequiredFlag,
    ValueConversionError,
)
from cmdline.parser import (
    Argument,
    EnumParser,
    FilePath,
    Flag,
    Int32,
    String,
    increment,
    set_false,
    set_true,
)


def build_app(values: Namespace) -> App:
    values.verbose = False
    values.quiet = False
    values.jobs = None
    values.arch = None
    values.source = None
    values.rest = []
    app = App("tool")
    app.add_flags(
        [
            Flag(long="verbose", short="v", call=set_true(values, "verbose")),
            Flag(short="q", call=set_true(values, "quiet"), max=1),
            Flag(long="jobs", short="j", value=Int32.store(values, "jobs"), default="4"),
            Flag(
                long="arch",
                value=EnumParser(["arm", "arm64", "x64"]).store(values, "arch"),
            ),
        ]
    )
    app.add_arguments([Argument("source", String.store(values, "source"))])
    app.set_excess_argument(Argument("rest", String.collect(values.rest)))
    return app


@pytest.fixture
def values():
    return Namespace()


@pytest.fixture
def app(values):
    return build_app(values)


def test_help_of_empty_app():
    assert App("foo").format_help() == "usage: foo\n"


def test_help(app):
    assert app.format_help() == (
        "usage: tool [<flags>] <source> [<rest>...]\n"
        "\n"
        "Flags:\n"
        "    -v/--verbose\n"
        "    -q\n"
        "    -j/--jobs   int32   default=4\n"
        "    --arch   {arm,arm64,x64}\n"
        "\n"
        "Args:\n"
        "    source   string\n"
        "    <rest>...   string\n"
    )


def test_str(app):
    assert str(app) == (
        "App(name='tool', flags=4, arguments=1, excess=True, required_flags=0)"
    )


def test_parse_binds_values(app, values):
    assert app.parse(["-vj8", "--arch=x64", "src", "a", "--", "-b"])
    assert values.verbose is True
    assert values.jobs == 8
    assert values.arch == "x64"
    assert values.source == "src"
    assert values.rest == ["a", "-b"]
    assert app.errors == []


def test_parse_applies_defaults(app, values):
    assert app.parse(["src"])
    assert values.jobs == 4
    assert values.arch is None


def test_missing_required_argument(app):
    assert not app.parse(["-v"])
    assert [type(error) for error in app.errors] == [MissingRequiredArgument]
    assert str(app.errors[0]) == "argument 'source' is required"


def test_missing_required_flag(values):
    app = App("tool")
    app.add_flags([Flag(long="bar", value=Int32.store(values, "bar")).required()])
    assert not app.parse([])
    assert [str(error) for error in app.errors] == ["--bar is required"]
    assert isinstance(app.errors[0], MissingRequiredFlag)


def test_extra_argument_is_structural(values):
    app = App("tool", arguments=[Argument("one", String.store(values, "one"))])
    assert not app.parse(["a", "b", "c"])
    assert [str(error) for error in app.errors] == ["extra argument: b"]
    assert isinstance(app.errors[0], ExtraArgument)


def test_value_errors_are_collected(app, values):
    assert not app.parse(["--jobs", "many", "--arch", "sparc", "src"])
    assert [str(error) for error in app.errors] == [
        "'many' cannot be converted into an int32",
        "'sparc' is not in {arm,arm64,x64}",
    ]
    assert all(isinstance(error, ValueConversionError) for error in app.errors)
    assert values.source == "src"


def test_post_pass_skipped_after_structural_error(app):
    assert not app.parse(["--nope"])
    assert [str(error) for error in app.errors] == ["unrecognized flag --nope"]


def test_fatal_value_error_stops_scan(values):
    app = App("tool")
    app.add_flags(
        [
            Flag(short="n", value=Int32.store(values, "n", fatal=True)),
            Flag(short="v", call=set_true(values, "verbose")),
        ]
    )
    values.verbose = False
    assert not app.parse(["-n", "x", "-v"])
    assert values.verbose is False
    assert app.num_errors == 1


def test_state_is_reset_between_invocations(app, values):
    assert not app.parse(["--jobs", "x", "src"])
    assert app.parse(["src"])
    assert app.errors == []
    assert app.complete(["-"]).candidates[:3] == ["-v", "-q", "-j"]


@pytest.mark.parametrize(
    "flags, message",
    [
        ([Flag(call=print)], "Flag has no name"),
        ([Flag(short="ab", call=print)], "Short flag 'ab'"),
        ([Flag(long="-x", call=print)], "Long flag '-x'"),
        ([Flag(long="a=b", call=print)], "Long flag 'a=b'"),
        ([Flag(long="x")], "--x has no effect"),
        ([Flag(long="x", call=print, value=String.call(print))], "both"),
        ([Flag(long="x", call=print, default="1")], "default value"),
        ([Flag(long="x", value=String.call(print), min=2, max=1)], "below min"),
        ([Flag(long="x", call=print), Flag(long="x", call=print)], "redefine --x"),
        ([Flag(short="x", call=print), Flag(short="x", call=print)], "redefine -x"),
    ],
)
def test_invalid_flags(flags, message):
    app = App("tool")
    with pytest.raises(ConfigurationError) as excinfo:
        app.add_flags(flags)
    assert message in str(excinfo.value)
    assert app.flags == []


def test_duplicate_against_registered_flag(app):
    with pytest.raises(ConfigurationError):
        app.add_flags([Flag(short="v", call=print)])


def test_invalid_arguments(values):
    app = App("tool", arguments=[Argument("a", String.store(values, "a"))])
    with pytest.raises(ConfigurationError):
        app.add_arguments([Argument("a", String.store(values, "a"))])
    with pytest.raises(ConfigurationError):
        app.add_arguments([Argument("", String.store(values, "b"))])
    app.set_excess_argument(Argument("rest", String.call(print)))
    with pytest.raises(ConfigurationError):
        app.set_excess_argument(Argument("more", String.call(print)))


def test_complete_long_flags(app):
    assert app.complete(["--"]).candidates == ["--", "--verbose", "--jobs", "--arch"]


def test_complete_long_flags_without_positional(values):
    app = App("tool", flags=[Flag(long="foo", call=set_true(values, "foo"))])
    assert app.complete(["--"]).candidates == ["--foo"]


def test_complete_skips_exhausted_flags(app):
    assert "-q" not in app.complete(["-q", "-"]).candidates
    assert "-q" in app.complete(["-v", "-"]).candidates


def test_complete_flag_value(app):
    assert app.complete(["--arch", "arm"]).candidates == ["arm", "arm64"]
    assert app.complete(["--arch=x"]).candidates == ["--arch=x64"]


def test_complete_positional_uses_active_slot(tmp_path, values):
    (tmp_path / "data.csv").write_text("x")
    app = App(
        "tool",
        arguments=[Argument("mode", EnumParser(["fast", "slow"]).call(print))],
        excess=Argument("files", FilePath(root=str(tmp_path)).collect([])),
    )
    assert app.complete(["f"]).candidates == ["fast"]
    assert app.complete(["fast", "d"]).candidates == ["data.csv"]


def test_complete_without_slots_offers_flags_for_empty_word(values):
    app = App("tool", flags=[Flag(short="x", call=set_true(values, "x"))])
    assert app.complete([""]).candidates == ["-x"]
    assert app.complete(["a"]).candidates == []


def test_completion_lines(app):
    assert app.completion_lines(" =", ["--ver"]) == ["--verbose "]
    assert app.completion_lines(" =", ["--arch=a"]) == ["arm", "arm64"]
    assert app.completion_lines(" =", ["--arch=x"]) == ["x64 "]


def test_completion_stops_at_unknown_flag(app):
    assert app.complete(["--nope", ""]).candidates == []
    assert app.num_errors == 1


def test_bash_completion_script():
    script = App("my-tool").bash_completion_script()
    assert 'eval "$(my-tool --bash-completion-script)"' in script
    assert "_my_tool_bash_autocomplete()" in script
    assert script.rstrip().endswith("complete -o nospace -F _my_tool_bash_autocomplete my-tool")
    assert "--generate-bash-completion" in script


def test_run_success_is_silent(app, capsys):
    app.run(["src"])
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_run_failure_exits_with_help(app, capsys):
    with pytest.raises(SystemExit) as excinfo:
        app.run(["--nope"])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "unrecognized flag --nope" in captured.err
    assert "usage: tool" in captured.out


def test_run_completion_marker(app, capsys):
    with pytest.raises(SystemExit) as excinfo:
        app.run(["--generate-bash-completion", " \t\n=", "--ver"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out == "--verbose \n"


def test_run_completion_marker_ambiguous(app, capsys):
    with pytest.raises(SystemExit):
        app.run(["--generate-bash-completion", " =", "--arch", ""])
    assert capsys.readouterr().out == "arm\narm64\nx64\n"


def test_run_script_marker(app, capsys):
    with pytest.raises(SystemExit) as excinfo:
        app.run(["--bash-completion-script"])
    assert excinfo.value.code == 0
    assert "complete -o nospace" in capsys.readouterr().out


def test_counting_and_negating_flags():
    values = Namespace(color=True)
    app = App(
        "tool",
        flags=[
            Flag(long="no-color", call=set_false(values, "color")),
            Flag(short="v", call=increment(values, "verbosity")),
        ],
    )
    assert app.parse(["-vvv", "--no-color", "-v"])
    assert values.verbosity == 4
    assert values.color is False
