import pytest

from cmdline.parser import CompletionResult, completion_clip_point
from cmdline.parser.completion import DEFAULT_WORD_BREAKS


@pytest.mark.parametrize(
    "current, expected",
    [
        ("", 0),
        ("--bar", 0),
        ("--bar=", 6),
        ("--bar=ab", 6),
        ("host:port", 5),
        ("a=b=c", 4),
    ],
)
def test_completion_clip_point(current, expected):
    assert completion_clip_point(current, DEFAULT_WORD_BREAKS) == expected


def test_single_final_candidate_gets_a_space():
    result = CompletionResult(["--bar"], partial=False)
    assert result.is_exact
    assert result.to_lines("--b", DEFAULT_WORD_BREAKS) == ["--bar "]


def test_single_partial_candidate_has_no_space():
    result = CompletionResult(["dir/"], partial=True)
    assert not result.is_exact
    assert result.to_lines("d", DEFAULT_WORD_BREAKS) == ["dir/"]


def test_several_candidates_have_no_space():
    result = CompletionResult(["--foo", "--bar"])
    assert result.to_lines("--", DEFAULT_WORD_BREAKS) == ["--foo", "--bar"]


def test_candidates_are_clipped_after_word_break():
    result = CompletionResult(["--arch=arm", "--arch=arm64"])
    assert result.to_lines("--arch=ar", DEFAULT_WORD_BREAKS) == ["arm", "arm64"]
    exact = CompletionResult(["--arch=x64"])
    assert exact.to_lines("--arch=x", DEFAULT_WORD_BREAKS) == ["x64 "]


def test_no_candidates():
    assert CompletionResult().to_lines("zzz", DEFAULT_WORD_BREAKS) == []
