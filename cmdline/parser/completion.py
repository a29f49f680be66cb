# cmdline — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Completion candidate protocol shared by the token parser, the value parsers
and the shell integration.

A candidate is either *final* (a complete, acceptable token) or *partial*
(a valid prefix that may still grow, such as a directory or a short flag
cluster). The distinction decides whether the shell may append a space.

Contents:
- `CompletionSink`: receives candidates from observers and value parsers.
- `CompletionResult`: the candidates gathered by one completion scan.
- `completion_clip_point`: where the shell expects the inserted suffix to start.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

DEFAULT_WORD_BREAKS = " \t\n\"'><=;|&(:"


class CompletionSink(ABC):
    """Accumulates completion candidates."""

    @abstractmethod
    def partial(self, candidate: str) -> None:
        """Offer a candidate that may be extended further."""

    @abstractmethod
    def final(self, candidate: str) -> None:
        """Offer a candidate that is a complete token."""


class CollectingSink(CompletionSink):
    """Plain sink that records what it is given, used when no scan is involved."""

    def __init__(self) -> None:
        self.candidates: list[str] = []
        self.is_partial: bool = False

    def partial(self, candidate: str) -> None:
        self.candidates.append(candidate)
        self.is_partial = True

    def final(self, candidate: str) -> None:
        self.candidates.append(candidate)

    def result(self) -> CompletionResult:
        return CompletionResult(list(self.candidates), self.is_partial)


def completion_clip_point(current: str, word_breaks: str) -> int:
    """
    Return the index just past the last word-break character in `current`.

    Bash splits the word under the cursor at every character in
    `COMP_WORDBREAKS`, so only the text after the last break is replaced.
    """
    for index in range(len(current) - 1, -1, -1):
        if current[index] in word_breaks:
            return index + 1
    return 0


@dataclass
class CompletionResult:
    """Candidates produced by one completion scan."""

    candidates: list[str] = field(default_factory=list)
    partial: bool = False

    @property
    def is_exact(self) -> bool:
        """True when exactly one final candidate remains."""
        return len(self.candidates) == 1 and not self.partial

    def to_lines(self, current: str = "", word_breaks: str = "") -> list[str]:
        """
        Render the candidates the way the bash completion function expects.

        Args:
            current (str): The literal word being completed.
            word_breaks (str): The shell's word-break characters.

        Returns:
            list[str]: One line per candidate, clipped to the suffix after the
            last word break. A single final candidate gets a trailing space.
        """
        clip = completion_clip_point(current, word_breaks)
        if self.is_exact:
            return [self.candidates[0][clip:] + " "]
        return [candidate[clip:] for candidate in self.candidates]
