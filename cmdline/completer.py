# cmdline — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `CmdlineCompleter`, a Prompt Toolkit completer driven by the same
grammar as the bash integration.

The text before the cursor is split with `shlex`, handed to `App.complete`
and every candidate is yielded as a `Completion` that replaces the word under
the cursor. A trailing space in the buffer means a new, empty word is being
completed.
"""
from __future__ import annotations

import shlex
from typing import TYPE_CHECKING, Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cmdline.logger import logger

if TYPE_CHECKING:
    from cmdline.app import App


class CmdlineCompleter(Completer):
    """
    Prompt Toolkit completer for an `App`'s command line.

    Args:
        app (App): The application whose flags and arguments are completed.
    """

    def __init__(self, app: "App"):
        self.app = app

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        text = document.text_before_cursor
        try:
            tokens = shlex.split(text)
        except ValueError:
            return
        if not tokens or text.endswith((" ", "\t")):
            tokens.append("")

        stub = tokens[-1]
        result = self.app.complete(tokens)
        logger.debug("Interactive completion for %r: %s", stub, result.candidates)
        for candidate in result.candidates:
            if not candidate.startswith(stub):
                continue
            yield Completion(
                self._ensure_quote(candidate),
                start_position=-len(stub),
                display=candidate,
            )

    def _ensure_quote(self, text: str) -> str:
        """Quote completions containing whitespace so they stay one token."""
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text
