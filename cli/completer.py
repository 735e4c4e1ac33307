"""Completer for the catalog CLI with entry-name autocompletion."""

import shlex
from typing import Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import COMMANDS, NAME_COMMANDS
from cli.state import CatalogState


def _quote(name: str) -> str:
    return shlex.quote(name) if any(ch.isspace() for ch in name) or "'" in name or '"' in name else name


class CatalogCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - Entry names of the current folder for commands that take one
    """

    def __init__(self, state: CatalogState):
        self.state = state

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        command = tokens[0].lower()
        if command not in NAME_COMMANDS:
            return

        # only the first argument names an entry, except for mv's destination
        argument_index = len(tokens) - 1 if not is_typing_new_token else len(tokens)
        if argument_index > 1 and not (command == "mv" and argument_index == 2):
            return

        current_word = "" if is_typing_new_token else tokens[-1]
        folders_only = command == "cd" or argument_index == 2
        yield from self._complete_names(current_word, folders_only)

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_names(self, partial: str, folders_only: bool) -> Iterable[Completion]:
        """
        Complete names from the loaded listing of the current folder.
        """
        partial_lower = partial.lower()
        for node in self.state.children:
            if folders_only and not node.is_folder:
                continue
            if node.name.lower().startswith(partial_lower):
                yield Completion(
                    _quote(node.name),
                    start_position=-len(partial),
                    display=node.name + ("/" if node.is_folder else ""),
                )
