"""REPL with prompt_toolkit for user interaction."""

import os
import sys
from pathlib import Path
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from cli.catalog_client import CatalogClient
from cli.commands import (
    current_path,
    handle_cd,
    handle_find,
    handle_info,
    handle_ls,
    handle_mkdir,
    handle_mv,
    handle_rename,
    handle_rm,
    handle_touch,
    handle_tree,
)
from cli.completer import CatalogCompleter
from cli.config import Config
from cli.constants import (
    HELP_TEXT,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
from cli.models import (
    ChangeDirCommand,
    FindCommand,
    InfoCommand,
    ListCommand,
    MakeDirCommand,
    MoveCommand,
    RemoveCommand,
    RenameCommand,
    TouchCommand,
    TreeCommand,
)
from cli.parser import ParseError, parse_command
from cli.search import SearchState
from cli.state import CatalogState


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    if sys.platform == "win32":
        os.system("cls")
    else:
        os.system("clear")


def show_welcome() -> None:
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def dispatch_command(cmd_obj, state: CatalogState, search: SearchState) -> str:
    """Dispatch parsed command to appropriate handler."""
    if isinstance(cmd_obj, TreeCommand):
        return handle_tree(cmd_obj, state)
    elif isinstance(cmd_obj, ListCommand):
        return handle_ls(cmd_obj, state)
    elif isinstance(cmd_obj, ChangeDirCommand):
        return handle_cd(cmd_obj, state)
    elif isinstance(cmd_obj, FindCommand):
        return handle_find(cmd_obj, search)
    elif isinstance(cmd_obj, MakeDirCommand):
        return handle_mkdir(cmd_obj, state)
    elif isinstance(cmd_obj, TouchCommand):
        return handle_touch(cmd_obj, state)
    elif isinstance(cmd_obj, RenameCommand):
        return handle_rename(cmd_obj, state)
    elif isinstance(cmd_obj, MoveCommand):
        return handle_mv(cmd_obj, state)
    elif isinstance(cmd_obj, RemoveCommand):
        return handle_rm(cmd_obj, state)
    elif isinstance(cmd_obj, InfoCommand):
        return handle_info(cmd_obj, state)
    else:
        return f"Unknown command type: {type(cmd_obj)}"


def repl_loop(config: Optional[Config] = None) -> None:
    """Start interactive REPL with prompt_toolkit."""
    if config is None:
        config = Config(Path.home() / '.catalog' / 'config.json')

    client = CatalogClient(config)
    state = CatalogState(client)
    search = SearchState(client, delay=config.get_search_debounce())

    history = InMemoryHistory()
    session: PromptSession = PromptSession(
        completer=CatalogCompleter(state), history=history, style=STYLE
    )

    clear_screen()
    show_welcome()

    state.load_folder_tree()
    state.select_node(None)
    if state.error:
        print(f"Warning: catalog unreachable at {config.get_server_url()}: {state.error}")

    try:
        while True:
            try:
                user_input = session.prompt([
                    ("class:prompt", PROMPT_TEXT),
                    ("class:path", current_path(state)),
                    ("", "> "),
                ])

                if not user_input.strip():
                    continue

                if user_input.strip() == "exit":
                    print("Goodbye!")
                    break

                if user_input.strip() == "help":
                    print(HELP_TEXT)
                    continue

                if user_input.strip() == "clear":
                    clear_screen()
                    show_welcome()
                    continue

                cmd_obj = parse_command(user_input)
                result = dispatch_command(cmd_obj, state, search)
                print(result)

            except ParseError as e:
                print(f"Error: {e}")
            except KeyboardInterrupt:
                continue
            except EOFError:
                print("\nGoodbye!")
                break
    finally:
        search.clear()
        client.close()
