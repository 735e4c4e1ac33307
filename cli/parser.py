"""Command parser for CLI input."""

import shlex

from cli.models import (
    ChangeDirCommand,
    CommandRequest,
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


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0]
    args = tokens[1:]

    if command_name == "tree":
        return _parse_tree(args)
    elif command_name == "ls":
        return _parse_ls(args)
    elif command_name == "cd":
        return ChangeDirCommand(target=_single_arg("cd", args, "a folder name, '..' or '/'"))
    elif command_name == "find":
        if not args:
            raise ParseError("find requires search text")
        return FindCommand(query=" ".join(args))
    elif command_name == "mkdir":
        return MakeDirCommand(name=_single_arg("mkdir", args, "a folder name"))
    elif command_name == "touch":
        return _parse_touch(args)
    elif command_name == "rename":
        if len(args) != 2:
            raise ParseError("rename requires <name> <new-name>")
        return RenameCommand(target=args[0], new_name=args[1])
    elif command_name == "mv":
        if len(args) != 2:
            raise ParseError("mv requires <name> <folder|..|/>")
        return MoveCommand(target=args[0], destination=args[1])
    elif command_name == "rm":
        return RemoveCommand(target=_single_arg("rm", args, "a name"))
    elif command_name == "info":
        return InfoCommand(target=_single_arg("info", args, "a name"))
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _single_arg(command_name: str, args: list[str], what: str) -> str:
    if len(args) != 1:
        raise ParseError(f"{command_name} requires {what} (quote names with spaces)")
    return args[0]


def _is_number(text: str) -> bool:
    """True for a string of ASCII decimal digits."""
    return text.isascii() and text.isdigit()


def _parse_tree(args: list[str]) -> TreeCommand:
    """Parse 'tree' command."""
    if args:
        raise ParseError("tree takes no arguments")
    return TreeCommand()


def _parse_ls(args: list[str]) -> ListCommand:
    """Parse 'ls [page]' command."""
    if not args:
        return ListCommand()
    if len(args) > 1 or not _is_number(args[0]) or int(args[0]) < 1:
        raise ParseError("ls takes an optional page number (1, 2, ...)")
    return ListCommand(page=int(args[0]))


def _parse_touch(args: list[str]) -> TouchCommand:
    """Parse 'touch <name> [size] [mime-type]' command."""
    if not args or len(args) > 3:
        raise ParseError("touch requires <name> [size] [mime-type]")

    size = None
    if len(args) >= 2:
        if not _is_number(args[1]):
            raise ParseError(f"Invalid size: {args[1]}")
        size = int(args[1])

    mime_type = args[2] if len(args) == 3 else None

    return TouchCommand(name=args[0], size=size, mime_type=mime_type)
