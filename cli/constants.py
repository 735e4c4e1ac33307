"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["tree", "ls", "cd", "find", "mkdir", "touch", "rename", "mv", "rm", "info", "clear", "exit", "help"]

# commands whose argument is an entry of the current folder
NAME_COMMANDS = ["cd", "rename", "mv", "rm", "info"]

STYLE = Style.from_dict(
    {
        "prompt": "#3D8BD9 bold",
        "path": "#888888",
    }
)

FOLDER_MARK = "\033[38;2;61;139;217m"
GREEN = "\033[92m"
RESET = "\033[0m"

WELCOME_TITLE = "Catalog CLI - virtual file and folder browser"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "catalog:"

HELP_TEXT = """Available commands:
  tree                            Show the folder tree
  ls [page]                       List the current folder (folders first)
  cd <folder|..|/>                Enter a folder, go up, or go to the root
  find <text>                     Search names across the whole catalog
  mkdir <name>                    Create a folder here
  touch <name> [size] [mime]      Create a file entry here
  rename <name> <new-name>        Rename an entry of this folder
  mv <name> <folder|..|/>         Move an entry into another folder
  rm <name>                       Delete an entry of this folder
  info <name>                     Show metadata of an entry
  clear                           Clear screen and redisplay welcome message
  help                            Show this help
  exit                            Exit REPL

Names refer to entries of the current folder; quote names with spaces.
Examples:
  mkdir Reports
  touch "annual report.pdf" 524288 application/pdf
  cd Reports
  find report"""
