"""CLI entry point."""

import sys
import os
from pathlib import Path
from typing import List, Optional, Tuple

from common.logging_config import setup_logging
from cli.config import Config
from cli.repl import repl_loop


def parse_server_arg(argv: List[str]) -> Optional[Tuple[str, int]]:
    """
    Pull a ``--server HOST:PORT`` option out of argv.

    The option and its value are removed from argv. Returns None when the
    option is absent; raises ValueError when the value is malformed.
    """
    if '--server' not in argv:
        return None

    index = argv.index('--server')
    if index + 1 >= len(argv):
        raise ValueError("--server requires HOST:PORT")
    value = argv[index + 1]
    del argv[index:index + 2]

    host, sep, port = value.rpartition(':')
    if not sep or not host or not (port.isascii() and port.isdigit()):
        raise ValueError(f"Invalid server address: {value}")
    return host, int(port)


def main() -> None:
    """Entry point for CLI."""
    log_level = 'DEBUG' if '--debug' in sys.argv else os.getenv('LOG_LEVEL', 'WARNING')

    logger = setup_logging('cli', log_level=log_level)

    if '--debug' in sys.argv:
        logger.info("Debug logging enabled")
        sys.argv.remove('--debug')

    config = Config(Path.home() / '.catalog' / 'config.json')
    try:
        server = parse_server_arg(sys.argv)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    if server is not None:
        config.set_server(*server)

    logger.info(f"Catalog CLI connecting to {config.get_base_url()}")
    try:
        repl_loop(config)
    except Exception as e:
        logger.error(f"CLI error: {e}", exc_info=True)
        raise
    finally:
        logger.info("Catalog CLI exiting")


if __name__ == "__main__":
    main()
