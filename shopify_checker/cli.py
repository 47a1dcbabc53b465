"""Interactive command prompt.

Lets the user add, remove and list tracked sites before handing control
to the monitoring loop with `run`. Valid commands are listed with
`help`, `?` or `h`.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from . import config
from .monitor import Monitor

logger = logging.getLogger(__name__)

ReadLine = Callable[[str], str]

COMMANDS: Dict[str, dict] = {
    "help": {
        "description": "Lists available commands.",
        "aliases": ["help", "?", "h"],
    },
    "run": {
        "description": "Begin running the availability checker.",
        "aliases": ["run", "start", "go"],
    },
    "add": {
        "description": "Add a site to the list of checked sites.",
        "aliases": ["add"],
    },
    "remove": {
        "description": "Remove a site from the list of checked sites.",
        "aliases": ["remove", "delete"],
    },
    "quit": {
        "description": "Exit the program.",
        "aliases": ["quit", "exit", "stop"],
    },
    "list": {
        "description": "List all tracked urls.",
        "aliases": ["list"],
    },
}


def resolve_command(text: str) -> Optional[str]:
    """Map user input (any alias, any case) to a command name."""
    word = text.strip().lower()
    for name, spec in COMMANDS.items():
        if word in spec["aliases"]:
            return name
    return None


def help_lines() -> List[str]:
    lines = ["Available commands:"]
    for name, spec in COMMANDS.items():
        aliases = ", ".join(a for a in spec["aliases"] if a != name)
        suffix = f" (aliases: {aliases})" if aliases else ""
        lines.append(f"+ {name}: {spec['description']}{suffix}")
    return lines


def list_lines(monitor: Monitor) -> List[str]:
    lines = ["Tracked sites:"]
    entries = monitor.list_targets()
    if entries is None:
        lines.append("None.")
        return lines
    lines.extend(f"- {tid}: {url}" for tid, url in entries)
    return lines


def add_site(monitor: Monitor, read_line: ReadLine) -> None:
    site = read_line(">?URL? ")
    path = read_line(f">?PATH? [{config.DEFAULT_PRODUCTS_PATH}] ").strip() or config.DEFAULT_PRODUCTS_PATH
    name = read_line(">?ID? ")
    try:
        monitor.register_target(name, site, path)
    except ValueError as e:
        logger.warning("Could not add site: %s", e)


def remove_site(monitor: Monitor, read_line: ReadLine) -> None:
    name = read_line(">?ID? ").strip()
    monitor.unregister_target(name)


def dispatch(command: Optional[str], uin: str, monitor: Monitor, read_line: ReadLine, write: Callable[[str], None]) -> bool:
    """Run one command. Returns False when the prompt should stop."""
    if command == "help":
        for line in help_lines():
            write(line)
    elif command == "add":
        add_site(monitor, read_line)
    elif command == "remove":
        remove_site(monitor, read_line)
    elif command == "list":
        for line in list_lines(monitor):
            write(line)
    elif command == "run":
        monitor.run_forever()
        return False
    elif command == "quit":
        logger.info("Exiting.")
        return False
    elif uin.strip():
        logger.warning(
            "Command '%s' not recognized. To see a list of available commands type 'help' or '?'",
            uin.strip(),
        )
    return True


def command_loop(monitor: Monitor, read_line: ReadLine = input, write: Callable[[str], None] = print) -> None:
    """Read and dispatch commands until `quit`, end of input, or `run`.

    `run` never comes back here: the monitoring loop owns the process
    until it is cancelled. Input ending inside an `add` or `remove`
    prompt ends the loop like it does at the top-level prompt.
    """
    while True:
        try:
            uin = read_line(">- ")
            if not dispatch(resolve_command(uin), uin, monitor, read_line, write):
                return
        except EOFError:
            logger.info("End of input. Exiting.")
            return


__all__ = ["COMMANDS", "resolve_command", "help_lines", "list_lines", "dispatch", "command_loop"]
