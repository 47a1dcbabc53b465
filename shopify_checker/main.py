from __future__ import annotations

import logging
from typing import Callable, Optional

from . import cli, config, db
from .monitor import Monitor
from .store import TargetStore


def setup_logging() -> None:
    level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def setup_store(path: str, read_line: Callable[[str], str] = input) -> Optional[TargetStore]:
    """Load the products file, offering to create it when missing or unreadable.

    Returns None when the user declines, in which case the caller exits.
    """
    logger = logging.getLogger(__name__)
    logger.info("Looking for products file...")
    try:
        store = db.load_store(path)
    except db.StoreReadError:
        logger.warning("Products file %s is unusable; treating it as missing.", path)
        store = None

    if store is not None:
        return store

    try:
        uin = read_line(">? No usable products file detected! Would you like to create a products file? (y/n) ")
    except EOFError:
        uin = ""
    if uin.strip().lower() != "y":
        logger.warning("No products data exists. Exiting.")
        return None

    logger.info("Creating products file %s...", path)
    store = TargetStore()
    db.save_store(store, path)
    return store


def main() -> None:
    """Load the tracked sites and hand over to the command prompt."""
    config.validate()
    setup_logging()
    logger = logging.getLogger(__name__)

    logger.info("Shopify-Checker initializing.")
    monitor = None
    try:
        store = setup_store(config.PRODUCTS_FILE, read_line=input)
        if store is None:
            return

        monitor = Monitor(store, config.PRODUCTS_FILE)
        logger.info("Awaiting input. Type 'help' for a list of commands.")
        cli.command_loop(monitor, read_line=input)
    except KeyboardInterrupt:
        if monitor is not None:
            monitor.stop()
        logger.info("Interrupted. Exiting.")


if __name__ == "__main__":
    main()
