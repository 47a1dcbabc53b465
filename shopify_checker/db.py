"""JSON file persistence for the target store."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

from .store import TargetStore

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class StoreReadError(Exception):
    """Raised when the products file exists but cannot be read back."""


def load_store(path: PathLike) -> Optional[TargetStore]:
    """Read the products file.

    Returns None if the file does not exist so the caller can offer to
    create it. Raises StoreReadError when the file is unreadable or
    does not have the expected shape.
    """
    path = Path(path)
    if not path.exists():
        logger.info("No products file at %s", path)
        return None

    logger.info("Products file found. Reading %s...", path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        store = TargetStore.from_dict(data)
    except (OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        logger.error("Error encountered when reading products file %s: %s", path, e)
        raise StoreReadError(str(e)) from e

    logger.info("Products file read: %d tracked sites.", len(store))
    return store


def save_store(store: TargetStore, path: PathLike) -> bool:
    """Overwrite the products file with the full store.

    Write failures are logged and reported as False; the in-memory store
    stays authoritative.
    """
    path = Path(path)
    logger.debug("Writing to products file %s", path)
    try:
        payload = json.dumps(store.to_dict())
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(payload)
    except (OSError, TypeError, ValueError):
        logger.exception("Error encountered when writing to products file %s", path)
        return False
    return True


__all__ = ["StoreReadError", "load_store", "save_store"]
