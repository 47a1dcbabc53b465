"""Availability monitoring loop.

Every cycle walks the tracked sites in store order, one at a time:
fetch the products JSON, extract the product/variant records and put
them on the target. After the last site the whole store is written
once, then the loop waits a fixed interval.

A site whose request fails keeps its previous products; a site whose
payload does not parse gets an empty product list. Neither stops the
cycle.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Iterator, Optional, Tuple, Union

from . import config
from .db import save_store
from .scraper import fetch_product_data, parse_product_info
from .store import Target, TargetStore

logger = logging.getLogger(__name__)

FetchFn = Callable[[str, str], Optional[str]]
SaveFn = Callable[[TargetStore, Union[str, Path]], bool]


class Monitor:
    def __init__(
        self,
        store: TargetStore,
        path: Optional[Union[str, Path]] = None,
        fetch: FetchFn = fetch_product_data,
        save: SaveFn = save_store,
    ) -> None:
        self.store = store
        self.path = path if path is not None else config.PRODUCTS_FILE
        self.fetch = fetch
        self.save = save
        self._stop = threading.Event()

    # -------- tracked sites --------

    def register_target(self, target_id: str, host: str, path: str) -> Target:
        target = self.store.add(target_id, host, path)
        logger.info("Tracking site ID '%s': %s", target.id, target.url)
        self.persist()
        return target

    def unregister_target(self, target_id: str) -> bool:
        removed = self.store.remove(target_id)
        if removed:
            self.persist()
        return removed

    def list_targets(self) -> Optional[Iterator[Tuple[str, str]]]:
        return self.store.list()

    def persist(self) -> bool:
        return self.save(self.store, self.path)

    # -------- check cycle --------

    def check_target(self, target_id: str) -> None:
        target = self.store.get(target_id)
        if target is None:
            return
        logger.info("Checking %s: %s", target_id, target.url)
        payload = self.fetch(target.host, target.path)
        if payload is None:
            logger.warning("Keeping previous products for '%s'.", target_id)
            return
        self.store.set_products(target_id, parse_product_info(payload, target_id, self.store))

    def run_cycle(self) -> None:
        """Check every tracked site once, then save the store once."""
        for target_id in self.store.ids():
            try:
                self.check_target(target_id)
            except Exception:
                logger.exception("Unexpected error while checking '%s'.", target_id)
        self.persist()

    def run_forever(
        self,
        stop_event: Optional[threading.Event] = None,
        interval: Optional[float] = None,
    ) -> None:
        """Repeat run_cycle() with a fixed delay until stop_event is set.

        The delay defaults to config.SLEEP_SECONDS, read when the loop starts.
        """
        if interval is None:
            interval = config.SLEEP_SECONDS
        if stop_event is not None:
            self._stop = stop_event
        logger.info("Starting availability checker for %d sites (interval=%.1fs).", len(self.store), interval)
        while not self._stop.is_set():
            self.run_cycle()
            logger.info("Check cycle finished. Waiting %dms...", int(interval * 1000))
            self._stop.wait(interval)
        logger.info("Availability checker stopped.")

    def stop(self) -> None:
        self._stop.set()


__all__ = ["Monitor"]
