"""In-memory mapping of tracked sites.

The store is the single source of truth for what gets checked; it is
written to disk as a whole by `db.save_store`.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from .scraper import Product, build_product
from .utils import strip_scheme

logger = logging.getLogger(__name__)


@dataclass
class Target:
    id: str
    host: str
    path: str
    products: List[Product] = field(default_factory=list)

    @property
    def url(self) -> str:
        return self.host + self.path

    def to_dict(self) -> dict:
        # "loc" is the on-disk name of the host field
        return {
            "loc": self.host,
            "path": self.path,
            "products": [asdict(p) for p in self.products],
        }

    @classmethod
    def from_dict(cls, target_id: str, data: Mapping[str, Any]) -> "Target":
        if not isinstance(data, Mapping):
            raise ValueError(f"entry for '{target_id}' is not an object")
        loc = data.get("loc")
        path = data.get("path")
        if not isinstance(loc, str) or not isinstance(path, str):
            raise ValueError(f"entry for '{target_id}' is missing 'loc' or 'path'")
        raw_products = data.get("products")
        if raw_products is None:
            raw_products = []
        if not isinstance(raw_products, list):
            raise ValueError(f"entry for '{target_id}' has a non-list 'products'")
        return cls(
            id=target_id,
            host=loc,
            path=path,
            products=[build_product(p) for p in raw_products],
        )


class TargetStore:
    """Ordered mapping of target id -> Target.

    Keys are unique; adding an existing id replaces it.
    """

    def __init__(self) -> None:
        self._targets: Dict[str, Target] = {}

    def __len__(self) -> int:
        return len(self._targets)

    def __contains__(self, target_id: object) -> bool:
        return target_id in self._targets

    def __iter__(self) -> Iterator[Target]:
        return iter(list(self._targets.values()))

    def ids(self) -> List[str]:
        return list(self._targets)

    def add(self, target_id: str, host: str, path: str) -> Target:
        """Insert or overwrite a target with no products.

        An empty id is replaced by ``len(store) + 1``. That numbering is
        not collision-safe once entries have been removed: it can land on
        an id that is still in use and overwrite it.
        """
        host = strip_scheme(host or "")
        path = (path or "").strip()
        if not host:
            raise ValueError("host must not be empty")
        if not path:
            raise ValueError("path must not be empty")

        target_id = (target_id or "").strip()
        if not target_id:
            target_id = str(len(self._targets) + 1)

        if target_id in self._targets:
            logger.info("Replacing site ID '%s'.", target_id)
        target = Target(id=target_id, host=host, path=path)
        self._targets[target_id] = target
        return target

    def remove(self, target_id: str) -> bool:
        if target_id and target_id in self._targets:
            del self._targets[target_id]
            logger.info("No longer tracking site ID '%s'.", target_id)
            return True
        logger.warning("Failed: products list does not contain '%s'.", target_id)
        return False

    def list(self) -> Optional[Iterator[Tuple[str, str]]]:
        """Lazily yield ``(id, host+path)`` pairs, or None when empty."""
        if not self._targets:
            return None
        return ((tid, t.url) for tid, t in self._targets.items())

    def get(self, target_id: str) -> Optional[Target]:
        return self._targets.get(target_id)

    def set_products(self, target_id: str, products: List[Product]) -> None:
        target = self._targets.get(target_id)
        if target is None:
            raise KeyError(target_id)
        target.products = list(products)

    # -------- (de)serialisation --------

    def to_dict(self) -> Dict[str, dict]:
        return {tid: t.to_dict() for tid, t in self._targets.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TargetStore":
        """Build a store from the on-disk mapping. Raises ValueError on bad shape."""
        if not isinstance(data, Mapping):
            raise ValueError("products file must contain a JSON object")
        store = cls()
        for tid, entry in data.items():
            store._targets[str(tid)] = Target.from_dict(str(tid), entry)
        return store


__all__ = ["Target", "TargetStore"]
