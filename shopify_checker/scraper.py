from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Optional

import requests

from .config import REQUEST_TIMEOUT_SECONDS
from .utils import get_http_session, retryable_request

if TYPE_CHECKING:
    from .store import TargetStore

logger = logging.getLogger(__name__)


@dataclass
class Variant:
    id: Any
    title: Optional[str]
    available: Optional[bool]
    price: Any  # passed through as supplied, no currency parsing


@dataclass
class Product:
    id: Any
    handle: Optional[str]
    variants: List[Variant] = field(default_factory=list)


class ParseError(ValueError):
    """Payload does not have the products/variants shape."""


@retryable_request
def _get(session: requests.Session, url: str, **kwargs: dict) -> requests.Response:
    """Thin wrapper around session.get with retry policy from utils.retryable_request."""
    return session.get(url, **kwargs)


def build_url(host: str, path: str) -> str:
    return f"https://{host}{path}"


def fetch_product_data(
    host: str,
    path: str,
    session: Optional[requests.Session] = None,
) -> Optional[str]:
    """Get the raw JSON text published by a tracked site.

    Returns None when the request never completes (DNS, connect, timeout);
    the failure is logged and never raised so the caller can move on to
    the next site. A completed response is returned whatever its status,
    so an error page reaches the extractor and fails to parse there.
    """
    close_session = False
    if session is None:
        session = get_http_session()
        close_session = True

    url = build_url(host, path)
    try:
        resp = _get(session, url, timeout=REQUEST_TIMEOUT_SECONDS)
        if resp.status_code >= 400:
            logger.warning("HTTP %s from %s", resp.status_code, url)
        else:
            logger.info("Received data from %s", url)
        return resp.text
    except requests.RequestException as e:
        logger.warning("Error while connecting to %s: %s", url, e)
        return None
    finally:
        if close_session:
            session.close()


def _build_variant(entry: Any) -> Variant:
    if not isinstance(entry, dict):
        raise ParseError(f"variant entry is {type(entry).__name__}, expected object")
    return Variant(
        id=entry.get("id"),
        title=entry.get("title"),
        available=entry.get("available"),
        price=entry.get("price"),
    )


def build_product(entry: Any) -> Product:
    """Map one `products[i]` object onto a Product.

    Missing scalar fields come through as None; a missing `variants`
    collection is a ParseError.
    """
    if not isinstance(entry, dict):
        raise ParseError(f"product entry is {type(entry).__name__}, expected object")
    variants = entry.get("variants")
    if not isinstance(variants, list):
        raise ParseError(f"product {entry.get('id')!r} has no variants list")
    return Product(
        id=entry.get("id"),
        handle=entry.get("handle"),
        variants=[_build_variant(v) for v in variants],
    )


def parse_product_info(payload: Optional[str], target_id: str, store: "TargetStore") -> List[Product]:
    """Extract the product/variant records from a site's JSON payload.

    Best-effort: anything that does not parse yields an empty list for
    this site instead of an exception. The store is only consulted, never
    changed.
    """
    if not payload or target_id not in store:
        logger.info("No data detected for '%s'.", target_id)
        return []

    try:
        data = json.loads(payload)
        if not isinstance(data, dict):
            raise ParseError("top-level JSON is not an object")
        items = data.get("products")
        if not isinstance(items, list):
            raise ParseError("missing 'products' list")
        products = [build_product(item) for item in items]
    except (ValueError, TypeError) as e:
        # json.JSONDecodeError and ParseError are both ValueErrors
        logger.warning("Could not parse product data for '%s': %s", target_id, e)
        return []

    logger.info("Parsed info from %s (%d products)", target_id, len(products))
    return products


__all__ = [
    "Variant",
    "Product",
    "ParseError",
    "build_url",
    "build_product",
    "fetch_product_data",
    "parse_product_info",
]
