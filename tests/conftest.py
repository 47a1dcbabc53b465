"""Shared fixtures for the shopify_checker test suite."""

import json
import sys
from pathlib import Path

import pytest
import requests

# Ensure the repo root is on the path so "import shopify_checker" works without installing.
repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from shopify_checker.store import TargetStore  # noqa: E402


SAMPLE_PAYLOAD = json.dumps(
    {
        "products": [
            {
                "id": 1,
                "handle": "x",
                "variants": [
                    {"id": 10, "title": "S", "available": True, "price": "9.99"},
                ],
            }
        ]
    }
)


class FakeResponse:
    def __init__(self, text: str = "", status_code: int = 200):
        self.text = text
        self.status_code = status_code


class FakeSession:
    """Stands in for requests.Session; returns or raises canned results per URL."""

    def __init__(self, results=None):
        self.results = results or {}
        self.calls = []
        self.headers = {}
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        result = self.results.get(url)
        if isinstance(result, Exception):
            raise result
        if result is None:
            raise requests.ConnectionError(f"no route to {url}")
        return result

    def close(self):
        self.closed = True


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_payload():
    return SAMPLE_PAYLOAD


@pytest.fixture
def store():
    """A store with one site, shaped like a freshly loaded products file."""
    return TargetStore.from_dict({"a": {"loc": "shop1.com", "path": "/products.json", "products": []}})


@pytest.fixture
def products_file(tmp_path):
    return tmp_path / "products.json"
