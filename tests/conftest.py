"""Shared fakes for registry tests: no test touches the network."""

import json

import pytest
import requests

from crate_graph.cache import ResponseCache
from crate_graph.registry_client import RegistryClient

BASE = "https://registry.test/api/v1"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, content=None):
        self.status_code = status_code
        if content is None:
            content = json.dumps(payload).encode("utf-8")
        self.content = content

    def json(self):
        return json.loads(self.content.decode("utf-8"))


class FakeSession:
    """Stands in for requests.Session; routes map URL -> FakeResponse or exception."""

    def __init__(self, routes=None):
        self.headers = {}
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if url not in self.routes:
            return FakeResponse(404, {"errors": [{"detail": "Not Found"}]})
        route = self.routes[url]
        if isinstance(route, Exception):
            raise route
        return route


class FakeRegistry(FakeSession):
    """Builds crates.io-shaped routes from a compact description."""

    def add_crate(self, name, versions, yanked=()):
        self.routes[f"{BASE}/crates/{name}/versions"] = FakeResponse(
            200, {"versions": [{"num": v, "yanked": v in yanked} for v in versions]})
        for version in versions:
            self.routes.setdefault(f"{BASE}/crates/{name}/{version}/dependencies",
                                   FakeResponse(200, {"dependencies": []}))

    def add_deps(self, name, version, deps):
        records = []
        for dep in deps:
            record = {"crate_id": dep[0], "req": dep[1], "optional": False, "kind": "normal"}
            if len(dep) > 2:
                record.update(dep[2])
            records.append(record)
        self.routes[f"{BASE}/crates/{name}/{version}/dependencies"] = FakeResponse(
            200, {"dependencies": records})

    def count(self, url_suffix):
        return sum(1 for url, _ in self.calls if url == f"{BASE}{url_suffix}")


@pytest.fixture
def registry():
    return FakeRegistry()


@pytest.fixture
def client(registry):
    return RegistryClient(
        session=registry,
        dependency_cache=ResponseCache("dependencies"),
        version_cache=ResponseCache("versions"),
        base_url=BASE,
        timeout=5,
    )


@pytest.fixture
def timeout_error():
    return requests.Timeout("read timed out")
