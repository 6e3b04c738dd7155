"""
Registry Client
Fetches dependency lists and version catalogs from crates.io, caching each per process
"""

import logging
from typing import Any, Callable, List, Optional

import requests

from .cache import ResponseCache
from .config import Config
from .errors import DecodeError, RegistryError
from .models import DependencyRecord, VersionRecord, format_label

logger = logging.getLogger(__name__)


class RegistryClient:
    """Read-only client for the crates.io HTTP API"""

    def __init__(self,
                 session: Optional[requests.Session] = None,
                 dependency_cache: Optional[ResponseCache] = None,
                 version_cache: Optional[ResponseCache] = None,
                 base_url: str = Config.CRATES_IO_API_BASE,
                 timeout: float = Config.REQUEST_TIMEOUT):
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": Config.USER_AGENT})
        self.dependency_cache = dependency_cache if dependency_cache is not None else ResponseCache("dependencies")
        self.version_cache = version_cache if version_cache is not None else ResponseCache("versions")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def fetch_dependencies(self, name: str, version: str) -> List[DependencyRecord]:
        """Fetch the dependency records of name@version"""
        key = format_label(name, version)
        found, cached = self.dependency_cache.lookup(key)
        if found:
            logger.debug(f"Dependency cache hit for {key}")
            return cached

        url = f"{self.base_url}/crates/{name}/{version}/dependencies"
        payload = self._get_json(url)
        records = self._decode_list(payload, "dependencies", DependencyRecord.from_json, url)

        self.dependency_cache.store(key, records)
        return records

    def fetch_versions(self, name: str) -> List[VersionRecord]:
        """Fetch the version catalog of a crate"""
        found, cached = self.version_cache.lookup(name)
        if found:
            logger.debug(f"Version cache hit for {name}")
            return cached

        url = f"{self.base_url}/crates/{name}/versions"
        payload = self._get_json(url)
        records = self._decode_list(payload, "versions", VersionRecord.from_json, url)

        self.version_cache.store(name, records)
        return records

    def _get_json(self, url: str) -> Any:
        """Issue a GET request and decode the JSON body"""
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise RegistryError(f"crates.io request to {url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            excerpt = response.content[:Config.BODY_EXCERPT_LIMIT].decode("utf-8", errors="ignore").strip()
            raise RegistryError(
                f"crates.io request failed ({response.status_code}): {excerpt}",
                status_code=response.status_code,
                body=excerpt,
            )

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Failed to decode response from {url}: {e}") from e

    @staticmethod
    def _decode_list(payload: Any, key: str, factory: Callable[[dict], Any], url: str) -> list:
        """Turn payload[key] into a list of records"""
        if not isinstance(payload, dict) or not isinstance(payload.get(key), list):
            raise DecodeError(f"Response from {url} has no '{key}' list")
        try:
            return [factory(item) for item in payload[key]]
        except (KeyError, TypeError, AttributeError) as e:
            raise DecodeError(f"Malformed '{key}' entry in response from {url}: {e}") from e
