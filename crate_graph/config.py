"""
Runtime configuration, read from the environment when the package is imported
"""

import os

from . import __version__


class Config:
    """Configuration for the registry endpoint, timeouts and defaults"""
    # API endpoints
    CRATES_IO_API_BASE = os.environ.get("CRATES_IO_API_BASE", "https://crates.io/api/v1").rstrip("/")

    # crates.io rejects requests without an identifying user agent
    USER_AGENT = os.environ.get("CRATE_GRAPH_USER_AGENT", f"crate-graph/{__version__}")

    # Seconds per request; expiry aborts the crawl
    REQUEST_TIMEOUT = float(os.environ.get("CRATE_GRAPH_TIMEOUT", "15"))

    # Default depth bound offered by the dashboard (0 = unbounded)
    DEFAULT_MAX_DEPTH = int(os.environ.get("CRATE_GRAPH_MAX_DEPTH", "3"))

    # Longest error body excerpt kept on a RegistryError
    BODY_EXCERPT_LIMIT = 512
