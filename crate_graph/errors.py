"""
Error types raised while crawling the registry and analyzing dependency graphs
"""

from typing import List, Optional


class CrateGraphError(Exception):
    """Base class for every error raised by crate_graph"""


class RegistryError(CrateGraphError):
    """The registry answered with a non-success status or could not be reached"""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(CrateGraphError):
    """A registry response body could not be decoded"""


class InvalidRequirementError(CrateGraphError):
    """A version requirement is neither a range constraint nor a concrete version"""


class NoAvailableVersionError(CrateGraphError):
    """A crate has no non-yanked version to resolve to"""


class CycleDetectedError(CrateGraphError):
    """The graph contains a cycle, so no load order exists"""

    def __init__(self, message: str, cycle: Optional[List[str]] = None):
        super().__init__(message)
        self.cycle = cycle or []


class FixtureParseError(CrateGraphError):
    """An offline adjacency fixture is malformed or unreadable"""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
