"""
Version Resolver
Resolves Cargo-style semantic-version requirements against a crate's version catalog
"""

import logging
import re
from typing import Optional

from semantic_version import SimpleSpec, Version

from .errors import InvalidRequirementError, NoAvailableVersionError
from .registry_client import RegistryClient

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_requirement(requirement: str) -> str:
    """Drop the whitespace Cargo allows between operators and versions (">= 1.2, < 2")"""
    clauses = [_WHITESPACE.sub("", clause) for clause in requirement.split(",")]
    return ",".join(clauses)


def parse_version(text: str) -> Optional[Version]:
    """Parse a strict semantic version, or return None"""
    try:
        return Version(text)
    except ValueError:
        return None


class VersionResolver:
    """Picks one concrete version for a (crate, requirement) pair"""

    def __init__(self, client: RegistryClient):
        self.client = client

    def resolve(self, name: str, requirement: str) -> str:
        """Resolve requirement to a version string from the catalog of name"""
        req = (requirement or "").strip()
        spec = None
        if req:
            try:
                spec = SimpleSpec(normalize_requirement(req))
            except ValueError as e:
                # A concrete version the range parser rejects is returned as-is, yanked or not
                if parse_version(req) is not None:
                    return req
                raise InvalidRequirementError(f"Invalid semver constraint {req!r} for {name}: {e}") from e

        allow_prerelease = "-" in req
        versions = self.client.fetch_versions(name)

        best_version = None
        best_original = None
        for record in versions:
            if record.yanked:
                continue
            version = parse_version(record.num)
            if version is None:
                continue
            if spec is not None:
                # Pre-releases only satisfy a constraint that names one
                if version.prerelease and not allow_prerelease:
                    continue
                if not spec.match(version):
                    continue
            if best_version is None or version > best_version:
                best_version = version
                best_original = record.num

        if best_original is not None:
            return best_original

        for record in versions:
            if not record.yanked:
                logger.debug(f"No version of {name} matches {req!r}; falling back to {record.num}")
                return record.num

        raise NoAvailableVersionError(f"No available versions for {name}")
