"""
Offline adjacency fixtures: a plain-text graph format used instead of the registry
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from .errors import FixtureParseError
from .models import Adjacency

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = ("#", ";")
DELIMITERS = (":", "->")


def _split_line(line: str) -> Optional[Tuple[str, str]]:
    """Split a line at its earliest delimiter, or return None for a standalone node"""
    best = None
    for delimiter in DELIMITERS:
        index = line.find(delimiter)
        if index != -1 and (best is None or index < best[0]):
            best = (index, delimiter)
    if best is None:
        return None
    index, delimiter = best
    return line[:index], line[index + len(delimiter):]


def parse_fixture(text: str) -> Adjacency:
    """Parse fixture text into an adjacency structure.

    Format, one entry per line:
        parent: child1, child2
        parent -> child1 child2
        standalone
    Blank lines and lines starting with '#' or ';' are ignored.
    """
    adjacency: Adjacency = {}
    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue

        parts = _split_line(line)
        if parts is None:
            if len(line.split()) > 1:
                raise FixtureParseError(f"expected 'parent: children' or a single node, got {line!r}", line_number)
            adjacency.setdefault(line, [])
            continue

        parent = parts[0].strip()
        if not parent:
            raise FixtureParseError(f"missing parent before delimiter in {line!r}", line_number)
        if len(parent.split()) > 1:
            raise FixtureParseError(f"parent {parent!r} contains whitespace", line_number)

        children = adjacency.setdefault(parent, [])
        for child in parts[1].replace(",", " ").split():
            children.append(child)

    logger.info(f"Parsed fixture with {len(adjacency)} parent entries")
    return adjacency


def parse_fixture_bytes(data: bytes) -> Adjacency:
    """Parse fixture content that arrives as raw bytes, e.g. an upload"""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FixtureParseError(f"fixture is not valid UTF-8: {e}") from e
    return parse_fixture(text)


def load_fixture(path: Union[str, Path]) -> Adjacency:
    """Read and parse a UTF-8 fixture file"""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FixtureParseError(f"cannot read fixture {path}: {e}") from e
    return parse_fixture(text)
