"""
Data models shared by the crawler, analyzer and load-order computer
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

# label -> child labels; an edge A -> B means A depends on B
Adjacency = Dict[str, List[str]]


def format_label(name: str, version: str) -> str:
    """Format the node label used as graph identity"""
    return f"{name}@{version}"


@dataclass(frozen=True)
class PackageRef:
    """A crate name pinned to one concrete version"""
    name: str
    version: str

    @property
    def label(self) -> str:
        return format_label(self.name, self.version)


@dataclass
class DependencyRecord:
    """Raw registry metadata for one dependency edge candidate"""
    crate_id: str
    req: str = ""
    optional: bool = False
    kind: Optional[str] = None

    @property
    def is_normal(self) -> bool:
        """True for build/runtime dependencies (kind absent or "normal")"""
        return not self.kind or self.kind == "normal"

    @classmethod
    def from_json(cls, data: Dict) -> "DependencyRecord":
        return cls(
            crate_id=data["crate_id"],
            req=data.get("req") or "",
            optional=bool(data.get("optional", False)),
            kind=data.get("kind"),
        )


@dataclass
class VersionRecord:
    """One entry of a crate's version catalog"""
    num: str
    yanked: bool = False

    @classmethod
    def from_json(cls, data: Dict) -> "VersionRecord":
        return cls(num=data["num"], yanked=bool(data.get("yanked", False)))


@dataclass
class SkippedDependency:
    """A dependency dropped from the graph because its version could not be resolved"""
    parent: str
    crate_id: str
    req: str
    reason: str


@dataclass
class AnalysisResult:
    """Tree rendering plus repeated-node and cycle reports from one traversal"""
    tree: str
    repeated_nodes: List[str] = field(default_factory=list)
    cycles: List[str] = field(default_factory=list)
    # child label -> sorted parent labels it was reached from
    parents: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def has_cycles(self) -> bool:
        return bool(self.cycles)
