"""
Dependency Graph Builder
Crawls crates.io depth-first from a root crate and assembles the adjacency structure
"""

import logging
from typing import Dict, List, NamedTuple, Optional

import networkx as nx

from .errors import CrateGraphError
from .models import Adjacency, PackageRef, SkippedDependency
from .registry_client import RegistryClient
from .version_resolver import VersionResolver

logger = logging.getLogger(__name__)


class _WorkItem(NamedTuple):
    ref: PackageRef
    depth: int


class RegistryGraphBuilder:
    """Builds dependency adjacency structures from the crates.io registry"""

    def __init__(self, client: Optional[RegistryClient] = None, resolver: Optional[VersionResolver] = None):
        self.client = client or RegistryClient()
        self.resolver = resolver or VersionResolver(self.client)
        self.skipped: List[SkippedDependency] = []

    def crawl(self, root_name: str, root_version: str, max_depth: int = 0) -> Adjacency:
        """Expand root_name@root_version into its transitive normal dependencies.

        max_depth == 0 means unbounded. Otherwise nodes at depth max_depth are
        recorded as leaves and their own dependencies are never fetched. A label
        reached again nearer the root than where it was first expanded is
        expanded again from the cached dependency list, so the result does not
        depend on record order.
        Resolution failures drop the single edge concerned (see self.skipped);
        failing to fetch a node's own dependency list aborts the whole crawl.
        """
        if not root_name or not root_version:
            raise ValueError("crate name and version must be provided")
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")

        self.skipped = []
        adjacency: Adjacency = {}
        expanded_at: Dict[str, int] = {}
        root = PackageRef(root_name, root_version)
        stack = [_WorkItem(root, 0)]

        while stack:
            current = stack.pop()
            label = current.ref.label
            if label in expanded_at and (max_depth == 0 or expanded_at[label] <= current.depth):
                continue
            expanded_at[label] = current.depth

            try:
                records = self.client.fetch_dependencies(current.ref.name, current.ref.version)
            except CrateGraphError as e:
                logger.error(f"Failed to fetch dependencies for {label}: {e}")
                raise

            children: List[str] = []
            next_depth = current.depth + 1
            expand_children = max_depth == 0 or next_depth < max_depth
            for record in records:
                if record.optional or not record.is_normal:
                    continue
                try:
                    resolved = self.resolver.resolve(record.crate_id, record.req)
                except CrateGraphError as e:
                    skip = SkippedDependency(label, record.crate_id, record.req, str(e))
                    if skip not in self.skipped:
                        logger.debug(f"Skipping {record.crate_id} {record.req!r} of {label}: {e}")
                        self.skipped.append(skip)
                    continue

                child = PackageRef(record.crate_id, resolved)
                if child.label in children:
                    continue
                children.append(child.label)

                if expand_children:
                    stack.append(_WorkItem(child, next_depth))
                else:
                    adjacency.setdefault(child.label, [])

            adjacency[label] = children

        logger.info(f"Crawled {len(adjacency)} packages from {root.label} "
                    f"({len(self.skipped)} dependencies skipped)")
        return adjacency


def to_networkx(adjacency: Adjacency, root: Optional[str] = None) -> nx.DiGraph:
    """Convert an adjacency structure into a networkx DiGraph"""
    graph = nx.DiGraph()
    for parent, children in adjacency.items():
        graph.add_node(parent)
        for child in children:
            graph.add_edge(parent, child)

    for node in graph.nodes:
        name, _, version = node.rpartition("@")
        graph.nodes[node]["name"] = name or node
        graph.nodes[node]["version"] = version if name else "unknown"
        graph.nodes[node]["type"] = "root" if node == root else "dependency"
    return graph


def get_graph_stats(adjacency: Adjacency) -> Dict:
    """Get statistics about the dependency graph"""
    graph = to_networkx(adjacency)
    total = graph.number_of_nodes()
    return {
        'total_packages': total,
        'total_dependencies': graph.number_of_edges(),
        'is_connected': nx.is_weakly_connected(graph) if total > 0 else False,
        'density': nx.density(graph),
        'average_degree': sum(dict(graph.degree()).values()) / total if total > 0 else 0
    }
