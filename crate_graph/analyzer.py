"""
Graph Analyzer
Renders a dependency tree and reports repeated nodes and cycles in a single traversal
"""

import logging
from typing import Dict, List, NamedTuple, Set

import networkx as nx

from .graph_builder import to_networkx
from .models import Adjacency, AnalysisResult

logger = logging.getLogger(__name__)

BRANCH = "|-- "
LAST_BRANCH = "`-- "
PIPE = "|   "
SPACE = "    "


class _Frame(NamedTuple):
    node: str
    depth: int
    prefix: str
    is_last: bool
    exiting: bool


def _format_line(node: str, depth: int, prefix: str = "", branch: str = "") -> str:
    return f"{prefix}{branch}{node} (depth={depth})"


def _cycle_string(path: List[str], node: str) -> str:
    """Label sequence from node's occurrence on path back to node itself"""
    start = path.index(node)
    return " -> ".join(path[start:] + [node])


class GraphAnalyzer:
    """Analyzes adjacency structures produced by the crawler or a fixture"""

    def analyze(self, root: str, adjacency: Adjacency, max_depth: int = 0) -> AnalysisResult:
        """Render the tree under root and collect repeated nodes and cycles.

        Child lists are sorted in place first. A node at depth max_depth is
        rendered as a leaf (max_depth == 0 means unbounded). A child already on
        the current path is rendered but not re-entered; the back-edge is
        reported as a cycle instead. result.parents maps every child reached to
        the distinct parents it was reached from during this pass.
        """
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")

        for children in adjacency.values():
            children.sort()

        lines = [_format_line(root, 0)]
        parents_by_node: Dict[str, Set[str]] = {}
        cycles: Set[str] = set()
        on_path: Set[str] = set()
        path: List[str] = []

        stack = [_Frame(root, 0, "", True, False)]
        while stack:
            frame = stack.pop()

            if frame.exiting:
                if path and path[-1] == frame.node:
                    path.pop()
                on_path.discard(frame.node)
                continue

            if frame.depth > 0:
                branch = LAST_BRANCH if frame.is_last else BRANCH
                lines.append(_format_line(frame.node, frame.depth, frame.prefix, branch))

            if frame.node in on_path:
                cycles.add(_cycle_string(path, frame.node))
                continue

            stack.append(frame._replace(exiting=True))
            on_path.add(frame.node)
            path.append(frame.node)

            if max_depth > 0 and frame.depth >= max_depth:
                continue

            children = adjacency.get(frame.node, [])
            if frame.depth == 0:
                child_prefix = ""
            else:
                child_prefix = frame.prefix + (SPACE if frame.is_last else PIPE)
            last_index = len(children) - 1
            for index in range(last_index, -1, -1):
                child = children[index]
                stack.append(_Frame(child, frame.depth + 1, child_prefix, index == last_index, False))
                parents_by_node.setdefault(child, set()).add(frame.node)

        repeated = sorted(node for node, parents in parents_by_node.items() if len(parents) > 1)
        logger.info(f"Analyzed {root}: {len(lines)} lines, {len(repeated)} repeated nodes, {len(cycles)} cycles")
        parents = {node: sorted(labels) for node, labels in parents_by_node.items()}
        return AnalysisResult(tree="\n".join(lines), repeated_nodes=repeated, cycles=sorted(cycles),
                              parents=parents)

    @staticmethod
    def strongly_connected_components(adjacency: Adjacency) -> List[List[str]]:
        """Find strongly connected components that contain a cycle"""
        graph = to_networkx(adjacency)
        components = []
        for scc in nx.strongly_connected_components(graph):
            if len(scc) > 1:
                components.append(sorted(scc))
            else:
                node = next(iter(scc))
                if graph.has_edge(node, node):
                    components.append([node])
        return sorted(components)


def analyze_graph(root: str, adjacency: Adjacency, max_depth: int = 0) -> AnalysisResult:
    """Convenience wrapper around GraphAnalyzer().analyze"""
    return GraphAnalyzer().analyze(root, adjacency, max_depth)
