"""
Load-Order Computer
Topologically sorts the packages reachable from a root into a valid install/build order
"""

import logging
from typing import List

import networkx as nx

from .errors import CycleDetectedError
from .graph_builder import to_networkx
from .models import Adjacency

logger = logging.getLogger(__name__)


def compute_load_order(root: str, adjacency: Adjacency) -> List[str]:
    """Order every label reachable from root so it follows all labels it depends on.

    Only the given structure is considered; truncated branches are not
    re-expanded. Unconstrained labels are ordered lexicographically.
    """
    graph = to_networkx(adjacency)
    if root not in graph:
        graph.add_node(root)

    reachable = nx.descendants(graph, root) | {root}
    # Dependencies must come first, so sort the graph with edges reversed
    install_graph = graph.subgraph(reachable).reverse(copy=True)

    try:
        order = list(nx.lexicographical_topological_sort(install_graph))
    except nx.NetworkXUnfeasible as e:
        cycle = [edge[0] for edge in nx.find_cycle(graph.subgraph(reachable), source=root)]
        raise CycleDetectedError(
            f"Dependency graph of {root} contains a cycle; no load order exists", cycle=cycle
        ) from e

    logger.info(f"Computed load order of {len(order)} packages for {root}")
    return order
