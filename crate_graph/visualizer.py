"""
Dependency Visualizer
Interactive plotly views and pandas tables for an analyzed dependency graph
"""

import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

import networkx as nx
import pandas as pd
import plotly.graph_objects as go

from .graph_builder import to_networkx
from .models import Adjacency

logger = logging.getLogger(__name__)

CYCLE_SEPARATOR = " -> "


def cycle_edges(cycles: Iterable[str]) -> Set[Tuple[str, str]]:
    """Edges traversed by rendered cycle strings such as 'a -> b -> a'"""
    edges = set()
    for cycle in cycles:
        labels = cycle.split(CYCLE_SEPARATOR)
        edges.update(zip(labels, labels[1:]))
    return edges


class DependencyVisualizer:
    """Creates interactive visualizations for dependency analysis"""

    def __init__(self, adjacency: Adjacency, root: Optional[str] = None):
        self.root = root
        self.graph = to_networkx(adjacency, root)
        self.layout_cache = {}

    def create_dependency_graph_plot(self, cycles: Optional[List[str]] = None,
                                     repeated: Optional[List[str]] = None) -> go.Figure:
        """Create an interactive dependency graph visualization"""
        if self.graph.number_of_nodes() == 0:
            return self._create_empty_plot("No dependencies to visualize")

        pos = self._get_graph_layout()
        highlighted = cycle_edges(cycles or [])
        cycle_nodes = {node for edge in highlighted for node in edge}

        node_trace = self._create_node_trace(pos, cycle_nodes, set(repeated or []))
        edge_traces = self._create_edge_traces(pos, highlighted)

        return go.Figure(data=edge_traces + [node_trace], layout=self._get_plot_layout())

    def _get_graph_layout(self) -> Dict:
        """Calculate graph layout using spring algorithm"""
        if 'spring' not in self.layout_cache:
            # Fixed seed keeps the picture stable between reruns
            if self.graph.number_of_nodes() > 100:
                pos = nx.spring_layout(self.graph, k=1, iterations=20, seed=42)
            else:
                pos = nx.spring_layout(self.graph, k=2, iterations=50, seed=42)
            self.layout_cache['spring'] = pos
        return self.layout_cache['spring']

    def _create_node_trace(self, pos: Dict, cycle_nodes: Set[str], repeated_nodes: Set[str]) -> go.Scatter:
        """Create node trace for the graph"""
        node_x, node_y, node_text, node_colors, node_sizes = [], [], [], [], []
        labels = []

        for node in self.graph.nodes():
            x, y = pos[node]
            node_x.append(x)
            node_y.append(y)
            labels.append(node)

            color, size = self._get_node_style(node, cycle_nodes, repeated_nodes)
            node_colors.append(color)
            node_sizes.append(size)

            data = self.graph.nodes[node]
            hover_text = f"<b>{data['name']}</b><br>"
            hover_text += f"Version: {data['version']}<br>"
            hover_text += f"Dependencies: {self.graph.out_degree(node)}<br>"
            hover_text += f"Dependents: {self.graph.in_degree(node)}"
            if node in cycle_nodes:
                hover_text += "<br><b>Part of cycle</b>"
            if node in repeated_nodes:
                hover_text += "<br><b>Reached through several parents</b>"
            node_text.append(hover_text)

        return go.Scatter(
            x=node_x, y=node_y,
            mode='markers+text',
            text=labels,
            textposition="top center",
            textfont=dict(size=8),
            hovertemplate='%{hovertext}<extra></extra>',
            hovertext=node_text,
            marker=dict(size=node_sizes, color=node_colors, line=dict(width=2, color='white'), opacity=0.8),
            name="Packages"
        )

    def _get_node_style(self, node: str, cycle_nodes: Set[str], repeated_nodes: Set[str]) -> Tuple[str, int]:
        """Determine node color and size based on its characteristics"""
        size = 15
        degree = self.graph.degree(node)
        if degree > 10:
            size = 25
        elif degree > 5:
            size = 20

        if node in cycle_nodes:
            color = '#FF4444'
        elif node in repeated_nodes:
            color = '#FFAA00'
        elif node == self.root:
            color = '#4444FF'
        else:
            color = '#44AA44'
        return color, size

    def _create_edge_traces(self, pos: Dict, highlighted: Set[Tuple[str, str]]) -> List[go.Scatter]:
        """Create edge traces, cycle edges drawn separately"""
        regular_x, regular_y = [], []
        cycle_x, cycle_y = [], []

        for source, target in self.graph.edges():
            x0, y0 = pos[source]
            x1, y1 = pos[target]
            if (source, target) in highlighted:
                cycle_x.extend([x0, x1, None])
                cycle_y.extend([y0, y1, None])
            else:
                regular_x.extend([x0, x1, None])
                regular_y.extend([y0, y1, None])

        traces = []
        if regular_x:
            traces.append(go.Scatter(x=regular_x, y=regular_y, line=dict(width=1, color='#888'),
                                     hoverinfo='none', mode='lines', name="Dependencies"))
        if cycle_x:
            traces.append(go.Scatter(x=cycle_x, y=cycle_y, line=dict(width=3, color='#FF4444'),
                                     hoverinfo='none', mode='lines', name="Cycle Dependencies"))
        return traces

    def _get_plot_layout(self) -> dict:
        """Get layout configuration for the plot"""
        title = f"Dependency Graph of {self.root}" if self.root else "Dependency Graph"
        return dict(
            title=dict(text=title, font=dict(size=16)),
            showlegend=True,
            hovermode='closest',
            margin=dict(b=20, l=5, r=5, t=40),
            xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            yaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            plot_bgcolor='white'
        )

    def _create_empty_plot(self, message: str) -> go.Figure:
        """Create an empty plot with a message"""
        fig = go.Figure()
        fig.add_annotation(text=message, xref="paper", yref="paper", x=0.5, y=0.5,
                           showarrow=False, font=dict(size=16, color="gray"))
        fig.update_layout(
            xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            yaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            plot_bgcolor='white'
        )
        return fig

    def cycle_table(self, cycles: List[str]) -> pd.DataFrame:
        """One row per detected cycle"""
        rows = []
        for i, cycle in enumerate(cycles):
            labels = cycle.split(CYCLE_SEPARATOR)
            rows.append({
                'Cycle ID': i,
                'Cycle Path': cycle,
                'Length': len(labels) - 1,
                'Involves Root': self.root in labels,
            })
        return pd.DataFrame(rows, columns=['Cycle ID', 'Cycle Path', 'Length', 'Involves Root'])

    def repeated_table(self, repeated: List[str], parents: Dict[str, List[str]]) -> pd.DataFrame:
        """One row per package reached through more than one parent.

        parents comes from the analysis pass, so edges below a depth bound are not counted.
        """
        rows = []
        for node in repeated:
            seen = parents.get(node, [])
            rows.append({'Package': node, 'Parents': len(seen), 'Parent Packages': ', '.join(seen)})
        return pd.DataFrame(rows, columns=['Package', 'Parents', 'Parent Packages'])

    @staticmethod
    def load_order_table(order: List[str]) -> pd.DataFrame:
        """Install steps numbered from 1"""
        return pd.DataFrame({'Step': range(1, len(order) + 1), 'Package': order})
