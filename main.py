import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import streamlit as st
from dotenv import load_dotenv
load_dotenv()

# crate_graph.config reads the environment at import time
from crate_graph import (
    CrateGraphError,
    CycleDetectedError,
    GraphAnalyzer,
    RegistryGraphBuilder,
    compute_load_order,
    format_label,
    get_graph_stats,
    parse_fixture_bytes,
)
from crate_graph.config import Config
from crate_graph.models import Adjacency, AnalysisResult, SkippedDependency
from crate_graph.visualizer import DependencyVisualizer

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# =============================================================================
# DATA MODELS
# =============================================================================

@dataclass
class GraphReport:
    """Everything the dashboard shows for one analyzed root"""
    root: str
    adjacency: Adjacency
    analysis: AnalysisResult
    graph_stats: Dict
    load_order: Optional[List[str]] = None
    load_order_error: Optional[str] = None
    skipped: List[SkippedDependency] = field(default_factory=list)

# =============================================================================
# PIPELINE
# =============================================================================

def get_builder() -> RegistryGraphBuilder:
    """One builder per session so registry responses stay cached across runs"""
    if 'builder' not in st.session_state:
        st.session_state.builder = RegistryGraphBuilder()
    return st.session_state.builder


def build_report(root: str, adjacency: Adjacency, max_depth: int,
                 skipped: Optional[List[SkippedDependency]] = None) -> GraphReport:
    """Run the analyzer and load-order computer over one adjacency structure"""
    analysis = GraphAnalyzer().analyze(root, adjacency, max_depth)
    report = GraphReport(
        root=root,
        adjacency=adjacency,
        analysis=analysis,
        graph_stats=get_graph_stats(adjacency),
        skipped=list(skipped or []),
    )
    # A cycle here does not invalidate the analysis above
    try:
        report.load_order = compute_load_order(root, adjacency)
    except CycleDetectedError as e:
        report.load_order_error = str(e)
    return report

# =============================================================================
# STREAMLIT UI
# =============================================================================

def render_report(report: GraphReport):
    st.markdown("#### Quick Stats")
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Total Packages", report.graph_stats['total_packages'])
    with col2:
        st.metric("Dependencies", report.graph_stats['total_dependencies'])
    with col3:
        st.metric("Repeated Packages", len(report.analysis.repeated_nodes))
    with col4:
        st.metric("Cycles Found", len(report.analysis.cycles))

    visualizer = DependencyVisualizer(report.adjacency, report.root)
    tab1, tab2, tab3, tab4, tab5 = st.tabs(["Tree", "Repeated", "Cycles", "Load Order", "Graph"])

    with tab1:
        st.code(report.analysis.tree, language=None)
        if report.skipped:
            with st.expander(f"{len(report.skipped)} dependencies skipped (version not resolvable)"):
                for skip in report.skipped:
                    st.write(f"- **{skip.parent}** -> `{skip.crate_id} {skip.req}`: {skip.reason}")

    with tab2:
        if report.analysis.repeated_nodes:
            table = visualizer.repeated_table(report.analysis.repeated_nodes, report.analysis.parents)
            st.dataframe(table, use_container_width=True)
        else:
            st.info("Every package is reached through a single parent.")

    with tab3:
        if report.analysis.cycles:
            st.dataframe(visualizer.cycle_table(report.analysis.cycles), use_container_width=True)
        else:
            st.success("No circular dependencies detected.")

    with tab4:
        if report.load_order_error:
            st.error(report.load_order_error)
        else:
            st.dataframe(visualizer.load_order_table(report.load_order), use_container_width=True)

    with tab5:
        st.plotly_chart(
            visualizer.create_dependency_graph_plot(report.analysis.cycles, report.analysis.repeated_nodes),
            use_container_width=True,
        )


def main():
    st.set_page_config(page_title="crate-graph", layout="wide")
    st.title("crate-graph - crates.io dependency analysis")

    source = st.radio("Choose graph source:", ["crates.io registry", "Fixture file"], horizontal=True)
    col1, col2 = st.columns([1, 3])

    with col1:
        max_depth = st.number_input("Max depth (0 = unbounded)", min_value=0,
                                    value=Config.DEFAULT_MAX_DEPTH, step=1)

        if source == "crates.io registry":
            name = st.text_input("Crate name", placeholder="e.g., serde")
            version = st.text_input("Crate version", placeholder="e.g., 1.0.200")

            if st.button("Crawl", type="primary", use_container_width=True) and name and version:
                builder = get_builder()
                with st.spinner(f"Crawling {format_label(name, version)}..."):
                    try:
                        adjacency = builder.crawl(name, version, int(max_depth))
                        st.session_state.report = build_report(
                            format_label(name, version), adjacency, int(max_depth), builder.skipped)
                    except CrateGraphError as e:
                        logger.error(f"Crawl failed: {e}")
                        st.session_state.report = None
                        st.error(f"Crawl failed: {e}")
        else:
            root = st.text_input("Root label", placeholder="e.g., a@1.0.0")
            uploaded_file = st.file_uploader("Upload adjacency fixture", type=['txt'])

            if st.button("Analyze", type="primary", use_container_width=True) and root and uploaded_file:
                try:
                    adjacency = parse_fixture_bytes(uploaded_file.read())
                    st.session_state.report = build_report(root, adjacency, int(max_depth))
                except CrateGraphError as e:
                    st.session_state.report = None
                    st.error(f"Error processing fixture: {e}")

    with col2:
        report = st.session_state.get('report')
        if report:
            st.header(f"Dependencies of `{report.root}`")
            render_report(report)
        else:
            st.info("Pick a source on the left to analyze a dependency graph.")


if __name__ == "__main__":
    main()
