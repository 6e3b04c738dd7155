"""
crate_graph: transitive dependency graphs of crates.io packages
Crawls the registry, renders the tree, flags diamond dependencies and cycles, and computes a load order
"""

__version__ = "0.1.0"

from .analyzer import GraphAnalyzer, analyze_graph
from .cache import ResponseCache
from .errors import (
    CrateGraphError,
    CycleDetectedError,
    DecodeError,
    FixtureParseError,
    InvalidRequirementError,
    NoAvailableVersionError,
    RegistryError,
)
from .fixture import load_fixture, parse_fixture, parse_fixture_bytes
from .graph_builder import RegistryGraphBuilder, get_graph_stats, to_networkx
from .load_order import compute_load_order
from .models import AnalysisResult, DependencyRecord, PackageRef, VersionRecord, format_label
from .registry_client import RegistryClient
from .version_resolver import VersionResolver

__all__ = [
    'GraphAnalyzer', 'analyze_graph', 'ResponseCache',
    'CrateGraphError', 'CycleDetectedError', 'DecodeError', 'FixtureParseError',
    'InvalidRequirementError', 'NoAvailableVersionError', 'RegistryError',
    'load_fixture', 'parse_fixture', 'parse_fixture_bytes', 'RegistryGraphBuilder', 'get_graph_stats', 'to_networkx',
    'compute_load_order', 'AnalysisResult', 'DependencyRecord', 'PackageRef', 'VersionRecord',
    'format_label', 'RegistryClient', 'VersionResolver',
]
