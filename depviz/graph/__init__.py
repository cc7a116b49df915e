"""Public graph API surface."""

from depviz.graph.builder import BuildResult, GraphBuilder
from depviz.graph.core import Graph
from depviz.graph.mapper import DependencyMapper
from depviz.graph.models import (
    INHERITANCE_KINDS,
    BuildStats,
    ClassMetadata,
    Declaration,
    DeclarationKind,
    DeclarationRecord,
    Dependency,
    DependencyKind,
    Edge,
    InterfaceMetadata,
    KindCounter,
    MappingStats,
    Node,
    TraitMetadata,
    make_edge_id,
)

__all__ = [
    "BuildResult",
    "BuildStats",
    "ClassMetadata",
    "Declaration",
    "DeclarationKind",
    "DeclarationRecord",
    "Dependency",
    "DependencyKind",
    "DependencyMapper",
    "Edge",
    "Graph",
    "GraphBuilder",
    "INHERITANCE_KINDS",
    "InterfaceMetadata",
    "KindCounter",
    "MappingStats",
    "Node",
    "TraitMetadata",
    "make_edge_id",
]
