"""Data models used by the graph package."""

from .schema import (
    INHERITANCE_KINDS,
    ClassMetadata,
    Declaration,
    DeclarationKind,
    DeclarationRecord,
    Dependency,
    DependencyKind,
    Edge,
    InterfaceMetadata,
    Node,
    NodeMetadata,
    TraitMetadata,
    TypeMetadata,
    make_edge_id,
    metadata_for,
)
from .stats import BuildStats, KindCounter, MappingStats

__all__ = [
    "BuildStats",
    "ClassMetadata",
    "Declaration",
    "DeclarationKind",
    "DeclarationRecord",
    "Dependency",
    "DependencyKind",
    "Edge",
    "INHERITANCE_KINDS",
    "InterfaceMetadata",
    "KindCounter",
    "MappingStats",
    "Node",
    "NodeMetadata",
    "TraitMetadata",
    "TypeMetadata",
    "make_edge_id",
    "metadata_for",
]
