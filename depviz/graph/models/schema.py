"""Canonical graph schema models.

This module is the single source of truth for the declaration/dependency
input records and the node/edge types stored in a :class:`~depviz.graph.core.graph.Graph`.
All models are Pydantic models using snake_case attributes in Python and
camelCase keys in their dict/JSON form, which is the shape consumed by the
visualization client.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger("depviz.graph.models.schema")

EDGE_ID_SEPARATOR = "->"

# Input keys that only make sense on class declarations.
_CLASS_ONLY_KEYS = ("is_abstract", "isAbstract", "is_final", "isFinal")


class DeclarationKind(str, Enum):
    """Kinds of type declarations produced by the extraction step."""

    CLASS = "class"
    INTERFACE = "interface"
    TRAIT = "trait"


class DependencyKind(str, Enum):
    """Dependency kinds with dedicated statistics buckets.

    Dependencies may carry any other kind string; those are tolerated and
    tracked separately (see :class:`~depviz.graph.models.stats.MappingStats`).
    """

    USE = "use"
    EXTENDS = "extends"
    IMPLEMENTS = "implements"
    USES_TRAIT = "usesTrait"

    @classmethod
    def parse(cls, value: str) -> "DependencyKind | None":
        """Return the known kind for ``value`` or None for unknown kinds."""
        try:
            return cls(value)
        except ValueError:
            return None


# Edge kinds followed by circularity checks and cycle detection.
INHERITANCE_KINDS = frozenset({DependencyKind.EXTENDS.value, DependencyKind.IMPLEMENTS.value})


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-ready camelCase representation."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# Input records
# =============================================================================


class Declaration(_CamelModel):
    """A class, interface or trait extracted from one source file."""

    name: str
    namespace: str = ""
    fully_qualified_name: str = Field(..., min_length=1)
    file_path: str = ""
    doc_comment: Tuple[str, ...] = Field(
        default=(),
        alias="docCommentLines",
        validation_alias=AliasChoices("docCommentLines", "docComment"),
    )
    kind: DeclarationKind = DeclarationKind.CLASS
    is_abstract: bool = False
    is_final: bool = False

    @model_validator(mode="before")
    @classmethod
    def _drop_class_only_flags(cls, data: Any) -> Any:
        # Interfaces and traits carry no abstract/final flags; stray ones are dropped.
        if not isinstance(data, dict):
            return data
        kind = DeclarationKind(data.get("kind", DeclarationKind.CLASS))
        if kind is DeclarationKind.CLASS:
            return data
        flags = [key for key in _CLASS_ONLY_KEYS if data.get(key)]
        if flags:
            logger.warning(
                "Ignoring %s on %s %s",
                ", ".join(flags),
                kind.value,
                data.get("fullyQualifiedName", data.get("fully_qualified_name")),
            )
        return {key: value for key, value in data.items() if key not in _CLASS_ONLY_KEYS}

    @property
    def fqn(self) -> str:
        return self.fully_qualified_name


class Dependency(_CamelModel):
    """A directed, kind-tagged relationship between two FQNs."""

    source_fqn: str = Field(..., alias="sourceFQN")
    target_fqn: str = Field(..., alias="targetFQN")
    kind: str

    @property
    def known_kind(self) -> "DependencyKind | None":
        return DependencyKind.parse(self.kind)


class DeclarationRecord(_CamelModel):
    """One unit of the extraction contract: a declaration and its dependencies."""

    declaration: Declaration
    dependencies: Tuple[Dependency, ...] = ()


# =============================================================================
# Node metadata variants
# =============================================================================


class TypeMetadata(_CamelModel):
    """Metadata shared by every declaration kind."""

    namespace: str = ""
    file_path: str = ""
    doc_comment: Tuple[str, ...] = ()


class ClassMetadata(TypeMetadata):
    """Class metadata; classes alone carry the abstract/final flags."""

    is_abstract: bool = False
    is_final: bool = False


class InterfaceMetadata(TypeMetadata):
    pass


class TraitMetadata(TypeMetadata):
    pass


NodeMetadata = Union[ClassMetadata, InterfaceMetadata, TraitMetadata]

_METADATA_BY_KIND = {
    DeclarationKind.CLASS: ClassMetadata,
    DeclarationKind.INTERFACE: InterfaceMetadata,
    DeclarationKind.TRAIT: TraitMetadata,
}


def metadata_for(declaration: Declaration) -> NodeMetadata:
    """Build the metadata variant matching the declaration's kind."""
    common = {
        "namespace": declaration.namespace,
        "file_path": declaration.file_path,
        "doc_comment": declaration.doc_comment,
    }
    if declaration.kind is DeclarationKind.CLASS:
        return ClassMetadata(
            is_abstract=declaration.is_abstract,
            is_final=declaration.is_final,
            **common,
        )
    return _METADATA_BY_KIND[declaration.kind](**common)


# =============================================================================
# Graph elements
# =============================================================================


class Node(_CamelModel):
    """A declared type in the dependency graph, identified by its FQN."""

    id: str = Field(..., min_length=1)
    label: str
    kind: DeclarationKind = DeclarationKind.CLASS
    metadata: NodeMetadata = Field(default_factory=ClassMetadata)

    @model_validator(mode="before")
    @classmethod
    def _select_metadata_variant(cls, data: Any) -> Any:
        # Dict metadata (e.g. from a saved graph) is resolved by node kind so
        # that interface and trait metadata never validate as the wrong variant.
        if not isinstance(data, dict):
            return data
        metadata = data.get("metadata")
        if metadata is None or not isinstance(metadata, dict):
            return data
        kind = DeclarationKind(data.get("kind", DeclarationKind.CLASS))
        data = dict(data)
        data["metadata"] = _METADATA_BY_KIND[kind].model_validate(metadata)
        return data

    @classmethod
    def from_declaration(cls, declaration: Declaration) -> "Node":
        return cls(
            id=declaration.fully_qualified_name,
            label=declaration.name,
            kind=declaration.kind,
            metadata=metadata_for(declaration),
        )


def make_edge_id(source: str, target: str) -> str:
    """Return the edge identity for an ordered node pair.

    The identity is not kind-qualified: two edges of different kinds between
    the same ordered pair share one ID.
    """
    return f"{source}{EDGE_ID_SEPARATOR}{target}"


class Edge(_CamelModel):
    """A directed relationship between two existing nodes."""

    id: str
    source: str
    target: str
    kind: str
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_dependency(cls, dependency: Dependency) -> "Edge":
        return cls(
            id=make_edge_id(dependency.source_fqn, dependency.target_fqn),
            source=dependency.source_fqn,
            target=dependency.target_fqn,
            kind=dependency.kind,
        )

    @property
    def is_inheritance(self) -> bool:
        return self.kind in INHERITANCE_KINDS

