"""Synthetic declaration records for prototyping and tests."""

from __future__ import annotations

import logging
import random
from collections import deque
from typing import Dict, List, Optional

from .models.schema import (
    Declaration,
    DeclarationRecord,
    Dependency,
    DependencyKind,
)

logger = logging.getLogger("depviz.graph.sample")

BASE_CLASS_FQN = "App\\Base\\BaseClass"
NETWORK_NAMESPACE = "App\\Network"


def _class(name: str, namespace: str, doc: str, is_abstract: bool = False) -> Declaration:
    return Declaration(
        name=name,
        namespace=namespace,
        fully_qualified_name=f"{namespace}\\{name}",
        file_path=f"/path/to/{name}.php",
        doc_comment=(doc,),
        is_abstract=is_abstract,
    )


class SampleDataGenerator:
    """Generates declaration records with known shapes.

    Args:
        seed: Seed for the random network generator; None uses system
            randomness.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._random = random.Random(seed)

    def generate_class_hierarchy(self, depth: int = 3, width: int = 3) -> List[DeclarationRecord]:
        """Generate a tree of classes below an abstract base class.

        Every class extends its parent and every sibling after the first
        ``use``s the sibling before it. Class names encode the level, the
        parent's position within its own level and the sibling index, e.g.
        ``App\\Level2\\Class_2_1_0``.

        Args:
            depth: Number of levels below the base class.
            width: Children per class.

        Returns:
            Records in depth-first order, base class first.
        """
        base = _class("BaseClass", "App\\Base", "Base class documentation", is_abstract=True)
        records = [DeclarationRecord(declaration=base)]
        level_sizes: Dict[int, int] = {}

        self._generate_level(records, level_sizes, base.fqn, 0, 1, depth, width)
        logger.debug("Generated class hierarchy with %d classes", len(records))
        return records

    def _generate_level(
        self,
        records: List[DeclarationRecord],
        level_sizes: Dict[int, int],
        parent_fqn: str,
        parent_ordinal: int,
        level: int,
        max_depth: int,
        width: int,
    ) -> None:
        if level > max_depth:
            return

        namespace = f"App\\Level{level}"
        for i in range(width):
            declaration = _class(
                f"Class_{level}_{parent_ordinal}_{i}", namespace, f"Class at depth {level}"
            )
            dependencies = [
                Dependency(
                    source_fqn=declaration.fqn,
                    target_fqn=parent_fqn,
                    kind=DependencyKind.EXTENDS.value,
                )
            ]
            if i > 0:
                dependencies.append(
                    Dependency(
                        source_fqn=declaration.fqn,
                        target_fqn=f"{namespace}\\Class_{level}_{parent_ordinal}_{i - 1}",
                        kind=DependencyKind.USE.value,
                    )
                )
            records.append(
                DeclarationRecord(declaration=declaration, dependencies=tuple(dependencies))
            )

            ordinal = level_sizes.get(level, 0)
            level_sizes[level] = ordinal + 1
            self._generate_level(
                records, level_sizes, declaration.fqn, ordinal, level + 1, max_depth, width
            )

    def generate_complex_network(
        self, node_count: int = 50, connectivity: float = 0.3
    ) -> List[DeclarationRecord]:
        """Generate randomly connected classes.

        Aims for ``int(n * (n - 1) * connectivity)`` distinct dependencies
        using at most twice that many attempts. Roughly one dependency in
        eleven is an ``extends``; it is downgraded to ``use`` when it would
        close an inheritance loop.

        Args:
            node_count: Number of classes.
            connectivity: Fraction of all ordered pairs to connect (0.0-1.0).

        Returns:
            One record per class, in creation order.
        """
        declarations = [
            _class(f"NetworkNode{i}", NETWORK_NAMESPACE, f"Network node {i}")
            for i in range(node_count)
        ]
        fqns = [declaration.fqn for declaration in declarations]
        dependencies: Dict[str, List[Dependency]] = {fqn: [] for fqn in fqns}

        target_connections = int(node_count * (node_count - 1) * connectivity)
        max_attempts = target_connections * 2
        connections = 0
        attempts = 0

        while connections < target_connections and attempts < max_attempts:
            attempts += 1
            source_index = self._random.randrange(node_count)
            target_index = self._random.randrange(node_count)
            if source_index == target_index:
                continue

            source, target = fqns[source_index], fqns[target_index]
            if any(dep.target_fqn == target for dep in dependencies[source]):
                continue

            kind = DependencyKind.USE.value
            if self._random.randint(0, 10) == 0 and not self._extends_reaches(
                dependencies, target, source
            ):
                kind = DependencyKind.EXTENDS.value

            dependencies[source].append(
                Dependency(source_fqn=source, target_fqn=target, kind=kind)
            )
            connections += 1

        logger.debug(
            "Generated network: %d nodes, %d connections in %d attempts",
            node_count,
            connections,
            attempts,
        )
        return [
            DeclarationRecord(
                declaration=declaration, dependencies=tuple(dependencies[declaration.fqn])
            )
            for declaration in declarations
        ]

    @staticmethod
    def _extends_reaches(
        dependencies: Dict[str, List[Dependency]], start: str, goal: str
    ) -> bool:
        """Return True if ``goal`` is reachable from ``start`` via extends."""
        visited = {start}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for dep in dependencies.get(current, ()):
                if dep.kind != DependencyKind.EXTENDS.value:
                    continue
                if dep.target_fqn == goal:
                    return True
                if dep.target_fqn not in visited:
                    visited.add(dep.target_fqn)
                    queue.append(dep.target_fqn)
        return False
