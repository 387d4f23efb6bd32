"""Artifact dependency graph.

An ArtifactGraph is built once from a resolved schema and answers readiness
queries as pure functions of a caller-supplied completion set. The graph
holds no workflow state of its own.
"""

import heapq
from collections.abc import Iterable
from typing import TYPE_CHECKING, Final

from specflow.exceptions import ArtifactNotFoundError, SchemaError

from ._models import ArtifactDef, BlockedArtifacts, Schema

if TYPE_CHECKING:
    from typing import Self


class ArtifactGraph:
    """Dependency graph over the artifacts of one workflow schema.

    Attributes:
        _schema: The schema the graph was built from.
        _artifacts: Artifact definitions keyed by ID, in declaration order.
        _dependents: Artifact IDs that directly require each artifact.
        _build_order: Topological order computed at construction.
    """

    __slots__: Final = ("_artifacts", "_build_order", "_dependents", "_schema")

    _schema: Schema
    _artifacts: dict[str, ArtifactDef]
    _dependents: dict[str, list[str]]
    _build_order: tuple[str, ...]

    def __init__(self, schema: Schema) -> None:
        """Build and validate the graph for ``schema``.

        Raises:
            SchemaError: If artifact IDs repeat, a dependency names an unknown
                artifact, or the dependencies form a cycle.
        """
        artifacts: dict[str, ArtifactDef] = {}
        duplicates: list[str] = []
        for artifact in schema.artifacts:
            if artifact.id in artifacts:
                duplicates.append(artifact.id)
            artifacts[artifact.id] = artifact
        if duplicates:
            msg = f"Duplicate artifact IDs in schema '{schema.name}': {', '.join(duplicates)}"
            raise SchemaError(msg, artifact_ids=duplicates)

        dangling = [
            f"{artifact.id} -> {dep}"
            for artifact in artifacts.values()
            for dep in artifact.requires
            if dep not in artifacts
        ]
        if dangling:
            msg = f"Unknown dependencies in schema '{schema.name}': {', '.join(dangling)}"
            raise SchemaError(
                msg, artifact_ids=[entry.split(" -> ", 1)[0] for entry in dangling]
            )

        cycle = _find_cycle(artifacts)
        if cycle is not None:
            msg = f"Cyclic dependency detected: {' -> '.join(cycle)}"
            raise SchemaError(msg, artifact_ids=sorted(set(cycle)), cycle=cycle)

        dependents: dict[str, list[str]] = {artifact_id: [] for artifact_id in artifacts}
        for artifact in artifacts.values():
            for dep in artifact.requires:
                dependents[dep].append(artifact.id)

        self._schema = schema
        self._artifacts = artifacts
        self._dependents = dependents
        self._build_order = _topological_order(artifacts)

    @classmethod
    def from_schema(cls, schema: Schema) -> "Self":
        """Build a graph from a schema, failing without a partial graph."""
        return cls(schema)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        """Name of the underlying schema."""
        return self._schema.name

    @property
    def schema(self) -> Schema:
        """The schema the graph was built from."""
        return self._schema

    @property
    def artifacts(self) -> list[ArtifactDef]:
        """Artifact definitions in schema declaration order."""
        return list(self._artifacts.values())

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_artifact(self, artifact_id: str) -> ArtifactDef:
        """Return the definition of ``artifact_id``.

        Raises:
            ArtifactNotFoundError: If the schema has no such artifact.
        """
        try:
            return self._artifacts[artifact_id]
        except KeyError as e:
            msg = f"Artifact '{artifact_id}' not found in schema '{self.name}'"
            raise ArtifactNotFoundError(
                msg, artifact_id=artifact_id, schema_name=self.name
            ) from e

    def get_dependents(self, artifact_id: str) -> list[str]:
        """Return the sorted IDs of artifacts that directly require ``artifact_id``."""
        _ = self.get_artifact(artifact_id)
        return sorted(self._dependents[artifact_id])

    def get_next_artifacts(self, completed: Iterable[str]) -> list[str]:
        """Return incomplete artifacts whose dependencies are all complete.

        Results follow schema declaration order.
        """
        done = frozenset(completed)
        return [
            artifact.id
            for artifact in self._artifacts.values()
            if artifact.id not in done and all(dep in done for dep in artifact.requires)
        ]

    def get_blocked(self, completed: Iterable[str]) -> BlockedArtifacts:
        """Map each blocked artifact to its sorted unmet dependencies.

        Complete and ready artifacts are absent from the result.
        """
        done = frozenset(completed)
        blocked: BlockedArtifacts = {}
        for artifact in self._artifacts.values():
            if artifact.id in done:
                continue
            missing = sorted(dep for dep in artifact.requires if dep not in done)
            if missing:
                blocked[artifact.id] = missing
        return blocked

    def is_complete(self, completed: Iterable[str]) -> bool:
        """Return True if every artifact is complete; unknown IDs are ignored."""
        done = frozenset(completed)
        return all(artifact_id in done for artifact_id in self._artifacts)

    def get_build_order(self) -> list[str]:
        """Return the topological build order fixed at construction."""
        return list(self._build_order)


def _find_cycle(artifacts: dict[str, ArtifactDef]) -> list[str] | None:
    """Find a dependency cycle with DFS, returning its path or None."""
    visited: set[str] = set()
    rec_stack: set[str] = set()
    path: list[str] = []

    def dfs(node: str) -> list[str] | None:
        visited.add(node)
        rec_stack.add(node)
        path.append(node)

        for neighbor in artifacts[node].requires:
            if neighbor not in visited:
                result = dfs(neighbor)
                if result is not None:
                    return result
            elif neighbor in rec_stack:
                cycle_start = path.index(neighbor)
                return [*path[cycle_start:], neighbor]

        _ = path.pop()
        rec_stack.remove(node)
        return None

    for artifact_id in artifacts:
        if artifact_id not in visited:
            cycle = dfs(artifact_id)
            if cycle is not None:
                return cycle
    return None


def _topological_order(artifacts: dict[str, ArtifactDef]) -> tuple[str, ...]:
    """Kahn's algorithm, breaking ties by declaration order."""
    position = {artifact_id: index for index, artifact_id in enumerate(artifacts)}
    ids = list(artifacts)
    in_degree = {artifact_id: len(set(a.requires)) for artifact_id, a in artifacts.items()}
    dependents: dict[str, set[str]] = {artifact_id: set() for artifact_id in artifacts}
    for artifact in artifacts.values():
        for dep in artifact.requires:
            dependents[dep].add(artifact.id)

    heap = [position[artifact_id] for artifact_id, degree in in_degree.items() if degree == 0]
    heapq.heapify(heap)

    order: list[str] = []
    while heap:
        current = ids[heapq.heappop(heap)]
        order.append(current)
        for dependent in dependents[current]:
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                heapq.heappush(heap, position[dependent])

    return tuple(order)
