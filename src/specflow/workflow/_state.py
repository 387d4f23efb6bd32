"""Filesystem completion detection for change folders."""

from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from ._models import CompletedSet

if TYPE_CHECKING:
    from ._graph import ArtifactGraph

_GLOB_CHARS = frozenset("*?[")


def is_glob_pattern(pattern: str) -> bool:
    """Return True if ``pattern`` contains glob wildcards."""
    return any(char in _GLOB_CHARS for char in pattern)


def _split_glob(pattern: str) -> tuple[PurePosixPath, str]:
    """Split a glob into its fixed leading directory and the wildcard rest."""
    parts = PurePosixPath(pattern).parts
    fixed: list[str] = []
    for part in parts:
        if is_glob_pattern(part):
            break
        fixed.append(part)
    rest = parts[len(fixed) :]
    return PurePosixPath(*fixed), "/".join(rest)


def _pattern_satisfied(change_dir: Path, pattern: str) -> bool:
    if not is_glob_pattern(pattern):
        return (change_dir / pattern).is_file()

    base, rest = _split_glob(pattern)
    search_dir = change_dir / base
    if not search_dir.is_dir():
        return False
    return any(match.is_file() for match in search_dir.glob(rest))


def detect_completed(graph: "ArtifactGraph", change_dir: Path) -> CompletedSet:
    """Compute the IDs of artifacts whose outputs exist under ``change_dir``.

    A plain output path is complete when the file exists, regardless of
    size. A glob output is complete when at least one file under its fixed
    leading directory matches. Dependencies are not consulted. A missing
    change directory yields an empty set.
    """
    if not change_dir.is_dir():
        return frozenset()

    return frozenset(
        artifact.id
        for artifact in graph.artifacts
        if _pattern_satisfied(change_dir, artifact.generates)
    )
