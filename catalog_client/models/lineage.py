"""Lineage graph domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence

DEFAULT_LINEAGE_DEPTH = 1
DEFAULT_MAX_LINEAGE_DEPTH = 5


class LineageDirection(str, Enum):
    """Direction of a lineage traversal relative to the start node."""

    UPSTREAM = "UPSTREAM"
    DOWNSTREAM = "DOWNSTREAM"


@dataclass(frozen=True)
class LineageQuery:
    """Lineage request with the caller's depth and the configured cap."""

    start_urn: str
    direction: LineageDirection = LineageDirection.DOWNSTREAM
    depth: int = DEFAULT_LINEAGE_DEPTH
    max_depth: int = DEFAULT_MAX_LINEAGE_DEPTH

    def __post_init__(self) -> None:
        if not self.start_urn:
            raise ValueError("Lineage start URN cannot be empty")
        if not isinstance(self.direction, LineageDirection):
            try:
                direction = LineageDirection(str(self.direction).upper())
            except ValueError as error:
                raise ValueError(
                    f"Lineage direction '{self.direction}' is not recognized"
                ) from error
            object.__setattr__(self, "direction", direction)
        if self.depth < 1:
            raise ValueError("Lineage depth must be at least 1")
        if self.max_depth < 1:
            raise ValueError("Maximum lineage depth must be at least 1")

    @property
    def effective_depth(self) -> int:
        return min(self.depth, self.max_depth)


@dataclass(frozen=True)
class LineageNode:
    """Entity reached by a lineage search.

    ``level`` is the server-reported degree, never recomputed locally.
    """

    urn: str
    type: str = ""
    name: str = ""
    description: str = ""
    platform: str = ""
    level: int = 0


@dataclass(frozen=True)
class LineageEdge:
    """Directed relationship between two URNs."""

    source: str
    target: str


@dataclass(frozen=True)
class PathGroup:
    """Server-supplied route from the start node to a result node."""

    urns: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.urns)


@dataclass(frozen=True)
class LineageSearchResult:
    """One decoded entry of a lineage search response."""

    node: LineageNode
    paths: tuple[PathGroup, ...] = ()

    @property
    def degree(self) -> int:
        return self.node.level

    @classmethod
    def from_payload(cls, payload: Any) -> "LineageSearchResult":
        """Decode one ``searchResults`` entry; missing sections become empty."""
        payload = _mapping(payload)
        entity = _mapping(payload.get("entity"))
        platform = _mapping(entity.get("platform"))
        node = LineageNode(
            urn=entity.get("urn") or "",
            type=entity.get("type") or "",
            name=entity.get("name") or "",
            description=entity.get("description") or "",
            platform=platform.get("name") or "",
            level=int(payload.get("degree") or 0),
        )
        paths = tuple(
            PathGroup(
                urns=tuple(
                    _mapping(step).get("urn") or ""
                    for step in _sequence(_mapping(group).get("path"))
                )
            )
            for group in _sequence(payload.get("paths"))
        )
        return cls(node=node, paths=paths)


def _mapping(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    return {}


def _sequence(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    return []


@dataclass(frozen=True)
class LineageResult:
    """Depth-bounded lineage graph around a start node."""

    start: str
    direction: LineageDirection
    depth: int
    nodes: Sequence[LineageNode] = field(default_factory=tuple)
    edges: Sequence[LineageEdge] = field(default_factory=tuple)
