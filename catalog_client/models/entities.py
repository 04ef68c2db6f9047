"""Catalog entity records returned by the read operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Sequence


class OwnershipType(str, Enum):
    """Ownership categories reported by the catalog."""

    TECHNICAL_OWNER = "TECHNICAL_OWNER"
    BUSINESS_OWNER = "BUSINESS_OWNER"
    DATA_STEWARD = "DATA_STEWARD"
    NONE = "NONE"


@dataclass(frozen=True)
class Owner:
    urn: str
    type: str = OwnershipType.NONE.value
    name: str = ""
    email: str = ""


@dataclass(frozen=True)
class Tag:
    urn: str
    name: str = ""
    description: str = ""


@dataclass(frozen=True)
class Domain:
    urn: str
    name: str = ""
    description: str = ""
    owners: Sequence[Owner] = field(default_factory=tuple)
    entity_count: int = 0


@dataclass(frozen=True)
class GlossaryTerm:
    urn: str
    name: str = ""
    description: str = ""
    parent_node: str = ""
    owners: Sequence[Owner] = field(default_factory=tuple)
    properties: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Deprecation:
    deprecated: bool
    note: str = ""
    actor: str = ""
    decommission_time: int = 0


@dataclass(frozen=True)
class Entity:
    """Full entity view returned by ``get_entity``."""

    urn: str
    type: str
    name: str = ""
    description: str = ""
    platform: str = ""
    owners: Sequence[Owner] = field(default_factory=tuple)
    tags: Sequence[Tag] = field(default_factory=tuple)
    glossary_terms: Sequence[GlossaryTerm] = field(default_factory=tuple)
    domain: Optional[Domain] = None
    deprecation: Optional[Deprecation] = None
    sub_types: Sequence[str] = field(default_factory=tuple)
    properties: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MatchedField:
    name: str
    value: str


@dataclass(frozen=True)
class SearchEntity:
    urn: str
    type: str
    name: str = ""
    description: str = ""
    platform: str = ""
    owners: Sequence[Owner] = field(default_factory=tuple)
    tags: Sequence[Tag] = field(default_factory=tuple)
    domain: Optional[Domain] = None
    matched_fields: Sequence[MatchedField] = field(default_factory=tuple)


@dataclass(frozen=True)
class SearchResult:
    entities: Sequence[SearchEntity]
    total: int
    offset: int
    limit: int


@dataclass(frozen=True)
class SchemaField:
    field_path: str
    type: str = ""
    native_type: str = ""
    description: str = ""
    nullable: bool = False
    is_partition_key: bool = False
    tags: Sequence[Tag] = field(default_factory=tuple)
    glossary_terms: Sequence[GlossaryTerm] = field(default_factory=tuple)


@dataclass(frozen=True)
class ForeignKey:
    name: str
    foreign_dataset: str
    source_fields: Sequence[str] = field(default_factory=tuple)
    foreign_fields: Sequence[str] = field(default_factory=tuple)


@dataclass(frozen=True)
class SchemaMetadata:
    name: str = ""
    platform_schema: str = ""
    version: int = 0
    hash: str = ""
    fields: Sequence[SchemaField] = field(default_factory=tuple)
    primary_keys: Sequence[str] = field(default_factory=tuple)
    foreign_keys: Sequence[ForeignKey] = field(default_factory=tuple)


@dataclass(frozen=True)
class Query:
    """SQL statement observed against a dataset."""

    statement: str


@dataclass(frozen=True)
class QueryList:
    queries: Sequence[Query] = field(default_factory=tuple)
    total: int = 0


@dataclass(frozen=True)
class DataProduct:
    urn: str
    name: str = ""
    description: str = ""
    domain: Optional[Domain] = None
    owners: Sequence[Owner] = field(default_factory=tuple)
    properties: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ColumnLineageMapping:
    """Downstream column derived from one upstream column."""

    downstream_column: str
    upstream_dataset: str
    upstream_column: str
    transform: str = ""
    query: str = ""
    confidence_score: float = 0.0


@dataclass(frozen=True)
class ColumnLineage:
    dataset_urn: str
    mappings: Sequence[ColumnLineageMapping] = field(default_factory=tuple)
