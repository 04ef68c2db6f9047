"""Domain model package exports."""

from .entities import (ColumnLineage, ColumnLineageMapping, DataProduct,
                       Deprecation, Domain, Entity, ForeignKey, GlossaryTerm,
                       MatchedField, Owner, OwnershipType, Query, QueryList,
                       SchemaField, SchemaMetadata, SearchEntity,
                       SearchResult, Tag)
from .identifier import (Identifier, build_chart_urn, build_dashboard_urn,
                         build_data_flow_urn, build_data_job_urn,
                         build_dataset_urn, build_domain_urn,
                         build_glossary_term_urn, build_tag_urn, build_urn,
                         parse_urn)
from .lineage import (LineageDirection, LineageEdge, LineageNode,
                      LineageQuery, LineageResult, LineageSearchResult,
                      PathGroup)

__all__ = [
    "ColumnLineage",
    "ColumnLineageMapping",
    "DataProduct",
    "Deprecation",
    "Domain",
    "Entity",
    "ForeignKey",
    "GlossaryTerm",
    "Identifier",
    "LineageDirection",
    "LineageEdge",
    "LineageNode",
    "LineageQuery",
    "LineageResult",
    "LineageSearchResult",
    "MatchedField",
    "Owner",
    "OwnershipType",
    "PathGroup",
    "Query",
    "QueryList",
    "SchemaField",
    "SchemaMetadata",
    "SearchEntity",
    "SearchResult",
    "Tag",
    "build_chart_urn",
    "build_dashboard_urn",
    "build_data_flow_urn",
    "build_data_job_urn",
    "build_dataset_urn",
    "build_domain_urn",
    "build_glossary_term_urn",
    "build_tag_urn",
    "build_urn",
    "parse_urn",
]
