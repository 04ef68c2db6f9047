"""
Map raw GraphQL payload fragments onto catalog records.

The catalog returns the same sub-shapes (owners, tags, domains, custom
properties) in many queries; these helpers keep the per-operation mapping in
:mod:`catalog_client.clients.catalog_client` short.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from catalog_client.models.entities import (ColumnLineage,
                                            ColumnLineageMapping,
                                            DataProduct, Deprecation, Domain,
                                            Entity, ForeignKey, GlossaryTerm,
                                            MatchedField, Owner, Query,
                                            QueryList, SchemaField,
                                            SchemaMetadata, SearchEntity,
                                            SearchResult, Tag)


def _obj(value: Any) -> Mapping[str, Any]:
    """Treat ``None`` and non-mappings as an empty object."""
    if isinstance(value, Mapping):
        return value
    return {}


def _list(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    return []


def _str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _prefer(*candidates: Any) -> str:
    """Return the first non-empty candidate as a string."""
    for candidate in candidates:
        if candidate:
            return str(candidate)
    return ""


# Shared fragments ----------------------------------------------------------

def parse_owners(
    ownership: Any,
    *,
    prefer_display_name: bool = False,
) -> tuple[Owner, ...]:
    owners = []
    for entry in _list(_obj(ownership).get("owners")):
        entry = _obj(entry)
        owner = _obj(entry.get("owner"))
        info = _obj(owner.get("info"))
        if prefer_display_name:
            name = _prefer(
                info.get("displayName"),
                owner.get("name"),
                owner.get("username"),
            )
        else:
            name = _prefer(owner.get("name"), owner.get("username"))
        owners.append(
            Owner(
                urn=_str(owner.get("urn")),
                type=_str(entry.get("type")),
                name=name,
                email=_str(info.get("email")),
            )
        )
    return tuple(owners)


def parse_tags(tags: Any) -> tuple[Tag, ...]:
    parsed = []
    for entry in _list(_obj(tags).get("tags")):
        tag = _obj(_obj(entry).get("tag"))
        properties = _obj(tag.get("properties"))
        parsed.append(
            Tag(
                urn=_str(tag.get("urn")),
                name=_prefer(properties.get("name"), tag.get("name")),
                description=_prefer(
                    properties.get("description"), tag.get("description")
                ),
            )
        )
    return tuple(parsed)


def parse_glossary_terms(terms: Any) -> tuple[GlossaryTerm, ...]:
    parsed = []
    for entry in _list(_obj(terms).get("terms")):
        term = _obj(_obj(entry).get("term"))
        properties = _obj(term.get("properties"))
        parsed.append(
            GlossaryTerm(
                urn=_str(term.get("urn")),
                name=_prefer(properties.get("name"), term.get("name")),
                description=_str(properties.get("description")),
            )
        )
    return tuple(parsed)


def parse_domain(domain: Any) -> Optional[Domain]:
    """Return the nested ``domain.domain`` association, if any."""
    inner = _obj(_obj(domain).get("domain"))
    urn = _str(inner.get("urn"))
    if not urn:
        return None
    properties = _obj(inner.get("properties"))
    return Domain(
        urn=urn,
        name=_str(properties.get("name")),
        description=_str(properties.get("description")),
    )


def parse_custom_properties(properties: Any) -> dict[str, str]:
    return {
        _str(_obj(item).get("key")): _str(_obj(item).get("value"))
        for item in _list(_obj(properties).get("customProperties"))
    }


# Search --------------------------------------------------------------------

def parse_search_entity(raw: Mapping[str, Any]) -> SearchEntity:
    entity = _obj(raw.get("entity"))
    properties = _obj(entity.get("properties"))
    return SearchEntity(
        urn=_str(entity.get("urn")),
        type=_str(entity.get("type")),
        name=_prefer(properties.get("name"), entity.get("name")),
        description=_prefer(
            properties.get("description"), entity.get("description")
        ),
        platform=_str(_obj(entity.get("platform")).get("name")),
        owners=parse_owners(entity.get("ownership")),
        tags=parse_tags(entity.get("tags")),
        domain=parse_domain(entity.get("domain")),
        matched_fields=tuple(
            MatchedField(
                name=_str(_obj(item).get("name")),
                value=_str(_obj(item).get("value")),
            )
            for item in _list(raw.get("matchedFields"))
        ),
    )


def parse_search_result(data: Mapping[str, Any]) -> SearchResult:
    search = _obj(data.get("search"))
    return SearchResult(
        entities=tuple(
            parse_search_entity(_obj(item))
            for item in _list(search.get("searchResults"))
        ),
        total=int(search.get("total") or 0),
        offset=int(search.get("start") or 0),
        limit=int(search.get("count") or 0),
    )


# Entity --------------------------------------------------------------------

def parse_entity(raw: Mapping[str, Any]) -> Entity:
    properties = _obj(raw.get("properties"))
    deprecation_raw = _obj(raw.get("deprecation"))
    deprecation = None
    if deprecation_raw.get("deprecated"):
        deprecation = Deprecation(
            deprecated=True,
            note=_str(deprecation_raw.get("note")),
            actor=_str(deprecation_raw.get("actor")),
            decommission_time=int(
                deprecation_raw.get("decommissionTime") or 0
            ),
        )

    return Entity(
        urn=_str(raw.get("urn")),
        type=_str(raw.get("type")),
        name=_prefer(properties.get("name"), raw.get("name")),
        description=_prefer(
            properties.get("description"), raw.get("description")
        ),
        platform=_str(_obj(raw.get("platform")).get("name")),
        owners=parse_owners(raw.get("ownership"), prefer_display_name=True),
        tags=parse_tags(raw.get("tags")),
        glossary_terms=parse_glossary_terms(raw.get("glossaryTerms")),
        domain=parse_domain(raw.get("domain")),
        deprecation=deprecation,
        sub_types=tuple(
            _str(name)
            for name in _list(_obj(raw.get("subTypes")).get("typeNames"))
        ),
        properties=parse_custom_properties(properties),
    )


# Schema --------------------------------------------------------------------

def parse_schema_field(raw: Mapping[str, Any]) -> SchemaField:
    return SchemaField(
        field_path=_str(raw.get("fieldPath")),
        type=_str(raw.get("type")),
        native_type=_str(raw.get("nativeDataType")),
        description=_str(raw.get("description")),
        nullable=bool(raw.get("nullable")),
        is_partition_key=bool(raw.get("isPartOfKey")),
        tags=parse_tags(raw.get("tags")),
        glossary_terms=parse_glossary_terms(raw.get("glossaryTerms")),
    )


def parse_foreign_key(raw: Mapping[str, Any]) -> ForeignKey:
    return ForeignKey(
        name=_str(raw.get("name")),
        foreign_dataset=_str(_obj(raw.get("foreignDataset")).get("urn")),
        source_fields=tuple(
            _str(_obj(item).get("fieldPath"))
            for item in _list(raw.get("sourceFields"))
        ),
        foreign_fields=tuple(
            _str(_obj(item).get("fieldPath"))
            for item in _list(raw.get("foreignFields"))
        ),
    )


def parse_schema_metadata(raw: Any) -> SchemaMetadata:
    raw = _obj(raw)
    return SchemaMetadata(
        name=_str(raw.get("name")),
        platform_schema=_str(_obj(raw.get("platformSchema")).get("schema")),
        version=int(raw.get("version") or 0),
        hash=_str(raw.get("hash")),
        fields=tuple(
            parse_schema_field(_obj(item)) for item in _list(raw.get("fields"))
        ),
        primary_keys=tuple(_str(key) for key in _list(raw.get("primaryKeys"))),
        foreign_keys=tuple(
            parse_foreign_key(_obj(item))
            for item in _list(raw.get("foreignKeys"))
        ),
    )


# Usage, glossary, domains, products ----------------------------------------

def parse_query_list(data: Mapping[str, Any]) -> QueryList:
    usage = _obj(_obj(data.get("dataset")).get("usageStats"))
    queries = tuple(
        Query(statement=_str(statement))
        for bucket in _list(usage.get("buckets"))
        for statement in _list(
            _obj(_obj(bucket).get("metrics")).get("topSqlQueries")
        )
    )
    return QueryList(queries=queries, total=len(queries))


def parse_glossary_term(raw: Mapping[str, Any]) -> GlossaryTerm:
    properties = _obj(raw.get("properties"))
    parents = _list(_obj(raw.get("parentNodes")).get("nodes"))
    return GlossaryTerm(
        urn=_str(raw.get("urn")),
        name=_prefer(properties.get("name"), raw.get("name")),
        description=_str(properties.get("description")),
        parent_node=_str(_obj(parents[0]).get("urn")) if parents else "",
        owners=parse_owners(raw.get("ownership")),
        properties=parse_custom_properties(properties),
    )


def parse_tag_search(data: Mapping[str, Any]) -> list[Tag]:
    tags = []
    for item in _list(_obj(data.get("search")).get("searchResults")):
        entity = _obj(_obj(item).get("entity"))
        properties = _obj(entity.get("properties"))
        tags.append(
            Tag(
                urn=_str(entity.get("urn")),
                name=_prefer(properties.get("name"), entity.get("name")),
                description=_prefer(
                    properties.get("description"), entity.get("description")
                ),
            )
        )
    return tags


def parse_domain_list(data: Mapping[str, Any]) -> list[Domain]:
    domains = []
    for item in _list(_obj(data.get("listDomains")).get("domains")):
        item = _obj(item)
        properties = _obj(item.get("properties"))
        domains.append(
            Domain(
                urn=_str(item.get("urn")),
                name=_str(properties.get("name")),
                description=_str(properties.get("description")),
                owners=parse_owners(item.get("ownership")),
                entity_count=int(_obj(item.get("entities")).get("total") or 0),
            )
        )
    return domains


def parse_data_product(
    raw: Mapping[str, Any],
    *,
    prefer_display_name: bool = False,
) -> DataProduct:
    properties = _obj(raw.get("properties"))
    return DataProduct(
        urn=_str(raw.get("urn")),
        name=_str(properties.get("name")),
        description=_str(properties.get("description")),
        domain=parse_domain(raw.get("domain")),
        owners=parse_owners(
            raw.get("ownership"), prefer_display_name=prefer_display_name
        ),
        properties=parse_custom_properties(properties),
    )


def parse_data_product_list(data: Mapping[str, Any]) -> list[DataProduct]:
    return [
        parse_data_product(_obj(item))
        for item in _list(
            _obj(data.get("listDataProducts")).get("dataProducts")
        )
    ]


def parse_column_lineage(
    dataset_urn: str, data: Mapping[str, Any]
) -> ColumnLineage:
    """Expand each fine-grained entry into downstream x upstream mappings."""
    mappings = []
    dataset = _obj(data.get("dataset"))
    for entry in _list(dataset.get("fineGrainedLineages")):
        entry = _obj(entry)
        for downstream in _list(entry.get("downstreams")):
            for upstream in _list(entry.get("upstreams")):
                mappings.append(
                    ColumnLineageMapping(
                        downstream_column=_str(_obj(downstream).get("path")),
                        upstream_dataset=_str(_obj(upstream).get("dataset")),
                        upstream_column=_str(_obj(upstream).get("path")),
                        transform=_str(entry.get("transformOperation")),
                        query=_str(entry.get("query")),
                        confidence_score=float(
                            entry.get("confidenceScore") or 0.0
                        ),
                    )
                )
    return ColumnLineage(dataset_urn=dataset_urn, mappings=tuple(mappings))
