"""Tests for payload-to-record mapping helpers."""

from __future__ import annotations

from catalog_client.models.entities import Deprecation, Owner, Query
from catalog_client.services import mappers

OWNERSHIP = {
    "owners": [
        {
            "type": "TECHNICAL_OWNER",
            "owner": {
                "urn": "urn:li:corpuser:jdoe",
                "username": "jdoe",
                "info": {"displayName": "J. Doe", "email": "jdoe@example.com"},
            },
        },
        {
            "type": "BUSINESS_OWNER",
            "owner": {"urn": "urn:li:corpGroup:finance", "name": "finance"},
        },
    ]
}


def test_parse_owners_prefers_name_then_username() -> None:
    owners = mappers.parse_owners(OWNERSHIP)

    assert owners == (
        Owner(
            urn="urn:li:corpuser:jdoe",
            type="TECHNICAL_OWNER",
            name="jdoe",
            email="jdoe@example.com",
        ),
        Owner(urn="urn:li:corpGroup:finance", type="BUSINESS_OWNER", name="finance"),
    )


def test_parse_owners_can_prefer_display_name() -> None:
    owners = mappers.parse_owners(OWNERSHIP, prefer_display_name=True)

    assert [owner.name for owner in owners] == ["J. Doe", "finance"]


def test_parse_owners_tolerates_missing_sections() -> None:
    assert mappers.parse_owners(None) == ()
    assert mappers.parse_owners({"owners": None}) == ()


def test_parse_tags_prefers_properties() -> None:
    tags = mappers.parse_tags(
        {
            "tags": [
                {"tag": {"urn": "urn:li:tag:pii", "name": "pii",
                         "properties": {"name": "PII"}}},
                {"tag": {"urn": "urn:li:tag:gold", "name": "gold"}},
            ]
        }
    )

    assert [(tag.urn, tag.name) for tag in tags] == [
        ("urn:li:tag:pii", "PII"),
        ("urn:li:tag:gold", "gold"),
    ]


def test_parse_domain_requires_urn() -> None:
    assert mappers.parse_domain(None) is None
    assert mappers.parse_domain({"domain": {"properties": {"name": "x"}}}) is None

    domain = mappers.parse_domain(
        {"domain": {"urn": "urn:li:domain:sales",
                    "properties": {"name": "Sales"}}}
    )
    assert domain is not None
    assert domain.name == "Sales"


def test_parse_search_result() -> None:
    result = mappers.parse_search_result(
        {
            "search": {
                "start": 10,
                "count": 2,
                "total": 42,
                "searchResults": [
                    {
                        "entity": {
                            "urn": "urn:li:dataset:a",
                            "type": "DATASET",
                            "name": "a",
                            "platform": {"name": "hive"},
                        },
                        "matchedFields": [{"name": "name", "value": "a"}],
                    }
                ],
            }
        }
    )

    assert (result.total, result.offset, result.limit) == (42, 10, 2)
    assert result.entities[0].platform == "hive"
    assert result.entities[0].matched_fields[0].value == "a"


def test_parse_search_result_empty() -> None:
    result = mappers.parse_search_result({"search": None})

    assert result.entities == ()
    assert result.total == 0


def test_parse_entity_maps_optional_sections() -> None:
    entity = mappers.parse_entity(
        {
            "urn": "urn:li:dataset:a",
            "type": "DATASET",
            "name": "fallback",
            "properties": {
                "name": "orders",
                "description": "All orders",
                "customProperties": [{"key": "owner_team", "value": "core"}],
            },
            "ownership": OWNERSHIP,
            "deprecation": {"deprecated": True, "note": "use v2",
                            "actor": "urn:li:corpuser:x",
                            "decommissionTime": 1700000000},
            "subTypes": {"typeNames": ["Table"]},
        }
    )

    assert entity.name == "orders"
    assert entity.owners[0].name == "J. Doe"
    assert entity.deprecation == Deprecation(
        deprecated=True,
        note="use v2",
        actor="urn:li:corpuser:x",
        decommission_time=1700000000,
    )
    assert entity.sub_types == ("Table",)
    assert entity.properties == {"owner_team": "core"}
    assert entity.domain is None


def test_parse_entity_ignores_inactive_deprecation() -> None:
    entity = mappers.parse_entity(
        {"urn": "u", "type": "DATASET", "deprecation": {"deprecated": False}}
    )

    assert entity.deprecation is None


def test_parse_schema_metadata() -> None:
    schema = mappers.parse_schema_metadata(
        {
            "name": "orders",
            "version": 3,
            "platformSchema": {"schema": "CREATE TABLE orders"},
            "primaryKeys": ["id"],
            "fields": [
                {"fieldPath": "id", "type": "NUMBER",
                 "nativeDataType": "bigint", "isPartOfKey": True},
                {"fieldPath": "note", "nullable": True},
            ],
            "foreignKeys": [
                {
                    "name": "fk_customer",
                    "foreignDataset": {"urn": "urn:li:dataset:customers"},
                    "sourceFields": [{"fieldPath": "customer_id"}],
                    "foreignFields": [{"fieldPath": "id"}],
                }
            ],
        }
    )

    assert schema.version == 3
    assert schema.platform_schema == "CREATE TABLE orders"
    assert [field.field_path for field in schema.fields] == ["id", "note"]
    assert schema.fields[0].is_partition_key is True
    assert schema.fields[1].nullable is True
    assert schema.foreign_keys[0].source_fields == ("customer_id",)


def test_parse_schema_metadata_missing() -> None:
    schema = mappers.parse_schema_metadata(None)

    assert schema.fields == ()
    assert schema.name == ""


def test_parse_query_list_flattens_buckets() -> None:
    queries = mappers.parse_query_list(
        {
            "dataset": {
                "usageStats": {
                    "buckets": [
                        {"metrics": {"topSqlQueries": ["select 1", "select 2"]}},
                        {"metrics": None},
                        {"metrics": {"topSqlQueries": ["select 3"]}},
                    ]
                }
            }
        }
    )

    assert queries.total == 3
    assert queries.queries[-1] == Query(statement="select 3")


def test_parse_glossary_term_takes_first_parent() -> None:
    term = mappers.parse_glossary_term(
        {
            "urn": "urn:li:glossaryTerm:revenue",
            "properties": {"name": "Revenue"},
            "parentNodes": {"nodes": [{"urn": "urn:li:glossaryNode:finance"},
                                      {"urn": "urn:li:glossaryNode:root"}]},
        }
    )

    assert term.name == "Revenue"
    assert term.parent_node == "urn:li:glossaryNode:finance"


def test_parse_domain_list_counts_entities() -> None:
    domains = mappers.parse_domain_list(
        {
            "listDomains": {
                "domains": [
                    {"urn": "urn:li:domain:a", "properties": {"name": "A"},
                     "entities": {"total": 12}},
                    {"urn": "urn:li:domain:b"},
                ]
            }
        }
    )

    assert [(d.urn, d.entity_count) for d in domains] == [
        ("urn:li:domain:a", 12),
        ("urn:li:domain:b", 0),
    ]


def test_parse_column_lineage_expands_cross_product() -> None:
    lineage = mappers.parse_column_lineage(
        "urn:li:dataset:out",
        {
            "dataset": {
                "fineGrainedLineages": [
                    {
                        "downstreams": [{"path": "total"}, {"path": "net"}],
                        "upstreams": [
                            {"dataset": "urn:li:dataset:a", "path": "amount"},
                            {"dataset": "urn:li:dataset:b", "path": "tax"},
                        ],
                        "transformOperation": "SUM",
                        "confidenceScore": 0.9,
                    }
                ]
            }
        },
    )

    assert lineage.dataset_urn == "urn:li:dataset:out"
    assert len(lineage.mappings) == 4
    first = lineage.mappings[0]
    assert (first.downstream_column, first.upstream_column) == ("total", "amount")
    assert first.transform == "SUM"
    assert first.confidence_score == 0.9
