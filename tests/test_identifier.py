"""Tests for the catalog URN codec."""

from __future__ import annotations

import pytest

from catalog_client.errors import ErrorKind, InvalidIdentifier
from catalog_client.models.identifier import (Identifier, build_chart_urn,
                                              build_dashboard_urn,
                                              build_data_flow_urn,
                                              build_data_job_urn,
                                              build_dataset_urn,
                                              build_domain_urn,
                                              build_glossary_term_urn,
                                              build_tag_urn, build_urn,
                                              parse_urn)


def test_parse_dataset_urn() -> None:
    raw = "urn:li:dataset:(urn:li:dataPlatform:snowflake,db.schema.orders,PROD)"

    parsed = parse_urn(raw)

    assert parsed == Identifier(
        raw=raw,
        kind="dataset",
        platform="snowflake",
        name="db.schema.orders",
        env="PROD",
    )


def test_parse_dataset_urn_decodes_name() -> None:
    parsed = parse_urn(
        "urn:li:dataset:(urn:li:dataPlatform:s3,bucket%2Fpath%20with%2Cc,DEV)"
    )

    assert parsed.name == "bucket/path with,c"
    assert parsed.env == "DEV"


def test_parse_dataset_urn_keeps_malformed_escape_verbatim() -> None:
    parsed = parse_urn(
        "urn:li:dataset:(urn:li:dataPlatform:hive,bad%zz%20name,PROD)"
    )

    assert parsed.name == "bad%zz%20name"


def test_parse_dataset_urn_keeps_invalid_utf8_verbatim() -> None:
    parsed = parse_urn("urn:li:dataset:(urn:li:dataPlatform:hive,x%FF,PROD)")

    assert parsed.name == "x%FF"


def test_parse_dataset_bounded_split_keeps_trailing_commas_in_env() -> None:
    parsed = parse_urn("urn:li:dataset:(urn:li:dataPlatform:hive,a,b,c)")

    assert parsed.name == "a"
    assert parsed.env == "b,c"


def test_parse_dataset_urn_with_paren_directly_after_kind() -> None:
    parsed = parse_urn("urn:li:dataset(urn:li:dataPlatform:hive,t,PROD)")

    assert parsed.kind == "dataset"
    assert parsed.platform == "hive"


@pytest.mark.parametrize(
    "raw",
    [
        "urn:li:dataset:urn:li:dataPlatform:hive,t,PROD",
        "urn:li:dataset:(urn:li:dataPlatform:hive,t)",
        "urn:li:dataset:(hive,t,PROD)",
        "urn:li:dataset:(urn:li:dataPlatform:hive,t,PROD",
    ],
)
def test_parse_dataset_urn_rejects_malformed(raw: str) -> None:
    with pytest.raises(InvalidIdentifier) as excinfo:
        parse_urn(raw)

    assert excinfo.value.kind is ErrorKind.INVALID_IDENTIFIER


def test_parse_requires_namespace_prefix() -> None:
    with pytest.raises(InvalidIdentifier):
        parse_urn("urn:other:tag:pii")

    with pytest.raises(ValueError):
        parse_urn("")


def test_parse_rejects_empty_kind() -> None:
    with pytest.raises(InvalidIdentifier):
        parse_urn("urn:li::name")


def test_parse_tuple_urns() -> None:
    dashboard = parse_urn("urn:li:dashboard:(looker,dashboards.42)")
    chart = parse_urn("urn:li:chart:(superset,a%20b,c)")

    assert (dashboard.kind, dashboard.platform, dashboard.name) == (
        "dashboard",
        "looker",
        "dashboards.42",
    )
    # Tuple names are not percent-decoded and keep later commas.
    assert chart.platform == "superset"
    assert chart.name == "a%20b,c"
    assert chart.env == ""


@pytest.mark.parametrize(
    "raw",
    ["urn:li:chart:superset,1", "urn:li:dashboard:(looker)"],
)
def test_parse_tuple_urn_rejects_malformed(raw: str) -> None:
    with pytest.raises(InvalidIdentifier):
        parse_urn(raw)


@pytest.mark.parametrize(
    ("raw", "kind", "name"),
    [
        ("urn:li:tag:pii", "tag", "pii"),
        ("urn:li:glossaryTerm:finance.revenue", "glossaryTerm", "finance.revenue"),
        ("urn:li:domain:marketing", "domain", "marketing"),
        ("urn:li:corpuser", "corpuser", ""),
        (
            "urn:li:dataFlow:(airflow,etl,prod)",
            "dataFlow",
            "(airflow,etl,prod)",
        ),
    ],
)
def test_parse_simple_urns(raw: str, kind: str, name: str) -> None:
    parsed = parse_urn(raw)

    assert parsed.kind == kind
    assert parsed.name == name
    assert parsed.platform == ""
    assert parsed.env == ""


def test_build_dataset_urn_defaults_env_and_encodes_name() -> None:
    urn = build_dataset_urn("s3", "bucket/key name,1")

    assert urn == (
        "urn:li:dataset:(urn:li:dataPlatform:s3,"
        "bucket%2Fkey%20name%2C1,PROD)"
    )


def test_build_dataset_urn_leaves_path_safe_characters() -> None:
    urn = build_dataset_urn("hive", "a.b_c-d~e:f@g", "DEV")

    assert urn == "urn:li:dataset:(urn:li:dataPlatform:hive,a.b_c-d~e:f@g,DEV)"


@pytest.mark.parametrize(
    ("platform", "name", "env"),
    [
        ("snowflake", "db.schema.table", "PROD"),
        ("s3", "bucket/dir/file.csv", "DEV"),
        ("hive", "name with spaces", ""),
        ("postgres", "a,b,c", "QA"),
        ("kafka", "topic%literal", "PROD"),
        ("bigquery", "proj.ds.tbl/ü", "STAGING"),
    ],
)
def test_dataset_round_trip(platform: str, name: str, env: str) -> None:
    parsed = parse_urn(build_dataset_urn(platform, name, env))

    assert parsed.platform == platform
    assert parsed.name == name
    assert parsed.env == (env or "PROD")


def test_tuple_and_simple_builders() -> None:
    assert build_dashboard_urn("looker", "1") == "urn:li:dashboard:(looker,1)"
    assert build_chart_urn("looker", "a b") == "urn:li:chart:(looker,a b)"
    assert (
        build_data_flow_urn("airflow", "etl", "prod")
        == "urn:li:dataFlow:(airflow,etl,prod)"
    )
    assert (
        build_data_job_urn("urn:li:dataFlow:(airflow,etl,prod)", "load")
        == "urn:li:dataJob:(urn:li:dataFlow:(airflow,etl,prod),load)"
    )
    assert build_glossary_term_urn("a.b") == "urn:li:glossaryTerm:a.b"
    assert build_tag_urn("pii") == "urn:li:tag:pii"
    assert build_domain_urn("sales") == "urn:li:domain:sales"


def test_build_urn_dispatches_by_kind() -> None:
    assert build_urn("dataset", "t", platform="hive") == build_dataset_urn(
        "hive", "t"
    )
    assert build_urn("chart", "7", platform="mode") == "urn:li:chart:(mode,7)"
    assert build_urn("tag", "gold") == "urn:li:tag:gold"

    with pytest.raises(InvalidIdentifier):
        build_urn("", "x")


def test_tuple_round_trip() -> None:
    parsed = parse_urn(build_urn("dashboard", "id,with,commas", platform="pbi"))

    assert parsed.platform == "pbi"
    assert parsed.name == "id,with,commas"
