"""Read operations against the catalog's GraphQL API."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Union

from catalog_client.clients import queries
from catalog_client.clients.base_client import BaseClient
from catalog_client.config import ClientConfig
from catalog_client.errors import CatalogError, NotFound, ProtocolError
from catalog_client.models.entities import (ColumnLineage, DataProduct,
                                            Domain, Entity, GlossaryTerm,
                                            QueryList, SchemaMetadata,
                                            SearchResult, Tag)
from catalog_client.models.lineage import (LineageDirection, LineageQuery,
                                           LineageResult, LineageSearchResult)
from catalog_client.net.backoff import RetryPolicy
from catalog_client.net.transport import GraphQLTransport, HTTPSession
from catalog_client.services import mappers
from catalog_client.services.lineage_assembler import assemble_lineage

GRAPHQL_PATH = "/api/graphql"
DEFAULT_ENTITY_TYPE = "DATASET"


def _graphql_endpoint(url: str) -> str:
    if url.endswith(GRAPHQL_PATH):
        return url
    return url.rstrip("/") + GRAPHQL_PATH


class CatalogClient(BaseClient[Any]):
    """Typed, retry-safe wrapper around the catalog GraphQL API.

    Log handlers are left to the host application, which normally calls
    :func:`catalog_client.logging_config.configure_logging` at start-up.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[HTTPSession] = None,
        logger: Optional[logging.Logger] = None,
        sleep_fn: Optional[Callable[[float], None]] = None,
    ) -> None:
        config.validate()
        logger = logger or logging.getLogger(self.__class__.__name__)
        transport = GraphQLTransport(
            _graphql_endpoint(config.url),
            config.token,
            retry_policy=RetryPolicy(config.retry_max, sleep_fn=sleep_fn),
            timeout_seconds=float(config.timeout),
            session=session,
            logger=logger,
        )
        super().__init__(transport, logger=logger)
        self._config = config

    @classmethod
    def from_env(cls, **kwargs: Any) -> "CatalogClient":
        """Create a client from ``DATAHUB_*`` environment variables."""
        return cls(ClientConfig.from_env(), **kwargs)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def endpoint(self) -> str:
        return self._transport.endpoint

    def ping(self, *, deadline: Optional[float] = None) -> None:
        """Verify connectivity and credentials."""
        self._execute(queries.PING_QUERY, name="ping", deadline=deadline)

    def search(
        self,
        query: str,
        *,
        entity_type: str = DEFAULT_ENTITY_TYPE,
        limit: Optional[int] = None,
        offset: int = 0,
        deadline: Optional[float] = None,
    ) -> SearchResult:
        """Full-text search over one entity type."""
        count = limit if limit is not None else self._config.default_limit
        count = min(count, self._config.max_limit)
        variables = {
            "input": {
                "type": entity_type or DEFAULT_ENTITY_TYPE,
                "query": query,
                "start": offset,
                "count": count,
            }
        }
        return self._execute(
            queries.SEARCH_QUERY,
            variables,
            decoder=mappers.parse_search_result,
            name=f"search({query!r})",
            deadline=deadline,
        )

    def get_entity(
        self, urn: str, *, deadline: Optional[float] = None
    ) -> Entity:
        label = f"get_entity({urn})"
        return self._execute(
            queries.GET_ENTITY_QUERY,
            {"urn": urn},
            decoder=lambda data: mappers.parse_entity(
                _require_entity(data, "entity", label)
            ),
            name=label,
            deadline=deadline,
        )

    def get_schema(
        self, urn: str, *, deadline: Optional[float] = None
    ) -> SchemaMetadata:
        return self._execute(
            queries.GET_SCHEMA_QUERY,
            {"urn": urn},
            decoder=_decode_schema,
            name=f"get_schema({urn})",
            deadline=deadline,
        )

    def get_schemas(
        self, urns: list[str], *, deadline: Optional[float] = None
    ) -> dict[str, SchemaMetadata]:
        """Fetch schemas for several datasets in one request.

        Entities the catalog returns without a URN are omitted.
        """
        if not urns:
            return {}
        return self._execute(
            queries.BATCH_GET_SCHEMAS_QUERY,
            {"urns": list(urns)},
            decoder=_decode_schemas,
            name="get_schemas",
            deadline=deadline,
        )

    def get_lineage(
        self,
        urn: str,
        *,
        direction: Union[LineageDirection, str] = LineageDirection.DOWNSTREAM,
        depth: int = 1,
        deadline: Optional[float] = None,
    ) -> LineageResult:
        """Return the lineage graph around ``urn``.

        ``depth`` is clamped to the configured maximum; the effective depth
        is echoed back in :attr:`LineageResult.depth`.
        """
        lineage_query = LineageQuery(
            start_urn=urn,
            direction=direction,  # type: ignore[arg-type]
            depth=depth,
            max_depth=self._config.max_lineage_depth,
        )
        results = self._execute(
            queries.GET_LINEAGE_QUERY,
            {"urn": urn, "direction": lineage_query.direction.value},
            decoder=_decode_lineage_results,
            name=f"get_lineage({urn})",
            deadline=deadline,
        )
        return assemble_lineage(
            lineage_query.start_urn,
            lineage_query.direction,
            lineage_query.effective_depth,
            results,
        )

    def get_queries(
        self, urn: str, *, deadline: Optional[float] = None
    ) -> QueryList:
        """Return popular SQL statements for a dataset.

        Usage statistics are optional on the catalog side, so any failure
        yields an empty list.
        """
        try:
            return self._execute(
                queries.GET_QUERIES_QUERY,
                {"urn": urn},
                decoder=mappers.parse_query_list,
                name=f"get_queries({urn})",
                deadline=deadline,
            )
        except CatalogError as error:
            self._logger.info(
                "Usage statistics unavailable for %s: %s", urn, error
            )
            return QueryList()

    def get_glossary_term(
        self, urn: str, *, deadline: Optional[float] = None
    ) -> GlossaryTerm:
        label = f"get_glossary_term({urn})"
        return self._execute(
            queries.GET_GLOSSARY_TERM_QUERY,
            {"urn": urn},
            decoder=lambda data: mappers.parse_glossary_term(
                _require_entity(data, "glossaryTerm", label)
            ),
            name=label,
            deadline=deadline,
        )

    def list_tags(
        self, filter: str = "", *, deadline: Optional[float] = None
    ) -> list[Tag]:
        variables = {
            "input": {
                "type": "TAG",
                "query": filter or "*",
                "start": 0,
                "count": self._config.max_limit,
            }
        }
        return self._execute(
            queries.LIST_TAGS_QUERY,
            variables,
            decoder=mappers.parse_tag_search,
            name="list_tags",
            deadline=deadline,
        )

    def list_domains(self, *, deadline: Optional[float] = None) -> list[Domain]:
        return self._execute(
            queries.LIST_DOMAINS_QUERY,
            decoder=mappers.parse_domain_list,
            name="list_domains",
            deadline=deadline,
        )

    def list_data_products(
        self, *, deadline: Optional[float] = None
    ) -> list[DataProduct]:
        """List data products, falling back to search on older catalogs."""
        try:
            return self._execute(
                queries.LIST_DATA_PRODUCTS_QUERY,
                decoder=mappers.parse_data_product_list,
                name="list_data_products",
                deadline=deadline,
            )
        except CatalogError as error:
            self._logger.info(
                "listDataProducts unavailable (%s); falling back to search",
                error,
            )
            try:
                found = self.search(
                    "*",
                    entity_type="DATA_PRODUCT",
                    limit=self._config.max_limit,
                    deadline=deadline,
                )
            except CatalogError as search_error:
                raise search_error from error

        return [
            DataProduct(
                urn=entity.urn,
                name=entity.name,
                description=entity.description,
            )
            for entity in found.entities
        ]

    def get_data_product(
        self, urn: str, *, deadline: Optional[float] = None
    ) -> DataProduct:
        label = f"get_data_product({urn})"
        return self._execute(
            queries.GET_DATA_PRODUCT_QUERY,
            {"urn": urn},
            decoder=lambda data: mappers.parse_data_product(
                _require_entity(data, "dataProduct", label),
                prefer_display_name=True,
            ),
            name=label,
            deadline=deadline,
        )

    def get_column_lineage(
        self, urn: str, *, deadline: Optional[float] = None
    ) -> ColumnLineage:
        """Return column-level lineage; empty when the catalog has none."""
        try:
            data = self._execute(
                queries.GET_COLUMN_LINEAGE_QUERY,
                {"urn": urn},
                name=f"get_column_lineage({urn})",
                deadline=deadline,
            )
        except CatalogError as error:
            self._logger.info(
                "Column lineage unavailable for %s: %s", urn, error
            )
            return ColumnLineage(dataset_urn=urn)
        return mappers.parse_column_lineage(urn, data)


def _require_entity(
    data: Mapping[str, Any], key: str, label: str
) -> Mapping[str, Any]:
    """Return ``data[key]``, raising NotFound when it carries no URN."""
    raw = data.get(key)
    if raw is None:
        raise NotFound(f"{label}: entity not found")
    if not isinstance(raw, Mapping):
        raise ProtocolError(
            f"{label}: unexpected {key} type: {type(raw).__name__}"
        )
    if not raw.get("urn"):
        raise NotFound(f"{label}: entity not found")
    return raw


def _decode_schema(data: Mapping[str, Any]) -> SchemaMetadata:
    dataset = data.get("dataset") or {}
    return mappers.parse_schema_metadata(dataset.get("schemaMetadata"))


def _decode_schemas(data: Mapping[str, Any]) -> dict[str, SchemaMetadata]:
    schemas: dict[str, SchemaMetadata] = {}
    for entity in data.get("entities") or []:
        if not isinstance(entity, Mapping) or not entity.get("urn"):
            continue
        schemas[entity["urn"]] = mappers.parse_schema_metadata(
            entity.get("schemaMetadata")
        )
    return schemas


def _decode_lineage_results(
    data: Mapping[str, Any],
) -> list[LineageSearchResult]:
    search = data.get("searchAcrossLineage") or {}
    return [
        LineageSearchResult.from_payload(item)
        for item in search.get("searchResults") or []
        if isinstance(item, Mapping)
    ]
