"""Base class for clients backed by a GraphQL transport."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

from catalog_client.net.transport import GraphQLTransport

T = TypeVar("T")


class BaseClient(Generic[T]):
    """Provide labelled, timed execution of GraphQL operations."""

    def __init__(
        self,
        transport: GraphQLTransport,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._transport = transport
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    def close(self) -> None:
        """Release pooled connections held by the transport."""
        self._transport.close()

    def _execute(
        self,
        query: str,
        variables: Optional[Mapping[str, Any]] = None,
        *,
        decoder: Optional[Callable[[Mapping[str, Any]], T]] = None,
        name: Optional[str] = None,
        deadline: Optional[float] = None,
    ) -> Any:
        """Run ``query`` through the transport and decode its payload."""
        label = name or "<anonymous>"

        started_at = time.perf_counter()
        try:
            return self._transport.execute(
                query,
                variables,
                decoder=decoder,
                deadline=deadline,
                name=label,
            )
        finally:
            elapsed_ms = (time.perf_counter() - started_at) * 1000.0
            if self._logger.isEnabledFor(logging.DEBUG):
                self._logger.debug(
                    "Operation %s completed in %.2f ms",
                    label,
                    elapsed_ms,
                )
