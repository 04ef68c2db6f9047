"""GraphQL transport with failure classification and retries."""

from __future__ import annotations

import json
import logging
import time
from typing import (Any, Callable, Mapping, Optional, Protocol, TypeVar,
                    cast)

import requests  # type: ignore[import]

from catalog_client.config import DEFAULT_TIMEOUT_SECONDS
from catalog_client.errors import (CatalogError, Forbidden, ProtocolError,
                                   RateLimited, RetriesExhausted, Timeout,
                                   TransportError, Unauthorized, is_terminal)
from catalog_client.net.backoff import RetryPolicy
from catalog_client.net.envelope import decode_envelope

T = TypeVar("T")

BODY_PREVIEW_LIMIT = 512


class HTTPSession(Protocol):
    def post(
        self,
        url: str,
        data: Any = None,
        headers: Optional[dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any: ...


class GraphQLTransport:
    """Post ``{query, variables}`` to a GraphQL endpoint with retries.

    Terminal failures (unauthorized, forbidden, not found) are raised on the
    first occurrence. Every other failure is retried per ``retry_policy``;
    when attempts run out the last error is raised wrapped in
    :class:`RetriesExhausted`.
    """

    def __init__(
        self,
        endpoint: str,
        token: str,
        *,
        retry_policy: RetryPolicy,
        timeout_seconds: float = float(DEFAULT_TIMEOUT_SECONDS),
        session: Optional[HTTPSession] = None,
        logger: Optional[logging.Logger] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._endpoint = endpoint
        self._token = token
        self._retry_policy = retry_policy
        self._timeout_seconds = timeout_seconds
        self._session: HTTPSession = cast(
            HTTPSession, session or requests.Session()
        )
        self._logger = logger or logging.getLogger(__name__)
        self._clock = clock or time.monotonic

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def close(self) -> None:
        close = getattr(self._session, "close", None)
        if callable(close):
            close()

    def execute(
        self,
        query: str,
        variables: Optional[Mapping[str, Any]] = None,
        *,
        decoder: Optional[Callable[[Mapping[str, Any]], T]] = None,
        deadline: Optional[float] = None,
        name: Optional[str] = None,
    ) -> Any:
        """Run ``query`` and return the decoded ``data`` payload.

        Args:
            query: GraphQL document.
            variables: Optional variable mapping; omitted from the body when
                empty.
            decoder: Callable applied to the ``data`` mapping. When omitted
                the mapping itself is returned.
            deadline: Absolute ``time.monotonic()`` instant after which the
                call is considered expired.
            name: Label used in log lines and error messages.
        """
        label = name or "graphql.execute"
        body = self._serialize(query, variables)

        last_error: Optional[CatalogError] = None
        attempts = 0
        for attempt in self._retry_policy.attempts():
            attempts = attempt + 1
            try:
                return self._attempt(body, decoder, deadline)
            except CatalogError as error:
                last_error = error
                if is_terminal(error.kind):
                    self._logger.debug(
                        "%s failed with terminal %s: %s",
                        label,
                        error.kind.value,
                        error,
                    )
                    raise
                self._logger.warning(
                    "%s attempt %d/%d failed (%s): %s",
                    label,
                    attempts,
                    self._retry_policy.max_attempts,
                    error.kind.value,
                    error,
                )

        assert last_error is not None
        raise RetriesExhausted(label, attempts, last_error) from last_error

    @staticmethod
    def _serialize(
        query: str, variables: Optional[Mapping[str, Any]]
    ) -> bytes:
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = dict(variables)
        try:
            return json.dumps(payload).encode("utf-8")
        except (TypeError, ValueError) as error:
            raise ProtocolError(f"failed to marshal request: {error}") from error

    def _attempt(
        self,
        body: bytes,
        decoder: Optional[Callable[[Mapping[str, Any]], T]],
        deadline: Optional[float],
    ) -> Any:
        timeout = self._timeout_for(deadline)
        started_at = time.perf_counter()
        try:
            response = self._session.post(
                self._endpoint,
                data=body,
                headers=self._build_headers(),
                timeout=timeout,
            )
        except requests.RequestException as error:
            if self._expired(deadline):
                raise Timeout(f"request timed out: {error}") from error
            raise TransportError(
                f"failed to execute request: {error}"
            ) from error
        finally:
            if self._logger.isEnabledFor(logging.DEBUG):
                self._logger.debug(
                    "POST %s completed in %.2f ms",
                    self._endpoint,
                    (time.perf_counter() - started_at) * 1000.0,
                )

        self._check_status(response)

        try:
            parsed = response.json()
        except ValueError as error:
            raise ProtocolError(
                f"failed to unmarshal response: {error}"
            ) from error

        return decode_envelope(parsed).unwrap(decoder)

    def _timeout_for(self, deadline: Optional[float]) -> float:
        if deadline is None:
            return self._timeout_seconds
        remaining = deadline - self._clock()
        if remaining <= 0:
            raise Timeout("request timed out: deadline expired")
        return min(self._timeout_seconds, remaining)

    def _expired(self, deadline: Optional[float]) -> bool:
        return deadline is not None and self._clock() >= deadline

    @staticmethod
    def _check_status(response: Any) -> None:
        status = response.status_code
        if status == 200:
            return
        if status == 401:
            raise Unauthorized()
        if status == 403:
            raise Forbidden()
        if status == 429:
            raise RateLimited()
        raise TransportError(
            f"unexpected status {status}: {_truncate(_body_text(response))}",
            status_code=status,
        )

    def _build_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }


def _body_text(response: Any) -> str:
    text = getattr(response, "text", None)
    if isinstance(text, str):
        return text
    return ""


def _truncate(value: str, *, limit: int = BODY_PREVIEW_LIMIT) -> str:
    if len(value) <= limit:
        return value
    return f"{value[:limit]}...<truncated>"
