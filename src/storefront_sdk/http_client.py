from __future__ import annotations

import json
import logging
import time
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import TransportError

logger = logging.getLogger(__name__)

TRACE_HEADER = "X-Trace-ID"
TRACE_HEADER_ALIASES = (TRACE_HEADER, "X-Trace-Id", "X-Request-ID")
RETRYABLE_METHODS = frozenset({"GET", "HEAD"})

Payload = dict[str, Any] | list[Any] | None


@dataclass
class TraceContext:
    trace_id: str | None = None

    def ensure(self) -> str:
        if not self.trace_id:
            self.trace_id = str(uuid.uuid4())
        return self.trace_id

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        for key in TRACE_HEADER_ALIASES:
            trace_id = headers.get(key)
            if trace_id:
                self.trace_id = trace_id
                return

    def update_from_payload(self, payload: Mapping[str, object]) -> None:
        trace_id = payload.get("trace_id")
        if isinstance(trace_id, str) and trace_id:
            self.trace_id = trace_id


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str
    trace_id: str | None


def unwrap_data(payload: Payload) -> Any:
    """Strip the ``{"data": ...}`` envelope the store API puts on every body."""
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


def unwrap_rows(payload: Payload) -> list[dict[str, Any]]:
    data = unwrap_data(payload)
    if isinstance(data, dict):
        data = data.get("rows", [])
    if not isinstance(data, list):
        return []
    return [row for row in data if isinstance(row, dict)]


@dataclass
class ResponseCache:
    """Short-lived GET responses keyed by url, params and caller identity."""

    ttl_seconds: float = 3.0
    entries: dict[str, tuple[float, Payload]] = field(default_factory=dict)

    @staticmethod
    def key_for(url: str, headers: Mapping[str, str], params: Mapping[str, Any] | None) -> str:
        identity = headers.get("Authorization")
        return json.dumps({"url": url, "auth": identity, "params": dict(params or {})}, sort_keys=True)

    def get(self, key: str) -> Payload:
        entry = self.entries.get(key)
        if entry is None:
            return None
        expires_at, payload = entry
        if time.monotonic() >= expires_at:
            del self.entries[key]
            return None
        return payload

    def put(self, key: str, payload: Payload) -> None:
        self.entries[key] = (time.monotonic() + self.ttl_seconds, payload)

    def invalidate(self, paths: list[str]) -> None:
        for key in [key for key in self.entries if any(path in key for path in paths)]:
            del self.entries[key]

    def clear(self) -> None:
        self.entries.clear()


@dataclass
class HttpClient:
    """JSON-over-HTTP transport shared by every client of one session.

    GET requests are retried on transport errors and 5xx responses with
    exponential backoff; mutations are sent once. A request tagged with
    ``context_key`` is dropped with a ``REQUEST_CANCELLED`` transport error when
    :meth:`switch_context` has moved that key on, either before it is sent or
    once its response is back.
    """

    config: ClientConfig
    trace: TraceContext | None = None
    session: requests.Session | None = None
    last_operation: LastOperation | None = None
    cache: ResponseCache = field(init=False, default_factory=ResponseCache)
    context_versions: dict[str, int] = field(init=False, default_factory=dict)

    def __post_init__(self) -> None:
        self.trace = self.trace or TraceContext()
        if self.session is None:
            pool = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session = requests.Session()
            self.session.mount("http://", pool)
            self.session.mount("https://", pool)

    def url_for(self, path: str) -> str:
        return urljoin(self.config.api_base_url.rstrip("/") + "/", path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
        use_get_cache: bool = True,
        context_key: str | None = None,
        context_version: int | None = None,
        invalidate_paths: list[str] | None = None,
    ) -> Payload:
        verb = method.upper()
        url = self.url_for(path)
        send_headers = {"Accept": "application/json", **(headers or {}), TRACE_HEADER: self.trace.ensure()}

        cache_key = None
        if verb == "GET" and use_get_cache:
            cache_key = ResponseCache.key_for(url, send_headers, params)
            cached = self.cache.get(cache_key)
            if cached is not None:
                self.last_operation = LastOperation(module, operation, 0, "success(cache)", self.trace.trace_id)
                return cached

        if context_key and context_version is None:
            context_version = self.get_context_version(context_key)
        self._ensure_current(context_key, context_version, "Request cancelled before dispatch")

        started = time.monotonic()
        attempts = self.config.retries + 1 if verb in RETRYABLE_METHODS else 1
        try:
            response = self._send(verb, url, path, send_headers, json_body, params, files, attempts)
        except TransportError:
            self._record(module, operation, started, "error")
            raise

        self._ensure_current(context_key, context_version, "Request cancelled due to context switch")
        self.trace.update_from_headers(response.headers)

        if not response.ok:
            self._record(module, operation, started, "error")
            raise self._error_from(response)

        if verb != "GET":
            self.cache.invalidate(invalidate_paths or [path])
        body = response.json() if response.content else None
        if cache_key and body is not None:
            self.cache.put(cache_key, body)
        self._record(module, operation, started, "success")
        return body

    def _send(
        self,
        verb: str,
        url: str,
        path: str,
        headers: dict[str, str],
        json_body: dict[str, Any] | None,
        params: dict[str, Any] | None,
        files: dict[str, Any] | None,
        attempts: int,
    ) -> requests.Response:
        # multipart bodies carry their plain fields as form data
        body_kwargs = {"data": json_body, "files": files} if files is not None else {"json": json_body}
        for attempt in range(1, attempts + 1):
            last_attempt = attempt == attempts
            try:
                response = self.session.request(
                    method=verb,
                    url=url,
                    headers=headers,
                    params=params,
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                    **body_kwargs,
                )
            except requests.RequestException as exc:
                logger.warning("http_transport_error", extra={"method": verb, "path": path, "attempt": attempt})
                if last_attempt:
                    raise TransportError(
                        code="TRANSPORT_ERROR",
                        message=str(exc),
                        details={"type": type(exc).__name__},
                        trace_id=self.trace.trace_id,
                        status_code=0,
                    ) from exc
            else:
                if response.status_code < 500 or last_attempt:
                    return response
                logger.info("http_retry", extra={"method": verb, "path": path, "status": response.status_code})
            time.sleep(self.config.retry_backoff_seconds * (2 ** (attempt - 1)))
        raise RuntimeError("retry loop exited without a response")

    def _error_from(self, response: requests.Response) -> Exception:
        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text}
        if not isinstance(payload, dict):
            payload = {}
        self.trace.update_from_payload(payload)
        return map_error(response.status_code, payload, self.trace.trace_id)

    # context versions

    def switch_context(self, context_key: str) -> int:
        version = self.get_context_version(context_key) + 1
        self.context_versions[context_key] = version
        self.cache.clear()
        return version

    def get_context_version(self, context_key: str) -> int:
        return self.context_versions.get(context_key, 0)

    def _ensure_current(self, context_key: str | None, context_version: int | None, message: str) -> None:
        if not context_key or context_version is None:
            return
        if self.get_context_version(context_key) != context_version:
            raise TransportError(
                code="REQUEST_CANCELLED",
                message=message,
                details={"type": "context_switched", "context": context_key},
                trace_id=self.trace.trace_id,
                status_code=0,
            )

    def _record(self, module: str, operation: str, started: float, result: str) -> None:
        elapsed_ms = int((time.monotonic() - started) * 1000)
        self.last_operation = LastOperation(module, operation, elapsed_ms, result, self.trace.trace_id)
