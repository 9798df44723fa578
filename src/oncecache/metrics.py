"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Counter sinks for fetcher observability.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from prometheus_client import CollectorRegistry

HITS = "oncecache_hits"
MISSES = "oncecache_misses"
LOADS = "oncecache_loads"
COALESCED = "oncecache_coalesced"
# Counts every failed producer run, including aborted (cancelled) runs.
FAILURES = "oncecache_failures"


class FetcherMetrics(Protocol):
    """Minimal metrics interface for fetcher instrumentation."""

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        """Increment a counter metric."""


class NoOpFetcherMetrics:
    """Default metrics sink when no metrics backend is provided."""

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        _ = name
        _ = value
        _ = tags


class PrometheusFetcherMetrics(FetcherMetrics):
    """
    Prometheus-backed fetcher metrics adapter.

    Requires `prometheus_client` package. Pass a dedicated `registry` to keep
    counters out of the process-wide default registry.
    """

    def __init__(
        self,
        *,
        namespace: str = "",
        registry: CollectorRegistry | None = None,
    ) -> None:
        try:
            from prometheus_client import REGISTRY, Counter
        except ModuleNotFoundError as exc:  # pragma: no cover
            raise RuntimeError(
                "PrometheusFetcherMetrics requires `prometheus_client` to be installed."
            ) from exc

        self._Counter = Counter
        self._namespace = namespace
        self._registry = registry if registry is not None else REGISTRY
        self._counters: dict[str, object] = {}

    def incr(self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None) -> None:
        label_names = tuple(sorted((tags or {}).keys()))
        key = f"{name}|{','.join(label_names)}"
        counter = self._counters.get(key)
        if counter is None:
            counter = self._Counter(
                name=name,
                documentation=f"oncecache metric {name}",
                namespace=self._namespace,
                labelnames=label_names,
                registry=self._registry,
            )
            self._counters[key] = counter

        if label_names:
            label_values = [str((tags or {})[label]) for label in label_names]
            counter.labels(*label_values).inc(value)
        else:
            counter.inc(value)
