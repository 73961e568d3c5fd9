# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

STORE_LATENCY = Histogram(
    "files_manager_store_call_seconds",
    "Latency of backing store calls",
    labelnames=("store", "operation"),
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)
STORE_FAILURES = Counter(
    "files_manager_store_failures_total",
    "Backing store calls that failed with a connectivity fault",
    labelnames=("store", "operation"),
)
AUTH_EVENTS = Counter(
    "files_manager_auth_events_total",
    "Sign-in and sign-out outcomes",
    labelnames=("event", "outcome"),
)


@contextmanager
def track_store_call(store: str, operation: str, *, enabled: bool = True) -> Iterator[None]:
    if not enabled:
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        STORE_LATENCY.labels(store=store, operation=operation).observe(
            time.perf_counter() - start
        )


def record_store_failure(store: str, operation: str) -> None:
    STORE_FAILURES.labels(store=store, operation=operation).inc()


def record_auth_event(event: str, outcome: str) -> None:
    AUTH_EVENTS.labels(event=event, outcome=outcome).inc()


def render_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST


__all__ = [
    "AUTH_EVENTS",
    "STORE_FAILURES",
    "STORE_LATENCY",
    "record_auth_event",
    "record_store_failure",
    "render_metrics",
    "track_store_call",
]
