"""
Prometheus metrics for the extraction and query pipeline.

Collectors are looked up by name before they are created, so importing this
module twice (module reloads, several test sessions in one process) reuses
the registered collectors instead of failing registration.
"""

from __future__ import annotations

from typing import Any, Dict, Sequence, Type

from prometheus_client import REGISTRY, Counter, Histogram


def _registered(metric_cls: Type[Any], name: str, documentation: str, labelnames: Sequence[str] = ()) -> Any:
    """Collector ``name`` from the default registry, created on first use."""
    collector = REGISTRY._names_to_collectors.get(name)
    if collector is not None:
        return collector
    try:
        return metric_cls(name, documentation, labelnames)
    except ValueError:
        # Another import registered it between the lookup and the creation.
        return REGISTRY._names_to_collectors[name]


def _create_metrics() -> Dict[str, Any]:
    return {
        "extractions": _registered(
            Counter,
            "articlelens_extractions_total",
            "Extraction passes by outcome (candidate, fallback, empty)",
            ["outcome"],
        ),
        "extraction_duration_seconds": _registered(
            Histogram,
            "articlelens_extraction_duration_seconds",
            "Time spent scoring candidate regions for one document",
        ),
        "queries": _registered(
            Counter,
            "articlelens_queries_total",
            "User queries by intent and outcome",
            ["intent", "outcome"],
        ),
        "generation_duration_seconds": _registered(
            Histogram,
            "articlelens_generation_duration_seconds",
            "Latency of text-generation requests",
            ["model"],
        ),
    }


METRICS: Dict[str, Any] = _create_metrics()
