"""
Shared metrics configuration for the simple-acl decision engine.
"""

import threading
from typing import Optional

from prometheus_client import Counter, Gauge, Histogram, CollectorRegistry, REGISTRY


class AclMetrics:
    """Prometheus metrics for ACL decisions and registry size."""

    def __init__(self, namespace: str = "simple_acl", registry: Optional[CollectorRegistry] = None):
        self.namespace = namespace
        self.registry = registry

        self.decisions_total = Counter(
            "decisions_total",
            "Total access decisions",
            ["decision", "path"],
            namespace=namespace,
            registry=registry
        )

        self.decision_duration_seconds = Histogram(
            "decision_duration_seconds",
            "Access decision duration in seconds",
            ["path"],
            namespace=namespace,
            registry=registry
        )

        self.rules_registered = Gauge(
            "rules_registered",
            "Number of rules currently registered",
            namespace=namespace,
            registry=registry
        )

    def record_decision(self, allowed: bool, path: str, duration: float) -> None:
        """Record a single access decision."""
        decision = "allow" if allowed else "deny"
        self.decisions_total.labels(decision=decision, path=path).inc()
        self.decision_duration_seconds.labels(path=path).observe(duration)

    def set_rule_count(self, count: int) -> None:
        """Track the registry size."""
        self.rules_registered.set(count)


_metrics: dict = {}
_metrics_lock = threading.Lock()


def get_metrics(namespace: str = "simple_acl") -> AclMetrics:
    """Get the process-wide metrics instance bound to the default registry."""
    with _metrics_lock:
        if namespace not in _metrics:
            _metrics[namespace] = AclMetrics(namespace, registry=REGISTRY)
        return _metrics[namespace]
