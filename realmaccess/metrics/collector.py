"""
Prometheus metrics for access decisions.

Counts every decision made through the access service by operation and
outcome. Each collector owns its registry, so several services in one
process do not collide.
"""

import logging
from dataclasses import dataclass

from prometheus_client import CollectorRegistry, Counter, generate_latest, CONTENT_TYPE_LATEST


logger = logging.getLogger(__name__)


@dataclass
class MetricConfig:
    """Configuration for metrics collection."""

    enabled: bool = True
    namespace: str = "realmaccess"


class DecisionMetrics:
    """Metrics collector for access decisions."""

    def __init__(self, config: MetricConfig = None):
        """
        Initialize metrics collector.

        Args:
            config: Metrics configuration
        """
        self.config = config or MetricConfig()
        self.registry = CollectorRegistry()

        self.decisions = Counter(
            f'{self.config.namespace}_decisions_total',
            'Total number of access decisions',
            ['operation', 'allowed'],
            registry=self.registry
        )

        logger.info("Decision metrics collector initialized")

    def record(self, operation: str, allowed: bool) -> None:
        """Record one decision."""
        if not self.config.enabled:
            return
        self.decisions.labels(operation=operation, allowed=str(bool(allowed)).lower()).inc()

    def count(self, operation: str, allowed: bool) -> float:
        """Current count for an operation and outcome."""
        value = self.registry.get_sample_value(
            f'{self.config.namespace}_decisions_total',
            {'operation': operation, 'allowed': str(bool(allowed)).lower()},
        )
        return value or 0.0

    def get_metrics(self) -> str:
        """Get metrics in Prometheus text format."""
        return generate_latest(self.registry).decode('utf-8')

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE_LATEST
