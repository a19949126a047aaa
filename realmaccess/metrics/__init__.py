"""
Metrics collection for realmaccess.
"""

from .collector import MetricConfig, DecisionMetrics

__all__ = [
    "MetricConfig",
    "DecisionMetrics",
]
