"""
Metric collectors.
"""

from .base import Collector, CollectorResult
from .power_supply import PowerSupplyCollector

__all__ = [
    "Collector",
    "CollectorResult",
    "PowerSupplyCollector",
]
