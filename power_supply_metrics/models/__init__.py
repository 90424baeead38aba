"""
Data models for metric records.
"""

from .metric import LABEL_NAMES, DeviceDescriptor, MetricDesc, MetricRecord, build_fq_name

__all__ = [
    "LABEL_NAMES",
    "DeviceDescriptor",
    "MetricDesc",
    "MetricRecord",
    "build_fq_name",
]
