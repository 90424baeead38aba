"""
Metric models handed to the telemetry sink.

A collection cycle produces MetricRecord objects: one gauge value per
(device, attribute), each carrying the device's DeviceDescriptor labels.
"""

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any

# Label names in exposition order
LABEL_NAMES: tuple[str, ...] = (
    "chargeFullDesign",
    "model",
    "tech",
    "type",
    "serial",
    "voltageMinDesign",
)


def build_fq_name(namespace: str, subsystem: str, name: str) -> str:
    """
    Join metric name parts with underscores, skipping empty parts.

    Example: ("node", "power_supply", "status") -> "node_power_supply_status"
    """
    return "_".join(part for part in (namespace, subsystem, name) if part)


@dataclass(frozen=True)
class DeviceDescriptor:
    """
    Label set shared by every metric of one device.

    Fields are raw attribute text; unreadable attributes are empty strings.
    """

    charge_full_design: str = ""
    model: str = ""
    technology: str = ""
    type: str = ""
    serial: str = ""
    voltage_min_design: str = ""

    def label_values(self) -> tuple[str, ...]:
        """Label values in LABEL_NAMES order."""
        return (
            self.charge_full_design,
            self.model,
            self.technology,
            self.type,
            self.serial,
            self.voltage_min_design,
        )

    def labels(self) -> dict[str, str]:
        """Labels as a name -> value dict."""
        return dict(zip(LABEL_NAMES, self.label_values()))


@dataclass(frozen=True)
class MetricDesc:
    """Gauge metric description (name, help text, label names)."""

    name: str
    help: str
    label_names: tuple[str, ...] = LABEL_NAMES


@dataclass(frozen=True)
class MetricRecord:
    """One gauge sample for one device."""

    desc: MetricDesc
    value: float
    descriptor: DeviceDescriptor
    # Source device directory (routing only, not a label)
    device: Path | None = None

    @property
    def name(self) -> str:
        return self.desc.name

    @property
    def labels(self) -> dict[str, str]:
        return self.descriptor.labels()

    @property
    def device_name(self) -> str:
        return self.device.name if self.device else ""

    def to_json_dict(self) -> dict[str, Any]:
        """Payload for JSON publication."""
        return {"value": self.value, "labels": self.labels}

    def format_text(self) -> str:
        """
        Render in text exposition form.

        Example: node_power_supply_status{chargeFullDesign="",model="X",...} 2
        """
        pairs = ",".join(
            f'{name}="{_escape_label(value)}"'
            for name, value in zip(self.desc.label_names, self.descriptor.label_values())
        )
        return f"{self.desc.name}{{{pairs}}} {format_value(self.value)}"


def _escape_label(value: str) -> str:
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace('"', '\\"')


def format_value(value: float) -> str:
    """Format a sample value; integral floats are printed without a fraction."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
