"""
Tests for metric records.
"""

from pathlib import Path

import pytest

from power_supply_metrics.models.metric import (
    LABEL_NAMES,
    DeviceDescriptor,
    MetricDesc,
    MetricRecord,
    build_fq_name,
    format_value,
)


def test_build_fq_name() -> None:
    assert build_fq_name("node", "power_supply", "status") == "node_power_supply_status"
    assert build_fq_name("", "power_supply", "status") == "power_supply_status"
    assert build_fq_name("node", "", "status") == "node_status"


def test_descriptor_labels() -> None:
    descriptor = DeviceDescriptor("5800000", "5B10W13930", "Li-poly", "Battery", "1234", "11520000")

    assert descriptor.labels() == {
        "chargeFullDesign": "5800000",
        "model": "5B10W13930",
        "tech": "Li-poly",
        "type": "Battery",
        "serial": "1234",
        "voltageMinDesign": "11520000",
    }
    assert list(descriptor.labels()) == list(LABEL_NAMES)


def test_record_json_payload() -> None:
    record = MetricRecord(
        desc=MetricDesc("node_power_supply_online", "Device online."),
        value=1.0,
        descriptor=DeviceDescriptor(type="Mains"),
        device=Path("/sys/class/power_supply/AC0"),
    )

    assert record.device_name == "AC0"
    assert record.to_json_dict() == {
        "value": 1.0,
        "labels": {
            "chargeFullDesign": "",
            "model": "",
            "tech": "",
            "type": "Mains",
            "serial": "",
            "voltageMinDesign": "",
        },
    }


def test_record_format_text() -> None:
    record = MetricRecord(
        desc=MetricDesc("node_power_supply_status", "Status."),
        value=2.0,
        descriptor=DeviceDescriptor(model='Say "hi"\\', serial="a\nb"),
    )

    assert record.format_text() == (
        'node_power_supply_status{chargeFullDesign="",model="Say \\"hi\\"\\\\",'
        'tech="",type="",serial="a\\nb",voltageMinDesign=""} 2'
    )


@pytest.mark.parametrize(
    "value, text",
    [
        (0.0, "0"),
        (12211000.0, "12211000"),
        (-1452000.0, "-1452000"),
        (0.5, "0.5"),
        (float("nan"), "NaN"),
        (float("inf"), "+Inf"),
        (float("-inf"), "-Inf"),
    ],
)
def test_format_value(value: float, text: str) -> None:
    assert format_value(value) == text


def test_records_are_immutable() -> None:
    record = MetricRecord(MetricDesc("x", "x"), 0.0, DeviceDescriptor())

    with pytest.raises(AttributeError):
        record.value = 1.0  # type: ignore[misc]
