"""
Tests for categorical attribute codes.
"""

import pytest

from power_supply_metrics.collectors.categorical import VOCABULARIES, CategoricalKind, encode


@pytest.mark.parametrize("kind", list(CategoricalKind))
def test_known_tokens_encode_to_position(kind: CategoricalKind) -> None:
    for position, token in enumerate(VOCABULARIES[kind]):
        assert encode(kind, token) == position


def test_status_codes() -> None:
    assert encode(CategoricalKind.STATUS, "Charging") == 1
    assert encode(CategoricalKind.STATUS, "Discharging") == 2
    assert encode(CategoricalKind.STATUS, "Full") == 4


def test_health_codes() -> None:
    assert encode("health", "Over voltage") == 4
    assert encode("health", "Safety timer expire") == 8


def test_charge_type_codes() -> None:
    assert encode("charge_type", "N/A") == 1
    assert encode("charge_type", "Fast") == 3


@pytest.mark.parametrize("text", ["", "charging", "Bogus", "Full ", "Standard"])
def test_unknown_tokens_encode_to_zero(text: str) -> None:
    for kind in CategoricalKind:
        assert encode(kind, text) == 0
        assert encode(kind, text) == encode(kind, VOCABULARIES[kind][0])


def test_first_entry_is_unknown() -> None:
    for tokens in VOCABULARIES.values():
        assert tokens[0] == "Unknown"


def test_unknown_kind() -> None:
    with pytest.raises(ValueError):
        encode("technology", "Li-ion")


def test_vocabularies_are_read_only() -> None:
    with pytest.raises(TypeError):
        VOCABULARIES[CategoricalKind.STATUS] = ("Unknown",)  # type: ignore[index]
