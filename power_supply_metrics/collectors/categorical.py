"""
Numeric codes for string-valued power supply attributes.

Values come from the kernel power_supply class documentation. A token's
position in its vocabulary is its code; unknown tokens map to 0, the same
code as "Unknown".
"""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType


class CategoricalKind(Enum):
    """Attributes reported as categories."""

    CHARGE_TYPE = "charge_type"
    HEALTH = "health"
    STATUS = "status"


# Order is the code assignment; only append
VOCABULARIES: Mapping[CategoricalKind, tuple[str, ...]] = MappingProxyType(
    {
        CategoricalKind.CHARGE_TYPE: (
            "Unknown",
            "N/A",
            "Trickle",
            "Fast",
        ),
        CategoricalKind.HEALTH: (
            "Unknown",
            "Good",
            "Overheat",
            "Dead",
            "Over voltage",
            "Unspecified failure",
            "Cold",
            "Watchdog timer expire",
            "Safety timer expire",
        ),
        CategoricalKind.STATUS: (
            "Unknown",
            "Charging",
            "Discharging",
            "Not charging",
            "Full",
        ),
    }
)


def make_code_map(tokens: tuple[str, ...]) -> Mapping[str, float]:
    """Build a read-only token -> index map."""
    return MappingProxyType({token: float(i) for i, token in enumerate(tokens)})


_CODE_MAPS: Mapping[CategoricalKind, Mapping[str, float]] = MappingProxyType(
    {kind: make_code_map(tokens) for kind, tokens in VOCABULARIES.items()}
)


def encode(kind: CategoricalKind | str, text: str) -> float:
    """
    Map an attribute value to its numeric code.

    Args:
        kind: Attribute kind (enum member or its value, e.g. "status")
        text: Raw attribute text

    Returns:
        Position of text in the kind's vocabulary, or 0.0 if unknown

    Raises:
        ValueError: If kind is not a categorical attribute
    """
    return _CODE_MAPS[CategoricalKind(kind)].get(text, 0.0)
