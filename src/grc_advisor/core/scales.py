"""Static rating scales used by the risk register and the maturity report.

Likelihood is a 1-5 ordinal and consequence a 1-6 ordinal; a risk score is
their product (1-30). Risk levels bucket that product:

    score >= 20 -> Extreme
    score >= 12 -> High
    score >= 6  -> Medium
    otherwise   -> Low

Maturity levels bucket a 0-100 maturity score:

    80-100 -> Strong
    60-79  -> Moderate
    0-59   -> Developing
"""

from types import MappingProxyType
from typing import Mapping

LIKELIHOOD_SCALE: Mapping[int, str] = MappingProxyType(
    {
        1: "Rare",
        2: "Unlikely",
        3: "Possible",
        4: "Likely",
        5: "Almost Certain",
    }
)

CONSEQUENCE_SCALE: Mapping[int, str] = MappingProxyType(
    {
        1: "Insignificant",
        2: "Minor",
        3: "Moderate",
        4: "Major",
        5: "Catastrophic",
        6: "Doomsday",
    }
)

# Inclusive lower bounds, highest first
RISK_LEVEL_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (20, "Extreme"),
    (12, "High"),
    (6, "Medium"),
)

_MATURITY_LEVEL_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (80, "Strong"),
    (60, "Moderate"),
)


def likelihood_label(likelihood_score: int) -> str:
    """Return the label for a 1-5 likelihood ordinal.

    Raises:
        ValueError: If the ordinal is not on the scale.
    """
    try:
        return LIKELIHOOD_SCALE[likelihood_score]
    except KeyError:
        raise ValueError(
            f"likelihood_score must be between 1 and 5, got {likelihood_score!r}"
        ) from None


def consequence_label(consequence_score: int) -> str:
    """Return the label for a 1-6 consequence ordinal.

    Raises:
        ValueError: If the ordinal is not on the scale.
    """
    try:
        return CONSEQUENCE_SCALE[consequence_score]
    except KeyError:
        raise ValueError(
            f"consequence_score must be between 1 and 6, got {consequence_score!r}"
        ) from None


def risk_level(score: int) -> str:
    """Map a likelihood x consequence product to a risk level."""
    for threshold, level in RISK_LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return "Low"


def maturity_level(score: float) -> str:
    """Map a 0-100 maturity score to Strong / Moderate / Developing."""
    for threshold, level in _MATURITY_LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return "Developing"
