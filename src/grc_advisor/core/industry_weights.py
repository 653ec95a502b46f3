"""Industry-specific dimension weights and thresholds.

Each industry profile assigns a weight and a target threshold to the six
maturity dimensions. Weights within a profile sum to 1.0 (the uniform default
uses 0.166 per dimension, i.e. 0.996 in total). Regulated industries put more
weight on compliance; SaaS puts more weight on application security.

The table is read-only. Unknown industries resolve to the ``default`` profile.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from grc_advisor.observability import get_logger

logger = get_logger(__name__)

DIMENSIONS: tuple[str, ...] = (
    "governance",
    "risk",
    "compliance",
    "technical",
    "application",
    "operational",
)

DIMENSION_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "governance": "Governance & Strategy",
        "risk": "Risk & Continuity",
        "compliance": "Compliance & Privacy",
        "technical": "Technical Security",
        "application": "App & Data Security",
        "operational": "Operational Security",
    }
)

DEFAULT_PROFILE_KEY: str = "default"
DEFAULT_DIMENSION_WEIGHT: float = 0.166

_EMPTY: Mapping[str, int] = MappingProxyType({})


@dataclass(frozen=True)
class DimensionWeight:
    """Weight and target threshold for one dimension.

    Attributes:
        weight: Share of the overall score, in (0, 1].
        threshold: Target dimension score for the industry, 0-100.
        label: Optional display label overriding DIMENSION_LABELS.
    """

    weight: float
    threshold: int
    label: str | None = None


@dataclass(frozen=True)
class IndustryWeightProfile:
    """Dimension weights plus optional penalty and bonus tables for an industry.

    Attributes:
        key: Industry key this profile is registered under.
        dimensions: Mapping of dimension name to DimensionWeight.
        penalties: Declared penalty points per condition (informational).
        bonuses: Declared bonus points per condition (informational).
    """

    key: str
    dimensions: Mapping[str, DimensionWeight]
    penalties: Mapping[str, int] = field(default_factory=lambda: _EMPTY)
    bonuses: Mapping[str, int] = field(default_factory=lambda: _EMPTY)

    def weight_for(self, dimension: str) -> float:
        """Return the weight for a dimension, falling back to the uniform weight."""
        entry = self.dimensions.get(dimension)
        if entry is None or not entry.weight:
            return DEFAULT_DIMENSION_WEIGHT
        return entry.weight

    def threshold_for(self, dimension: str) -> int:
        """Return the target threshold for a dimension (70 when undeclared)."""
        entry = self.dimensions.get(dimension)
        return entry.threshold if entry is not None else 70

    def total_weight(self) -> float:
        """Sum of the six dimension weights."""
        return sum(self.weight_for(dimension) for dimension in DIMENSIONS)


def _profile(
    key: str,
    weights: dict[str, tuple[float, int]],
    penalties: dict[str, int] | None = None,
    bonuses: dict[str, int] | None = None,
    labelled: bool = False,
) -> IndustryWeightProfile:
    dimensions = {
        dimension: DimensionWeight(
            weight=weight,
            threshold=threshold,
            label=DIMENSION_LABELS[dimension] if labelled else None,
        )
        for dimension, (weight, threshold) in weights.items()
    }
    return IndustryWeightProfile(
        key=key,
        dimensions=MappingProxyType(dimensions),
        penalties=MappingProxyType(penalties or {}),
        bonuses=MappingProxyType(bonuses or {}),
    )


INDUSTRY_WEIGHTS: Mapping[str, IndustryWeightProfile] = MappingProxyType(
    {
        "fintech": _profile(
            "fintech",
            {
                "governance": (0.15, 75),
                "risk": (0.15, 80),
                "compliance": (0.25, 90),
                "technical": (0.15, 85),
                "application": (0.15, 85),
                "operational": (0.15, 80),
            },
            penalties={"no_mfa": -25, "no_encryption": -25, "no_incident_response": -20},
            bonuses={"cert_exists": 10},
            labelled=True,
        ),
        "healthcare": _profile(
            "healthcare",
            {
                "governance": (0.10, 70),
                "risk": (0.15, 80),
                "compliance": (0.30, 95),
                "technical": (0.15, 80),
                "application": (0.15, 85),
                "operational": (0.15, 80),
            },
        ),
        "saas": _profile(
            "saas",
            {
                "governance": (0.10, 70),
                "risk": (0.15, 75),
                "compliance": (0.15, 80),
                "technical": (0.20, 85),
                "application": (0.25, 90),
                "operational": (0.15, 80),
            },
        ),
        DEFAULT_PROFILE_KEY: _profile(
            DEFAULT_PROFILE_KEY,
            {dimension: (DEFAULT_DIMENSION_WEIGHT, 70) for dimension in DIMENSIONS},
            penalties={"no_mfa": -20, "no_backup": -20},
            labelled=True,
        ),
    }
)


def get_weight_profile(industry: str | None) -> IndustryWeightProfile:
    """Look up the weight profile for an industry key.

    Args:
        industry: Industry key from the profile (e.g. 'fintech'). May be empty.

    Returns:
        The matching IndustryWeightProfile, or the default profile when the
        industry is not declared.
    """
    profile = INDUSTRY_WEIGHTS.get(industry or "")
    if profile is None:
        logger.debug("Industry not declared, using default weights", industry=industry)
        return INDUSTRY_WEIGHTS[DEFAULT_PROFILE_KEY]
    return profile
