"""Unit tests for the rating scales and the RiskRecord invariants."""

import pytest

from grc_advisor.core.models import RiskRecord
from grc_advisor.core.scales import (
    consequence_label,
    likelihood_label,
    maturity_level,
    risk_level,
)


class TestRiskLevel:
    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (30, "Extreme"),
            (20, "Extreme"),
            (19, "High"),
            (12, "High"),
            (11, "Medium"),
            (6, "Medium"),
            (5, "Low"),
            (1, "Low"),
        ],
    )
    def test_breakpoints(self, score: int, expected: str) -> None:
        assert risk_level(score) == expected


class TestMaturityLevel:
    @pytest.mark.parametrize(
        ("score", "expected"),
        [(100, "Strong"), (80, "Strong"), (79, "Moderate"), (60, "Moderate"), (59, "Developing"), (0, "Developing")],
    )
    def test_breakpoints(self, score: int, expected: str) -> None:
        assert maturity_level(score) == expected


class TestScaleLabels:
    def test_labels(self) -> None:
        assert likelihood_label(1) == "Rare"
        assert likelihood_label(5) == "Almost Certain"
        assert consequence_label(6) == "Doomsday"

    def test_off_scale_likelihood_raises(self) -> None:
        with pytest.raises(ValueError, match="likelihood_score"):
            likelihood_label(6)

    def test_off_scale_consequence_raises(self) -> None:
        with pytest.raises(ValueError, match="consequence_score"):
            consequence_label(0)


class TestRiskRecord:
    def test_derived_fields(self) -> None:
        record = RiskRecord(
            id=1,
            risk="Ransomware Attack with Data Loss",
            likelihood_score=5,
            consequence_score=6,
            mitigation="Offline backups",
        )
        assert record.score == 30
        assert record.level == "Extreme"
        assert record.likelihood_label == "Almost Certain"
        assert record.consequence_label == "Doomsday"

    def test_off_scale_ordinal_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            RiskRecord(id=1, risk="Bad", likelihood_score=0, consequence_score=3, mitigation="")
