"""BenchmarkComparator adapter for industry peer comparison.

Compares an organisation's overall maturity score, security budget and
security headcount against per-industry reference figures, estimates its
percentile position among peers, and lists certifications that peers in the
industry are expected to hold but the organisation does not.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from grc_advisor.core.models import BenchmarkComparison, CertificationGap
from grc_advisor.core.profile import Profile
from grc_advisor.observability import get_logger

logger = get_logger(__name__)

# Ratio of actual to expected below which budget/team is flagged
UNDER_RESOURCED_RATIO: float = 0.75
SEVERELY_UNDER_RESOURCED_RATIO: float = 0.40

CERTIFICATION_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "iso27001": "ISO 27001",
        "soc2": "SOC 2 Type II",
        "pci_dss": "PCI-DSS",
        "hipaa": "HIPAA",
        "gdpr": "GDPR / CCPA",
        "nist": "NIST CSF",
    }
)


@dataclass(frozen=True)
class IndustryBenchmark:
    """Reference figures for one industry.

    Attributes:
        average_score: Mean overall maturity score of peers.
        p25_score: 25th percentile overall score.
        p50_score: Median overall score.
        p75_score: 75th percentile overall score.
        budget_per_employee: Expected annual security spend per employee (USD).
        security_fte_per_100: Expected security staff per 100 employees.
        expected_certifications: Certifications peers commonly hold.
    """

    average_score: int
    p25_score: float
    p50_score: float
    p75_score: float
    budget_per_employee: float
    security_fte_per_100: float
    expected_certifications: tuple[str, ...]


INDUSTRY_BENCHMARKS: Mapping[str, IndustryBenchmark] = MappingProxyType(
    {
        "fintech": IndustryBenchmark(
            average_score=72,
            p25_score=58.0,
            p50_score=72.0,
            p75_score=84.0,
            budget_per_employee=2500.0,
            security_fte_per_100=3.0,
            expected_certifications=("soc2", "pci_dss", "iso27001"),
        ),
        "healthcare": IndustryBenchmark(
            average_score=68,
            p25_score=54.0,
            p50_score=68.0,
            p75_score=80.0,
            budget_per_employee=1800.0,
            security_fte_per_100=2.0,
            expected_certifications=("hipaa",),
        ),
        "saas": IndustryBenchmark(
            average_score=65,
            p25_score=50.0,
            p50_score=65.0,
            p75_score=78.0,
            budget_per_employee=1500.0,
            security_fte_per_100=2.0,
            expected_certifications=("soc2",),
        ),
        "default": IndustryBenchmark(
            average_score=60,
            p25_score=45.0,
            p50_score=60.0,
            p75_score=72.0,
            budget_per_employee=1000.0,
            security_fte_per_100=1.0,
            expected_certifications=(),
        ),
    }
)


class BenchmarkComparator:
    """Industry peer comparison for a scored profile.

    Args:
        benchmarks: Optional per-industry reference table. Defaults to
            INDUSTRY_BENCHMARKS; must contain a 'default' entry.
    """

    def __init__(self, benchmarks: Mapping[str, IndustryBenchmark] | None = None) -> None:
        self._benchmarks = benchmarks if benchmarks is not None else INDUSTRY_BENCHMARKS

    def compare(self, profile: Profile, overall_score: int) -> BenchmarkComparison:
        """Compare a profile and its overall score against industry peers.

        Args:
            profile: Questionnaire profile.
            overall_score: Overall maturity score (0-100).

        Returns:
            BenchmarkComparison with score delta, percentile, budget and team
            status, and certification gaps.
        """
        industry = profile.industry if profile.industry in self._benchmarks else "default"
        benchmark = self._benchmarks[industry]

        percentile = self._interpolate_percentile(overall_score, benchmark)
        expected_budget = round(benchmark.budget_per_employee * profile.employees, 2)
        expected_team = round(benchmark.security_fte_per_100 * profile.employees / 100.0, 1)

        comparison = BenchmarkComparison(
            industry=industry,
            your_score=overall_score,
            industry_average=benchmark.average_score,
            score_delta=overall_score - benchmark.average_score,
            percentile=percentile,
            percentile_label=self._percentile_label(percentile),
            comparison=self._comparison_text(percentile, industry),
            your_budget=profile.security_budget,
            expected_budget=expected_budget,
            budget_status=self._resource_status(
                profile.security_budget, expected_budget, "Underfunded"
            ),
            your_team_size=profile.security_team_size,
            expected_team_size=expected_team,
            team_status=self._resource_status(
                profile.security_team_size, expected_team, "Understaffed"
            ),
            certification_gaps=self._certification_gaps(profile, benchmark),
        )

        logger.info(
            "Benchmark comparison computed",
            industry=industry,
            score_delta=comparison.score_delta,
            percentile=percentile,
            certification_gap_count=len(comparison.certification_gaps),
        )
        return comparison

    def _interpolate_percentile(self, score: float, benchmark: IndustryBenchmark) -> float:
        """Estimate the percentile by linear interpolation between p25/p50/p75.

        Args:
            score: Overall score (0-100).
            benchmark: Industry reference figures.

        Returns:
            Estimated percentile in range 0.0-100.0.
        """
        p25, p50, p75 = benchmark.p25_score, benchmark.p50_score, benchmark.p75_score

        if score <= p25:
            if p25 == 0.0:
                return 0.0
            return round(max(score, 0.0) / p25 * 25.0, 1)
        if score <= p50:
            if p50 == p25:
                return 25.0
            return round(25.0 + (score - p25) / (p50 - p25) * 25.0, 1)
        if score <= p75:
            if p75 == p50:
                return 50.0
            return round(50.0 + (score - p50) / (p75 - p50) * 25.0, 1)
        if p75 >= 100.0:
            return 100.0
        fraction = min((score - p75) / (100.0 - p75), 1.0)
        return round(75.0 + fraction * 25.0, 1)

    def _percentile_label(self, percentile: float) -> str:
        if percentile >= 75.0:
            return "Top Quartile"
        if percentile >= 50.0:
            return "Above Median"
        if percentile >= 25.0:
            return "Below Median"
        return "Bottom Quartile"

    def _comparison_text(self, percentile: float, industry: str) -> str:
        peers = "all industries" if industry == "default" else f"{industry} peers"
        return f"Better than {percentile:.0f}% of {peers}"

    def _resource_status(self, actual: float, expected: float, shortfall: str) -> str:
        """Classify actual vs expected resourcing."""
        if expected <= 0:
            return "Adequate"
        ratio = actual / expected
        if ratio < SEVERELY_UNDER_RESOURCED_RATIO:
            return f"Severely {shortfall}"
        if ratio < UNDER_RESOURCED_RATIO:
            return shortfall
        return "Adequate"

    def _certification_gaps(
        self,
        profile: Profile,
        benchmark: IndustryBenchmark,
    ) -> list[CertificationGap]:
        return [
            CertificationGap(
                framework=framework,
                message=(
                    f"{CERTIFICATION_LABELS.get(framework, framework)} is expected "
                    "for organisations in your industry but is not in place."
                ),
            )
            for framework in benchmark.expected_certifications
            if not profile.has_framework(framework)
        ]
