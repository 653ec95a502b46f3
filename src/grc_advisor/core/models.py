"""Result records produced by the scoring, gap, risk and report components.

All records except Report are frozen. RiskRecord derives its labels, score
and level from the two ordinals at construction time; they cannot be passed
in, so ``score == likelihood_score * consequence_score`` always holds.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping

from grc_advisor.core.scales import consequence_label, likelihood_label, risk_level


@dataclass(frozen=True)
class MaturityResult:
    """Six dimension scores plus the weighted overall score.

    Attributes:
        governance: Governance & Strategy score, 0-100.
        risk: Risk & Continuity score, 0-100.
        compliance: Compliance & Privacy score, 0-100.
        technical: Technical Security score, 0-100.
        application: App & Data Security score, 0-100.
        operational: Operational Security score, 0-100.
        overall: Weighted, penalised and clamped overall score, 0-100.
        labels: Display label per dimension.
        weight_profile: Key of the industry weight profile that was applied.
    """

    governance: int
    risk: int
    compliance: int
    technical: int
    application: int
    operational: int
    overall: int
    labels: Mapping[str, str]
    weight_profile: str

    def dimension_scores(self) -> dict[str, int]:
        """Return the six dimension scores keyed by dimension name."""
        return {
            "governance": self.governance,
            "risk": self.risk,
            "compliance": self.compliance,
            "technical": self.technical,
            "application": self.application,
            "operational": self.operational,
        }


@dataclass(frozen=True)
class Gap:
    """A categorised, severity-tagged control gap.

    Attributes:
        category: Dimension display name (e.g. 'Application').
        severity: 'Critical', 'High' or 'Medium'.
        description: Human-readable finding.
    """

    category: str
    severity: str
    description: str


@dataclass(frozen=True)
class RiskRecord:
    """An entry in the risk register."""

    id: int
    risk: str
    likelihood_score: int
    consequence_score: int
    mitigation: str
    likelihood_label: str = field(init=False)
    consequence_label: str = field(init=False)
    score: int = field(init=False)
    level: str = field(init=False)

    def __post_init__(self) -> None:
        score = self.likelihood_score * self.consequence_score
        object.__setattr__(self, "likelihood_label", likelihood_label(self.likelihood_score))
        object.__setattr__(self, "consequence_label", consequence_label(self.consequence_score))
        object.__setattr__(self, "score", score)
        object.__setattr__(self, "level", risk_level(score))


@dataclass(frozen=True)
class CostRange:
    """Estimated cost range in USD."""

    min: float
    max: float


@dataclass(frozen=True)
class ResourceNeeds:
    """People and tooling needed to implement a recommendation."""

    people: str
    tools: str


@dataclass(frozen=True)
class Recommendation:
    """An actionable remediation recommendation.

    Attributes:
        id: 1-based position in the recommendation list.
        title: Action-oriented title.
        category: Control category or dimension.
        priority: 'Critical', 'High', 'Medium' or 'Low'.
        business_impact: Why the action matters.
        steps: Ordered implementation steps.
        estimated_cost: Cost range in USD.
        timeline: Expected duration (e.g. '4-8 weeks').
        resources: People and tools required.
        success_metrics: How completion is measured.
        quick_wins: Immediate actions.
    """

    id: int
    title: str
    category: str
    priority: str
    business_impact: str
    steps: list[str]
    estimated_cost: CostRange
    timeline: str
    resources: ResourceNeeds
    success_metrics: list[str]
    quick_wins: list[str]


@dataclass(frozen=True)
class QuantifiedRisk:
    """Financial exposure estimate for one risk scenario.

    Attributes:
        risk: Risk name matching a RiskRecord.risk.
        sle: Single Loss Expectancy (USD).
        aro: Annual Rate of Occurrence.
        ale: Annual Loss Expectancy (USD), SLE x ARO.
        mitigation_cost: Estimated mitigation cost (USD).
        roi: Return on mitigation investment (percent).
    """

    risk: str
    sle: float = 0.0
    aro: float = 0.0
    ale: float = 0.0
    mitigation_cost: float = 0.0
    roi: float = 0.0


@dataclass(frozen=True)
class CertificationGap:
    """An expected certification the organisation does not hold."""

    framework: str
    message: str


@dataclass(frozen=True)
class BenchmarkComparison:
    """Industry peer comparison for the overall score, budget and team size."""

    industry: str
    your_score: int
    industry_average: int
    score_delta: int
    percentile: float
    percentile_label: str
    comparison: str
    your_budget: float
    expected_budget: float
    budget_status: str
    your_team_size: int
    expected_team_size: float
    team_status: str
    certification_gaps: list[CertificationGap]


@dataclass(frozen=True)
class MaturityAssessment:
    """Deterministic maturity findings for a profile, without AI text."""

    maturity: MaturityResult
    gaps: list[Gap]
    benchmarks: BenchmarkComparison | None


@dataclass(frozen=True)
class RiskRegister:
    """Ranked risk register with its likelihood x consequence matrix."""

    risks: list[RiskRecord]
    risk_matrix: list[dict[str, Any]]


@dataclass
class Report:
    """The assembled advisory report returned to the presentation layer."""

    executive_summary: str
    recommendations: list[Recommendation]
    compliance_roadmap: str
    maturity: MaturityResult
    benchmarks: BenchmarkComparison | None
    gaps: list[Gap]
    risks: list[RiskRecord]
    quantified_risks: list[QuantifiedRisk]
    governance: dict[str, Any]
    access: dict[str, Any]
    privilege_matrix: list[dict[str, str]]
    compliance: list[dict[str, str]]
    logging: dict[str, str]
    risk_matrix: list[dict[str, Any]]
    fallback_sections: list[str] = field(default_factory=list)
    generated_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))
