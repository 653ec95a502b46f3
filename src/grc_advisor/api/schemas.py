"""Pydantic response models for the GRC Maturity Advisor API.

The request body for every report endpoint is the Profile model itself.
Responses are built from the core result records with
``model_validate(..., from_attributes=True)``.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _Response(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Maturity schemas
# ---------------------------------------------------------------------------


class MaturityResponse(_Response):
    """Six dimension scores plus the weighted overall score."""

    governance: int = Field(..., ge=0, le=100)
    risk: int = Field(..., ge=0, le=100)
    compliance: int = Field(..., ge=0, le=100)
    technical: int = Field(..., ge=0, le=100)
    application: int = Field(..., ge=0, le=100)
    operational: int = Field(..., ge=0, le=100)
    overall: int = Field(..., ge=0, le=100)
    labels: dict[str, str]
    weight_profile: str


class GapResponse(_Response):
    category: str
    severity: str
    description: str


class CertificationGapResponse(_Response):
    framework: str
    message: str


class BenchmarkResponse(_Response):
    """Peer comparison for the profile's industry."""

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
    certification_gaps: list[CertificationGapResponse]


class MaturityReportResponse(_Response):
    """Deterministic maturity findings: scores, gaps and benchmarks."""

    maturity: MaturityResponse
    gaps: list[GapResponse]
    benchmarks: BenchmarkResponse | None


# ---------------------------------------------------------------------------
# Risk schemas
# ---------------------------------------------------------------------------


class RiskResponse(_Response):
    """One ranked entry of the risk register."""

    id: int
    risk: str
    likelihood_score: int = Field(..., ge=1, le=5)
    likelihood_label: str
    consequence_score: int = Field(..., ge=1, le=6)
    consequence_label: str
    score: int = Field(..., ge=1, le=30)
    level: str
    mitigation: str


class RiskMatrixCellResponse(_Response):
    likelihood: int
    likelihood_label: str
    consequence: int
    consequence_label: str
    level: str
    risk_ids: list[int]
    overflow: int


class RiskRegisterResponse(_Response):
    risks: list[RiskResponse]
    risk_matrix: list[RiskMatrixCellResponse]


# ---------------------------------------------------------------------------
# Full report schemas
# ---------------------------------------------------------------------------


class CostRangeResponse(_Response):
    min: float
    max: float


class ResourceNeedsResponse(_Response):
    people: str
    tools: str


class RecommendationResponse(_Response):
    id: int
    title: str
    category: str
    priority: str
    business_impact: str
    steps: list[str]
    estimated_cost: CostRangeResponse
    timeline: str
    resources: ResourceNeedsResponse
    success_metrics: list[str]
    quick_wins: list[str]


class QuantifiedRiskResponse(_Response):
    risk: str
    sle: float
    aro: float
    ale: float
    mitigation_cost: float
    roi: float


class ReportResponse(_Response):
    """The complete advisory report.

    ``fallback_sections`` lists AI sections that were replaced by
    deterministic fallback content.
    """

    executive_summary: str
    recommendations: list[RecommendationResponse]
    compliance_roadmap: str
    maturity: MaturityResponse
    benchmarks: BenchmarkResponse | None
    gaps: list[GapResponse]
    risks: list[RiskResponse]
    quantified_risks: list[QuantifiedRiskResponse]
    governance: dict[str, Any]
    access: dict[str, Any]
    privilege_matrix: list[dict[str, str]]
    compliance: list[dict[str, str]]
    logging: dict[str, str]
    risk_matrix: list[RiskMatrixCellResponse]
    fallback_sections: list[str]
    generated_at: datetime


# ---------------------------------------------------------------------------
# Reference data and status schemas
# ---------------------------------------------------------------------------


class IndustryWeightsResponse(BaseModel):
    """Declared dimension weights and thresholds for one industry."""

    key: str
    weights: dict[str, float]
    thresholds: dict[str, int]
    total_weight: float


class IndustryListResponse(BaseModel):
    items: list[IndustryWeightsResponse]


class AIStatusResponse(BaseModel):
    """Reachability of the Ollama server and the configured model."""

    model_config = ConfigDict(protected_namespaces=())

    model: str
    available: bool
