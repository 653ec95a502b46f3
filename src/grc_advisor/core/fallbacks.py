"""Deterministic fallbacks for the AI-written report sections.

Used by ReportAssembler when the text generation service fails. Each fallback
has the same output shape as its AI counterpart and uses only data already
computed for the report. None of them can fail for a valid Profile.

Markdown sections are rendered from the Jinja2 templates packaged under
``grc_advisor/templates``.
"""

from jinja2 import Environment, PackageLoader

from grc_advisor.core.models import (
    CostRange,
    Gap,
    MaturityResult,
    QuantifiedRisk,
    Recommendation,
    ResourceNeeds,
    RiskRecord,
)
from grc_advisor.core.profile import Profile
from grc_advisor.core.scales import maturity_level

DEFAULT_RECOMMENDATION_LIMIT: int = 10

_DEFAULT_PRIORITY_ACTIONS: tuple[str, ...] = (
    "Improve overall security posture",
    "Enhance compliance documentation",
    "Implement missing technical controls",
)

_GENERIC_STEPS: tuple[str, ...] = (
    "Assess current state",
    "Design solution",
    "Implement controls",
    "Verify effectiveness",
)

_templates = Environment(
    loader=PackageLoader("grc_advisor", "templates"),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
)


def fallback_summary(profile: Profile, maturity: MaturityResult, gaps: list[Gap]) -> str:
    """Render a templated executive summary from the maturity result and gaps.

    The three priority actions are the first three critical gap descriptions,
    padded with generic actions when fewer critical gaps exist.
    """
    critical_gaps = [gap for gap in gaps if gap.severity == "Critical"]
    priority_actions = [
        critical_gaps[index].description if index < len(critical_gaps) else default
        for index, default in enumerate(_DEFAULT_PRIORITY_ACTIONS)
    ]

    return _templates.get_template("executive_summary.md.j2").render(
        name=profile.name,
        overall=maturity.overall,
        critical_gap_count=len(critical_gaps),
        level=maturity_level(maturity.overall),
        industry=profile.industry or "Not specified",
        employees=profile.employees,
        priority_actions=priority_actions,
    )


def fallback_recommendations(
    gaps: list[Gap],
    limit: int = DEFAULT_RECOMMENDATION_LIMIT,
) -> list[Recommendation]:
    """Turn the first ``limit`` gaps into generic remediation recommendations."""
    return [
        Recommendation(
            id=index,
            title=f"Address {gap.category} Gap",
            category=gap.category,
            priority=gap.severity,
            business_impact=gap.description,
            steps=list(_GENERIC_STEPS),
            estimated_cost=CostRange(min=5000, max=25000),
            timeline="4-8 weeks",
            resources=ResourceNeeds(
                people="1 FTE for 4 weeks",
                tools="TBD based on specific solution",
            ),
            success_metrics=["Gap closed", "Risk reduced"],
            quick_wins=[],
        )
        for index, gap in enumerate(gaps[:limit], start=1)
    ]


def fallback_roadmap(profile: Profile) -> str:
    """Render a templated compliance roadmap from industry and data types."""
    industry = profile.industry or "general"
    frameworks = [
        {"name": "ISO 27001", "description": "Information Security Management System"},
        {"name": "SOC 2 Type II", "description": f"Trust Service Criteria for {industry}"},
    ]
    if profile.handles_data("pii"):
        frameworks.append({"name": "GDPR/CCPA", "description": "Privacy regulations (REQUIRED)"})
    if profile.handles_data("financial"):
        frameworks.append(
            {"name": "PCI-DSS", "description": "Payment Card Industry (REQUIRED)"}
        )

    return _templates.get_template("compliance_roadmap.md.j2").render(
        name=profile.name,
        industry=industry,
        frameworks=frameworks,
    )


def fallback_quantification(risks: list[RiskRecord]) -> list[QuantifiedRisk]:
    """Return an unquantified (all-zero) entry for every register risk."""
    return [QuantifiedRisk(risk=record.risk) for record in risks]
