"""FastAPI router for the GRC Maturity Advisor API.

All routes are thin. They validate the profile, delegate to the
ReportAssembler and serialize the result. No business logic here.

API prefix: /api/v1
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from grc_advisor.adapters.benchmark_comparator import BenchmarkComparator
from grc_advisor.adapters.ollama_generator import OllamaReportGenerator
from grc_advisor.api.schemas import (
    AIStatusResponse,
    IndustryListResponse,
    IndustryWeightsResponse,
    MaturityReportResponse,
    ReportResponse,
    RiskRegisterResponse,
)
from grc_advisor.core.gaps import GapIdentifier
from grc_advisor.core.industry_weights import DIMENSIONS, INDUSTRY_WEIGHTS
from grc_advisor.core.profile import Profile
from grc_advisor.core.risks import RiskPoolBuilder
from grc_advisor.core.scoring import MaturityScorer
from grc_advisor.core.services import ReportAssembler
from grc_advisor.settings import Settings

router = APIRouter(tags=["GRC Maturity Advisor"])


# ---------------------------------------------------------------------------
# Dependency factories
# ---------------------------------------------------------------------------


def get_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


def get_text_generator(request: Request) -> OllamaReportGenerator:
    """Return the generator created by the application lifespan."""
    return request.app.state.text_generator


def get_report_assembler(
    generator: Annotated[OllamaReportGenerator, Depends(get_text_generator)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ReportAssembler:
    """Build ReportAssembler with injected dependencies."""
    return ReportAssembler(
        text_generator=generator,
        scorer=MaturityScorer(),
        gap_identifier=GapIdentifier(),
        risk_builder=RiskPoolBuilder(register_size=settings.risk_register_size),
        benchmark_comparator=BenchmarkComparator() if settings.include_benchmarks else None,
        fallback_recommendation_limit=settings.fallback_recommendation_limit,
    )


# ---------------------------------------------------------------------------
# Report endpoints
# ---------------------------------------------------------------------------


@router.post("/reports", response_model=ReportResponse)
async def generate_report(
    profile: Profile,
    assembler: Annotated[ReportAssembler, Depends(get_report_assembler)],
) -> ReportResponse:
    """Generate the full advisory report for a questionnaire profile.

    Always succeeds for a valid profile: AI sections that cannot be
    generated are replaced by fallback content and listed in
    ``fallback_sections``.
    """
    report = await assembler.assemble(profile)
    return ReportResponse.model_validate(report, from_attributes=True)


@router.post("/reports/maturity", response_model=MaturityReportResponse)
async def assess_maturity(
    profile: Profile,
    assembler: Annotated[ReportAssembler, Depends(get_report_assembler)],
) -> MaturityReportResponse:
    """Score the profile and list its gaps and benchmarks, without AI text."""
    assessment = assembler.assess(profile)
    return MaturityReportResponse.model_validate(assessment, from_attributes=True)


@router.post("/reports/risks", response_model=RiskRegisterResponse)
async def build_risk_register(
    profile: Profile,
    assembler: Annotated[ReportAssembler, Depends(get_report_assembler)],
) -> RiskRegisterResponse:
    """Build the ranked risk register and its likelihood x consequence matrix."""
    register = assembler.risk_register(profile)
    return RiskRegisterResponse.model_validate(register, from_attributes=True)


# ---------------------------------------------------------------------------
# Reference data and status endpoints
# ---------------------------------------------------------------------------


@router.get("/industries", response_model=IndustryListResponse)
async def list_industries() -> IndustryListResponse:
    """List the declared industry weight profiles."""
    return IndustryListResponse(
        items=[
            IndustryWeightsResponse(
                key=key,
                weights={dimension: profile.weight_for(dimension) for dimension in DIMENSIONS},
                thresholds={
                    dimension: profile.threshold_for(dimension) for dimension in DIMENSIONS
                },
                total_weight=round(profile.total_weight(), 3),
            )
            for key, profile in INDUSTRY_WEIGHTS.items()
        ]
    )


@router.get("/ai/status", response_model=AIStatusResponse)
async def ai_status(
    generator: Annotated[OllamaReportGenerator, Depends(get_text_generator)],
) -> AIStatusResponse:
    """Report whether the Ollama server is reachable with the configured model."""
    return AIStatusResponse(model=generator.model, available=await generator.is_available())
