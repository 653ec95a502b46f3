"""Report assembly orchestrating scoring, risk analysis and AI-written sections.

Runs the advisory report pipeline for one profile:
    1. maturity scoring       : MaturityScorer
    2. industry benchmarks    : injected IBenchmarkComparator (optional)
    3. gap identification     : GapIdentifier
    4. risk register          : RiskPoolBuilder
    5. executive summary      : AI, fallback: templated summary
    6. recommendations        : AI, fallback: one per gap
    7. compliance roadmap     : AI, fallback: templated roadmap
    8. risk quantification    : AI, fallback: zero-valued entries

Steps 1-4 are deterministic and never depend on the AI service. Each AI step
is isolated: a failure is logged and replaced by its fallback without
affecting the other steps, so a report is always produced.
"""

from typing import Awaitable, Callable, TypeVar

from grc_advisor.core.fallbacks import (
    DEFAULT_RECOMMENDATION_LIMIT,
    fallback_quantification,
    fallback_recommendations,
    fallback_roadmap,
    fallback_summary,
)
from grc_advisor.core.gaps import GapIdentifier
from grc_advisor.core.interfaces import IBenchmarkComparator, IReportTextGenerator
from grc_advisor.core.models import MaturityAssessment, Report, RiskRegister
from grc_advisor.core.profile import Profile
from grc_advisor.core.risks import RiskPoolBuilder
from grc_advisor.core.scoring import MaturityScorer
from grc_advisor.core.sections import (
    access_section,
    compliance_section,
    governance_section,
    logging_section,
    privilege_matrix,
    risk_matrix,
)
from grc_advisor.observability import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

SECTION_EXECUTIVE_SUMMARY = "executive_summary"
SECTION_RECOMMENDATIONS = "recommendations"
SECTION_COMPLIANCE_ROADMAP = "compliance_roadmap"
SECTION_QUANTIFIED_RISKS = "quantified_risks"


class ReportAssembler:
    """Builds a complete advisory Report from a questionnaire profile.

    All collaborators are injected at construction time. Only
    ``text_generator`` is required; the deterministic components default to
    their standard configuration.
    """

    def __init__(
        self,
        text_generator: IReportTextGenerator,
        scorer: MaturityScorer | None = None,
        gap_identifier: GapIdentifier | None = None,
        risk_builder: RiskPoolBuilder | None = None,
        benchmark_comparator: IBenchmarkComparator | None = None,
        fallback_recommendation_limit: int = DEFAULT_RECOMMENDATION_LIMIT,
    ) -> None:
        """Initialise the assembler with its collaborators.

        Args:
            text_generator: AI text generation service.
            scorer: Maturity scorer.
            gap_identifier: Gap rule evaluator.
            risk_builder: Risk register builder.
            benchmark_comparator: Industry comparison; benchmarks are omitted
                from the report when None.
            fallback_recommendation_limit: Maximum gaps turned into fallback
                recommendations.
        """
        self._text_generator = text_generator
        self._scorer = scorer or MaturityScorer()
        self._gap_identifier = gap_identifier or GapIdentifier()
        self._risk_builder = risk_builder or RiskPoolBuilder()
        self._benchmark_comparator = benchmark_comparator
        self._fallback_recommendation_limit = fallback_recommendation_limit

    def assess(self, profile: Profile) -> MaturityAssessment:
        """Score a profile and derive its gaps and benchmark comparison.

        Pure and synchronous; never calls the text generator.
        """
        maturity = self._scorer.score(profile)
        benchmarks = (
            self._benchmark_comparator.compare(profile, maturity.overall)
            if self._benchmark_comparator is not None
            else None
        )
        gaps = self._gap_identifier.identify(profile, maturity)
        return MaturityAssessment(maturity=maturity, gaps=gaps, benchmarks=benchmarks)

    def risk_register(self, profile: Profile) -> RiskRegister:
        """Build the ranked risk register and place it on the risk matrix."""
        risks = self._risk_builder.build(profile)
        return RiskRegister(risks=risks, risk_matrix=risk_matrix(risks))

    async def assemble(self, profile: Profile) -> Report:
        """Run the full report pipeline for a profile.

        Args:
            profile: Questionnaire profile.

        Returns:
            Report combining deterministic results with AI or fallback text.
            ``fallback_sections`` names every AI section that was replaced.
        """
        logger.info("Report generation started", organization=profile.name, industry=profile.industry)

        assessment = self.assess(profile)
        register = self.risk_register(profile)
        maturity, gaps, risks = assessment.maturity, assessment.gaps, register.risks

        fallback_sections: list[str] = []

        executive_summary = await self._generate_or_fallback(
            SECTION_EXECUTIVE_SUMMARY,
            lambda: self._text_generator.summarize(profile, maturity),
            lambda: fallback_summary(profile, maturity, gaps),
            fallback_sections,
        )
        recommendations = await self._generate_or_fallback(
            SECTION_RECOMMENDATIONS,
            lambda: self._text_generator.recommend(profile, gaps, maturity),
            lambda: fallback_recommendations(gaps, self._fallback_recommendation_limit),
            fallback_sections,
        )
        compliance_roadmap = await self._generate_or_fallback(
            SECTION_COMPLIANCE_ROADMAP,
            lambda: self._text_generator.roadmap(profile),
            lambda: fallback_roadmap(profile),
            fallback_sections,
        )
        quantified_risks = await self._generate_or_fallback(
            SECTION_QUANTIFIED_RISKS,
            lambda: self._text_generator.quantify(profile, risks),
            lambda: fallback_quantification(risks),
            fallback_sections,
        )

        logger.info(
            "Report generation complete",
            organization=profile.name,
            overall=maturity.overall,
            gap_count=len(gaps),
            risk_count=len(risks),
            fallback_sections=fallback_sections,
        )

        return Report(
            executive_summary=executive_summary,
            recommendations=recommendations,
            compliance_roadmap=compliance_roadmap,
            maturity=maturity,
            benchmarks=assessment.benchmarks,
            gaps=gaps,
            risks=risks,
            quantified_risks=quantified_risks,
            governance=governance_section(profile),
            access=access_section(profile),
            privilege_matrix=privilege_matrix(),
            compliance=compliance_section(profile),
            logging=logging_section(profile),
            risk_matrix=register.risk_matrix,
            fallback_sections=fallback_sections,
        )

    async def _generate_or_fallback(
        self,
        section: str,
        generate: Callable[[], Awaitable[T]],
        fallback: Callable[[], T],
        fallback_sections: list[str],
    ) -> T:
        """Await one AI call, substituting its fallback on any failure.

        Args:
            section: Section name for logging and fallback tracking.
            generate: Zero-argument coroutine factory calling the AI service.
            fallback: Deterministic producer of the same output shape.
            fallback_sections: Accumulator of replaced section names.

        Returns:
            The AI result, or the fallback result if the call raised.
        """
        try:
            return await generate()
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "AI section failed, using fallback",
                section=section,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            fallback_sections.append(section)
            return fallback()
