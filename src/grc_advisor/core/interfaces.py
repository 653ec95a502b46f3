"""Abstract interfaces (Protocol classes) for the GRC Maturity Advisor.

The report assembler depends on these interfaces, not on a concrete LLM client
or benchmark source. Concrete implementations live in ``adapters/``; tests
inject in-memory fakes.
"""

from typing import Protocol, runtime_checkable

from grc_advisor.core.models import (
    BenchmarkComparison,
    Gap,
    MaturityResult,
    QuantifiedRisk,
    Recommendation,
    RiskRecord,
)
from grc_advisor.core.profile import Profile


class GenerationFailedError(Exception):
    """Raised when the text generation service cannot produce a usable result.

    Covers transport errors, timeouts, error responses, and output that cannot
    be parsed into the expected shape.
    """


@runtime_checkable
class IBenchmarkComparator(Protocol):
    """Industry peer comparison; pure and non-failing."""

    def compare(self, profile: Profile, overall_score: int) -> BenchmarkComparison:
        """Compare a profile's overall score and resourcing against peers."""
        ...


@runtime_checkable
class IReportTextGenerator(Protocol):
    """Text generation capabilities consumed by ReportAssembler.

    Every method raises GenerationFailedError on failure.
    """

    async def summarize(self, profile: Profile, maturity: MaturityResult) -> str:
        """Write a board-level executive summary."""
        ...

    async def recommend(
        self,
        profile: Profile,
        gaps: list[Gap],
        maturity: MaturityResult,
    ) -> list[Recommendation]:
        """Produce prioritised, actionable recommendations."""
        ...

    async def roadmap(self, profile: Profile) -> str:
        """Write an industry and region specific compliance roadmap."""
        ...

    async def quantify(
        self,
        profile: Profile,
        risks: list[RiskRecord],
    ) -> list[QuantifiedRisk]:
        """Estimate SLE / ARO / ALE and mitigation ROI for each risk."""
        ...
