"""Shared fixtures for grc-maturity-advisor tests.

Provides representative questionnaire profiles and in-memory text generators
that stand in for the Ollama adapter.
"""

from typing import Any

import pytest

from grc_advisor.core.interfaces import GenerationFailedError
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

# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------

STRONG_SAAS_ANSWERS: dict[str, Any] = {
    "name": "Northwind SaaS",
    "industry": "saas",
    "region": "eu",
    "employees": 120,
    "model": "b2b",
    "hosting": "cloud",
    "remote": "yes",
    "securityBudget": 250000,
    "dataTypes": ["pii"],
    "existingCertifications": ["soc2"],
    "policiesDocumented": "complete",
    "cisoPresent": "yes",
    "securityTeamSize": 4,
    "managementReview": "quarterly",
    "privacyOfficerAppointed": "yes",
    "riskAssessmentFreq": "quarterly",
    "bcpDocumented": "yes",
    "backupFrequency": "daily",
    "cyberInsurance": "yes",
    "complianceFrameworks": ["iso27001", "soc2"],
    "privacyProgram": "yes",
    "lastAuditDate": "2024-03-01",
    "compliance": "partial",
    "firewallEnabled": "yes",
    "networkSegmentation": "yes",
    "edr": "yes",
    "vulnerabilityScanning": "regular",
    "patchingAutomated": "yes",
    "mfa": "mandatory",
    "sso": "yes",
    "encryption": "yes",
    "codeReview": "yes",
    "dataEncryptionAtRest": "yes",
    "dataEncryptionInTransit": "yes",
    "privilegedAccessManagement": "yes",
    "adminCount": 6,
    "sessionTimeouts": 15,
    "accountReviewFrequency": "quarterly",
    "incidentResponsePlan": "yes",
    "securityTraining": "regular",
    "vendorRiskProgram": "yes",
    "cloudDataClassification": "yes",
    "logging": "advanced",
    "siemDeployed": "yes",
}


@pytest.fixture()
def weak_profile() -> Profile:
    """Profile with no answers beyond a name: every control scores as absent."""
    return Profile(name="Acme Ltd")


@pytest.fixture()
def strong_profile() -> Profile:
    """SaaS profile with every control in place."""
    return Profile.model_validate(STRONG_SAAS_ANSWERS)


@pytest.fixture()
def exposed_profile() -> Profile:
    """Remote, cloud-hosted profile without MFA or backups."""
    return Profile(
        name="Exposed Corp",
        mfa="none",
        backup_frequency="none",
        remote="yes",
        hosting="cloud",
    )


# ---------------------------------------------------------------------------
# Text generator fakes
# ---------------------------------------------------------------------------


def make_recommendation(index: int = 1, title: str = "Enforce MFA") -> Recommendation:
    """Build a fully-populated Recommendation for generator fakes."""
    return Recommendation(
        id=index,
        title=title,
        category="Technical",
        priority="Critical",
        business_impact="Prevents account takeover.",
        steps=["Enable conditional access", "Enroll all users"],
        estimated_cost=CostRange(min=1000, max=4000),
        timeline="2 weeks",
        resources=ResourceNeeds(people="IAM engineer", tools="Entra ID"),
        success_metrics=["100% enrollment"],
        quick_wins=["Enforce MFA for admins"],
    )


class StubTextGenerator:
    """Text generator returning fixed content and recording its calls."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def summarize(self, profile: Profile, maturity: MaturityResult) -> str:
        self.calls.append("summarize")
        return f"AI summary for {profile.name}"

    async def recommend(
        self,
        profile: Profile,
        gaps: list[Gap],
        maturity: MaturityResult,
    ) -> list[Recommendation]:
        self.calls.append("recommend")
        return [make_recommendation()]

    async def roadmap(self, profile: Profile) -> str:
        self.calls.append("roadmap")
        return "AI roadmap"

    async def quantify(self, profile: Profile, risks: list[RiskRecord]) -> list[QuantifiedRisk]:
        self.calls.append("quantify")
        return [
            QuantifiedRisk(risk=record.risk, sle=100000, aro=0.5, ale=50000, mitigation_cost=10000, roi=400)
            for record in risks
        ]

    async def is_available(self) -> bool:
        return True

    @property
    def model(self) -> str:
        return "stub-model"


class FailingTextGenerator(StubTextGenerator):
    """Text generator whose every call fails."""

    async def summarize(self, profile: Profile, maturity: MaturityResult) -> str:
        raise GenerationFailedError("summary unavailable")

    async def recommend(
        self,
        profile: Profile,
        gaps: list[Gap],
        maturity: MaturityResult,
    ) -> list[Recommendation]:
        raise GenerationFailedError("recommendations unavailable")

    async def roadmap(self, profile: Profile) -> str:
        raise GenerationFailedError("roadmap unavailable")

    async def quantify(self, profile: Profile, risks: list[RiskRecord]) -> list[QuantifiedRisk]:
        raise GenerationFailedError("quantification unavailable")

    async def is_available(self) -> bool:
        return False


@pytest.fixture()
def stub_generator() -> StubTextGenerator:
    return StubTextGenerator()


@pytest.fixture()
def failing_generator() -> FailingTextGenerator:
    return FailingTextGenerator()
