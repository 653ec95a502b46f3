"""Unit tests for the deterministic fallback sections."""

from grc_advisor.core.fallbacks import (
    fallback_quantification,
    fallback_recommendations,
    fallback_roadmap,
    fallback_summary,
)
from grc_advisor.core.gaps import GapIdentifier
from grc_advisor.core.models import Gap
from grc_advisor.core.profile import Profile
from grc_advisor.core.risks import RiskPoolBuilder
from grc_advisor.core.scoring import MaturityScorer


class TestFallbackSummary:
    def test_summary_for_weak_profile(self, weak_profile: Profile) -> None:
        maturity = MaturityScorer().score(weak_profile)
        gaps = GapIdentifier().identify(weak_profile, maturity)

        summary = fallback_summary(weak_profile, maturity, gaps)

        assert summary.startswith("# Executive Summary")
        assert "Acme Ltd" in summary
        assert "**20%**" in summary
        assert "2 critical security gaps identified" in summary
        assert "Current maturity level: Developing" in summary
        assert "Industry: Not specified" in summary
        assert "1. No backup strategy found" in summary
        assert "2. Multi-Factor Authentication (MFA) is not enabled." in summary
        assert "3. Implement missing technical controls" in summary

    def test_summary_without_critical_gaps_uses_defaults(self, strong_profile: Profile) -> None:
        maturity = MaturityScorer().score(strong_profile)

        summary = fallback_summary(strong_profile, maturity, [])

        assert "0 critical security gaps identified" in summary
        assert "Current maturity level: Strong" in summary
        assert "1. Improve overall security posture" in summary
        assert "2. Enhance compliance documentation" in summary


class TestFallbackRecommendations:
    def test_one_recommendation_per_gap(self) -> None:
        gaps = [
            Gap(category="Risk", severity="Critical", description="No backups."),
            Gap(category="Operational", severity="Medium", description="No training."),
        ]
        recommendations = fallback_recommendations(gaps)

        assert [rec.id for rec in recommendations] == [1, 2]
        first = recommendations[0]
        assert first.title == "Address Risk Gap"
        assert first.priority == "Critical"
        assert first.business_impact == "No backups."
        assert len(first.steps) == 4
        assert (first.estimated_cost.min, first.estimated_cost.max) == (5000, 25000)
        assert first.timeline == "4-8 weeks"

    def test_limit_caps_recommendations(self) -> None:
        gaps = [Gap(category="Technical", severity="High", description=f"Gap {n}") for n in range(14)]
        assert len(fallback_recommendations(gaps)) == 10
        assert len(fallback_recommendations(gaps, limit=3)) == 3

    def test_no_gaps_gives_no_recommendations(self) -> None:
        assert fallback_recommendations([]) == []


class TestFallbackRoadmap:
    def test_baseline_frameworks(self) -> None:
        roadmap = fallback_roadmap(Profile(name="Acme Ltd", industry="saas"))
        assert "# Compliance Roadmap for Acme Ltd" in roadmap
        assert "1. **ISO 27001**" in roadmap
        assert "2. **SOC 2 Type II** - Trust Service Criteria for saas" in roadmap
        assert "GDPR/CCPA" not in roadmap
        assert "PCI-DSS" not in roadmap

    def test_data_types_add_regulations(self) -> None:
        roadmap = fallback_roadmap(Profile(data_types=("pii", "financial")))
        assert "3. **GDPR/CCPA** - Privacy regulations (REQUIRED)" in roadmap
        assert "4. **PCI-DSS** - Payment Card Industry (REQUIRED)" in roadmap

    def test_frameworks_are_numbered_in_listed_order(self) -> None:
        roadmap = fallback_roadmap(Profile(data_types=("financial",)))
        assert "3. **PCI-DSS** - Payment Card Industry (REQUIRED)" in roadmap
        assert "4." not in roadmap


class TestFallbackQuantification:
    def test_zero_entry_per_risk(self, weak_profile: Profile) -> None:
        risks = RiskPoolBuilder().build(weak_profile)
        quantified = fallback_quantification(risks)

        assert [entry.risk for entry in quantified] == [record.risk for record in risks]
        assert all(
            (entry.sle, entry.aro, entry.ale, entry.mitigation_cost, entry.roi) == (0, 0, 0, 0, 0)
            for entry in quantified
        )
