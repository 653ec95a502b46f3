"""Security maturity scoring.

Scores a questionnaire profile across six dimensions. Every dimension starts
from a baseline of 50, applies a fixed sequence of additive adjustments keyed
off profile answers, and is clamped to 0-100 on its own so it can be shown
and tested in isolation.

The overall score is the weighted sum of the six dimension scores using the
industry's weight profile, minus global penalties for missing MFA and missing
backups. These penalties repeat conditions already penalised inside the
Application and Risk dimensions; the repetition is intended emphasis. The
overall is clamped and then rounded half-up independently of the dimension
scores, so it may differ by 1 from a recomputation over rounded inputs.

This module has no I/O and no infrastructure dependencies.
"""

import math

from grc_advisor.core.industry_weights import (
    DIMENSION_LABELS,
    DIMENSIONS,
    IndustryWeightProfile,
    get_weight_profile,
)
from grc_advisor.core.models import MaturityResult
from grc_advisor.core.profile import Profile
from grc_advisor.observability import get_logger

logger = get_logger(__name__)

BASELINE_SCORE: int = 50

# Applied to the weighted overall score, on top of the dimension-level penalties
GLOBAL_PENALTIES: dict[str, int] = {
    "no_mfa": 5,
    "no_backup": 5,
}


def clamp(value: float, lower: float = 0.0, upper: float = 100.0) -> float:
    """Clamp a value into [lower, upper]."""
    return max(lower, min(upper, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 rounding up."""
    return int(math.floor(value + 0.5))


class MaturityScorer:
    """Rule-based six-dimension maturity scorer.

    Dimension weights come from the industry weight profile selected by
    ``profile.industry``; unknown industries use the uniform default.
    """

    def score_governance(self, profile: Profile) -> int:
        """Policies, security leadership, team and management review."""
        score = BASELINE_SCORE

        if profile.policies_documented == "complete":
            score += 20
        elif profile.policies_documented == "partial":
            score += 10
        else:
            score -= 15

        if profile.ciso_present == "yes":
            score += 15

        if profile.security_team_size > 0:
            score += 10

        if profile.management_review and profile.management_review != "never":
            score += 5

        return int(clamp(score))

    def score_risk(self, profile: Profile) -> int:
        """Risk assessments, insurance, continuity planning and backups."""
        score = BASELINE_SCORE

        if profile.risk_assessment_freq in ("annual", "quarterly"):
            score += 15
        else:
            score -= 10

        if profile.cyber_insurance == "yes":
            score += 10

        if profile.bcp_documented == "yes":
            score += 15
        else:
            score -= 10

        if profile.backup_frequency in ("daily", "real_time"):
            score += 10
        elif profile.backup_frequency == "none":
            score -= 20

        return int(clamp(score))

    def score_compliance(self, profile: Profile) -> int:
        """Adopted frameworks, privacy program and audit history."""
        score = BASELINE_SCORE

        frameworks = profile.compliance_frameworks
        if frameworks:
            score += 20
        if "iso27001" in frameworks or "soc2" in frameworks:
            score += 10

        if profile.privacy_program == "yes":
            score += 10

        if profile.last_audit_date and profile.last_audit_date != "never":
            score += 10

        return int(clamp(score))

    def score_technical(self, profile: Profile) -> int:
        """Network perimeter, endpoint protection, vulnerability management, patching."""
        score = BASELINE_SCORE

        if profile.firewall_enabled == "yes":
            score += 10
        if profile.network_segmentation == "yes":
            score += 10

        if profile.antivirus == "yes" or profile.edr == "yes":
            score += 10

        if profile.vulnerability_scanning == "regular":
            score += 15
        elif profile.vulnerability_scanning == "never":
            score -= 15

        if profile.patching_automated == "yes":
            score += 5

        return int(clamp(score))

    def score_application(self, profile: Profile) -> int:
        """Authentication, encryption and secure development."""
        score = BASELINE_SCORE

        if profile.mfa == "mandatory":
            score += 25
        elif profile.mfa == "optional":
            score -= 10
        else:
            score -= 25

        if profile.sso == "yes":
            score += 5

        if profile.encryption == "yes":
            score += 15

        if profile.code_review == "yes":
            score += 10

        return int(clamp(score))

    def score_operational(self, profile: Profile) -> int:
        """Incident response, awareness training and vendor management."""
        score = BASELINE_SCORE

        if profile.incident_response_plan == "yes":
            score += 20
        else:
            score -= 15

        if profile.security_training == "regular":
            score += 15
        else:
            score -= 10

        if profile.vendor_risk_program == "yes":
            score += 10

        return int(clamp(score))

    def score_overall(
        self,
        dimension_scores: dict[str, int],
        weight_profile: IndustryWeightProfile,
        profile: Profile,
    ) -> int:
        """Combine dimension scores with industry weights and global penalties.

        Args:
            dimension_scores: Mapping of dimension name to 0-100 score.
            weight_profile: Industry weight profile to apply.
            profile: The profile, for the global penalty conditions.

        Returns:
            Overall score, clamped to 0-100 and rounded half-up.
        """
        overall = sum(
            dimension_scores[dimension] * weight_profile.weight_for(dimension)
            for dimension in DIMENSIONS
        )

        if profile.mfa == "none":
            overall -= GLOBAL_PENALTIES["no_mfa"]
        if profile.backup_frequency == "none":
            overall -= GLOBAL_PENALTIES["no_backup"]

        return round_half_up(clamp(overall))

    def score(self, profile: Profile) -> MaturityResult:
        """Run the full scoring pipeline for a profile.

        Args:
            profile: Questionnaire profile.

        Returns:
            MaturityResult with all six dimension scores and the overall score.
        """
        weight_profile = get_weight_profile(profile.industry)

        dimension_scores = {
            "governance": self.score_governance(profile),
            "risk": self.score_risk(profile),
            "compliance": self.score_compliance(profile),
            "technical": self.score_technical(profile),
            "application": self.score_application(profile),
            "operational": self.score_operational(profile),
        }
        overall = self.score_overall(dimension_scores, weight_profile, profile)

        logger.info(
            "Maturity scored",
            overall=overall,
            weight_profile=weight_profile.key,
            industry=profile.industry,
            **dimension_scores,
        )

        return MaturityResult(
            overall=overall,
            labels=DIMENSION_LABELS,
            weight_profile=weight_profile.key,
            **dimension_scores,
        )
