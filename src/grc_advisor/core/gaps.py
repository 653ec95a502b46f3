"""Control gap identification.

Each rule pairs a guard over the profile and the maturity result with a fixed
category / severity / description. Rules are evaluated in declaration order
and the output keeps that order; callers that need severity ordering sort on
their side.

Score thresholds here are fixed per rule (governance below 60, risk and
compliance below 50) and do not follow the per-industry thresholds of the
weight table.
"""

from dataclasses import dataclass
from typing import Callable

from grc_advisor.core.models import Gap, MaturityResult
from grc_advisor.core.profile import Profile
from grc_advisor.observability import get_logger

logger = get_logger(__name__)

REGULATED_INDUSTRIES: frozenset[str] = frozenset({"fintech", "healthcare"})


@dataclass(frozen=True)
class GapRule:
    """A guarded gap finding.

    Attributes:
        applies: Guard evaluated against the profile and maturity result.
        category: Dimension display name.
        severity: 'Critical', 'High' or 'Medium'.
        description: Finding text emitted when the guard holds.
    """

    applies: Callable[[Profile, MaturityResult], bool]
    category: str
    severity: str
    description: str

    def to_gap(self) -> Gap:
        return Gap(category=self.category, severity=self.severity, description=self.description)


GAP_RULES: tuple[GapRule, ...] = (
    GapRule(
        applies=lambda profile, scores: scores.governance < 60,
        category="Governance",
        severity="High",
        description="Lack of formal security leadership and documented policies.",
    ),
    GapRule(
        applies=lambda profile, scores: profile.backup_frequency == "none",
        category="Risk",
        severity="Critical",
        description="No backup strategy found; data loss is imminent in an attack.",
    ),
    GapRule(
        applies=lambda profile, scores: profile.bcp_documented != "yes" and scores.risk < 50,
        category="Risk",
        severity="Medium",
        description="Undefined Business Continuity Plan.",
    ),
    GapRule(
        applies=lambda profile, scores: (
            scores.compliance < 50 and profile.industry in REGULATED_INDUSTRIES
        ),
        category="Compliance",
        severity="High",
        description="Compliance posture is weak for a regulated industry.",
    ),
    GapRule(
        applies=lambda profile, scores: profile.vulnerability_scanning == "never",
        category="Technical",
        severity="High",
        description="No visibility into system vulnerabilities.",
    ),
    GapRule(
        applies=lambda profile, scores: profile.mfa == "none",
        category="Application",
        severity="Critical",
        description="Multi-Factor Authentication (MFA) is not enabled.",
    ),
    GapRule(
        applies=lambda profile, scores: profile.encryption == "no",
        category="Application",
        severity="High",
        description="Sensitive data is not encrypted.",
    ),
    GapRule(
        applies=lambda profile, scores: profile.incident_response_plan != "yes",
        category="Operational",
        severity="High",
        description="No Incident Response Plan to handle breaches.",
    ),
    GapRule(
        applies=lambda profile, scores: profile.security_training != "regular",
        category="Operational",
        severity="Medium",
        description="Employees are not trained on security risks.",
    ),
)


class GapIdentifier:
    """Evaluates the gap rule set against a scored profile."""

    def __init__(self, rules: tuple[GapRule, ...] = GAP_RULES) -> None:
        self._rules = rules

    def identify(self, profile: Profile, maturity: MaturityResult) -> list[Gap]:
        """Return the gaps whose guards hold, in rule declaration order.

        Args:
            profile: Questionnaire profile.
            maturity: Maturity result computed for the same profile.

        Returns:
            List of Gap records.
        """
        gaps = [rule.to_gap() for rule in self._rules if rule.applies(profile, maturity)]

        logger.info(
            "Gaps identified",
            gap_count=len(gaps),
            critical_count=sum(1 for gap in gaps if gap.severity == "Critical"),
        )
        return gaps
