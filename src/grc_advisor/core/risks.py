"""Risk register generation.

Builds a candidate pool from two rule sets, then ranks and truncates it:

    1. Conditional rules add a risk only when their guard holds for the
       profile. A secondary condition inside the rule picks the likelihood
       (e.g. remote endpoint compromise drops from Likely to Unlikely when
       MFA is mandatory).
    2. Universal rules add their risk for every profile.
    3. The pool is sorted by score (likelihood x consequence), highest first.
       The sort is stable, so ties keep pool insertion order.
    4. The top N records are kept and renumbered 1..N in rank order.

Ids assigned in the pool are provisional and are replaced during selection.
"""

from dataclasses import dataclass, replace
from typing import Callable

from grc_advisor.core.models import RiskRecord
from grc_advisor.core.profile import Profile
from grc_advisor.observability import get_logger

logger = get_logger(__name__)

DEFAULT_REGISTER_SIZE: int = 12

Ordinal = int | Callable[[Profile], int]


@dataclass(frozen=True)
class RiskRule:
    """A rule contributing one risk to the pool.

    Attributes:
        risk: Risk scenario name.
        likelihood: 1-5 ordinal, or a function of the profile returning one.
        consequence: 1-6 ordinal.
        mitigation: Recommended mitigation text.
        applies: Guard for conditional rules; None for universal rules.
    """

    risk: str
    likelihood: Ordinal
    consequence: int
    mitigation: str
    applies: Callable[[Profile], bool] | None = None

    def likelihood_for(self, profile: Profile) -> int:
        if callable(self.likelihood):
            return self.likelihood(profile)
        return self.likelihood


CONDITIONAL_RULES: tuple[RiskRule, ...] = (
    RiskRule(
        risk="Remote Endpoint Compromise",
        applies=lambda p: p.remote == "yes",
        likelihood=lambda p: 2 if p.mfa == "mandatory" else 4,
        consequence=4,
        mitigation="Enforce Endpoint Encryption, VPN, and Mandatory MFA",
    ),
    RiskRule(
        risk="Cloud Misconfiguration",
        applies=lambda p: p.hosting == "cloud",
        likelihood=lambda p: 2 if p.cloud_data_classification == "yes" else 4,
        consequence=5,
        mitigation="Enable Cloud Security Posture Management (CSPM), Regular Audits",
    ),
    RiskRule(
        risk="Supply Chain / Third-Party Breach",
        applies=lambda p: p.vendors == "yes" or p.critical_vendor_count > 0,
        likelihood=lambda p: 2 if p.vendor_risk_assessments == "yes" else 4,
        consequence=4,
        mitigation="Vendor Risk Assessment Program, Least Privilege Access, SLAs",
    ),
    RiskRule(
        risk="Data Breach / Leakage (Sensitive Data)",
        applies=lambda p: p.handles_data("pii", "financial", "health"),
        likelihood=lambda p: (
            2
            if p.data_encryption_at_rest == "yes" and p.data_encryption_in_transit == "yes"
            else 4
        ),
        consequence=5,
        mitigation="Data Loss Prevention (DLP), Encryption at Rest/Transit, Access Logging",
    ),
    # The two ransomware rules are mutually exclusive on backup_frequency
    RiskRule(
        risk="Ransomware Attack with Data Loss",
        applies=lambda p: p.backup_frequency == "none",
        likelihood=5,
        consequence=6,
        mitigation="Implement Backup Strategy, Offline Backups, Incident Response Plan",
    ),
    RiskRule(
        risk="Ransomware Attack (Recoverable)",
        applies=lambda p: p.backup_frequency != "none",
        likelihood=3,
        consequence=4,
        mitigation="Regular Backups, EDR, Incident Response Plan",
    ),
    RiskRule(
        risk="Credential Stuffing / Brute Force",
        applies=lambda p: p.mfa != "mandatory",
        likelihood=5,
        consequence=4,
        mitigation="Mandatory MFA, Strong Password Policies, Account Lockout",
    ),
    RiskRule(
        risk="Failure to Detect Intrusions",
        applies=lambda p: p.logging != "advanced",
        likelihood=4,
        consequence=4,
        mitigation="Centralized Logging, SIEM, Real-time Alerting",
    ),
    RiskRule(
        risk="Regulatory Non-Compliance Fines",
        applies=lambda p: p.compliance == "none" and (
            p.handles_data("pii") or p.industry == "healthcare"
        ),
        likelihood=5,
        consequence=5,
        mitigation="Compliance Audits, Legal Counsel, Policy Management",
    ),
)

UNIVERSAL_RULES: tuple[RiskRule, ...] = (
    RiskRule(
        risk="Insider Threat / Privilege Abuse",
        likelihood=lambda p: 2 if p.privileged_access_management == "yes" else 3,
        consequence=3,
        mitigation="RBAC, Privileged Access Management, Audit Logging",
    ),
    RiskRule(
        risk="Social Engineering & Phishing Attacks",
        likelihood=4,
        consequence=4,
        mitigation="Security Awareness Training, Phishing Simulations, Email Filtering",
    ),
    RiskRule(
        risk="Exploitation of Unpatched Vulnerabilities",
        likelihood=3,
        consequence=4,
        mitigation="Automated Patch Management, Regular Vulnerability Scanning",
    ),
    RiskRule(
        risk="Unsanctioned Shadow IT Usage",
        likelihood=3,
        consequence=2,
        mitigation="Cloud Access Security Broker (CASB), Software Asset Management",
    ),
    RiskRule(
        risk="Web Application Attacks (SQLi, XSS)",
        likelihood=3,
        consequence=4,
        mitigation="Web Application Firewall (WAF), Secure Code Review, DAST/SAST",
    ),
    RiskRule(
        risk="Denial of Service (DDoS) Attack",
        likelihood=2,
        consequence=3,
        mitigation="DDoS Protection Services (e.g., Cloudflare), Redundancy",
    ),
    RiskRule(
        risk="Mobile Device Compromise (BYOD)",
        likelihood=3,
        consequence=3,
        mitigation="Mobile Device Management (MDM), Containerization, Remote Wipe",
    ),
    RiskRule(
        risk="Insecure API Endpoints",
        likelihood=3,
        consequence=4,
        mitigation="API Gateway, Rate Limiting, API Authentication",
    ),
    RiskRule(
        risk="Data Integrity Corruption",
        likelihood=1,
        consequence=5,
        mitigation="File Integrity Monitoring (FIM), Checksums, Backup Validation",
    ),
    RiskRule(
        risk="Physical Security Breach",
        likelihood=2,
        consequence=3,
        mitigation="Access Cards, CCTV, Visitor Management",
    ),
    RiskRule(
        risk="Reputational Damage from Incident",
        likelihood=3,
        consequence=5,
        mitigation="Crisis Communication Plan, PR Strategy",
    ),
    RiskRule(
        risk="Theft of Intellectual Property",
        likelihood=2,
        consequence=5,
        mitigation="DLP, Access Control, NDA, DRM",
    ),
    RiskRule(
        risk="Business Interruption / Failure",
        likelihood=2,
        consequence=6,
        mitigation="Business Continuity Plan (BCP), Disaster Recovery (DR) Drills",
    ),
    RiskRule(
        risk="Insecure Default Configurations",
        likelihood=3,
        consequence=4,
        mitigation="Hardening Benchmarks (CIS), Automated Config Management",
    ),
    RiskRule(
        risk="Network Eavesdropping / MitM",
        likelihood=lambda p: 1 if p.data_encryption_in_transit == "yes" else 2,
        consequence=3,
        mitigation="End-to-End Encryption, VPN, Mutual TLS",
    ),
    RiskRule(
        risk="Inadequate Employee Offboarding",
        likelihood=3,
        consequence=3,
        mitigation="Automated Account Deprovisioning, Exit Interviews",
    ),
    RiskRule(
        risk="Data Leakage via AI/LLM Tools",
        likelihood=4,
        consequence=4,
        mitigation="AI Usage Policy, Enterprise AI Gateways",
    ),
    RiskRule(
        risk="Brand Impersonation on Social Media",
        likelihood=3,
        consequence=2,
        mitigation="Social Media Monitoring, Verified Profiles",
    ),
)


class RiskPoolBuilder:
    """Builds the ranked, fixed-size risk register for a profile.

    Args:
        register_size: Number of risks kept after ranking.
        conditional_rules: Profile-guarded rules, evaluated first.
        universal_rules: Rules included for every profile.
    """

    def __init__(
        self,
        register_size: int = DEFAULT_REGISTER_SIZE,
        conditional_rules: tuple[RiskRule, ...] = CONDITIONAL_RULES,
        universal_rules: tuple[RiskRule, ...] = UNIVERSAL_RULES,
    ) -> None:
        if register_size < 1:
            raise ValueError(f"register_size must be positive, got {register_size!r}")
        self._register_size = register_size
        self._conditional_rules = conditional_rules
        self._universal_rules = universal_rules

    @property
    def register_size(self) -> int:
        return self._register_size

    def build_pool(self, profile: Profile) -> list[RiskRecord]:
        """Evaluate all rules and return the unranked candidate pool.

        Conditional risks come first in rule order, then every universal
        risk. Ids are provisional pool positions.
        """
        rules = [
            rule
            for rule in self._conditional_rules
            if rule.applies is not None and rule.applies(profile)
        ]
        rules.extend(self._universal_rules)

        return [
            RiskRecord(
                id=position,
                risk=rule.risk,
                likelihood_score=rule.likelihood_for(profile),
                consequence_score=rule.consequence,
                mitigation=rule.mitigation,
            )
            for position, rule in enumerate(rules, start=1)
        ]

    def select(self, pool: list[RiskRecord]) -> list[RiskRecord]:
        """Rank the pool by score, keep the top N and renumber them 1..N."""
        ranked = sorted(pool, key=lambda record: record.score, reverse=True)
        selected = ranked[: self._register_size]
        return [replace(record, id=rank) for rank, record in enumerate(selected, start=1)]

    def build(self, profile: Profile) -> list[RiskRecord]:
        """Build the ranked and truncated risk register for a profile.

        Args:
            profile: Questionnaire profile.

        Returns:
            Up to ``register_size`` RiskRecords with ids 1..N, highest score first.
        """
        pool = self.build_pool(profile)
        register = self.select(pool)

        logger.info(
            "Risk register built",
            pool_size=len(pool),
            register_size=len(register),
            top_score=register[0].score if register else None,
        )
        return register
