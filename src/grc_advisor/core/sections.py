"""Supporting report sections derived directly from the profile.

These sections carry no scoring logic; they restate questionnaire answers in
the shape the report renders (governance roles, access statistics, privilege
matrix, compliance framework status, logging posture) and place the register
risks on the likelihood x consequence matrix.
"""

from typing import Any

from grc_advisor.core.models import RiskRecord
from grc_advisor.core.profile import Profile
from grc_advisor.core.scales import CONSEQUENCE_SCALE, LIKELIHOOD_SCALE, risk_level

PRIVILEGE_MATRIX: tuple[tuple[str, str], ...] = (
    ("Super Admin", "Full System Access (Read/Write/Delete/Config)"),
    ("Security Admin", "Security Tools, Logs, Audit (Read/Write)"),
    ("Manager", "Dept Data (Read/Write), User Mgmt (Dept only)"),
    ("Standard User", "Own Data (Read/Write), Public Data (Read)"),
    ("Auditor", "Logs & Reports (Read Only)"),
)

# Cell ids beyond this many are summarised in the rendered matrix
MATRIX_CELL_DISPLAY_LIMIT: int = 3


def governance_section(profile: Profile) -> dict[str, Any]:
    """Accountable security and privacy roles."""
    has_ciso = profile.ciso_present == "yes"
    has_dpo = profile.privacy_officer_appointed == "yes"
    return {
        "roles": [
            {
                "title": "System Owner",
                "desc": "Executive accountable for system operations and security.",
            },
            {
                "title": "CISO" if has_ciso else "Security Officer",
                "desc": (
                    "Chief Information Security Officer leading security strategy."
                    if has_ciso
                    else "Responsible for security controls implementation."
                ),
            },
            {
                "title": "Data Protection Officer (DPO)" if has_dpo else "Privacy Lead",
                "desc": (
                    "Ensures privacy compliance (GDPR/CCPA)."
                    if has_dpo
                    else "Designated privacy point of contact."
                ),
            },
        ]
    }


def _mfa_status(mfa: str) -> str:
    if mfa == "mandatory":
        return "Enforced (All Users)"
    if mfa == "optional":
        return "Partial (Optional)"
    return "Not Enforced"


def access_section(profile: Profile) -> dict[str, Any]:
    """User and admin statistics plus the state of access controls."""
    privileged_ratio = (
        round(profile.admin_count / profile.employees * 100) if profile.employees > 0 else 0
    )
    account_reviews = (
        "Never"
        if profile.account_review_frequency in ("", "never")
        else profile.account_review_frequency
    )
    return {
        "stats": [
            {"label": "Total Users", "value": profile.employees},
            {"label": "Admin Accounts", "value": profile.admin_count},
            {"label": "Privileged Ratio", "value": f"{privileged_ratio}%"},
            {"label": "Security Team", "value": f"{profile.security_team_size} FTE"},
        ],
        "rules": [
            {"control": "MFA", "val": _mfa_status(profile.mfa)},
            {
                "control": "SSO",
                "val": "Implemented"
                if "yes" in (profile.sso, profile.sso_implemented)
                else "Not Implemented",
            },
            {
                "control": "PAM",
                "val": "Implemented"
                if profile.privileged_access_management == "yes"
                else "Not Implemented",
            },
            {"control": "Session Timeout", "val": f"{profile.session_timeouts} minutes"},
            {"control": "Account Reviews", "val": account_reviews},
        ],
    }


def privilege_matrix() -> list[dict[str, str]]:
    """Reference role-to-permission matrix."""
    return [{"role": role, "perm": permission} for role, permission in PRIVILEGE_MATRIX]


def compliance_section(profile: Profile) -> list[dict[str, str]]:
    """Status of the common frameworks for this profile."""
    held = set(profile.existing_certifications) | set(profile.compliance_frameworks)

    needs_privacy = profile.handles_data("pii") or profile.region in ("eu", "us")
    if "gdpr" in held or "ccpa" in held:
        privacy_status = "Compliant"
    elif needs_privacy:
        privacy_status = "REQUIRED"
    else:
        privacy_status = "N/A"

    if "pci_dss" in held:
        pci_status = "Compliant"
    elif profile.handles_data("financial"):
        pci_status = "REQUIRED"
    else:
        pci_status = "N/A"

    if "soc2" in held:
        soc2_status = "Certified"
    elif profile.industry in ("saas", "fintech"):
        soc2_status = "Highly Recommended"
    else:
        soc2_status = "Optional"

    frameworks = [
        {
            "std": "ISO 27001",
            "status": "Certified" if "iso27001" in held else "Recommended Framework",
        },
        {"std": "GDPR/CCPA", "status": privacy_status},
        {"std": "PCI-DSS", "status": pci_status},
        {"std": "SOC 2", "status": soc2_status},
    ]

    if profile.industry == "healthcare" or profile.handles_data("health"):
        frameworks.append(
            {"std": "HIPAA", "status": "Compliant" if "hipaa" in held else "REQUIRED"}
        )

    return frameworks


def logging_section(profile: Profile) -> dict[str, str]:
    """Log retention, alerting and review cadence."""
    advanced = profile.logging == "advanced"
    return {
        "retention": "12 Months (90 days hot, 9 months archive)" if advanced else "6 Months",
        "alerts": (
            "Real-time SIEM alerts enabled"
            if profile.siem_deployed == "yes"
            else "Basic error monitoring only"
        ),
        "frequency": (
            "Daily automated analysis, Weekly manual review" if advanced else "Monthly review"
        ),
    }


def risk_matrix(risks: list[RiskRecord]) -> list[dict[str, Any]]:
    """Place register risks on the 5 x 6 likelihood x consequence grid.

    Rows run from Almost Certain (5) down to Rare (1); columns from
    Insignificant (1) to Doomsday (6). Every cell is present, including empty
    ones, so the grid can be rendered directly.

    Returns:
        One dict per cell with likelihood, consequence, labels, level and the
        ids of the risks in that cell.
    """
    cells: dict[tuple[int, int], list[int]] = {}
    for record in risks:
        cells.setdefault((record.likelihood_score, record.consequence_score), []).append(
            record.id
        )

    matrix: list[dict[str, Any]] = []
    for likelihood in sorted(LIKELIHOOD_SCALE, reverse=True):
        for consequence in sorted(CONSEQUENCE_SCALE):
            risk_ids = cells.get((likelihood, consequence), [])
            matrix.append(
                {
                    "likelihood": likelihood,
                    "likelihood_label": LIKELIHOOD_SCALE[likelihood],
                    "consequence": consequence,
                    "consequence_label": CONSEQUENCE_SCALE[consequence],
                    "level": risk_level(likelihood * consequence),
                    "risk_ids": risk_ids,
                    "overflow": max(0, len(risk_ids) - MATRIX_CELL_DISPLAY_LIMIT),
                }
            )
    return matrix
