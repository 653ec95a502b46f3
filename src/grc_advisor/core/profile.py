"""Assessment profile submitted by the questionnaire.

The profile is the single input to scoring, gap identification, risk
register generation and prompt construction. Every recognised field has an
explicit default equal to the weakest answer for that control, so a field
the questionnaire did not send is scored as "not in place". Null values are
treated the same as missing ones.

Enumerated answers are kept as plain strings: an unrecognised value simply
fails every rule that checks for a specific answer.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Profile(BaseModel):
    """Immutable questionnaire profile.

    Accepts the questionnaire's camelCase keys (``backupFrequency``) as well
    as the snake_case field names. Unknown keys are ignored.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    # Organisation
    name: str = "Organization"
    industry: str = ""
    region: str = ""
    size: str = ""
    employees: int = 0
    business_model: str = Field(default="", alias="model")
    hosting: str = "on_premise"
    remote: str = "no"
    security_budget: float = 0
    data_types: tuple[str, ...] = ()
    regulatory_requirements: tuple[str, ...] = ()
    existing_certifications: tuple[str, ...] = ()

    # Governance
    policies_documented: str = "none"
    ciso_present: str = "no"
    security_team_size: int = 0
    management_review: str = "never"
    privacy_officer_appointed: str = "no"

    # Risk & continuity
    risk_assessment_freq: str = "never"
    bcp_documented: str = "no"
    backup_frequency: str = "none"
    cyber_insurance: str = "no"

    # Compliance & privacy
    compliance_frameworks: tuple[str, ...] = ()
    privacy_program: str = "no"
    last_audit_date: str = ""
    compliance: str = "none"

    # Technical
    firewall_enabled: str = "no"
    network_segmentation: str = "no"
    antivirus: str = "no"
    edr: str = "no"
    vulnerability_scanning: str = "never"
    patching_automated: str = "no"

    # Application & data
    mfa: str = "none"
    sso: str = "no"
    sso_implemented: str = "no"
    encryption: str = "no"
    code_review: str = "no"
    data_encryption_at_rest: str = "no"
    data_encryption_in_transit: str = "no"
    privileged_access_management: str = "no"
    admin_count: int = 0
    session_timeouts: int = 0
    account_review_frequency: str = "never"

    # Operational
    incident_response_plan: str = "no"
    security_training: str = "none"
    vendor_risk_program: str = "no"
    vendors: str = "no"
    critical_vendor_count: int = 0
    vendor_risk_assessments: str = "no"
    cloud_data_classification: str = "no"
    logging: str = "none"
    siem_deployed: str = "no"

    @model_validator(mode="before")
    @classmethod
    def _drop_null_fields(cls, data: Any) -> Any:
        """Remove null values so the field defaults apply."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    def handles_data(self, *data_types: str) -> bool:
        """Return True if the profile lists any of the given data types."""
        return any(data_type in self.data_types for data_type in data_types)

    def has_framework(self, *frameworks: str) -> bool:
        """Return True if any framework is listed as adopted or certified."""
        held = set(self.compliance_frameworks) | set(self.existing_certifications)
        return any(framework in held for framework in frameworks)
