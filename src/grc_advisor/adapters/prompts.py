"""Prompt construction for the Ollama report generator.

Each builder returns a GenerationRequest carrying the prompt text together
with the sampling settings for that task. Structured tasks ask for JSON only
and set ``json_output`` so the adapter requests Ollama's JSON mode.
"""

from dataclasses import dataclass

from grc_advisor.core.models import Gap, MaturityResult, RiskRecord
from grc_advisor.core.profile import Profile

# Rough revenue per employee used to size the quantification context (USD)
REVENUE_PER_EMPLOYEE: int = 200_000

RECOMMENDATION_COUNT: int = 15


@dataclass(frozen=True)
class GenerationRequest:
    """One prompt plus its sampling budget.

    Attributes:
        prompt: Full prompt text.
        temperature: Sampling temperature.
        max_tokens: Token budget, sent to Ollama as ``num_predict``.
        json_output: Whether the response must be a JSON document.
    """

    prompt: str
    temperature: float
    max_tokens: int
    json_output: bool = False


def _join(values: tuple[str, ...], default: str) -> str:
    return ", ".join(values) if values else default


def _critical_findings(profile: Profile) -> str:
    findings = []
    if profile.mfa != "mandatory":
        findings.append("Lack of Mandatory MFA")
    if profile.backup_frequency == "none":
        findings.append("No Offline Backups")
    if profile.vulnerability_scanning == "never":
        findings.append("No Vuln Scanning")
    return ", ".join(findings) if findings else "None identified"


def build_summary_request(profile: Profile, maturity: MaturityResult) -> GenerationRequest:
    """Board-level executive summary, returned as plain text."""
    prompt = f"""You are an elite Virtual CISO consulting for a client. Your job is to output a Board-Level Executive Summary of their security posture.

CLIENT PROFILE:
- Name: {profile.name}
- Industry: {profile.industry or "unspecified"} ({profile.employees} employees, {profile.region or "unspecified region"})
- Operations: {profile.business_model or "unspecified"} model, Cloud: {profile.hosting}
- Key Assets: {_join(profile.data_types, "Standard Business Data")}
- Security Budget: ${profile.security_budget:,.0f}/year

SECURITY POSTURE SNAPSHOT:
- Maturity Score: {maturity.overall}% (Industry Avg: ~65%)
- Critical Gaps: {_critical_findings(profile)}
- Compliance Needs: {_join(profile.regulatory_requirements, "Standard Data Protection")}

INSTRUCTIONS:
Write a **Strategic Executive Summary** (3-4 paragraphs) addressed to the Board of Directors.
1.  **Strategic Outlook**: Open with a high-level assessment of their risk posture relative to the {profile.industry or "their"} industry threats.
2.  **Critical Risk Exposure**: Explicitly mention the top 1-2 existential risks (e.g., Ransomware due to no backups, Data Breach due to weak auth). Use financial risk language.
3.  **Forward-Looking Strategy**: Briefly justify the need for immediate investment in the top recommendations to protect revenue and reputation.

TONE: Professional, Authoritative, Concise, Business-Aligned. Avoid generic fluff. Use strong verbs."""
    return GenerationRequest(prompt=prompt, temperature=0.6, max_tokens=1000)


def build_recommendations_request(
    profile: Profile,
    gaps: list[Gap],
    maturity: MaturityResult,
) -> GenerationRequest:
    """Technical recommendations, returned as a JSON object."""
    gaps_summary = (
        "\n".join(f"- {gap.category}: {gap.description} (Severity: {gap.severity})" for gap in gaps)
        or "- No significant gaps identified"
    )
    prompt = f"""You are a Technical Security Architect. Generate {RECOMMENDATION_COUNT} precise, actionable recommendations for this client.

CLIENT: {profile.name} ({profile.industry or "unspecified industry"}, {profile.employees} employees)
BUDGET: ${profile.security_budget:,.0f}/year
MATURITY: {maturity.overall}%

IDENTIFIED GAPS & RISKS:
{gaps_summary}

CRITICAL INSTRUCTIONS:
For EACH recommendation, you MUST provide precise technical details.
- Avoid generic advice like "Implement a tool."
- Instead, say "Deploy CrowdStrike Falcon or SentinelOne" or "Configure AWS CloudTrail with log validation."
- Provide a "Technical Configuration" step (e.g., "Run 'npm audit' in CI/CD").

OUTPUT FORMAT (JSON ONLY):
{{
  "recommendations": [
    {{
      "id": number,
      "title": "Action-Oriented Title",
      "category": "Management" | "Operational" | "Technical",
      "priority": "Critical" | "High" | "Medium" | "Low",
      "businessImpact": "One sentence on WHY this matters financially/operationally.",
      "steps": ["Step 1: Specific action...", "Step 2: Config/Install...", "Step 3: Validation..."],
      "estimatedCost": {{"min": number, "max": number}},
      "timeline": "e.g., 2 weeks",
      "resources": {{"people": "Roles needed", "tools": "Specific tools/licenses"}},
      "successMetrics": ["Metric 1", "Metric 2"],
      "quickWins": ["Immediate action 1"]
    }}
  ]
}}

Prioritize the Critical gaps first. Ensure the "steps" are technical and granular."""
    return GenerationRequest(prompt=prompt, temperature=0.4, max_tokens=6000, json_output=True)


def build_roadmap_request(profile: Profile) -> GenerationRequest:
    """Industry and region specific compliance roadmap, returned as markdown."""
    industry = profile.industry or "unspecified"
    region = profile.region or "unspecified"
    prompt = f"""You are a compliance consultant. Generate a detailed compliance roadmap for this company.

COMPANY:
- Industry: {industry}
- Region: {region}
- Size: {profile.employees} employees
- Data Types: {_join(profile.data_types, "Standard Business Data")}
- Existing Certifications: {_join(profile.existing_certifications, "None")}
- Regulatory Requirements: {_join(profile.regulatory_requirements, "Not specified")}

Generate a compliance roadmap covering:

1. REQUIRED Regulations (mandatory for their industry/region):
   - List each regulation (GDPR, HIPAA, PCI-DSS, SOC 2, ISO 27001, etc.)
   - Why it applies to them
   - Current gap assessment
   - Timeline to achieve (realistic months)
   - Estimated cost range
   - Business benefits

2. RECOMMENDED Frameworks (industry best practice):
   - Similar format as above
   - Focus on competitive advantage

3. Prioritized Action Plan:
   - Month-by-month roadmap for next 12 months
   - Quick wins (0-3 months)
   - Medium-term goals (3-9 months)
   - Long-term goals (9-12 months)

Be specific to their {industry} industry and {region} region. Include actual regulation names and specific requirements.

Format as clear markdown with headers, lists, and tables where appropriate."""
    return GenerationRequest(prompt=prompt, temperature=0.6, max_tokens=3000)


def build_quantification_request(profile: Profile, risks: list[RiskRecord]) -> GenerationRequest:
    """OpenFAIR style loss estimates per risk, returned as a JSON object."""
    risks_description = "\n".join(
        f"- {record.risk}: {record.consequence_label} impact, {record.likelihood_label} likelihood"
        for record in risks
    )
    prompt = f"""You are a Quantitative Risk Analyst (OpenFAIR methodology). Calculate financial risk exposure.

CONTEXT:
- Company Size: {profile.employees} employees
- Est. Revenue: ${profile.employees * REVENUE_PER_EMPLOYEE:,} (approx)
- Industry: {profile.industry or "unspecified"}
- Data Sensitivity: {_join(profile.data_types, "Standard Business Data")}

RISK SCENARIOS TO QUANTIFY:
{risks_description}

INSTRUCTIONS:
Estimate reasonable financial loss values (ALE) for EACH risk.
- **SLE (Single Loss Expectancy)**: Total cost of one event (Response + Downtime + Fines + Reputation).
- **ARO (Annual Rate of Occurrence)**: Probability of event per year (e.g., 0.1 for once in 10 years, 1.0 for once a year).
- **ALE**: SLE * ARO.
- **ROI**: ((ALE - MitigationCost) / MitigationCost) * 100.

BENCHMARKS (Guide only):
- Ransomware: $500k - $2M range for mid-size.
- Data Breach: $150 per record.
- DDoS: $10k - $50k per hour downtime.

OUTPUT FORMAT (JSON ONLY):
{{
  "risks": [
    {{
      "risk": "Exact Risk Name from list",
      "sle": number (USD),
      "aro": number (0.01 - 3.0),
      "ale": number (USD),
      "mitigationCost": number (USD),
      "roi": number (percentage)
    }}
  ]
}}"""
    return GenerationRequest(prompt=prompt, temperature=0.3, max_tokens=2000, json_output=True)
