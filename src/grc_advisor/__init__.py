"""GRC Maturity Advisor service.

Security maturity diagnostic for small and mid-sized organisations. Scores a
questionnaire profile across six weighted dimensions, derives a ranked risk
register, and assembles an advisory report with LLM-written narrative
sections and deterministic fallbacks.
"""

__version__ = "0.1.0"
