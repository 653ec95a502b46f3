"""Service layer for the GRC Maturity Advisor."""

from grc_advisor.core.services.report_assembler import ReportAssembler

__all__ = ["ReportAssembler"]
