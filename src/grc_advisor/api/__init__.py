"""HTTP API for the GRC Maturity Advisor."""
