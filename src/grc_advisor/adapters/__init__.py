"""Adapters for external collaborators (LLM service, benchmark data)."""
