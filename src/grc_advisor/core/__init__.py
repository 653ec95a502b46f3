"""Core domain logic: scoring, gaps, risk register and report assembly."""
