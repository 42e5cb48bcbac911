"""Guardrails: architectural policy checks over TypeScript and Python syntax trees."""

__version__ = "0.1.0"
