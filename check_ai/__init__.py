"""check-ai - Audit any repository for AI-readiness."""

__version__ = "1.0.0"
