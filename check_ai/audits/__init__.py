"""Audit modules. Each module contributes one section of checks."""
