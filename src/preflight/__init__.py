"""Preflight: FAIR compliance checks for scientific dataset directories."""

__version__ = "0.1.0"
