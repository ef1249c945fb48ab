"""Playwright login helpers for the SaaS admin end-to-end suite."""

__version__ = "0.1.0"
