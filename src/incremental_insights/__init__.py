"""Incremental budget opportunity analysis for campaign-performance exports."""

__version__ = "0.1.0"
