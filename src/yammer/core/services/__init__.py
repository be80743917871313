"""Orchestration services built on the core ports."""
