"""Orchestration over the rules engine."""
