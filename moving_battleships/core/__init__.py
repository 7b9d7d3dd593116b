"""Deterministic rules engine."""
