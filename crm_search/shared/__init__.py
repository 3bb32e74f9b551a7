"""Shared utilities and telemetry (no domain knowledge)."""
