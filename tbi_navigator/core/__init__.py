"""Deterministic ciTBI risk and CT decision engine."""
