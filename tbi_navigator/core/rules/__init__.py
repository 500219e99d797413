"""Clinical decision rules with registry and comparison engine."""

from . import cchr, chip, nexus_ii, noc  # noqa: F401
from .engine import disagreement_notice, evaluate_cdrs
from .registry import registered_rules, run_rules

__all__ = ["evaluate_cdrs", "disagreement_notice", "registered_rules", "run_rules"]
