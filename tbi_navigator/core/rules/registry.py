"""Rule registry composing the independent clinical decision rules."""

from __future__ import annotations

from typing import Callable, Dict, Tuple

from ...schemas.findings import PatientFindings
from ...schemas.results import CDRDecision
from ..reference import RULE_PERFORMANCE

RuleFunc = Callable[[PatientFindings], CDRDecision]

_REGISTRY: Dict[str, RuleFunc] = {}


def register(name: str) -> Callable[[RuleFunc], RuleFunc]:
    def decorator(func: RuleFunc) -> RuleFunc:
        _REGISTRY[name] = func
        return func

    return decorator


def registered_rules() -> Tuple[str, ...]:
    return tuple(_REGISTRY)


def run_rules(findings: PatientFindings) -> Dict[str, CDRDecision]:
    """Evaluate every registered rule against the same findings snapshot."""

    results: Dict[str, CDRDecision] = {}
    for name, func in _REGISTRY.items():
        decision = func(findings)
        performance = RULE_PERFORMANCE.get(name)
        if performance is not None:
            decision = decision.model_copy(update={"performance": performance})
        results[name] = decision
    return results
