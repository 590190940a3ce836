"""Placement of injected content and upkeep of tagged auxiliary messages."""

from .planner import InjectionPlan, InjectionSpec, apply_injection, plan_injection
from .reconciler import AFTER_ID, BEFORE_ID, is_auxiliary, reconcile_auxiliary

__all__ = [
    "AFTER_ID",
    "BEFORE_ID",
    "InjectionPlan",
    "InjectionSpec",
    "apply_injection",
    "is_auxiliary",
    "plan_injection",
    "reconcile_auxiliary",
]
