"""Warehouse rack layout estimation."""

from .calculator import (
    EquipmentProfile,
    EquipmentType,
    PlanInput,
    PlanResult,
    coerce_plan_input,
    compute_plan,
    resolve_equipment,
)
from .errors import UnknownEquipmentError

__all__ = [
    "EquipmentProfile",
    "EquipmentType",
    "PlanInput",
    "PlanResult",
    "UnknownEquipmentError",
    "coerce_plan_input",
    "compute_plan",
    "resolve_equipment",
]
