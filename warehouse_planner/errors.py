"""Exceptions raised by the warehouse planner."""

from __future__ import annotations


class PlannerError(Exception):
    """Base class for planner failures."""


class UnknownEquipmentError(PlannerError, ValueError):
    """Raised when an equipment name is not one of the known profiles."""

    def __init__(self, name: str, valid: str = "") -> None:
        self.name = name
        message = f"Unknown equipment type '{name}'."
        if valid:
            message = f"{message} Valid values: {valid}."
        super().__init__(message)


class PlanStoreError(PlannerError):
    """Base class for snapshot slot failures."""


class NoSavedPlanError(PlanStoreError):
    def __init__(self, slot: str) -> None:
        self.slot = slot
        super().__init__("No saved plan found")


class CorruptPlanError(PlanStoreError, ValueError):
    """The stored snapshot could not be read back as a plan."""


class PreviewTooLargeError(PlannerError):
    """The rack grid has too many racks to draw."""

    def __init__(self, racks: int, limit: int) -> None:
        self.racks = racks
        self.limit = limit
        super().__init__(
            f"3D preview skipped: {racks} racks exceeds the limit of {limit}."
        )
