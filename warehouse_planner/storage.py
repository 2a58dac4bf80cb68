"""Saving and loading a plan snapshot in a named JSON slot."""

from __future__ import annotations

import json
import os
from pathlib import Path
import tempfile
from typing import Any, Dict

from .calculator import PlanInput
from .config import DEFAULT_SLOT
from .errors import CorruptPlanError, NoSavedPlanError
from .logging_config import get_logger

logger = get_logger(__name__)


class PlanStore:
    """A JSON file mapping slot names to serialised plans.

    Saving overwrites the slot unconditionally; there is no locking.
    """

    def __init__(self, path: str | Path, slot: str = DEFAULT_SLOT) -> None:
        self.path = Path(path)
        self.slot = slot

    def _read_slots(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                slots = json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            raise CorruptPlanError(f"Saved plans in {self.path} could not be read.") from exc
        if not isinstance(slots, dict):
            raise CorruptPlanError(f"Saved plans in {self.path} are not a JSON object.")
        return slots

    def _write_slots(self, slots: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(slots, fh, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def save(self, plan: PlanInput) -> None:
        try:
            slots = self._read_slots()
        except CorruptPlanError:
            # Last write wins, even over an unreadable file.
            logger.warning("overwriting unreadable plan store", path=str(self.path))
            slots = {}
        slots[self.slot] = plan.to_dict()
        self._write_slots(slots)
        logger.info("plan saved", path=str(self.path), slot=self.slot)

    def load(self) -> PlanInput:
        slots = self._read_slots()
        if self.slot not in slots:
            logger.info("no saved plan", path=str(self.path), slot=self.slot)
            raise NoSavedPlanError(self.slot)
        raw = slots[self.slot]
        if not isinstance(raw, dict):
            raise CorruptPlanError(f"Saved plan '{self.slot}' is not a JSON object.")
        try:
            plan = PlanInput.from_dict(raw)
        except ValueError as exc:
            raise CorruptPlanError(f"Saved plan '{self.slot}' is invalid.") from exc
        logger.info("plan loaded", path=str(self.path), slot=self.slot)
        return plan

    def clear(self) -> None:
        slots = self._read_slots()
        if slots.pop(self.slot, None) is not None:
            self._write_slots(slots)
            logger.info("plan cleared", path=str(self.path), slot=self.slot)
