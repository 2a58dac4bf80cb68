"""Core rack layout calculations."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from enum import Enum
import json
import math
from typing import Any, List, Mapping, Optional, Tuple

from .errors import UnknownEquipmentError
from .logging_config import get_logger

logger = get_logger(__name__)

INCHES_PER_FOOT = 12.0
SQIN_PER_SQFT = 144.0

WARN_EXCEEDS_LENGTH = "layout exceeds building length"
WARN_EXCEEDS_WIDTH = "layout exceeds building width"
WARN_NO_RACKS_ALONG_LENGTH = "no racks fit along building length"
WARN_NO_ROWS_ACROSS_WIDTH = "no rack rows fit across building width"
WARN_RACK_DIMENSIONS = "rack beam length and depth must be positive"
WARN_AREA_OVERFLOW = "areas are too large to compute"


@dataclass(frozen=True)
class EquipmentProfile:
    """Aisle clearances required by a piece of material-handling equipment."""

    aisle_width_in: float
    intersecting_aisle_width_in: float

    @property
    def aisle_width_ft(self) -> float:
        return self.aisle_width_in / INCHES_PER_FOOT

    @property
    def intersecting_aisle_width_ft(self) -> float:
        return self.intersecting_aisle_width_in / INCHES_PER_FOOT


class EquipmentType(Enum):
    TURRET_TRUCK = "Turret Truck"
    COUNTERBALANCE_FORKLIFT = "Counterbalance Forklift"
    REACH_TRUCK = "Reach Truck"
    AISLE_MASTER_33NE = "Aisle Master 33NE"

    @property
    def profile(self) -> EquipmentProfile:
        return _EQUIPMENT_PROFILES[self]


_EQUIPMENT_PROFILES = {
    EquipmentType.TURRET_TRUCK: EquipmentProfile(72.0, 96.0),
    EquipmentType.COUNTERBALANCE_FORKLIFT: EquipmentProfile(144.0, 144.0),
    EquipmentType.REACH_TRUCK: EquipmentProfile(108.0, 120.0),
    EquipmentType.AISLE_MASTER_33NE: EquipmentProfile(72.0, 96.0),
}


def equipment_names() -> List[str]:
    """Return the equipment names in display order."""

    return [member.value for member in EquipmentType]


def resolve_equipment(name: str) -> EquipmentProfile:
    try:
        return EquipmentType(name).profile
    except ValueError as exc:
        raise UnknownEquipmentError(name, ", ".join(equipment_names())) from exc


@dataclass(frozen=True)
class PlanInput:
    """Building, rack and equipment parameters for one layout calculation.

    Building dimensions are in feet, pallet and rack dimensions in inches.
    """

    building_length: float
    building_width: float
    ceiling_height: float
    pallet_width: float
    pallet_depth: float
    pallets_per_level: int
    rack_beam_length: float
    rack_depth: float
    equipment_type: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "PlanInput":
        """Build a plan from a JSON-like mapping, rejecting missing or bad values."""

        try:
            values = {
                name: _strict_number(raw[name]) for name in _NUMERIC_FIELDS
            }
            pallets_per_level = raw["pallets_per_level"]
            if isinstance(pallets_per_level, bool) or int(pallets_per_level) != pallets_per_level:
                raise ValueError("pallets_per_level must be a whole number")
            equipment_type = raw["equipment_type"]
            if not isinstance(equipment_type, str):
                raise TypeError("equipment_type must be a string")
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            raise ValueError(
                f"Invalid plan specification: {json.dumps(raw, default=str)}"
            ) from exc
        return cls(
            pallets_per_level=int(pallets_per_level),
            equipment_type=equipment_type,
            **values,
        )


_NUMERIC_FIELDS: Tuple[str, ...] = tuple(
    f.name
    for f in fields(PlanInput)
    if f.name not in ("pallets_per_level", "equipment_type")
)


def _strict_number(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("booleans are not numbers")
    try:
        number = float(value)
    except OverflowError as exc:
        raise ValueError("numbers must be finite") from exc
    if not math.isfinite(number):
        raise ValueError("numbers must be finite")
    return number


def _lenient_number(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def coerce_plan_input(
    raw: Mapping[str, Any], defaults: Optional[PlanInput] = None
) -> PlanInput:
    """Build a plan from loosely typed form values.

    Values that are not numbers become zero instead of raising, missing
    values fall back to ``defaults`` (or zero).
    """

    def pick(name: str) -> Any:
        if name in raw:
            return raw[name]
        return getattr(defaults, name) if defaults is not None else 0

    values = {name: _lenient_number(pick(name)) for name in _NUMERIC_FIELDS}
    equipment_type = pick("equipment_type")
    return PlanInput(
        pallets_per_level=int(_lenient_number(pick("pallets_per_level"))),
        equipment_type=str(equipment_type or "").strip(),
        **values,
    )


@dataclass(frozen=True)
class PlanResult:
    rack_count_per_row: int
    number_of_rack_rows: int
    total_racks: int
    total_pallets: int
    used_area_sqft: float
    unused_area_sqft: float
    warnings: Tuple[str, ...]
    rack_length_ft: float
    rack_depth_ft: float
    aisle_width_ft: float
    intersecting_aisle_width_ft: float

    @property
    def total_area_sqft(self) -> float:
        return self.used_area_sqft + self.unused_area_sqft

    def to_dict(self) -> dict:
        data = asdict(self)
        data["warnings"] = list(self.warnings)
        return data


def _fit_count(usable_ft: float, span_ft: float) -> Tuple[int, bool]:
    """Return how many spans fit and whether the raw count had to be clamped."""

    count = math.floor(usable_ft / span_ft)
    if count < 0:
        return 0, True
    return count, False


def compute_plan(plan: PlanInput) -> PlanResult:
    equipment = resolve_equipment(plan.equipment_type)

    rack_length_ft = plan.rack_beam_length / INCHES_PER_FOOT
    rack_depth_ft = plan.rack_depth / INCHES_PER_FOOT
    aisle_ft = equipment.aisle_width_ft
    intersecting_ft = equipment.intersecting_aisle_width_ft
    length_span_ft = rack_length_ft + aisle_ft
    width_span_ft = rack_depth_ft + intersecting_ft

    warnings: List[str] = []
    if rack_length_ft <= 0 or rack_depth_ft <= 0:
        rack_count_per_row = number_of_rack_rows = 0
        warnings.append(WARN_RACK_DIMENSIONS)
    else:
        usable_length = plan.building_length - aisle_ft
        usable_width = plan.building_width - intersecting_ft
        rack_count_per_row, clamped_length = _fit_count(usable_length, length_span_ft)
        number_of_rack_rows, clamped_width = _fit_count(usable_width, width_span_ft)
        if clamped_length:
            warnings.append(WARN_NO_RACKS_ALONG_LENGTH)
        if clamped_width:
            warnings.append(WARN_NO_ROWS_ACROSS_WIDTH)

    total_racks = rack_count_per_row * number_of_rack_rows
    total_pallets = max(total_racks * plan.pallets_per_level, 0)
    # Float factors: the integer rack total can exceed the float range.
    used_area_sqft = (
        float(rack_count_per_row)
        * float(number_of_rack_rows)
        * plan.rack_beam_length
        * plan.rack_depth
        / SQIN_PER_SQFT
    )
    unused_area_sqft = plan.building_length * plan.building_width - used_area_sqft
    if not (math.isfinite(used_area_sqft) and math.isfinite(unused_area_sqft)):
        warnings.append(WARN_AREA_OVERFLOW)

    # Guards against floating point drift at the boundary.
    if rack_count_per_row * length_span_ft > plan.building_length:
        warnings.append(WARN_EXCEEDS_LENGTH)
    if number_of_rack_rows * width_span_ft > plan.building_width:
        warnings.append(WARN_EXCEEDS_WIDTH)

    result = PlanResult(
        rack_count_per_row=rack_count_per_row,
        number_of_rack_rows=number_of_rack_rows,
        total_racks=total_racks,
        total_pallets=total_pallets,
        used_area_sqft=used_area_sqft,
        unused_area_sqft=unused_area_sqft,
        warnings=tuple(warnings),
        rack_length_ft=rack_length_ft,
        rack_depth_ft=rack_depth_ft,
        aisle_width_ft=aisle_ft,
        intersecting_aisle_width_ft=intersecting_ft,
    )
    logger.debug(
        "plan computed",
        equipment=plan.equipment_type,
        total_racks=total_racks,
        total_pallets=total_pallets,
        warnings=len(warnings),
    )
    return result
