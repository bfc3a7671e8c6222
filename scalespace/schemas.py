# scalespace/schemas.py
from typing import Any, Dict, List
from pydantic import BaseModel, Field

from .geometry.coordinates import Coordinate
from .layout import ObservedObject


class CoordinateSchema(BaseModel):
    x: int
    y: int
    z: int
    hash: int = Field(..., ge=0, lt=2 ** 64)

    @classmethod
    def from_coordinate(cls, coordinate: Coordinate) -> "CoordinateSchema":
        return cls(**coordinate.to_dict())


class ObservedObjectSchema(BaseModel):
    shape: Dict[str, Any]
    visual_angle_rad: float
    visual_angle_deg: float
    distance_m: float
    coordinates: CoordinateSchema
    observed_from: CoordinateSchema

    @classmethod
    def from_observed(cls, observed: ObservedObject) -> "ObservedObjectSchema":
        return cls(
            shape=observed.shape.describe(),
            visual_angle_rad=observed.visual_angle.to("radian").magnitude,
            visual_angle_deg=observed.visual_angle.to("degree").magnitude,
            distance_m=observed.distance.to("meter").magnitude,
            coordinates=CoordinateSchema.from_coordinate(observed.coordinates),
            observed_from=CoordinateSchema.from_coordinate(observed.observed_from),
        )


def dump_observations(observed: List[ObservedObject]) -> List[Dict[str, Any]]:
    """JSON-ready records for a list of observations, e.g. for debugging dumps."""
    return [ObservedObjectSchema.from_observed(o).model_dump() for o in observed]
