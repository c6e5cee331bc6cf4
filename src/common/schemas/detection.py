from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from ...roundabouts.domain.entities import (
    CarDetection,
    CarPosition,
    CarsSummary,
    HealthStatus,
    RoundaboutCarsSnapshot,
)


class CarPositionSchema(BaseModel):
    x: float
    y: float


class CarDetectionSchema(BaseModel):
    """
    Represents a vehicle reported by the live roundabout detector.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Track identifier")
    type: str = Field(..., description="Vehicle type label")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Detector confidence (0.0 - 1.0)")
    position: CarPositionSchema
    in_first_zone: bool = Field(..., alias="inFirstZone")
    in_second_zone: bool = Field(..., alias="inSecondZone")
    is_penalty: bool = Field(..., alias="isPenalty")
    timestamp: datetime

    def to_entity(self) -> CarDetection:
        return CarDetection(
            id=self.id,
            type=self.type,
            confidence=self.confidence,
            position=CarPosition(x=self.position.x, y=self.position.y),
            in_first_zone=self.in_first_zone,
            in_second_zone=self.in_second_zone,
            is_penalty=self.is_penalty,
            timestamp=self.timestamp,
        )

    @classmethod
    def from_entity(cls, car: CarDetection) -> "CarDetectionSchema":
        return cls(
            id=car.id,
            type=car.type,
            confidence=car.confidence,
            position=CarPositionSchema(x=car.position.x, y=car.position.y),
            in_first_zone=car.in_first_zone,
            in_second_zone=car.in_second_zone,
            is_penalty=car.is_penalty,
            timestamp=car.timestamp,
        )


class CarsSummarySchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_cars: int = Field(..., ge=0, alias="totalCars")
    penalty_count: int = Field(..., ge=0, alias="penaltyCount")
    first_zone_count: int = Field(..., ge=0, alias="firstZoneCount")
    second_zone_count: int = Field(..., ge=0, alias="secondZoneCount")
    car_types: Dict[str, int] = Field(default_factory=dict, alias="carTypes")


class RoundaboutCarsSchema(BaseModel):
    """
    Live-detection snapshot for a roundabout.
    """
    model_config = ConfigDict(populate_by_name=True)

    roundabout_id: str = Field(..., alias="roundaboutId")
    timestamp: datetime
    summary: CarsSummarySchema
    cars: List[CarDetectionSchema] = Field(default_factory=list)

    def to_entity(self) -> RoundaboutCarsSnapshot:
        return RoundaboutCarsSnapshot(
            roundabout_id=self.roundabout_id,
            timestamp=self.timestamp,
            summary=CarsSummary(
                total_cars=self.summary.total_cars,
                penalty_count=self.summary.penalty_count,
                first_zone_count=self.summary.first_zone_count,
                second_zone_count=self.summary.second_zone_count,
                car_types=dict(self.summary.car_types),
            ),
            cars=[c.to_entity() for c in self.cars],
        )

    @classmethod
    def from_entity(cls, snapshot: RoundaboutCarsSnapshot) -> "RoundaboutCarsSchema":
        return cls(
            roundabout_id=snapshot.roundabout_id,
            timestamp=snapshot.timestamp,
            summary=CarsSummarySchema(
                total_cars=snapshot.summary.total_cars,
                penalty_count=snapshot.summary.penalty_count,
                first_zone_count=snapshot.summary.first_zone_count,
                second_zone_count=snapshot.summary.second_zone_count,
                car_types=dict(snapshot.summary.car_types),
            ),
            cars=[CarDetectionSchema.from_entity(c) for c in snapshot.cars],
        )


class HealthStatusSchema(BaseModel):
    """
    Liveness probe payload.
    """
    status: str
    timestamp: datetime

    def to_entity(self) -> HealthStatus:
        return HealthStatus(status=self.status, timestamp=self.timestamp)
