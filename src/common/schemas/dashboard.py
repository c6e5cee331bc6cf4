from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ...roundabouts.domain.entities import (
    Alert,
    AlertType,
    CongestionLevel,
    District,
    RiskyBehavior,
    Roundabout,
    SeverityLevel,
    TrendDirection,
)

SeverityName = Literal['optimal', 'attention', 'concern', 'critical']
TrendName = Literal['up', 'down', 'stable']


class RiskyBehaviorSchema(BaseModel):
    """
    Risky-behavior counters as exchanged with the traffic API.
    """
    model_config = ConfigDict(populate_by_name=True)

    wrong_way: int = Field(..., ge=0, alias="wrongWay", description="Wrong-way incidents")
    illegal_u_turn: int = Field(..., ge=0, alias="illegalUTurn", description="Illegal U-turn incidents")
    speeding: int = Field(..., ge=0, description="Speeding incidents")

    def to_entity(self) -> RiskyBehavior:
        return RiskyBehavior(
            wrong_way=self.wrong_way,
            illegal_u_turn=self.illegal_u_turn,
            speeding=self.speeding,
        )

    @classmethod
    def from_entity(cls, risky: RiskyBehavior) -> "RiskyBehaviorSchema":
        return cls(
            wrong_way=risky.wrong_way,
            illegal_u_turn=risky.illegal_u_turn,
            speeding=risky.speeding,
        )


class DistrictSchema(BaseModel):
    """
    Represents a district record of the traffic API.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Unique district identifier")
    name: str = Field(..., description="Display name")
    name_ar: str = Field(..., alias="nameAr", description="Arabic display name")
    total_roundabouts: int = Field(..., ge=0, alias="totalRoundabouts")
    active_alerts: int = Field(..., ge=0, alias="activeAlerts")
    congestion_score: int = Field(..., ge=0, le=100, alias="congestionScore")
    severity: SeverityName = Field(..., description="District severity level")
    latitude: float
    longitude: float

    def to_entity(self) -> District:
        return District(
            id=self.id,
            name=self.name,
            name_ar=self.name_ar,
            total_roundabouts=self.total_roundabouts,
            active_alerts=self.active_alerts,
            congestion_score=self.congestion_score,
            severity=SeverityLevel(self.severity),
            latitude=self.latitude,
            longitude=self.longitude,
        )

    @classmethod
    def from_entity(cls, district: District) -> "DistrictSchema":
        return cls(
            id=district.id,
            name=district.name,
            name_ar=district.name_ar,
            total_roundabouts=district.total_roundabouts,
            active_alerts=district.active_alerts,
            congestion_score=district.congestion_score,
            severity=district.severity.value,
            latitude=district.latitude,
            longitude=district.longitude,
        )


class RoundaboutSchema(BaseModel):
    """
    Represents a roundabout record of the traffic API.
    Lane utilization is not range-checked: seed values may sit outside [20, 100].
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Unique roundabout identifier")
    name: str = Field(..., description="Display name")
    district_id: str = Field(..., alias="districtId", description="Owning district")
    vehicle_entry: int = Field(..., ge=0, alias="vehicleEntry")
    vehicle_exit: int = Field(..., ge=0, alias="vehicleExit")
    entry_trend: TrendName = Field(..., alias="entryTrend")
    exit_trend: TrendName = Field(..., alias="exitTrend")
    lane_utilization: int = Field(..., alias="laneUtilization")
    congestion_level: Literal['Low', 'Moderate', 'High', 'Critical'] = Field(..., alias="congestionLevel")
    risky_behaviors: RiskyBehaviorSchema = Field(..., alias="riskyBehaviors")
    last_updated: datetime = Field(..., alias="lastUpdated", description="ISO-8601 time of last update")
    severity_score: int = Field(..., ge=0, le=100, alias="severityScore")
    latitude: float
    longitude: float

    def to_entity(self) -> Roundabout:
        return Roundabout(
            id=self.id,
            name=self.name,
            district_id=self.district_id,
            vehicle_entry=self.vehicle_entry,
            vehicle_exit=self.vehicle_exit,
            entry_trend=TrendDirection(self.entry_trend),
            exit_trend=TrendDirection(self.exit_trend),
            lane_utilization=self.lane_utilization,
            congestion_level=CongestionLevel(self.congestion_level),
            risky_behaviors=self.risky_behaviors.to_entity(),
            last_updated=self.last_updated,
            severity_score=self.severity_score,
            latitude=self.latitude,
            longitude=self.longitude,
        )

    @classmethod
    def from_entity(cls, roundabout: Roundabout) -> "RoundaboutSchema":
        return cls(
            id=roundabout.id,
            name=roundabout.name,
            district_id=roundabout.district_id,
            vehicle_entry=roundabout.vehicle_entry,
            vehicle_exit=roundabout.vehicle_exit,
            entry_trend=roundabout.entry_trend.value,
            exit_trend=roundabout.exit_trend.value,
            lane_utilization=roundabout.lane_utilization,
            congestion_level=roundabout.congestion_level.value,
            risky_behaviors=RiskyBehaviorSchema.from_entity(roundabout.risky_behaviors),
            last_updated=roundabout.last_updated,
            severity_score=roundabout.severity_score,
            latitude=roundabout.latitude,
            longitude=roundabout.longitude,
        )


class AlertSchema(BaseModel):
    """
    Represents an alert record of the traffic API.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Unique alert identifier")
    roundabout_id: str = Field(..., alias="roundaboutId")
    roundabout_name: str = Field(..., alias="roundaboutName")
    district_id: str = Field(..., alias="districtId")
    district_name: str = Field(..., alias="districtName")
    severity: SeverityName
    type: Literal['congestion', 'risky_behavior', 'equipment', 'accident']
    message: str
    estimated_impact: str = Field(..., alias="estimatedImpact")
    timestamp: datetime = Field(..., description="ISO-8601 time the alert was raised")
    acknowledged: bool = False
    severity_score: int = Field(..., ge=0, le=100, alias="severityScore")

    def to_entity(self) -> Alert:
        return Alert(
            id=self.id,
            roundabout_id=self.roundabout_id,
            roundabout_name=self.roundabout_name,
            district_id=self.district_id,
            district_name=self.district_name,
            severity=SeverityLevel(self.severity),
            type=AlertType(self.type),
            message=self.message,
            estimated_impact=self.estimated_impact,
            timestamp=self.timestamp,
            acknowledged=self.acknowledged,
            severity_score=self.severity_score,
        )

    @classmethod
    def from_entity(cls, alert: Alert) -> "AlertSchema":
        return cls(
            id=alert.id,
            roundabout_id=alert.roundabout_id,
            roundabout_name=alert.roundabout_name,
            district_id=alert.district_id,
            district_name=alert.district_name,
            severity=alert.severity.value,
            type=alert.type.value,
            message=alert.message,
            estimated_impact=alert.estimated_impact,
            timestamp=alert.timestamp,
            acknowledged=alert.acknowledged,
            severity_score=alert.severity_score,
        )
