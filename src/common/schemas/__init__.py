from .dashboard import RiskyBehaviorSchema, DistrictSchema, RoundaboutSchema, AlertSchema
from .detection import (
    CarPositionSchema,
    CarDetectionSchema,
    CarsSummarySchema,
    RoundaboutCarsSchema,
    HealthStatusSchema,
)

__all__ = [
    "RiskyBehaviorSchema",
    "DistrictSchema",
    "RoundaboutSchema",
    "AlertSchema",
    "CarPositionSchema",
    "CarDetectionSchema",
    "CarsSummarySchema",
    "RoundaboutCarsSchema",
    "HealthStatusSchema",
]
