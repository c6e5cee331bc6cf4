"""
Domain module initialization.
"""
from .entities import (
    TrendDirection,
    CongestionLevel,
    SeverityLevel,
    AlertType,
    RiskyBehavior,
    District,
    Roundabout,
    Alert,
    DispatchRequest,
    CarPosition,
    CarDetection,
    CarsSummary,
    RoundaboutCarsSnapshot,
    HealthStatus,
    DashboardSnapshot,
    TimeRange,
    HistoryPoint
)
from .protocols import DataSource
