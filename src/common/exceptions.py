class MonitoringError(Exception):
    """Base exception for all roundabout monitoring errors."""
    pass

class SourceUnavailable(MonitoringError):
    """Raised when a data source cannot deliver a complete, valid collection."""
    pass

class EmptyAggregateInput(MonitoringError):
    """Raised when an aggregate is computed over zero roundabouts."""
    pass

class ConfigurationError(MonitoringError):
    """Raised when configuration is invalid."""
    pass
