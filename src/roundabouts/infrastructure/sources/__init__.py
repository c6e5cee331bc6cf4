"""
Source module initialization and factory registry.
"""
from typing import Dict
from ....common.exceptions import ConfigurationError
from ...domain.protocols import DataSource
from .base import SourceFactory, SourceSettings
from .http_source import HttpDataSource
from .simulated_source import SimulatedDataSource, generate_history

class HttpSourceFactory(SourceFactory):
    def can_handle(self, source_type: str) -> bool:
        return source_type == "http"

    def create(self, settings: SourceSettings) -> DataSource:
        return HttpDataSource(settings.base_url, settings.timeout_seconds)


class SimulatedSourceFactory(SourceFactory):
    def can_handle(self, source_type: str) -> bool:
        return source_type == "simulated"

    def create(self, settings: SourceSettings) -> DataSource:
        return SimulatedDataSource(seed=settings.seed)


class SourceRegistry:
    """
    Centralized registry for source factories.
    """

    def __init__(self):
        self._factories: Dict[str, SourceFactory] = {}

    def register(self, name: str, factory: SourceFactory):
        self._factories[name] = factory

    def create_source(self, source_type: str, **kwargs) -> DataSource:
        settings = SourceSettings(**kwargs)
        for factory in self._factories.values():
            if factory.can_handle(source_type):
                return factory.create(settings)

        raise ConfigurationError(f"No factory found for source type: {source_type}")


# Setup global registry
_registry = SourceRegistry()
_registry.register("http", HttpSourceFactory())
_registry.register("simulated", SimulatedSourceFactory())


def create_source(source_type: str = "http", **kwargs) -> DataSource:
    """
    Factory function to create the appropriate DataSource using the registry.
    """
    return _registry.create_source(source_type, **kwargs)
