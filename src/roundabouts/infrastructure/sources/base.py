"""
Base classes and configuration for dashboard data sources.
"""
from abc import ABC, abstractmethod
from typing import Optional
from pydantic import BaseModel, Field
from ...domain.protocols import DataSource

class SourceSettings(BaseModel):
    """Validated settings shared by source factories"""
    base_url: str = Field("http://localhost:5000/api", description="Traffic API base URL")
    timeout_seconds: float = Field(3.0, gt=0, description="Per-request timeout")
    seed: Optional[int] = Field(None, description="Random seed for the simulated source")

class SourceFactory(ABC):
    """
    Abstract factory for creating data sources.
    """

    @abstractmethod
    def create(self, settings: SourceSettings) -> DataSource:
        pass

    @abstractmethod
    def can_handle(self, source_type: str) -> bool:
        pass
