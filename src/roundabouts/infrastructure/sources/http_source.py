"""
HTTP data source for the traffic API.
"""
from typing import Any, List, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from ....common.exceptions import SourceUnavailable
from ....common.logging import log_execution_time, setup_logger
from ....common.schemas import (
    AlertSchema,
    DistrictSchema,
    HealthStatusSchema,
    RoundaboutCarsSchema,
    RoundaboutSchema,
)
from ...domain.entities import Alert, District, HealthStatus, Roundabout, RoundaboutCarsSnapshot

logger = setup_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class HttpDataSource:
    """
    DataSource backed by the traffic REST API.

    Any transport error, non-2xx status, unparsable body or invalid record
    fails the whole call with SourceUnavailable; nothing is partially hydrated.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000/api",
        timeout_seconds: float = 3.0,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    @log_execution_time(logger)
    def _fetch_json(self, endpoint: str) -> Any:
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.get(url, timeout=self.timeout_seconds)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            raise SourceUnavailable(f"GET {url} failed: {e}") from e
        except ValueError as e:
            raise SourceUnavailable(f"GET {url} returned invalid JSON: {e}") from e

    def _parse_one(self, payload: Any, schema: Type[SchemaT], endpoint: str) -> SchemaT:
        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            raise SourceUnavailable(f"Malformed payload from {endpoint}: {e}") from e

    def _parse_many(self, payload: Any, schema: Type[SchemaT], endpoint: str) -> List[SchemaT]:
        if not isinstance(payload, list):
            raise SourceUnavailable(
                f"Expected a list from {endpoint}, got {type(payload).__name__}"
            )
        return [self._parse_one(item, schema, endpoint) for item in payload]

    def fetch_roundabouts(self) -> List[Roundabout]:
        payload = self._fetch_json("/roundabouts")
        return [r.to_entity() for r in self._parse_many(payload, RoundaboutSchema, "/roundabouts")]

    def fetch_districts(self) -> List[District]:
        payload = self._fetch_json("/districts")
        return [d.to_entity() for d in self._parse_many(payload, DistrictSchema, "/districts")]

    def fetch_alerts(self) -> List[Alert]:
        payload = self._fetch_json("/alerts")
        return [a.to_entity() for a in self._parse_many(payload, AlertSchema, "/alerts")]

    def fetch_roundabout(self, roundabout_id: str) -> Roundabout:
        endpoint = f"/roundabout/{roundabout_id}"
        return self._parse_one(self._fetch_json(endpoint), RoundaboutSchema, endpoint).to_entity()

    def fetch_roundabout_cars(self, roundabout_id: str) -> RoundaboutCarsSnapshot:
        endpoint = f"/roundabout/{roundabout_id}/cars"
        return self._parse_one(self._fetch_json(endpoint), RoundaboutCarsSchema, endpoint).to_entity()

    def health_check(self) -> HealthStatus:
        return self._parse_one(self._fetch_json("/health"), HealthStatusSchema, "/health").to_entity()
