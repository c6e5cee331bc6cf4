"""
Realtime refresh controller.

Owns the dashboard snapshot, polls the data source on a fixed period and
applies results all-or-nothing.
"""
import asyncio
import time
from dataclasses import replace
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Set, Tuple

from ...common.exceptions import SourceUnavailable
from ...common.logging import setup_logger
from ...common.metrics import RefreshMetricsCollector
from ..domain.entities import Alert, DashboardSnapshot, DispatchRequest, District, Roundabout
from ..domain.metrics import recompute_district_aggregates
from ..domain.protocols import DataSource
from ..infrastructure.broadcast.realtime_broadcaster import SNAPSHOT_CHANNEL, RealtimeBroadcaster

logger = setup_logger(__name__)


class RefreshMode(Enum):
    LIVE = "live"          # last fetch succeeded
    DEGRADED = "degraded"  # last fetch failed, or none has succeeded yet


class RefreshController:
    """
    Periodically refreshes districts, roundabouts and alerts from a DataSource.

    At most one refresh runs at a time. A refresh either replaces the whole
    snapshot or leaves it untouched. After stop(), results of a fetch still
    in flight are discarded.
    """

    def __init__(
        self,
        source: DataSource,
        seed: DashboardSnapshot,
        interval_seconds: float = 5.0,
        broadcaster: Optional[RealtimeBroadcaster] = None,
        metrics_collector: Optional[RefreshMetricsCollector] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.source = source
        self.interval_seconds = interval_seconds
        self.broadcaster = broadcaster
        self.metrics_collector = metrics_collector
        self._clock = clock

        # Seed fixtures carry stale district aggregates
        self._snapshot = replace(
            seed,
            districts=tuple(recompute_district_aggregates(seed.districts, seed.roundabouts)),
        )
        self._mode = RefreshMode.DEGRADED
        self._last_error: Optional[str] = None
        self._last_success: Optional[datetime] = None

        self._acknowledged: Set[str] = set()
        self._dispatches: List[DispatchRequest] = []

        self._task: Optional[asyncio.Task] = None
        self._in_flight = False
        self._disposed = False

    # Read-only state

    @property
    def snapshot(self) -> DashboardSnapshot:
        return self._snapshot

    @property
    def mode(self) -> RefreshMode:
        return self._mode

    @property
    def is_online(self) -> bool:
        return self._mode is RefreshMode.LIVE

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def last_success(self) -> Optional[datetime]:
        return self._last_success

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def now(self) -> datetime:
        return self._clock()

    @property
    def dispatches(self) -> Tuple[DispatchRequest, ...]:
        return tuple(self._dispatches)

    # Lifecycle

    async def start(self):
        """Starts the periodic refresh loop. The first refresh runs immediately."""
        if self._disposed:
            raise RuntimeError("RefreshController cannot be restarted after stop()")
        if self.is_running:
            logger.info("Refresh controller already running")
            return

        self._task = asyncio.create_task(self._run_loop())
        logger.info(f"Refresh controller started (interval {self.interval_seconds}s)")

    async def stop(self):
        """Stops the loop. A fetch completing after this point is discarded."""
        self._disposed = True
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Refresh controller stopped")

    async def _run_loop(self):
        loop = asyncio.get_running_loop()
        while not self._disposed:
            started = loop.time()
            try:
                await self.refresh()
            except Exception as e:
                logger.error(f"Refresh tick failed: {e}", exc_info=True)
            # Fixed period: fetch time counts against the interval
            await asyncio.sleep(max(0.0, self.interval_seconds - (loop.time() - started)))

    # Refresh

    def _fetch_all(self) -> Tuple[List[Roundabout], List[District], List[Alert]]:
        roundabouts = self.source.fetch_roundabouts()
        districts = self.source.fetch_districts()
        alerts = self.source.fetch_alerts()
        return roundabouts, districts, alerts

    async def refresh(self) -> bool:
        """
        Runs one refresh cycle.

        Returns True if a new snapshot was applied, False if the cycle was
        skipped, failed, or finished after the controller was stopped.
        """
        if self._disposed:
            return False
        if self._in_flight:
            logger.debug("Refresh already in flight, skipping tick")
            if self.metrics_collector:
                self.metrics_collector.record_skip()
            return False

        self._in_flight = True
        start = time.time()
        try:
            try:
                roundabouts, districts, alerts = await asyncio.to_thread(self._fetch_all)
            except Exception as e:
                if not isinstance(e, SourceUnavailable):
                    # A faulty source must not end the loop
                    logger.error(f"Unexpected error while refreshing: {e}", exc_info=True)
                self._record_fetch(start, succeeded=False)
                if self._disposed:
                    return False
                self._on_failure(e)
                await self.publish()
                return False

            self._record_fetch(start, succeeded=True)
            if self._disposed:
                logger.debug("Discarding fetch that completed after stop()")
                return False

            self._apply(roundabouts, districts, alerts)
        finally:
            self._in_flight = False

        await self.publish()
        return True

    async def publish(self):
        """Pushes the current snapshot and mode to the broadcaster, if any."""
        if self.broadcaster:
            payload = self.broadcaster.serialize_snapshot(self._snapshot, self._mode.value)
            await self.broadcaster.broadcast(SNAPSHOT_CHANNEL, payload)

    def _record_fetch(self, start: float, succeeded: bool):
        if self.metrics_collector:
            self.metrics_collector.record_fetch((time.time() - start) * 1000, succeeded)

    def _on_failure(self, error: Exception):
        if self._mode is RefreshMode.LIVE or self._last_error is None:
            logger.warning(f"Live data unavailable, serving last known-good snapshot: {error}")
        else:
            logger.debug(f"Source still unavailable: {error}")
        self._mode = RefreshMode.DEGRADED
        self._last_error = str(error)

    def _apply(self, roundabouts: List[Roundabout], districts: List[District], alerts: List[Alert]):
        now = self._clock()
        alerts = [
            replace(a, acknowledged=True) if a.id in self._acknowledged and not a.acknowledged else a
            for a in alerts
        ]
        self._snapshot = DashboardSnapshot(
            districts=tuple(recompute_district_aggregates(districts, roundabouts)),
            roundabouts=tuple(roundabouts),
            alerts=tuple(alerts),
            taken_at=now,
        )
        if self._mode is not RefreshMode.LIVE:
            logger.info("Live data available")
        self._mode = RefreshMode.LIVE
        self._last_error = None
        self._last_success = now

    # User intents

    def acknowledge_alert(self, alert_id: str) -> bool:
        """
        Marks an alert as acknowledged. Idempotent.
        Returns False if no alert has this id.
        """
        if not any(a.id == alert_id for a in self._snapshot.alerts):
            return False

        self._acknowledged.add(alert_id)
        self._snapshot = replace(
            self._snapshot,
            alerts=tuple(
                replace(a, acknowledged=True) if a.id == alert_id else a
                for a in self._snapshot.alerts
            ),
        )
        return True

    def dispatch_team(self, alert_id: str) -> DispatchRequest:
        alert = self.get_alert(alert_id)
        if alert is None:
            raise KeyError(alert_id)

        request = DispatchRequest(
            alert_id=alert.id,
            roundabout_id=alert.roundabout_id,
            district_id=alert.district_id,
            requested_at=self._clock(),
        )
        self._dispatches.append(request)
        logger.info(f"Dispatch requested for alert {alert.id} at {alert.roundabout_name}")
        return request

    # Lookups

    def get_alert(self, alert_id: str) -> Optional[Alert]:
        return next((a for a in self._snapshot.alerts if a.id == alert_id), None)

    def get_roundabout(self, roundabout_id: str) -> Optional[Roundabout]:
        return next((r for r in self._snapshot.roundabouts if r.id == roundabout_id), None)

    def get_district(self, district_id: str) -> Optional[District]:
        return next((d for d in self._snapshot.districts if d.id == district_id), None)
