import asyncio
from typing import Dict, Set

from ....common.logging import setup_logger
from ....common.schemas import AlertSchema, DistrictSchema, RoundaboutSchema
from ...domain.entities import DashboardSnapshot

logger = setup_logger(__name__)

SNAPSHOT_CHANNEL = "snapshot"


class RealtimeBroadcaster:
    """
    Pub/sub system to push dashboard snapshots to connected clients.
    Asynchronous; slow subscribers are skipped rather than awaited.
    """

    def __init__(self):
        # Subscribers per channel
        self._subscribers: Dict[str, Set[asyncio.Queue]] = {}
        self._lock = asyncio.Lock()

        # Latest payload per channel (for new subscribers)
        self._latest_state: Dict[str, dict] = {}

    async def subscribe(self, channel: str, queue_size: int = 50) -> asyncio.Queue:
        """
        Subscribes a client to a channel.
        Returns an async queue that will receive the data.
        """
        queue = asyncio.Queue(maxsize=queue_size)

        async with self._lock:
            if channel not in self._subscribers:
                self._subscribers[channel] = set()
            self._subscribers[channel].add(queue)

        # Send latest known state immediately
        if channel in self._latest_state:
            try:
                queue.put_nowait(self._latest_state[channel])
            except asyncio.QueueFull:
                pass

        return queue

    async def unsubscribe(self, channel: str, queue: asyncio.Queue):
        """Removes a subscriber."""
        async with self._lock:
            if channel in self._subscribers:
                self._subscribers[channel].discard(queue)
                if not self._subscribers[channel]:
                    del self._subscribers[channel]

    async def broadcast(self, channel: str, data: dict):
        """
        Transmits a payload to all subscribers of a channel.
        Non-blocking: if a client is slow, it is skipped.
        """
        self._latest_state[channel] = data

        async with self._lock:
            subscribers = self._subscribers.get(channel, set()).copy()

        for queue in subscribers:
            try:
                queue.put_nowait(data)
            except asyncio.QueueFull:
                logger.warning(f"Skipping slow client on channel {channel}")

    def latest(self, channel: str):
        return self._latest_state.get(channel)

    def channels(self):
        return list(self._subscribers.keys())

    def serialize_snapshot(self, snapshot: DashboardSnapshot, mode: str) -> dict:
        """
        Converts a DashboardSnapshot to a JSON-serializable dict.
        """
        return {
            "mode": mode,
            "takenAt": snapshot.taken_at.isoformat(),
            "districts": [
                DistrictSchema.from_entity(d).model_dump(by_alias=True, mode="json")
                for d in snapshot.districts
            ],
            "roundabouts": [
                RoundaboutSchema.from_entity(r).model_dump(by_alias=True, mode="json")
                for r in snapshot.roundabouts
            ],
            "alerts": [
                AlertSchema.from_entity(a).model_dump(by_alias=True, mode="json")
                for a in snapshot.alerts
            ],
        }
