"""
Endpoints for realtime streaming.
"""
from fastapi import FastAPI, HTTPException
from sse_starlette.sse import EventSourceResponse
import asyncio
import json
from ....infrastructure.broadcast.realtime_broadcaster import SNAPSHOT_CHANNEL, RealtimeBroadcaster

app = FastAPI()

# Singleton broadcaster
_broadcaster = RealtimeBroadcaster()

def init_broadcaster(broadcaster: RealtimeBroadcaster):
    global _broadcaster
    _broadcaster = broadcaster

def get_broadcaster() -> RealtimeBroadcaster:
    return _broadcaster

@app.get("/stream")
async def stream_snapshot():
    """
    Server-Sent Events endpoint pushing every applied snapshot.

    Frontend usage:
    ```javascript
    const eventSource = new EventSource('/stream');
    eventSource.addEventListener('snapshot', (event) => {
        const data = JSON.parse(event.data);
        console.log('Mode:', data.mode, 'alerts:', data.alerts.length);
    });
    ```
    """
    broadcaster = get_broadcaster()
    queue = await broadcaster.subscribe(SNAPSHOT_CHANNEL)

    async def event_generator():
        try:
            while True:
                data = await queue.get()
                yield {
                    "event": "snapshot",
                    "data": json.dumps(data)
                }
        except asyncio.CancelledError:
            await broadcaster.unsubscribe(SNAPSHOT_CHANNEL, queue)
            raise

    return EventSourceResponse(event_generator())

@app.get("/snapshot")
async def get_snapshot():
    """Latest broadcast snapshot (polling fallback)."""
    latest = get_broadcaster().latest(SNAPSHOT_CHANNEL)
    if latest is None:
        raise HTTPException(404, "No snapshot published yet")
    return latest
