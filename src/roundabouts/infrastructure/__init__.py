from .seed import build_seed_snapshot, WEEKLY_HEATMAP, RECURRING_ISSUES
from .sources import create_source, HttpDataSource, SimulatedDataSource
from .broadcast.realtime_broadcaster import RealtimeBroadcaster
