from .models import ApiConfig, RefreshConfig, SourceConfig, ServerConfig, DashboardConfig
from .manager import ConfigManager
