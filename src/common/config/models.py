from dataclasses import dataclass, field

@dataclass
class ApiConfig:
    base_url: str = "http://localhost:5000/api"
    timeout_seconds: float = 3.0

@dataclass
class RefreshConfig:
    interval_seconds: float = 5.0

@dataclass
class SourceConfig:
    type: str = "http"  # http | simulated
    seed: int = 42

@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000

@dataclass
class DashboardConfig:
    api: ApiConfig = field(default_factory=ApiConfig)
    refresh: RefreshConfig = field(default_factory=RefreshConfig)
    source: SourceConfig = field(default_factory=SourceConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    mock_server: ServerConfig = field(default_factory=lambda: ServerConfig(port=5000))
    log_level: str = "INFO"
