from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException
from pathlib import Path

from ..exceptions import ConfigurationError
from .models import DashboardConfig

SOURCE_TYPES = ("http", "simulated")

class ConfigManager:
    """Centralizes loading and validation of dashboard configuration"""

    def __init__(self, config_dir: Path = Path("conf")):
        self.config_dir = config_dir

    def load_dashboard_config(self, profile: str = "config") -> DictConfig:
        """Loads a YAML profile from the config directory and validates it"""
        config_path = self.config_dir / f"{profile}.yaml"

        if not config_path.exists():
            raise ConfigurationError(f"Config not found: {config_path}")

        return self.validate(OmegaConf.load(config_path))

    def validate(self, cfg: DictConfig) -> DictConfig:
        """
        Merges `cfg` over the structured defaults and checks cross-field rules.
        Returns the typed config.
        """
        required_keys = ['api', 'refresh', 'source']
        for key in required_keys:
            if key not in cfg:
                raise ConfigurationError(f"Missing required config key: {key}")

        try:
            merged = OmegaConf.merge(OmegaConf.structured(DashboardConfig), cfg)
        except OmegaConfBaseException as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        if merged.refresh.interval_seconds <= 0:
            raise ConfigurationError("refresh.interval_seconds must be positive")
        if merged.api.timeout_seconds <= 0:
            raise ConfigurationError("api.timeout_seconds must be positive")
        # Otherwise slow requests pile up behind the refresh ticks
        if merged.api.timeout_seconds >= merged.refresh.interval_seconds:
            raise ConfigurationError(
                f"api.timeout_seconds ({merged.api.timeout_seconds}) must be below "
                f"refresh.interval_seconds ({merged.refresh.interval_seconds})"
            )
        if merged.source.type not in SOURCE_TYPES:
            raise ConfigurationError(f"Unknown source type: {merged.source.type}")

        return merged
