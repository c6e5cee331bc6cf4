import os
import sys
import hydra
import uvicorn
from omegaconf import DictConfig

# Add src to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.common.config import ConfigManager
from src.common.logging import set_log_level, setup_logger
from src.common.metrics import RefreshMetricsCollector
from src.roundabouts.application.refresh_controller import RefreshController
from src.roundabouts.infrastructure.seed import build_seed_snapshot
from src.roundabouts.infrastructure.sources import create_source
from src.roundabouts.presentation.api import app, broadcaster
from src.roundabouts.presentation.api.routes import dashboard

@hydra.main(version_base=None, config_path="../conf", config_name="config")
def main(cfg: DictConfig):
    cfg = ConfigManager().validate(cfg)
    set_log_level(cfg.log_level)
    logger = setup_logger("src.run_dashboard", cfg.log_level)
    logger.info(f"Configuration loaded (source: {cfg.source.type})")

    source = create_source(
        cfg.source.type,
        base_url=cfg.api.base_url,
        timeout_seconds=cfg.api.timeout_seconds,
        seed=cfg.source.seed,
    )

    controller = RefreshController(
        source,
        seed=build_seed_snapshot(),
        interval_seconds=cfg.refresh.interval_seconds,
        broadcaster=broadcaster,
        metrics_collector=RefreshMetricsCollector(),
    )
    dashboard.init_controller(controller)

    @app.on_event("startup")
    async def startup_event():
        await controller.start()

    @app.on_event("shutdown")
    async def shutdown_event():
        await controller.stop()

    logger.info(f"Starting server at http://{cfg.server.host}:{cfg.server.port}")
    uvicorn.run(app, host=cfg.server.host, port=cfg.server.port)

if __name__ == "__main__":
    main()
