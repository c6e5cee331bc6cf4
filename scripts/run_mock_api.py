import os
import sys
import hydra
import uvicorn
from omegaconf import DictConfig

# Add src to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.common.config import ConfigManager
from src.roundabouts.infrastructure.sources.simulated_source import SimulatedDataSource
from src.roundabouts.presentation.mock_api import app, init_source

@hydra.main(version_base=None, config_path="../conf", config_name="config")
def main(cfg: DictConfig):
    cfg = ConfigManager().validate(cfg)
    init_source(SimulatedDataSource(seed=cfg.source.seed))

    print(f"Mock traffic API at http://{cfg.mock_server.host}:{cfg.mock_server.port}/api")
    uvicorn.run(app, host=cfg.mock_server.host, port=cfg.mock_server.port)

if __name__ == "__main__":
    main()
