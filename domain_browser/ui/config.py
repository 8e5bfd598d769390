from dataclasses import dataclass
from pathlib import Path

from domain_browser.config.model import GlobalConfig
from domain_browser.services.dataset_service import DatasetService


@dataclass
class AppConfig:
    """
    Shared state for the Dash app: config root, global config and the
    dataset service. Passed into layout + callback registration functions
    instead of using module-level globals.
    """
    config_root: Path
    global_config: GlobalConfig
    dataset_service: DatasetService
