"""
Runtime settings.

Typed view over the ConfigService values the CLI and orchestrator use.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from codearchitect.services.config_service import ConfigService

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    workspace_url: str
    default_dir: Optional[str]
    plan_pacing: float


def load_settings(config: ConfigService) -> Settings:
    try:
        pacing = float(config.get("plan_pacing"))
    except (TypeError, ValueError):
        logger.warning("Invalid plan_pacing in config, using 0.05")
        pacing = 0.05

    return Settings(
        workspace_url=str(config.get("workspace_url")),
        default_dir=config.get("default_dir"),
        plan_pacing=max(pacing, 0.0),
    )


def open_config(config_path: Optional[str] = None) -> ConfigService:
    return ConfigService(Path(config_path).expanduser() if config_path else None)
