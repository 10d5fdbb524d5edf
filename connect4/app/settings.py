import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/game.yaml"

# Environment variable -> settings field
ENV_OVERRIDES = {
    "CONNECT4_LOG_LEVEL": "log_level",
    "CONNECT4_VS_CPU": "play_against_cpu",
}


class GameSettings(BaseModel):
    play_against_cpu: bool = True
    human_symbol: str = Field(default="X", min_length=1, max_length=1)
    cpu_symbol: str = Field(default="O", min_length=1, max_length=1)
    log_level: str = "INFO"


def get_config_path() -> str:
    """Helper to retrieve the config path in scripts context"""
    return os.getenv("CONNECT4_CONFIG", DEFAULT_CONFIG_PATH)


def load_settings(config_path: Optional[str] = None) -> GameSettings:
    path = Path(config_path or get_config_path())
    data: Dict[str, Any] = {}

    if path.is_file():
        with open(path, "r") as f:
            data = (yaml.safe_load(f) or {}).get("game", {}) or {}
    else:
        logger.info("No config file at %s, using defaults", path)

    for env_var, field in ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value is not None:
            data[field] = value

    return GameSettings(**data)


def configure_logging(level: str = "INFO"):
    """Only entry points call this; library modules just use getLogger."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
