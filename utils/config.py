import logging
import os
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel

from utils.helper_functions import load_yaml

DEFAULT_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "timing.yaml"

class Settings(BaseModel):
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_dir: Optional[str] = None
    server_timing_header: bool = True
    server_timing_include_marks: bool = False

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)

def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    '''
    Loads service settings from yaml, then applies environment overrides.
    Args:
        path (str | Path | None): Config file. Falls back to $TIMING_CONFIG, then configs/timing.yaml.
    Returns:
        Settings: Validated settings. Defaults are used when the file is missing.
    '''
    if path is None:
        path = os.environ.get("TIMING_CONFIG", DEFAULT_CONFIG)
    path = Path(path)

    raw = load_yaml(path) if path.exists() else {}

    level = os.environ.get("TIMING_LOG_LEVEL")
    if level:
        raw["log_level"] = level.upper()
    log_dir = os.environ.get("TIMING_LOG_DIR")
    if log_dir:
        raw["log_dir"] = log_dir

    return Settings(**raw)
