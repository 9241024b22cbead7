"""
Settings loaded from the environment (and a .env file when present)
"""
import codecs
import os
from datetime import time
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from LOGSCOPE.engine.errors import ConfigurationError

DEFAULT_ALERT_MARKERS = "FileNotFoundException,FileProcessingException,NullPointerException"

# Environment variable -> Settings field
ENV_FIELDS = {
    "LOGSCOPE_LOG_PATH": "log_path",
    "LOGSCOPE_ENCODING": "encoding",
    "LOGSCOPE_TAIL_LINES": "tail_lines",
    "LOGSCOPE_STRICT_ARCHIVE_LOOKUP": "strict_archive_lookup",
    "LOGSCOPE_ALERT_MARKERS": "alert_markers",
    "LOGSCOPE_ALERT_TIME": "alert_time",
    "LOGSCOPE_APP_LOG_DIR": "app_log_dir",
    "LOGSCOPE_SEARCH_WORKERS": "search_workers",
}


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    log_path: Path = Path(".")
    encoding: str = "utf-8"
    tail_lines: int = Field(default=100, ge=1)
    strict_archive_lookup: bool = False
    alert_markers: List[str] = Field(default_factory=lambda: DEFAULT_ALERT_MARKERS.split(","))
    alert_time: time = time(7, 30)
    app_log_dir: Path = Path("app_log")
    search_workers: int = Field(default=1, ge=1)

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        codecs.lookup(value)  # raises LookupError for unknown codecs
        return value

    @field_validator("alert_markers", mode="before")
    @classmethod
    def _split_markers(cls, value):
        if isinstance(value, str):
            return [marker.strip() for marker in value.split(",") if marker.strip()]
        return value


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Build Settings from LOGSCOPE_* environment variables.

    Values already set in the process environment win over the .env file.
    """
    load_dotenv(dotenv_path=env_file)

    values = {
        field: os.getenv(variable)
        for variable, field in ENV_FIELDS.items()
        if os.getenv(variable)
    }
    try:
        return Settings(**values)
    except (ValidationError, LookupError) as exc:
        raise ConfigurationError(f"Invalid LOGSCOPE settings: {exc}") from exc
