import logging
import os
from datetime import datetime
from pathlib import Path
from queue import Queue

from pydantic import BaseModel

alert_queue = Queue()

ALERT_I = 51
ALERT_II = 52
ALERT_III = 53

logging.addLevelName(ALERT_I, "ALERT I")
logging.addLevelName(ALERT_II, "ALERT II")
logging.addLevelName(ALERT_III, "ALERT III")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def configure_logging(log_dir="app_log", level=logging.INFO) -> Path:
    """
    Send LOGSCOPE logging to <log_dir>/alert.log.

    Returns:
        Path of the log file
    """
    if not os.path.exists(log_dir):
        os.makedirs(log_dir)

    log_file = Path(log_dir) / "alert.log"
    root = logging.getLogger("LOGSCOPE")
    root.setLevel(level)

    # Avoid duplicate handlers when the app is restarted in-process
    if not any(isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_file.absolute()
               for h in root.handlers):
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(file_handler)

    return log_file


class Alert(BaseModel):
    timestamp: datetime
    alertLevel: str
    message: str
    detected_by: str
