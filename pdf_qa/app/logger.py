import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def configure_logging(log_dir: Optional[str] = None, level: int = logging.INFO) -> Path:
    """Log to stdout and to app.log under log_dir (default: logs/ beside this module)."""
    logs_dir = Path(log_dir) if log_dir else Path(__file__).parent / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / "app.log"

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file)
        ]
    )
    return log_file

def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
