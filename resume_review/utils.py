# resume_review/utils.py
import logging
from datetime import datetime
from pathlib import Path


def setup_logging(log_dir: Path, log_level: str = "INFO"):
    """Configure logging for command-line runs"""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / f"resume_review_{datetime.now().strftime('%Y%m%d')}.log"

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )
