# resume_review/config.py
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_MAX_TEXT_LENGTH = 100 * 1024


@dataclass
class ReviewConfig:
    """Configuration for resume analysis"""

    # Inputs longer than this are rejected before any scanning
    max_text_length: int = DEFAULT_MAX_TEXT_LENGTH

    # Optional YAML file with rule set overrides
    rules_file: Optional[Path] = None

    # Logging (CLI only)
    log_level: str = "INFO"
    log_dir: Path = Path("data/logs")

    def __post_init__(self):
        if self.rules_file is not None:
            self.rules_file = Path(self.rules_file)
        self.log_dir = Path(self.log_dir)

    @classmethod
    def from_yaml(cls, path: str):
        """Load configuration from YAML file"""
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        return cls(**data.get('review', {}))


def get_config() -> ReviewConfig:
    """Get review configuration"""
    config_path = os.getenv('RESUME_REVIEW_CONFIG', 'config/review.yaml')

    if os.path.exists(config_path):
        return ReviewConfig.from_yaml(config_path)
    return ReviewConfig()
