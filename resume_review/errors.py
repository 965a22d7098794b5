# resume_review/errors.py
from typing import Optional


class InputValidationError(ValueError):
    """Resume text or file name rejected before analysis"""

    def __init__(self, message: str, length: Optional[int] = None, limit: Optional[int] = None):
        super().__init__(message)
        self.length = length
        self.limit = limit


class ConfigurationError(RuntimeError):
    """Rule set or config file failed its consistency check"""
