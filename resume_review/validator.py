# resume_review/validator.py
import logging
from typing import Optional

from resume_review.config import DEFAULT_MAX_TEXT_LENGTH
from resume_review.errors import InputValidationError

logger = logging.getLogger(__name__)


class InputValidator:
    """Reject resume input before any scanning work is done"""

    def __init__(self, max_text_length: int = DEFAULT_MAX_TEXT_LENGTH):
        if max_text_length <= 0:
            raise ValueError(f"max_text_length must be positive, got {max_text_length}")
        self.max_text_length = max_text_length

    def check_text(self, text: Optional[str], what: str = "Resume text") -> str:
        """
        Validate raw text

        Returns:
            The text unchanged

        Raises:
            InputValidationError if the text is empty or too long
        """
        if text is None or not text.strip():
            logger.warning(f"{what} rejected: empty")
            raise InputValidationError(f"{what} cannot be empty", length=0, limit=self.max_text_length)

        length = len(text)
        if length > self.max_text_length:
            logger.warning(f"{what} rejected: {length} chars (max: {self.max_text_length})")
            raise InputValidationError(
                f"{what} is {length} characters, exceeding the maximum of {self.max_text_length}",
                length=length,
                limit=self.max_text_length,
            )
        return text

    def check_file_name(self, file_name: Optional[str]) -> str:
        if file_name is None or not file_name.strip():
            logger.warning("File name rejected: empty")
            raise InputValidationError("File name cannot be empty")
        return file_name
