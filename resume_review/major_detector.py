# resume_review/major_detector.py
import logging
import re
from types import MappingProxyType
from typing import List, Mapping, Optional, Pattern, Set, Tuple

from resume_review.config import DEFAULT_MAX_TEXT_LENGTH
from resume_review.models import Major
from resume_review.rules import RuleSet
from resume_review.validator import InputValidator

logger = logging.getLogger(__name__)


class MajorDetector:
    """
    Infer the candidate's field of study from resume text.

    Returns a major only when exactly one field's aliases appear;
    no match and ambiguous matches both yield None.
    """

    def __init__(self, rules: RuleSet, max_text_length: int = DEFAULT_MAX_TEXT_LENGTH):
        self.rules = rules
        self.validator = InputValidator(max_text_length)

        # Reverse index: alias -> major, built once
        self.alias_index: Mapping[str, Major] = MappingProxyType({
            alias: major
            for major, aliases in rules.major_aliases.items()
            for alias in aliases
        })

        # Short abbreviations ("cs", "mba") only count as whole words
        self._word_patterns: Mapping[str, Pattern] = MappingProxyType({
            alias: re.compile(r'(?<![a-z0-9])' + re.escape(alias) + r'(?![a-z0-9])')
            for alias in self.alias_index
            if len(alias) < rules.major_alias_min_length
        })

    def detect(self, text: str) -> Optional[Major]:
        """
        Detect the single field of study mentioned in text

        Raises:
            InputValidationError for empty or oversized text
        """
        self.validator.check_text(text)

        candidates = self.candidates(text)
        if len(candidates) == 1:
            major = next(iter(candidates))
            logger.info(f"Detected major: {major.value}")
            return major

        if candidates:
            names = sorted(m.value for m in candidates)
            logger.info(f"Ambiguous major ({len(candidates)} candidates: {', '.join(names)})")
        else:
            logger.info("No major detected")
        return None

    def candidates(self, text: str) -> Set[Major]:
        """All majors with a matching alias that also have a skills entry"""
        found = {major for alias, major in self.matched_aliases(text)}
        return {major for major in found if major in self.rules.major_skills}

    def matched_aliases(self, text: str) -> List[Tuple[str, Major]]:
        lowered = text.lower()
        matches = []
        for alias, major in self.alias_index.items():
            pattern = self._word_patterns.get(alias)
            hit = pattern.search(lowered) is not None if pattern else alias in lowered
            if hit:
                matches.append((alias, major))
        logger.debug(f"Major aliases matched: {[alias for alias, _ in matches]}")
        return matches
