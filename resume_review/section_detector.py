# resume_review/section_detector.py
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Pattern, Sequence, Tuple

from resume_review.config import DEFAULT_MAX_TEXT_LENGTH
from resume_review.models import SectionType
from resume_review.rules import RuleSet, normalize_header
from resume_review.validator import InputValidator

logger = logging.getLogger(__name__)

SectionMap = Mapping[str, str]


@dataclass(frozen=True)
class LineRule:
    """One step of the unmarked-text cascade: classify a line or pass"""
    name: str
    classify: Callable[[str], Optional[SectionType]]


def _when(patterns: Sequence[Pattern], section: SectionType) -> Callable[[str], Optional[SectionType]]:
    def classify(line: str) -> Optional[SectionType]:
        if any(p.search(line) for p in patterns):
            return section
        return None
    return classify


class SectionDetector:
    """
    Split resume text into canonical sections.

    Text annotated with ``==SECTION== <header>`` marker lines is split on
    the markers. Anything before the first marker (or the whole text when
    there are none) goes through an ordered cascade of line rules; the
    first rule that matches a line moves the cursor to its section.
    """

    def __init__(self, rules: RuleSet, max_text_length: int = DEFAULT_MAX_TEXT_LENGTH):
        self.rules = rules
        self.validator = InputValidator(max_text_length)

        patterns = rules.patterns
        self.marker_pattern = patterns['section_marker']
        self.page_break_pattern = patterns['page_break']

        # alias -> canonical section, built once
        self.alias_table: Mapping[str, SectionType] = MappingProxyType({
            alias: section
            for section, aliases in rules.section_aliases.items()
            for alias in aliases
        })

        # Order matters: earlier rules win when a line matches several
        self.line_rules: List[LineRule] = [
            LineRule('header_alias', self.lookup_header_line),
            LineRule('contact', _when(
                [patterns['email'], patterns['phone'], patterns['linkedin'],
                 patterns['github'], patterns['portfolio']],
                SectionType.CONTACT,
            )),
            LineRule('summary_keyword', _when([patterns['summary_keyword']], SectionType.SUMMARY)),
            LineRule('date_range', _when([patterns['date_range']], SectionType.EXPERIENCE)),
            LineRule('bullet_or_skill', _when(
                [patterns['bullet'], patterns['skills_keyword']], SectionType.SKILLS)),
            LineRule('education_keyword', _when([patterns['education_keyword']], SectionType.EDUCATION)),
        ]

    def detect(self, text: str) -> SectionMap:
        """
        Detect sections in resume text

        Returns:
            Read-only mapping of every canonical section name to its text
            (empty string when nothing was assigned)

        Raises:
            InputValidationError for empty or oversized text
        """
        self.validator.check_text(text)

        text = text.replace('\r\n', '\n').replace('\r', '\n')
        text = self.page_break_pattern.sub('', text)

        buckets: Dict[SectionType, List[str]] = {section: [] for section in SectionType}
        markers = list(self.marker_pattern.finditer(text))

        preamble = text[:markers[0].start()] if markers else text
        if preamble.strip():
            self._scan_unmarked(preamble, buckets)

        for i, marker in enumerate(markers):
            section = self.lookup_header(marker.group(1)) or SectionType.MISCELLANEOUS
            end = markers[i + 1].start() if i + 1 < len(markers) else len(text)
            content = text[marker.end():end].strip()
            if content:
                buckets[section].append(content)

        sections = {section.value: '\n'.join(parts).strip() for section, parts in buckets.items()}

        found = [name for name, content in sections.items() if content]
        logger.info(f"Detected {len(found)} sections ({len(markers)} markers): {', '.join(found)}")
        return MappingProxyType(sections)

    def lookup_header(self, header: str) -> Optional[SectionType]:
        """Canonical section for a header text, or None if unrecognized"""
        return self.alias_table.get(normalize_header(header))

    def lookup_header_line(self, line: str) -> Optional[SectionType]:
        """Header alias standing alone on a line"""
        if len(line) > 60:
            return None
        return self.lookup_header(line)

    def classify_line(self, line: str) -> Optional[Tuple[str, SectionType]]:
        """First matching line rule as (rule name, section), or None"""
        for rule in self.line_rules:
            section = rule.classify(line)
            if section is not None:
                return rule.name, section
        return None

    def _scan_unmarked(self, block: str, buckets: Dict[SectionType, List[str]]):
        current = SectionType.CONTACT
        buffer: List[str] = []

        for line in block.split('\n'):
            if line.strip():
                hit = self.classify_line(line)
                if hit is not None and hit[1] is not current:
                    self._flush(current, buffer, buckets)
                    buffer = []
                    logger.debug(f"Line rule '{hit[0]}' switched section {current.value} -> {hit[1].value}")
                    current = hit[1]
            buffer.append(line)

        self._flush(current, buffer, buckets)

    @staticmethod
    def _flush(section: SectionType, buffer: List[str], buckets: Dict[SectionType, List[str]]):
        content = '\n'.join(buffer).strip()
        if content:
            buckets[section].append(content)
