# resume_review/scoring/scorer.py
import logging
from functools import lru_cache
from typing import Callable, Dict, List, Optional, Tuple

from resume_review.config import ReviewConfig, get_config
from resume_review.major_detector import MajorDetector
from resume_review.models import Major, SectionType
from resume_review.rules import RuleSet, load_rules
from resume_review.scoring.analyzers import SectionAnalyzers
from resume_review.scoring.models import AnalysisResult, SectionScore
from resume_review.section_detector import SectionDetector, SectionMap
from resume_review.validator import InputValidator

logger = logging.getLogger(__name__)


class ResumeScorer:
    """
    Run the full analysis pipeline: sections, major, section scores,
    normalized total and sorted feedback.

    Holds no per-call state; one instance can serve concurrent callers.
    """

    def __init__(self, rules: Optional[RuleSet] = None, config: Optional[ReviewConfig] = None):
        self.config = config or ReviewConfig()
        # Rules passed in are assumed validated; otherwise load and validate here
        self.rules = rules if rules is not None else load_rules(self.config)

        max_length = self.config.max_text_length
        self.validator = InputValidator(max_length)
        self.section_detector = SectionDetector(self.rules, max_length)
        self.major_detector = MajorDetector(self.rules, max_length)
        self.analyzers = SectionAnalyzers(self.rules)

    def analyze(self, file_name: str, full_text: str) -> AnalysisResult:
        """
        Analyze resume text

        Args:
            file_name: Source file name, kept for traceability
            full_text: Extracted resume text, optionally with section markers

        Returns:
            AnalysisResult with score, major, section breakdown and feedback

        Raises:
            InputValidationError if the text is empty or too long
        """
        self.validator.check_file_name(file_name)
        self.validator.check_text(full_text)
        logger.info(f"Analyzing resume: {file_name} ({len(full_text)} chars)")

        detected = self.section_detector.detect(full_text)
        sections = {section.value: detected.get(section.value, '') for section in SectionType}
        for name in (s.value for s in SectionType.scored()):
            if not sections[name]:
                logger.debug(f"Section missing: {name}")

        education = sections[SectionType.EDUCATION.value]
        major = self.major_detector.detect(education if education.strip() else full_text)
        vocabulary = self.rules.skills_for(major)

        breakdown = self._score_sections(sections, vocabulary, major)

        raw_total = sum(s.achieved_score for s in breakdown)
        score = max(0, min(100, raw_total * 100 // self.rules.total_max_score))

        feedback = self._compile_feedback(breakdown)
        if major is not None:
            feedback.append(f"General: Tailor your resume to highlight {major.value}-specific achievements.")

        logger.info(
            f"Resume score: {score}/100 (raw {raw_total}/{self.rules.total_max_score}), "
            f"major: {major.value if major else 'unknown'}, {len(feedback)} feedback items"
        )

        return AnalysisResult(
            file_name=file_name,
            full_text=full_text,
            score=score,
            major=major,
            section_scores=tuple(breakdown),
            feedback=tuple(feedback),
            sections=sections,
        )

    def _score_sections(
        self,
        sections: SectionMap,
        vocabulary: Tuple[str, ...],
        major: Optional[Major],
    ) -> List[SectionScore]:
        analyzers = self.analyzers
        steps: List[Tuple[SectionType, Callable[[str], SectionScore]]] = [
            (SectionType.CONTACT, analyzers.contact),
            (SectionType.SUMMARY, analyzers.summary),
            (SectionType.EXPERIENCE, analyzers.experience),
            (SectionType.EDUCATION, analyzers.education),
            (SectionType.SKILLS, lambda content: analyzers.skills(content, vocabulary, major)),
            (SectionType.PROJECTS, analyzers.projects),
            (SectionType.CERTIFICATIONS, analyzers.certifications),
        ]
        return [analyze(sections[section.value]) for section, analyze in steps]

    def _compile_feedback(self, breakdown: List[SectionScore]) -> List[str]:
        """
        Flatten section feedback, sorted by section priority then severity

        Missing elements come before weak ones, which come before
        optional enhancements. The sort is stable within a severity.
        """
        entries: List[Tuple[int, int, str]] = []
        by_name: Dict[str, SectionType] = {s.display_name: s for s in SectionType}

        for section_score in breakdown:
            section = by_name[section_score.section_name]
            priority = self.rules.priority(section)
            for item in section_score.feedback_items:
                entries.append((priority, item.severity.rank, f"{section_score.section_name}: {item.message}"))

        entries.sort(key=lambda e: (e[0], e[1]))
        return [text for _, _, text in entries]


@lru_cache(maxsize=1)
def default_scorer() -> ResumeScorer:
    """Process-wide scorer built from get_config(); rules validated once"""
    return ResumeScorer(config=get_config())


def analyze(file_name: str, full_text: str) -> AnalysisResult:
    """Analyze resume text with the default scorer"""
    return default_scorer().analyze(file_name, full_text)
