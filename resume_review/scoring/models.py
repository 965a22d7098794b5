# resume_review/scoring/models.py
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from resume_review.models import FeedbackSeverity, Major


@dataclass(frozen=True)
class Feedback:
    """Single piece of advice for a section"""
    message: str
    severity: FeedbackSeverity = FeedbackSeverity.IMPROVE

    def __str__(self):
        return self.message


@dataclass(frozen=True)
class SectionScore:
    """
    Score for one resume section.

    Construction rejects achieved points outside ``0..max_score``;
    analyzers clamp before building one.
    """
    section_name: str
    max_score: int
    achieved_score: int
    feedback_items: Tuple[Feedback, ...] = ()
    matched: Tuple[str, ...] = ()
    raw_content: str = ""

    def __post_init__(self):
        if not self.section_name:
            raise ValueError("section_name cannot be empty")
        if self.max_score <= 0:
            raise ValueError(f"max_score must be positive, got {self.max_score}")
        if self.achieved_score < 0:
            raise ValueError(f"achieved_score cannot be negative, got {self.achieved_score}")
        if self.achieved_score > self.max_score:
            raise ValueError(
                f"achieved_score ({self.achieved_score}) cannot exceed max_score ({self.max_score})"
            )
        object.__setattr__(self, 'feedback_items', tuple(self.feedback_items))
        object.__setattr__(self, 'matched', tuple(self.matched))
        object.__setattr__(self, 'raw_content', self.raw_content or "")

    @property
    def feedback(self) -> List[str]:
        return [item.message for item in self.feedback_items]

    @property
    def percentage(self) -> int:
        return self.achieved_score * 100 // self.max_score

    @property
    def is_empty(self) -> bool:
        return self.achieved_score == 0

    @property
    def is_perfect(self) -> bool:
        return self.achieved_score == self.max_score

    def to_dict(self) -> Dict[str, Any]:
        return {
            'section_name': self.section_name,
            'max_score': self.max_score,
            'achieved_score': self.achieved_score,
            'percentage': self.percentage,
            'feedback': self.feedback,
            'matched': list(self.matched),
        }

    def __str__(self):
        return f"{self.section_name}: {self.achieved_score}/{self.max_score}"


@dataclass(frozen=True)
class AnalysisResult:
    """Complete analysis of one resume"""
    file_name: str
    full_text: str
    score: int                                  # 0-100
    major: Optional[Major]
    section_scores: Tuple[SectionScore, ...]
    feedback: Tuple[str, ...]                   # sorted, "Section: message"
    sections: Mapping[str, str] = field(default_factory=dict, hash=False)

    PASS_THRESHOLD = 65

    def __post_init__(self):
        object.__setattr__(self, 'section_scores', tuple(self.section_scores))
        object.__setattr__(self, 'feedback', tuple(self.feedback))
        object.__setattr__(self, 'sections', MappingProxyType(dict(self.sections)))

    def with_changes(self, **changes) -> 'AnalysisResult':
        """
        Copy of this result with some fields replaced

        Collections are copied so the new instance never shares
        mutable state with the caller's arguments.
        """
        for name in ('section_scores', 'feedback'):
            if name in changes:
                changes[name] = tuple(changes[name])
        if 'sections' in changes:
            changes['sections'] = dict(changes['sections'])
        return replace(self, **changes)

    @property
    def major_name(self) -> Optional[str]:
        return self.major.value if self.major else None

    @property
    def grade(self) -> str:
        """Letter grade for the overall score"""
        if self.score >= 90:
            return "A"
        elif self.score >= 80:
            return "B"
        elif self.score >= 70:
            return "C"
        elif self.score >= 60:
            return "D"
        else:
            return "F"

    @property
    def passes_screening(self) -> bool:
        return self.score >= self.PASS_THRESHOLD

    def section(self, name: str) -> Optional[SectionScore]:
        """Section score by display or canonical name"""
        for section_score in self.section_scores:
            if section_score.section_name.lower() == name.lower():
                return section_score
        return None

    def feedback_for(self, name: str) -> List[str]:
        prefix = f"{name.lower()}:"
        return [line for line in self.feedback if line.lower().startswith(prefix)]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON export"""
        return {
            'file_name': self.file_name,
            'score': self.score,
            'grade': self.grade,
            'passes_screening': self.passes_screening,
            'major': self.major_name,
            'section_scores': [s.to_dict() for s in self.section_scores],
            'feedback': list(self.feedback),
            'sections': dict(self.sections),
        }

    def __repr__(self):
        return f"<AnalysisResult: {self.file_name} | {self.score}/100 | {self.major_name or 'unknown major'}>"
