# resume_review/__init__.py
"""
Resume section detection, field-of-study inference and scoring
"""

from resume_review.errors import ConfigurationError, InputValidationError
from resume_review.models import FeedbackSeverity, Major, SectionType
from resume_review.rules import RuleSet, load_rules
from resume_review.section_detector import SectionDetector
from resume_review.major_detector import MajorDetector
from resume_review.scoring import AnalysisResult, ResumeScorer, SectionScore, analyze

__version__ = "1.0.0"

__all__ = [
    'ConfigurationError',
    'InputValidationError',
    'FeedbackSeverity',
    'Major',
    'SectionType',
    'RuleSet',
    'load_rules',
    'SectionDetector',
    'MajorDetector',
    'AnalysisResult',
    'ResumeScorer',
    'SectionScore',
    'analyze',
]
