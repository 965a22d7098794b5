# resume_review/scoring/__init__.py
"""
Section scoring and result aggregation
"""

from resume_review.scoring.models import Feedback, SectionScore, AnalysisResult
from resume_review.scoring.analyzers import SectionAnalyzers
from resume_review.scoring.scorer import ResumeScorer, analyze, default_scorer
from resume_review.scoring.report import render_report

__all__ = [
    'Feedback',
    'SectionScore',
    'AnalysisResult',
    'SectionAnalyzers',
    'ResumeScorer',
    'analyze',
    'default_scorer',
    'render_report',
]
