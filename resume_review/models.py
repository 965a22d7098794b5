# resume_review/models.py
from enum import Enum
from typing import Dict, Optional


class SectionType(Enum):
    """Canonical resume sections"""
    CONTACT = "contact"
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    CERTIFICATIONS = "certifications"
    MISCELLANEOUS = "miscellaneous"  # overflow bucket

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def scored(cls):
        """Sections that receive a score, in report order"""
        return [s for s in cls if s is not cls.MISCELLANEOUS]


class FeedbackSeverity(Enum):
    """How urgently a piece of feedback should be acted on"""
    MISSING = 0       # required element absent
    IMPROVE = 1       # present but weak
    OPTIONAL = 2      # nice to have

    @property
    def rank(self) -> int:
        return self.value


class Major(Enum):
    """Fields of study with a dedicated skills vocabulary"""
    COMPUTER_SCIENCE = "Computer Science"
    BUSINESS_ADMINISTRATION = "Business Administration"
    MECHANICAL_ENGINEERING = "Mechanical Engineering"
    NURSING = "Nursing"
    ELECTRICAL_ENGINEERING = "Electrical Engineering"
    PSYCHOLOGY = "Psychology"
    BIOLOGY = "Biology"
    ECONOMICS = "Economics"
    ACCOUNTING = "Accounting"
    CIVIL_ENGINEERING = "Civil Engineering"
    EDUCATION = "Education"
    FINANCE = "Finance"
    POLITICAL_SCIENCE = "Political Science"
    MARKETING = "Marketing"
    COMMUNICATIONS = "Communications"
    CHEMISTRY = "Chemistry"
    INFORMATION_TECHNOLOGY = "Information Technology"
    GRAPHIC_DESIGN = "Graphic Design"
    MATHEMATICS = "Mathematics"
    ENVIRONMENTAL_SCIENCE = "Environmental Science"
    ENGLISH = "English"
    HISTORY = "History"
    SOCIOLOGY = "Sociology"

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def from_display(cls, name: str) -> Optional['Major']:
        """Look up a major by its display name (case-insensitive)"""
        return _MAJOR_BY_DISPLAY.get(name.strip().lower())


def _build_major_lookup() -> Dict[str, Major]:
    lookup = {}
    for major in Major:
        key = major.value.lower()
        if key in lookup:
            raise ValueError(f"Duplicate major display name: {major.value}")
        lookup[key] = major
    return lookup


_MAJOR_BY_DISPLAY = _build_major_lookup()
