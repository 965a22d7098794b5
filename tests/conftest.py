# tests/conftest.py
import pytest

from resume_review.major_detector import MajorDetector
from resume_review.rules import RuleSet
from resume_review.scoring import ResumeScorer, SectionAnalyzers
from resume_review.section_detector import SectionDetector

SUMMARY_TEXT = (
    "Software engineer with four years of experience building reliable data platforms "
    "and web services. Comfortable owning features end to end, from design reviews to "
    "production monitoring, and mentoring junior engineers on testing and code quality practices."
)

MARKED_RESUME = f"""Jane Doe
jane.doe@example.com | (555) 123-4567 | linkedin.com/in/janedoe | github.com/janedoe | https://janedoe.dev
==SECTION== Summary
{SUMMARY_TEXT}
==SECTION== Experience
Software Engineer, Acme Corp, Jan 2020 - Present
- Developed a streaming data pipeline processing two million events per day
- Led a team of four engineers through a database migration
- Implemented continuous integration for twelve services
==PAGE_BREAK==
- Optimized query latency by forty percent
==SECTION== Education
Bachelor of Science in Computer Science, State University, 2019
==SECTION== Skills
Python, Java, SQL, Git, Docker, AWS, PostgreSQL, Data Structures, Algorithms
==SECTION== Projects
Resume Analyzer: built a mobile app that scores resumes using section detection heuristics.
==SECTION== Certifications
AWS Certified Solutions Architect Associate
"""

UNMARKED_RESUME = """Jane Doe
jane.doe@example.com | (555) 123-4567
Summary
Motivated engineer with a passion for building reliable systems.
Experience
Software Engineer, Acme Corp, 2020 - 2022
Education
State University
Bachelor of Science in Computer Science
Skills
Python, Java, SQL
"""


@pytest.fixture(scope="session")
def rules():
    return RuleSet().validate()


@pytest.fixture
def section_detector(rules):
    return SectionDetector(rules)


@pytest.fixture
def major_detector(rules):
    return MajorDetector(rules)


@pytest.fixture
def analyzers(rules):
    return SectionAnalyzers(rules)


@pytest.fixture
def scorer(rules):
    return ResumeScorer(rules=rules)
