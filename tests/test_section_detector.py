# tests/test_section_detector.py
import pytest

from resume_review.errors import InputValidationError
from resume_review.models import SectionType
from resume_review.section_detector import SectionDetector

from tests.conftest import MARKED_RESUME, UNMARKED_RESUME

CANONICAL = {section.value for section in SectionType}


def _content_lines(text):
    return [
        line.strip() for line in text.splitlines()
        if line.strip() and not line.strip().startswith('==')
    ]


class TestInputLimits:

    def test_empty_text_rejected(self, section_detector):
        with pytest.raises(InputValidationError, match="empty"):
            section_detector.detect("")

    def test_whitespace_only_rejected(self, section_detector):
        with pytest.raises(InputValidationError):
            section_detector.detect("   \n\t ")

    def test_oversized_text_rejected(self, rules):
        detector = SectionDetector(rules, max_text_length=50)
        with pytest.raises(InputValidationError, match="maximum of 50") as exc:
            detector.detect("x" * 51)
        assert exc.value.length == 51
        assert exc.value.limit == 50


class TestMarkedText:

    def test_all_canonical_keys_present(self, section_detector):
        sections = section_detector.detect("==SECTION== Skills\nPython")
        assert set(sections) == CANONICAL
        assert sections['skills'] == "Python"
        assert sections['experience'] == ""

    def test_marker_blocks(self, section_detector):
        text = (
            "==SECTION== Experience\n"
            "Developed and led a team, 2020-2022\n"
            "==SECTION== Education\n"
            "Bachelor of Science in Computer Science, 2024"
        )
        sections = section_detector.detect(text)

        assert sections['experience'] == "Developed and led a team, 2020-2022"
        assert sections['education'] == "Bachelor of Science in Computer Science, 2024"

    def test_header_aliases_case_insensitive(self, section_detector):
        text = "==SECTION==   WORK HISTORY  \nAcme Corp\n==SECTION== technologies\nDocker"
        sections = section_detector.detect(text)

        assert sections['experience'] == "Acme Corp"
        assert sections['skills'] == "Docker"

    def test_unknown_header_goes_to_overflow(self, section_detector):
        sections = section_detector.detect("==SECTION== Volunteer Work\nFood bank organizer")
        assert sections['miscellaneous'] == "Food bank organizer"

    def test_text_before_first_marker_is_scanned(self, section_detector):
        sections = section_detector.detect("Jane Doe\njane@example.com\n==SECTION== Skills\nPython")

        assert "Jane Doe" in sections['contact']
        assert "jane@example.com" in sections['contact']
        assert sections['skills'] == "Python"

    def test_page_breaks_removed(self, section_detector):
        text = "==SECTION== Experience\nLine one\n==PAGE_BREAK==\nLine two"
        sections = section_detector.detect(text)

        assert "Line one" in sections['experience']
        assert "Line two" in sections['experience']
        assert all("PAGE_BREAK" not in content for content in sections.values())

    def test_repeated_markers_are_joined(self, section_detector):
        text = "==SECTION== Projects\nFirst app\n==SECTION== Skills\nSQL\n==SECTION== Projects\nSecond app"
        sections = section_detector.detect(text)

        assert sections['projects'] == "First app\nSecond app"

    def test_result_is_read_only(self, section_detector):
        sections = section_detector.detect("==SECTION== Skills\nPython")
        with pytest.raises(TypeError):
            sections['skills'] = "Java"


class TestUnmarkedText:

    def test_fallback_sections(self, section_detector):
        sections = section_detector.detect(UNMARKED_RESUME)

        assert "Jane Doe" in sections['contact']
        assert "(555) 123-4567" in sections['contact']
        assert "Motivated engineer" in sections['summary']
        assert "Acme Corp, 2020 - 2022" in sections['experience']
        assert "Bachelor of Science in Computer Science" in sections['education']
        assert "State University" in sections['education']
        assert "Python, Java, SQL" in sections['skills']

    def test_no_unmarked_line_is_lost(self, section_detector):
        sections = section_detector.detect(UNMARKED_RESUME)
        combined = "\n".join(sections.values())

        for line in _content_lines(UNMARKED_RESUME):
            assert line in combined

    def test_no_marked_line_is_lost(self, section_detector):
        sections = section_detector.detect(MARKED_RESUME)
        combined = "\n".join(sections.values())

        for line in _content_lines(MARKED_RESUME):
            assert line in combined

    def test_unclassified_text_stays_under_cursor(self, section_detector):
        sections = section_detector.detect("Enjoys hiking\nand chess")
        assert sections['contact'] == "Enjoys hiking\nand chess"


class TestLineRules:

    @pytest.mark.parametrize("line, rule, section", [
        ("Experience", 'header_alias', SectionType.EXPERIENCE),
        ("WORK EXPERIENCE:", 'header_alias', SectionType.EXPERIENCE),
        ("Hobbies", 'header_alias', SectionType.MISCELLANEOUS),
        ("jane@example.com", 'contact', SectionType.CONTACT),
        ("+1 555-123-4567", 'contact', SectionType.CONTACT),
        ("https://github.com/jane", 'contact', SectionType.CONTACT),
        ("Career objective: build accessible tools", 'summary_keyword', SectionType.SUMMARY),
        ("Data Analyst, Initech, June 2018 to 2020", 'date_range', SectionType.EXPERIENCE),
        ("- Python and Docker", 'bullet_or_skill', SectionType.SKILLS),
        ("Strong communication and writing", 'bullet_or_skill', SectionType.SKILLS),
        ("Stanford University", 'education_keyword', SectionType.EDUCATION),
    ])
    def test_classify_line(self, section_detector, line, rule, section):
        assert section_detector.classify_line(line) == (rule, section)

    def test_date_rule_wins_over_bullet(self, section_detector):
        assert section_detector.classify_line("- Led migration, 2019-2021") == ('date_range', SectionType.EXPERIENCE)

    def test_unmatched_line(self, section_detector):
        assert section_detector.classify_line("Enjoys hiking") is None

    def test_rule_order(self, section_detector):
        names = [rule.name for rule in section_detector.line_rules]
        assert names == [
            'header_alias', 'contact', 'summary_keyword',
            'date_range', 'bullet_or_skill', 'education_keyword',
        ]
