# tests/test_analyzers.py
import time

import pytest

from resume_review.models import FeedbackSeverity, Major

from tests.conftest import SUMMARY_TEXT

CONTACT_LINE = (
    "jane.doe@example.com | (555) 123-4567 | linkedin.com/in/janedoe | "
    "github.com/janedoe | https://janedoe.dev"
)


class TestContact:

    def test_empty(self, analyzers):
        result = analyzers.contact("")
        assert result.achieved_score == 0
        assert len(result.feedback) == 5
        assert [f.severity for f in result.feedback_items[:2]] == [FeedbackSeverity.MISSING] * 2

    def test_email_only(self, analyzers):
        empty = analyzers.contact("")
        result = analyzers.contact("jane@example.com")

        assert result.achieved_score == 7
        assert result.matched == ('email',)
        assert "Add a professional email address." in empty.feedback
        assert "Add a professional email address." not in result.feedback
        assert set(result.feedback) < set(empty.feedback)

    def test_complete(self, analyzers):
        result = analyzers.contact(CONTACT_LINE)
        assert result.achieved_score == 15
        assert result.is_perfect
        assert result.feedback == []
        assert result.matched == ('email', 'phone', 'LinkedIn', 'GitHub', 'portfolio')

    def test_link_counted_once(self, analyzers):
        result = analyzers.contact("linkedin.com/in/a linkedin.com/in/b")
        assert result.achieved_score == 3

    def test_profile_links_are_not_portfolio(self, analyzers):
        result = analyzers.contact("https://www.linkedin.com/in/jane https://github.com/jane")
        assert result.achieved_score == 5
        assert "Consider adding a link to your portfolio or personal website." in result.feedback


class TestSummary:

    def test_missing(self, analyzers):
        result = analyzers.summary("  ")
        assert result.achieved_score == 0
        assert result.feedback_items[0].severity is FeedbackSeverity.MISSING

    def test_short(self, analyzers):
        result = analyzers.summary("Engineer who likes data")
        assert result.achieved_score == 5
        assert result.feedback == ["Expand your summary to at least 30 words (currently 4)."]

    def test_full(self, analyzers):
        assert analyzers.summary(SUMMARY_TEXT).achieved_score == 10


class TestExperience:

    def test_verbs_and_dates(self, analyzers):
        result = analyzers.experience("Developed and led a team, 2020-2022")

        assert result.achieved_score == 17
        assert result.matched == ('developed', 'led')
        assert result.feedback == ["Use more action verbs (e.g., managed, built, designed)."]

    def test_verb_bonus_is_capped(self, analyzers):
        text = "Developed, managed, led, built and designed systems from 2018 to present"
        result = analyzers.experience(text)
        assert result.achieved_score == 19
        assert result.feedback == []

    def test_no_dates(self, analyzers):
        result = analyzers.experience("Worked at a bakery")
        assert result.achieved_score == 10
        assert "Include explicit date ranges for each role (e.g., 2020-2022)." in result.feedback

    def test_verbs_match_whole_words(self, analyzers):
        assert analyzers.experience("Misled nobody").matched == ()

    def test_missing(self, analyzers):
        result = analyzers.experience("")
        assert result.achieved_score == 0
        assert result.feedback_items[0].severity is FeedbackSeverity.MISSING


class TestEducation:

    def test_complete(self, analyzers):
        result = analyzers.education("Bachelor of Science in Computer Science, State University, 2019")
        assert result.achieved_score == 15
        assert result.feedback == []

    def test_school_only(self, analyzers):
        result = analyzers.education("State University")
        assert result.achieved_score == 10
        assert result.feedback == [
            "Specify your degree (e.g., Bachelor of Science).",
            "Include your graduation year.",
        ]

    def test_missing(self, analyzers):
        result = analyzers.education("")
        assert result.achieved_score == 0
        assert result.feedback == ["Add an education section with your degree and graduation year."]


class TestSkills:

    def test_major_vocabulary(self, analyzers, rules):
        vocabulary = rules.skills_for(Major.COMPUTER_SCIENCE)
        result = analyzers.skills("Python, Git, Docker, Data Structures", vocabulary, Major.COMPUTER_SCIENCE)

        assert result.achieved_score == 18
        assert result.matched == (
            'programming languages', 'version control', 'cloud computing', 'data structures',
        )
        assert result.feedback == []

    def test_general_vocabulary(self, analyzers, rules):
        result = analyzers.skills("Leadership and teamwork", rules.skills_for(None))

        assert result.achieved_score == 14
        assert result.matched == ('leadership', 'teamwork')
        assert result.feedback == ["Add more relevant skills such as communication, management, problem solving."]

    def test_hyphenation_is_normalized(self, analyzers, rules):
        vocabulary = rules.skills_for(Major.COMPUTER_SCIENCE)
        assert analyzers.match_skills("Problem solving", vocabulary) == ['problem-solving']
        assert analyzers.match_skills("problem-solving", vocabulary) == ['problem-solving']

    def test_points_are_capped(self, analyzers, rules):
        vocabulary = rules.skills_for(Major.COMPUTER_SCIENCE)
        text = "Python, Git, Docker, PostgreSQL, Algorithms, Data Structures, Machine Learning"
        result = analyzers.skills(text, vocabulary, Major.COMPUTER_SCIENCE)

        assert len(result.matched) == 7
        assert result.achieved_score == 20

    def test_no_matches(self, analyzers, rules):
        vocabulary = rules.skills_for(Major.NURSING)
        result = analyzers.skills("Woodworking", vocabulary, Major.NURSING)

        assert result.achieved_score == 10
        assert result.feedback == [
            "List skills relevant to Nursing "
            "(e.g., patient care, vital signs monitoring, medication administration)."
        ]

    def test_missing_names_major(self, analyzers, rules):
        vocabulary = rules.skills_for(Major.COMPUTER_SCIENCE)
        result = analyzers.skills("", vocabulary, Major.COMPUTER_SCIENCE)

        assert result.achieved_score == 0
        assert result.feedback_items[0].severity is FeedbackSeverity.MISSING
        assert "Computer Science skills" in result.feedback[0]
        assert "programming languages, data structures, algorithms" in result.feedback[0]


class TestProjects:

    def test_missing(self, analyzers):
        assert analyzers.projects("").achieved_score == 0

    def test_too_short(self, analyzers):
        result = analyzers.projects("Todo app")
        assert result.achieved_score == 0
        assert result.feedback_items[0].severity is FeedbackSeverity.IMPROVE

    def test_described(self, analyzers):
        result = analyzers.projects("Built a budgeting app with Flutter and Firebase")
        assert result.achieved_score == 15


class TestCertifications:

    def test_recognized(self, analyzers):
        result = analyzers.certifications("AWS Certified Solutions Architect")
        assert result.achieved_score == 5
        assert result.matched == ('Certified Solutions Architect',)

    @pytest.mark.parametrize("text", ["", "Certifications", "Hiking and chess"])
    def test_not_recognized(self, analyzers, text):
        result = analyzers.certifications(text)
        assert result.achieved_score == 0
        assert result.feedback_items[0].severity is FeedbackSeverity.OPTIONAL

    def test_abbreviations(self, analyzers):
        assert analyzers.certifications("PMP, 2021").achieved_score == 5


class TestHeaderLines:

    def test_header_only_summary_is_missing(self, analyzers):
        result = analyzers.summary("Summary")
        assert result.achieved_score == 0
        assert result.feedback_items[0].severity is FeedbackSeverity.MISSING

    def test_header_not_counted_as_project_words(self, analyzers):
        result = analyzers.projects("Projects\nTodo app with Flutter")
        assert result.achieved_score == 0
        assert result.feedback_items[0].severity is FeedbackSeverity.IMPROVE

    def test_header_variants_ignored(self, analyzers):
        assert analyzers.summary("Professional Summary:\n" + SUMMARY_TEXT).achieved_score == 10
        result = analyzers.summary("SUMMARY\nEngineer who likes data")
        assert result.feedback == ["Expand your summary to at least 30 words (currently 4)."]


class TestSlashSeparatedSkills:

    def test_slash_list_is_split(self, analyzers, rules):
        vocabulary = rules.skills_for(Major.COMPUTER_SCIENCE)
        assert analyzers.match_skills("Python/Django/SQL", vocabulary) == [
            'programming languages', 'software development',
        ]

    def test_slash_skills_kept_whole(self, analyzers, rules):
        assert analyzers.match_skills("TCP/IP", rules.skills_for(Major.COMPUTER_SCIENCE)) == ['computer networks']
        assert analyzers.match_skills(
            "UI/UX principles", rules.skills_for(Major.GRAPHIC_DESIGN)) == ['ui/ux principles']


class TestCertificationPhrases:

    @pytest.mark.parametrize("text, phrase", [
        ("Google Data Analytics Certificate", "Google Data Analytics Certificate"),
        ("Certificate in Project Management", "Certificate in Project Management"),
        ("Microsoft Certified Azure Developer", "Certified Azure Developer"),
        ("CompTIA Security+", "CompTIA Security"),
    ])
    def test_matched_phrase(self, analyzers, text, phrase):
        result = analyzers.certifications(text)
        assert result.achieved_score == 5
        assert result.matched == (phrase,)

    def test_large_section_is_fast(self, analyzers):
        text = "lorem ipsum dolor sit amet " * 3700

        start = time.perf_counter()
        result = analyzers.certifications(text)
        elapsed = time.perf_counter() - start

        assert result.achieved_score == 0
        assert elapsed < 2.0
