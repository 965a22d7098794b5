# resume_review/scoring/analyzers.py
import logging
import re
from typing import Dict, List, Optional, Sequence

from nltk.tokenize import RegexpTokenizer
from nltk.util import ngrams

from resume_review.models import FeedbackSeverity, Major, SectionType
from resume_review.rules import RuleSet
from resume_review.scoring.models import Feedback, SectionScore

logger = logging.getLogger(__name__)

MISSING = FeedbackSeverity.MISSING
IMPROVE = FeedbackSeverity.IMPROVE
OPTIONAL = FeedbackSeverity.OPTIONAL


def _normalize_skill(text: str) -> str:
    return ' '.join(text.replace('-', ' ').split())


class SectionAnalyzers:
    """
    Per-section scoring rules.

    Each analyzer is a pure function of its section text and the rule set;
    points are clamped to the section maximum before the SectionScore
    is built.
    """

    # Tokens keep the punctuation used inside skill names: c++, c#, node.js, ui/ux, gd&t
    tokenizer = RegexpTokenizer(r"[a-z0-9+#&./-]+")

    def __init__(self, rules: RuleSet):
        self.rules = rules
        self.patterns = rules.patterns
        self._verb_patterns = [
            (verb, re.compile(r'\b' + re.escape(verb) + r'\b', re.IGNORECASE))
            for verb in rules.action_verbs
        ]
        phrase_lengths = [
            len(_normalize_skill(s).split())
            for s in list(rules.skill_categories) + list(rules.general_skills)
            + [skill for skills in rules.major_skills.values() for skill in skills]
        ]
        self._max_ngram = max(phrase_lengths) if phrase_lengths else 1

    def _score(
        self,
        section: SectionType,
        points: int,
        feedback: List[Feedback],
        content: str,
        matched: Sequence[str] = (),
    ) -> SectionScore:
        max_score = self.rules.max_score(section)
        achieved = max(0, min(points, max_score))
        logger.debug(
            f"{section.display_name}: {achieved}/{max_score} (raw {points}), "
            f"matched={list(matched)}, feedback={len(feedback)}"
        )
        return SectionScore(
            section_name=section.display_name,
            max_score=max_score,
            achieved_score=achieved,
            feedback_items=tuple(feedback),
            matched=tuple(matched),
            raw_content=content,
        )

    def _body(self, content: str, section: SectionType) -> str:
        """Section text without lines that only repeat its header"""
        lines = [line for line in content.split('\n') if not self.rules.is_header(line, section)]
        return '\n'.join(lines).strip()

    # ------------------------------------------------------------------ contact

    def contact(self, content: str) -> SectionScore:
        """Email, phone and profile links; each link class counts once"""
        points = 0
        feedback = []
        found = []
        table = self.rules.contact_points

        if self.patterns['email'].search(content):
            points += table['email']
            found.append('email')
        else:
            feedback.append(Feedback("Add a professional email address.", MISSING))

        if self.patterns['phone'].search(content):
            points += table['phone']
            found.append('phone')
        else:
            feedback.append(Feedback("Add a phone number.", MISSING))

        if self.patterns['linkedin'].search(content):
            points += table['linkedin']
            found.append('LinkedIn')
        else:
            feedback.append(Feedback("Consider adding your LinkedIn profile URL.", OPTIONAL))

        if self.patterns['github'].search(content):
            points += table['github']
            found.append('GitHub')
        else:
            feedback.append(Feedback("Consider adding your GitHub profile URL.", OPTIONAL))

        if self._find_portfolio(content):
            points += table['portfolio']
            found.append('portfolio')
        else:
            feedback.append(Feedback("Consider adding a link to your portfolio or personal website.", OPTIONAL))

        return self._score(SectionType.CONTACT, points, feedback, content, found)

    def _find_portfolio(self, content: str) -> Optional[str]:
        for match in self.patterns['portfolio'].finditer(content):
            url = match.group(0).lower()
            if 'linkedin.com' not in url and 'github.com' not in url:
                return match.group(0)
        return None

    # ------------------------------------------------------------------ summary

    def summary(self, content: str) -> SectionScore:
        text = self._body(content, SectionType.SUMMARY)
        if not text:
            feedback = [Feedback("Write a professional summary that highlights your goals and strengths.", MISSING)]
            return self._score(SectionType.SUMMARY, 0, feedback, content)

        threshold = self.rules.summary_word_threshold
        word_count = len(text.split())
        if word_count >= threshold:
            return self._score(SectionType.SUMMARY, self.rules.max_score(SectionType.SUMMARY), [], content)

        feedback = [Feedback(f"Expand your summary to at least {threshold} words (currently {word_count}).", IMPROVE)]
        return self._score(SectionType.SUMMARY, self.rules.summary_partial_points, feedback, content)

    # ------------------------------------------------------------------ experience

    def experience(self, content: str) -> SectionScore:
        """Presence, distinct action verbs (capped) and date ranges"""
        text = self._body(content, SectionType.EXPERIENCE)
        if not text:
            feedback = [Feedback("Add a work experience section describing your roles and achievements.", MISSING)]
            return self._score(SectionType.EXPERIENCE, 0, feedback, content)

        rules = self.rules
        feedback = []
        points = rules.experience_base_points

        verbs = [verb for verb, pattern in self._verb_patterns if pattern.search(text)]
        points += min(len(verbs), rules.experience_verb_threshold) * rules.experience_verb_points
        if len(verbs) < rules.experience_verb_threshold:
            examples = ', '.join([v for v in rules.action_verbs if v not in verbs][:3])
            feedback.append(Feedback(f"Use more action verbs (e.g., {examples}).", IMPROVE))

        if self.patterns['date_range'].search(text):
            points += rules.experience_date_points
        else:
            feedback.append(Feedback("Include explicit date ranges for each role (e.g., 2020-2022).", IMPROVE))

        return self._score(SectionType.EXPERIENCE, points, feedback, content, verbs)

    # ------------------------------------------------------------------ education

    def education(self, content: str) -> SectionScore:
        text = self._body(content, SectionType.EDUCATION)
        if not text:
            feedback = [Feedback("Add an education section with your degree and graduation year.", MISSING)]
            return self._score(SectionType.EDUCATION, 0, feedback, content)

        rules = self.rules
        feedback = []
        matched = []
        points = rules.education_base_points

        degree = self.patterns['degree'].search(text)
        if degree:
            points += rules.education_degree_points
            matched.append(degree.group(0))
        else:
            feedback.append(Feedback("Specify your degree (e.g., Bachelor of Science).", IMPROVE))

        year = self.patterns['graduation_year'].search(text)
        if year:
            points += rules.education_year_points
            matched.append(year.group(0))
        else:
            feedback.append(Feedback("Include your graduation year.", IMPROVE))

        return self._score(SectionType.EDUCATION, points, feedback, content, matched)

    # ------------------------------------------------------------------ skills

    def skills(self, content: str, vocabulary: Sequence[str], major: Optional[Major] = None) -> SectionScore:
        """
        Match skills against the active vocabulary

        Args:
            content: Skills section text
            vocabulary: Relevant skills/categories (major-specific or general)
            major: Detected field of study, used to tailor feedback
        """
        rules = self.rules
        field_name = major.value if major else None
        text = self._body(content, SectionType.SKILLS)

        if not text:
            examples = ', '.join(vocabulary[:rules.skills_example_count])
            target = f"{field_name} skills" if field_name else "relevant skills"
            feedback = [Feedback(f"Add a skills section listing {target} (e.g., {examples}).", MISSING)]
            return self._score(SectionType.SKILLS, 0, feedback, content)

        found = self.match_skills(text, vocabulary)
        points = rules.skills_base_points
        points += min(len(found), rules.skills_max_matches) * rules.skills_points_per_match

        feedback = []
        if len(found) < rules.skills_min_matches:
            missing = [s for s in vocabulary if s not in found][:rules.skills_example_count]
            examples = ', '.join(missing)
            if not found:
                target = f"skills relevant to {field_name}" if field_name else "relevant skills"
                feedback.append(Feedback(f"List {target} (e.g., {examples}).", IMPROVE))
            else:
                target = f"{field_name} skills" if field_name else "relevant skills"
                feedback.append(Feedback(f"Add more {target} such as {examples}.", IMPROVE))

        return self._score(SectionType.SKILLS, points, feedback, content, found)

    def match_skills(self, text: str, vocabulary: Sequence[str]) -> List[str]:
        """Distinct vocabulary entries found in text, in order of first appearance"""
        wanted: Dict[str, str] = {_normalize_skill(s): s for s in vocabulary}
        categories = {_normalize_skill(k): v for k, v in self.rules.skill_categories.items()}

        known = {word for phrase in list(wanted) + list(categories) for word in phrase.split()}
        tokens = []
        for token in self.tokenizer.tokenize(text.lower()):
            token = token.strip('./-')
            # "python/django/sql" is a list; "ui/ux" and "tcp/ip" are skills
            if '/' in token and _normalize_skill(token) not in known:
                tokens.extend(part.strip('.-') for part in token.split('/'))
            else:
                tokens.append(token)
        tokens = [t for t in tokens if t]

        found: List[str] = []
        for n in range(1, self._max_ngram + 1):
            for gram in ngrams(tokens, n):
                phrase = _normalize_skill(' '.join(gram))

                skill = wanted.get(phrase)
                if skill is None and phrase in categories:
                    skill = wanted.get(_normalize_skill(categories[phrase]))
                if skill is not None and skill not in found:
                    found.append(skill)
        return found

    # ------------------------------------------------------------------ projects

    def projects(self, content: str) -> SectionScore:
        text = self._body(content, SectionType.PROJECTS)
        if not text:
            feedback = [Feedback("Add at least one project with a short description.", MISSING)]
            return self._score(SectionType.PROJECTS, 0, feedback, content)

        word_count = len(text.split())
        if word_count < self.rules.projects_min_words:
            feedback = [Feedback(
                f"Describe your projects in more detail (at least {self.rules.projects_min_words} words).",
                IMPROVE,
            )]
            return self._score(SectionType.PROJECTS, 0, feedback, content)

        return self._score(SectionType.PROJECTS, self.rules.max_score(SectionType.PROJECTS), [], content)

    # ------------------------------------------------------------------ certifications

    def certifications(self, content: str) -> SectionScore:
        matches = [m.group(0).strip() for m in self.patterns['certification'].finditer(content)]
        if matches:
            return self._score(
                SectionType.CERTIFICATIONS,
                self.rules.max_score(SectionType.CERTIFICATIONS),
                [],
                content,
                matches,
            )

        feedback = [Feedback("Consider adding relevant professional certifications.", OPTIONAL)]
        return self._score(SectionType.CERTIFICATIONS, 0, feedback, content)
