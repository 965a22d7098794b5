# resume_review/rules.py
import logging
import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Pattern, Tuple

import yaml

from resume_review.config import ReviewConfig
from resume_review.errors import ConfigurationError
from resume_review.models import Major, SectionType

logger = logging.getLogger(__name__)


# ===================== Patterns =====================

_MONTH = (
    r'(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?|'
    r'sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?'
)
_DATE_PREFIX = rf'(?:{_MONTH}\s+|\d{{1,2}}/)?'

DEFAULT_PATTERNS = {
    'email': r'\b[\w.%+-]+@[\w.-]+\.[a-z]{2,}\b',
    'phone': r'(?<![\w$])(?:\+\d{1,3}[-.\s]?)?(?:\(\d{3}\)\s?|\d{3}[-.\s]?)\d{3}[-.\s]?\d{4}(?![\w@])',
    'linkedin': r'(?:https?://)?(?:[a-z]{2,3}\.)?linkedin\.com/[^\s|,;]+',
    'github': r'(?:https?://)?(?:www\.)?github\.com/[^\s|,;]+',
    'portfolio': (
        r'(?<![@\w.-])(?:https?://|www\.)[^\s|,;]+'
        r'|(?<![@\w.-])[\w-]+\.(?:github\.io|netlify\.app|vercel\.app|pages\.dev|dev|me|site)\b(?:/[^\s|,;]*)?'
    ),
    'date_range': (
        rf'\b{_DATE_PREFIX}(?:19|20)\d{{2}}\s*(?:-|–|—|to)\s*'
        rf'(?:{_DATE_PREFIX}(?:19|20)\d{{2}}|present|current|now)\b'
    ),
    'graduation_year': r'\b(?:19|20)\d{2}\b',
    'degree': (
        r"\b(?:bachelor(?:'?s)?|master(?:'?s)?|associate(?:'?s)?|ph\.?\s?d|doctorate|"
        r"mba|bsc|msc|b\.sc?|m\.sc?|b\.a|m\.a)\b"
    ),
    'certification': (
        r'\bcertified(?:[ \t]+[a-z][a-z-]*){0,4}?[ \t]+(?:professional|practitioner|developer|engineer|associate|'
        r'master|administrator|architect|specialist|analyst|accountant)'
        r'|(?:\b[a-z][a-z-]*[ \t]+){0,6}\b(?:certification|certificate)\b'
        r'(?:[ \t]+(?:in|of|for)(?:[ \t]+[a-z][a-z-]*){1,6})?'
        r'|\b(?:cpa|pmp|cissp|ccna|ccnp|cfa|itil|comptia[ \t]+\w+)\b'
    ),
    'section_marker': r'^[ \t]*==[ \t]*SECTION[ \t]*==[ \t]*(.*?)[ \t]*$',
    'page_break': r'^[ \t]*==[ \t]*PAGE_BREAK[ \t]*==[ \t]*$',
    'bullet': r'^\s*[-•*▪◦‣·]\s+',
    'summary_keyword': r'\b(?:summary|objective|profile)\b',
    'skills_keyword': r'\b(?:skills|python|java|communication)\b',
    'education_keyword': r'\b(?:university|college|institute|academy|school|degree|bachelor|master|diploma|gpa)\b',
}

_MULTILINE_PATTERNS = {'section_marker', 'page_break'}


def compile_pattern(name: str, source: str) -> Pattern:
    """Compile a named rule pattern with the flags it is used with"""
    flags = re.IGNORECASE
    if name in _MULTILINE_PATTERNS:
        flags |= re.MULTILINE
    try:
        return re.compile(source, flags)
    except re.error as e:
        raise ConfigurationError(f"Invalid regex for pattern '{name}': {e}") from e


# ===================== Section structure =====================

DEFAULT_SECTION_MAX_SCORES = {
    SectionType.CONTACT: 15,
    SectionType.SUMMARY: 10,
    SectionType.EXPERIENCE: 20,
    SectionType.EDUCATION: 15,
    SectionType.SKILLS: 20,
    SectionType.PROJECTS: 15,
    SectionType.CERTIFICATIONS: 5,
}

# Lower value sorts first in the feedback list
DEFAULT_SECTION_PRIORITIES = {
    SectionType.CONTACT: 1,
    SectionType.SUMMARY: 2,
    SectionType.EXPERIENCE: 3,
    SectionType.EDUCATION: 4,
    SectionType.SKILLS: 5,
    SectionType.PROJECTS: 6,
    SectionType.CERTIFICATIONS: 7,
}

DEFAULT_SECTION_ALIASES = {
    SectionType.CONTACT: [
        'contact', 'contact info', 'contact information', 'personal details',
        'personal information', 'get in touch',
    ],
    SectionType.SUMMARY: [
        'summary', 'professional summary', 'objective', 'career objective',
        'profile', 'professional profile', 'overview', 'about me',
    ],
    SectionType.EXPERIENCE: [
        'experience', 'work experience', 'professional experience', 'work history',
        'employment', 'employment history', 'internships', 'internship',
    ],
    SectionType.EDUCATION: [
        'education', 'academic background', 'academics', 'studies', 'degrees',
        'education and training',
    ],
    SectionType.SKILLS: [
        'skills', 'technical skills', 'core competencies', 'technologies', 'tools',
        'proficiencies', 'abilities',
    ],
    SectionType.PROJECTS: [
        'projects', 'personal projects', 'academic projects', 'portfolio', 'works',
        'case studies',
    ],
    SectionType.CERTIFICATIONS: [
        'certifications', 'certificates', 'licenses', 'licenses and certifications',
        'credentials', 'awards',
    ],
    SectionType.MISCELLANEOUS: [
        'miscellaneous', 'other', 'additional', 'additional information', 'hobbies',
        'interests', 'activities', 'languages', 'references', 'volunteering',
    ],
}

_HEADER_WHITESPACE = re.compile(r'\s+')
_HEADER_PUNCTUATION = re.compile(r'[:\-–—|]+$')


def normalize_header(header: str) -> str:
    """Lowercase a header line, collapse whitespace and drop trailing punctuation"""
    key = _HEADER_WHITESPACE.sub(' ', header).strip().lower()
    return _HEADER_PUNCTUATION.sub('', key).strip()


# ===================== Scoring vocabulary =====================

DEFAULT_CONTACT_POINTS = {
    'email': 7,
    'phone': 5,
    'linkedin': 3,
    'github': 2,
    'portfolio': 2,
}

DEFAULT_ACTION_VERBS = [
    'developed', 'managed', 'led', 'built', 'designed', 'created', 'implemented',
    'optimized', 'analyzed', 'automated', 'oversaw', 'delivered', 'mentored',
    'solved', 'coordinated', 'executed', 'improved', 'streamlined', 'facilitated',
    'directed', 'launched', 'established', 'increased', 'reduced', 'achieved',
]

# Specific skill -> broader category used by the per-major vocabularies
DEFAULT_SKILL_CATEGORIES = {
    'golang': 'programming languages',
    'go': 'programming languages',
    'python': 'programming languages',
    'java': 'programming languages',
    'c': 'programming languages',
    'c++': 'programming languages',
    'c#': 'programming languages',
    'rust': 'programming languages',
    'kotlin': 'programming languages',
    'swift': 'programming languages',
    'scala': 'programming languages',
    'dart': 'programming languages',
    'html': 'programming languages',
    'javascript': 'programming languages',
    'typescript': 'programming languages',
    'css': 'programming languages',
    'sql': 'programming languages',
    'bash': 'programming languages',
    'git': 'version control',
    'github': 'version control',
    'gitlab': 'version control',
    'pytorch': 'machine learning',
    'tensorflow': 'machine learning',
    'keras': 'machine learning',
    'scikit-learn': 'machine learning',
    'artificial intelligence': 'machine learning',
    'numpy': 'data analysis',
    'pandas': 'data analysis',
    'tableau': 'data analysis',
    'power bi': 'data analysis',
    'docker': 'cloud computing',
    'kubernetes': 'cloud computing',
    'aws': 'cloud computing',
    'azure': 'cloud computing',
    'gcp': 'cloud computing',
    'node.js': 'software development',
    'react': 'software development',
    'reactjs': 'software development',
    'angular': 'software development',
    'django': 'software development',
    'flask': 'software development',
    'springboot': 'software development',
    'spring boot': 'software development',
    'maven': 'software development',
    'flutter': 'software development',
    'mysql': 'database management',
    'postgresql': 'database management',
    'mongodb': 'database management',
    'database systems': 'database management',
    'pytest': 'software testing',
    'junit': 'software testing',
    'selenium': 'software testing',
    'tcp/ip': 'computer networks',
    'advanced object-oriented programming': 'object-oriented programming',
    'oop': 'object-oriented programming',
    'computer security': 'cybersecurity',
    'network security': 'cybersecurity',
    'autocad': 'cad software',
    'solidworks': 'cad software',
    'jira': 'project management',
    'photoshop': 'adobe photoshop',
    'illustrator': 'adobe illustrator',
    'indesign': 'adobe indesign',
    'figma': 'ui/ux principles',
    'spss': 'statistical analysis',
    'emr': 'electronic medical records',
    'ehr': 'electronic medical records',
    'arcgis': 'gis',
}

# Used when no single field of study is detected
DEFAULT_GENERAL_SKILLS = [
    'communication', 'teamwork', 'leadership', 'management', 'problem solving',
    'project management', 'research', 'organization',
]

DEFAULT_MAJOR_SKILLS = {
    Major.COMPUTER_SCIENCE: [
        'programming languages', 'data structures', 'algorithms', 'operating systems',
        'database management', 'software development', 'object-oriented programming',
        'version control', 'computer networks', 'cloud computing', 'machine learning',
        'cybersecurity', 'software testing', 'problem-solving', 'critical thinking',
        'communication skills', 'teamwork',
    ],
    Major.BUSINESS_ADMINISTRATION: [
        'communication skills', 'leadership', 'teamwork', 'customer service', 'organization',
        'time management', 'multitasking', 'attention to detail', 'critical thinking',
        'strategic planning', 'project management', 'administration', 'computer literacy',
        'work under pressure', 'problem-solving',
    ],
    Major.MECHANICAL_ENGINEERING: [
        'cad software', 'mechanical design', 'finite element analysis', 'gd&t',
        'material science', 'thermodynamics', 'fluid mechanics', 'matlab', 'prototyping',
        'machining', 'project management', 'analytical skills', 'problem-solving',
        'creativity', 'adaptability', 'communication',
    ],
    Major.NURSING: [
        'patient care', 'vital signs monitoring', 'medication administration', 'iv therapy',
        'wound care', 'infection control', 'patient assessment', 'electronic medical records',
        'patient education', 'time management', 'attention to detail', 'emotional stability',
        'physical stamina', 'compassion', 'communication skills',
    ],
    Major.ELECTRICAL_ENGINEERING: [
        'circuit design', 'pcb layout', 'embedded systems', 'signal processing',
        'control systems', 'power systems', 'electronics troubleshooting', 'programming',
        'cad tools', 'math skills', 'problem-solving', 'project management',
        'continuous learning', 'communication skills',
    ],
    Major.PSYCHOLOGY: [
        'counseling', 'active listening', 'empathy', 'research methods',
        'statistical analysis', 'data analysis', 'analytical skills', 'observation',
        'critical thinking', 'ethics', 'interpersonal skills', 'patience',
        'communication skills', 'problem-solving', 'cultural competence',
    ],
    Major.BIOLOGY: [
        'laboratory techniques', 'molecular biology', 'cell culture', 'microscopy',
        'biochemical assays', 'field research', 'data analysis', 'scientific writing',
        'research methods', 'attention to detail', 'bioinformatics', 'critical thinking',
        'lab safety', 'teamwork', 'presentation skills',
    ],
    Major.ECONOMICS: [
        'statistical analysis', 'econometrics', 'data analysis', 'stata', 'microeconomics',
        'macroeconomics', 'analytical reasoning', 'critical thinking',
        'mathematical modeling', 'forecasting', 'financial literacy', 'policy analysis',
        'research skills', 'communication skills', 'excel',
    ],
    Major.ACCOUNTING: [
        'attention to detail', 'gaap knowledge', 'financial reporting',
        'account reconciliation', 'auditing', 'tax preparation', 'budgeting',
        'accounts payable', 'accounts receivable', 'quickbooks', 'excel',
        'analytical skills', 'math skills', 'organizational skills', 'communication skills',
    ],
    Major.CIVIL_ENGINEERING: [
        'cad', 'structural analysis', 'construction management', 'geotechnical engineering',
        'surveying', 'transportation engineering', 'hydrology', 'building codes',
        'project management', 'gis', 'blueprint reading', 'material science',
        'problem-solving', 'math skills', 'communication',
    ],
    Major.EDUCATION: [
        'curriculum development', 'lesson planning', 'classroom management',
        'instructional strategies', 'assessment design', 'educational technology',
        'public speaking', 'communication skills', 'patience', 'adaptability',
        'special education', 'collaboration', 'mentoring', 'cultural competence',
        'organizational skills',
    ],
    Major.FINANCE: [
        'financial analysis', 'financial modeling', 'budgeting', 'investment analysis',
        'portfolio management', 'risk management', 'valuation', 'excel', 'data analysis',
        'regulatory compliance', 'accounting principles', 'quantitative analysis',
        'decision-making', 'communication skills', 'attention to detail',
    ],
    Major.POLITICAL_SCIENCE: [
        'research', 'critical thinking', 'policy analysis', 'government knowledge',
        'public speaking', 'writing', 'persuasion', 'qualitative research',
        'statistical analysis', 'international relations', 'legal understanding',
        'campaign strategy', 'diplomacy', 'advocacy', 'collaboration',
    ],
    Major.MARKETING: [
        'seo', 'sem', 'content creation', 'social media marketing', 'email marketing', 'crm',
        'analytics', 'google analytics', 'market research', 'branding', 'copywriting',
        'graphic design', 'cms management', 'creativity', 'project management',
    ],
    Major.COMMUNICATIONS: [
        'public speaking', 'writing', 'media relations', 'social media', 'storytelling',
        'persuasion', 'crisis communication', 'interpersonal skills', 'editing',
        'content creation', 'marketing communications', 'research', 'event planning',
        'cultural awareness', 'collaboration',
    ],
    Major.CHEMISTRY: [
        'laboratory techniques', 'analytical chemistry', 'organic synthesis',
        'instrumental analysis', 'chemical safety', 'wet lab skills', 'data analysis',
        'problem-solving', 'attention to detail', 'quantitative analysis',
        'laboratory management', 'teamwork', 'scientific writing', 'critical thinking',
        'computational tools',
    ],
    Major.INFORMATION_TECHNOLOGY: [
        'technical support', 'networking', 'system administration', 'cybersecurity',
        'cloud computing', 'database management', 'scripting', 'hardware maintenance',
        'software configuration', 'itil processes', 'troubleshooting', 'customer service',
        'project management', 'attention to detail', 'continuous learning',
    ],
    Major.GRAPHIC_DESIGN: [
        'adobe photoshop', 'adobe illustrator', 'adobe indesign', 'typography',
        'color theory', 'layout design', 'branding', 'ui/ux principles', 'creativity',
        'attention to detail', 'time management', 'print design', 'digital illustration',
        'web design', 'communication',
    ],
    Major.MATHEMATICS: [
        'problem-solving', 'logical reasoning', 'statistical analysis',
        'mathematical modeling', 'calculus', 'algebra', 'discrete mathematics',
        'computational skills', 'data analysis', 'number theory', 'attention to detail',
        'proof writing', 'abstract thinking', 'critical thinking', 'persistence',
    ],
    Major.ENVIRONMENTAL_SCIENCE: [
        'environmental impact assessment', 'field research', 'gis', 'water analysis',
        'soil analysis', 'ecology', 'sustainability', 'climate science',
        'regulatory compliance', 'data analysis', 'remote sensing', 'report writing',
        'critical thinking', 'public outreach', 'laboratory skills',
    ],
    Major.ENGLISH: [
        'writing', 'editing', 'critical thinking', 'literary analysis', 'research',
        'communication skills', 'public speaking', 'proofreading', 'content creation',
        'storytelling', 'cultural awareness', 'collaboration', 'time management',
        'attention to detail', 'creativity',
    ],
    Major.HISTORY: [
        'research', 'critical thinking', 'writing', 'archival research',
        'historical analysis', 'attention to detail', 'communication skills',
        'public speaking', 'cultural awareness', 'data interpretation',
        'analytical skills', 'presentation skills', 'collaboration', 'time management',
        'persistence',
    ],
    Major.SOCIOLOGY: [
        'research methods', 'statistical analysis', 'data analysis', 'critical thinking',
        'writing', 'survey design', 'interviewing', 'cultural competence', 'social theory',
        'policy analysis', 'communication skills', 'collaboration', 'empathy',
        'analytical skills', 'presentation skills',
    ],
}

# Aliases shorter than major_alias_min_length are matched as whole words
DEFAULT_MAJOR_ALIASES = {
    Major.COMPUTER_SCIENCE: ['computer science', 'comp sci', 'compsci', 'cs', 'bscs'],
    Major.BUSINESS_ADMINISTRATION: ['business administration', 'business admin', 'mba', 'bba'],
    Major.MECHANICAL_ENGINEERING: ['mechanical engineering', 'mech eng', 'mechanical and aerospace engineering'],
    Major.NURSING: ['in nursing', 'of nursing', 'nursing degree', 'bsn', 'msn'],
    Major.ELECTRICAL_ENGINEERING: ['electrical engineering', 'electrical and computer engineering', 'ece', 'eee'],
    Major.PSYCHOLOGY: ['psychology'],
    Major.BIOLOGY: ['biology', 'biological sciences'],
    Major.ECONOMICS: ['economics', 'econ'],
    Major.ACCOUNTING: ['accounting', 'accountancy'],
    Major.CIVIL_ENGINEERING: ['civil engineering', 'civil and environmental engineering'],
    Major.EDUCATION: [
        'bachelor of education', 'master of education', 'b.ed', 'm.ed', 'elementary education',
        'secondary education', 'early childhood education', 'education major', 'degree in education',
    ],
    Major.FINANCE: ['finance', 'financial engineering'],
    Major.POLITICAL_SCIENCE: ['political science', 'poli sci', 'polisci', 'government and politics'],
    Major.MARKETING: ['marketing'],
    Major.COMMUNICATIONS: ['communications', 'communication studies', 'mass communication', 'journalism'],
    Major.CHEMISTRY: ['chemistry'],
    Major.INFORMATION_TECHNOLOGY: ['information technology', 'information systems', 'info tech'],
    Major.GRAPHIC_DESIGN: ['graphic design', 'visual communication design', 'graphic arts'],
    Major.MATHEMATICS: ['mathematics', 'applied math', 'math'],
    Major.ENVIRONMENTAL_SCIENCE: ['environmental science', 'environmental studies'],
    Major.ENGLISH: [
        'english literature', 'english major', 'degree in english', 'ba in english',
        'b.a. in english', 'bachelor of arts in english', 'major in english',
    ],
    Major.HISTORY: [
        'history major', 'degree in history', 'ba in history', 'b.a. in history',
        'bachelor of arts in history', 'major in history',
    ],
    Major.SOCIOLOGY: ['sociology'],
}


def _freeze_mapping(data: Mapping, values=tuple) -> Mapping:
    return MappingProxyType({k: values(v) if values else v for k, v in data.items()})


@dataclass(frozen=True)
class RuleSet:
    """
    Weights, patterns and vocabularies driving detection and scoring.

    Built once at startup, checked with validate(), then shared read-only
    by the section detector, major detector and scorer.
    """

    total_max_score: int = 100
    section_max_scores: Mapping[SectionType, int] = field(
        default_factory=lambda: dict(DEFAULT_SECTION_MAX_SCORES))
    section_priorities: Mapping[SectionType, int] = field(
        default_factory=lambda: dict(DEFAULT_SECTION_PRIORITIES))
    section_aliases: Mapping[SectionType, Tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_SECTION_ALIASES))
    patterns: Mapping[str, Pattern] = field(
        default_factory=lambda: {name: compile_pattern(name, src) for name, src in DEFAULT_PATTERNS.items()})

    # Contact
    contact_points: Mapping[str, int] = field(
        default_factory=lambda: dict(DEFAULT_CONTACT_POINTS))

    # Summary
    summary_word_threshold: int = 30
    summary_partial_points: int = 5

    # Experience
    action_verbs: Tuple[str, ...] = field(default_factory=lambda: tuple(DEFAULT_ACTION_VERBS))
    experience_base_points: int = 10
    experience_verb_points: int = 2
    experience_verb_threshold: int = 3
    experience_date_points: int = 3

    # Education
    education_base_points: int = 10
    education_degree_points: int = 3
    education_year_points: int = 2

    # Skills
    skill_categories: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_SKILL_CATEGORIES))
    general_skills: Tuple[str, ...] = field(default_factory=lambda: tuple(DEFAULT_GENERAL_SKILLS))
    major_skills: Mapping[Major, Tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_MAJOR_SKILLS))
    skills_base_points: int = 10
    skills_points_per_match: int = 2
    skills_max_matches: int = 5
    skills_min_matches: int = 3
    skills_example_count: int = 3

    # Projects
    projects_min_words: int = 5

    # Major detection
    major_aliases: Mapping[Major, Tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_MAJOR_ALIASES))
    major_alias_min_length: int = 5

    def __post_init__(self):
        # Freeze collections so a shared instance cannot be mutated
        setattr_ = object.__setattr__
        setattr_(self, 'section_max_scores', _freeze_mapping(self.section_max_scores, values=None))
        setattr_(self, 'section_priorities', _freeze_mapping(self.section_priorities, values=None))
        setattr_(self, 'section_aliases', _freeze_mapping(
            self.section_aliases, values=lambda v: tuple(a.lower().strip() for a in v)))
        setattr_(self, 'patterns', _freeze_mapping(self.patterns, values=None))
        setattr_(self, 'contact_points', _freeze_mapping(self.contact_points, values=None))
        setattr_(self, 'action_verbs', tuple(v.lower() for v in self.action_verbs))
        setattr_(self, 'skill_categories', MappingProxyType(
            {k.lower(): v.lower() for k, v in self.skill_categories.items()}))
        setattr_(self, 'general_skills', tuple(s.lower() for s in self.general_skills))
        setattr_(self, 'major_skills', _freeze_mapping(
            self.major_skills, values=lambda v: tuple(s.lower() for s in v)))
        setattr_(self, 'major_aliases', _freeze_mapping(
            self.major_aliases, values=lambda v: tuple(a.lower().strip() for a in v)))

    @property
    def scored_sections(self) -> List[SectionType]:
        return SectionType.scored()

    def max_score(self, section: SectionType) -> int:
        return self.section_max_scores[section]

    def priority(self, section: SectionType) -> int:
        return self.section_priorities.get(section, len(self.section_priorities) + 1)

    def skills_for(self, major: Optional[Major]) -> Tuple[str, ...]:
        """Skill vocabulary for a field of study, or the general list"""
        if major is not None and major in self.major_skills:
            return self.major_skills[major]
        return self.general_skills

    def is_header(self, line: str, section: SectionType) -> bool:
        """True if line is one of the section's header aliases"""
        return normalize_header(line) in self.section_aliases.get(section, ())

    def validate(self) -> 'RuleSet':
        """
        Check internal consistency

        Raises:
            ConfigurationError listing every problem found
        """
        issues = []

        # Section budgets
        scored = set(self.scored_sections)
        missing = scored - set(self.section_max_scores)
        if missing:
            issues.append(f"Missing max score for sections: {sorted(s.value for s in missing)}")
        for section, points in self.section_max_scores.items():
            if points <= 0:
                issues.append(f"Max score for '{section.value}' must be positive, got {points}")
        total = sum(self.section_max_scores.values())
        if total != self.total_max_score:
            issues.append(
                f"Section max scores sum ({total}) does not match total_max_score ({self.total_max_score})"
            )

        missing = scored - set(self.section_priorities)
        if missing:
            issues.append(f"Missing feedback priority for sections: {sorted(s.value for s in missing)}")

        # Section aliases
        seen: Dict[str, SectionType] = {}
        for section in SectionType:
            aliases = self.section_aliases.get(section, ())
            if not aliases:
                issues.append(f"No header aliases for section '{section.value}'")
            for alias in aliases:
                if alias in seen and seen[alias] is not section:
                    issues.append(
                        f"Header alias '{alias}' maps to both '{seen[alias].value}' and '{section.value}'"
                    )
                seen[alias] = section

        # Majors: detector aliases and skill vocabularies must cover the same fields
        alias_majors = set(self.major_aliases)
        skill_majors = set(self.major_skills)
        for major in sorted(alias_majors - skill_majors, key=lambda m: m.value):
            issues.append(f"Major '{major.value}' can be detected but has no skills entry")
        for major in sorted(skill_majors - alias_majors, key=lambda m: m.value):
            issues.append(f"Major '{major.value}' has skills but no detection aliases")
        for major, skills in self.major_skills.items():
            if not skills:
                issues.append(f"Empty skills list for major '{major.value}'")

        seen_major: Dict[str, Major] = {}
        for major, aliases in self.major_aliases.items():
            for alias in aliases:
                if alias in seen_major and seen_major[alias] is not major:
                    issues.append(
                        f"Major alias '{alias}' maps to both '{seen_major[alias].value}' and '{major.value}'"
                    )
                seen_major[alias] = major

        # Vocabularies and point tables
        if not self.general_skills:
            issues.append("General skills list is empty")
        if not self.action_verbs:
            issues.append("Action verb list is empty")
        for key in DEFAULT_CONTACT_POINTS:
            if self.contact_points.get(key, 0) <= 0:
                issues.append(f"Contact points for '{key}' must be positive")
        for name in DEFAULT_PATTERNS:
            if name not in self.patterns:
                issues.append(f"Missing pattern '{name}'")

        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, int) and value < 0:
                issues.append(f"'{f.name}' must not be negative, got {value}")

        if issues:
            for issue in issues:
                logger.error(f"Rule set validation: {issue}")
            raise ConfigurationError("Invalid rule set: " + "; ".join(issues))

        logger.info(
            f"Rule set validated: {len(self.section_max_scores)} sections, "
            f"{len(self.major_skills)} majors, {len(self.action_verbs)} action verbs"
        )
        return self

    @classmethod
    def from_yaml(cls, path: str) -> 'RuleSet':
        """Load rule overrides from the 'rules' mapping of a YAML file"""
        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read rules file {path}: {e}") from e

        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Rules file {path} must contain a mapping")
        return cls.from_overrides(data.get('rules', {}) or {})

    @classmethod
    def from_overrides(cls, overrides: Mapping[str, Any]) -> 'RuleSet':
        """
        Build a rule set from defaults plus plain-data overrides

        Raises:
            ConfigurationError for unknown keys, names or malformed values
        """
        if not isinstance(overrides, Mapping):
            raise ConfigurationError(f"Rule overrides must be a mapping, got {type(overrides).__name__}")

        base = cls()
        known = {f.name for f in fields(cls)}
        changes: Dict[str, Any] = {}

        for key, value in overrides.items():
            if key not in known:
                raise ConfigurationError(f"Unknown rule setting: '{key}'")
            try:
                changes[key] = _convert_override(base, key, value)
            except (TypeError, ValueError, AttributeError) as e:
                raise ConfigurationError(f"Invalid value for rule setting '{key}': {e}") from e

        return replace(base, **changes)


_MAPPING_SETTINGS = {
    'section_max_scores', 'section_priorities', 'section_aliases', 'major_skills',
    'major_aliases', 'patterns', 'contact_points', 'skill_categories',
}
_LIST_SETTINGS = {'action_verbs', 'general_skills'}


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"expected a list, got {type(value).__name__}")
    return [str(item) for item in value]


def _convert_override(base: RuleSet, key: str, value: Any) -> Any:
    """Merge one override into the default value for key"""
    if key in _MAPPING_SETTINGS and not isinstance(value, Mapping):
        raise TypeError(f"expected a mapping, got {type(value).__name__}")

    if key in ('section_max_scores', 'section_priorities'):
        merged = dict(getattr(base, key))
        merged.update({_section(name): int(v) for name, v in value.items()})
        return merged
    if key == 'section_aliases':
        merged = dict(base.section_aliases)
        merged.update({_section(name): _string_list(v) for name, v in value.items()})
        return merged
    if key in ('major_skills', 'major_aliases'):
        merged = dict(getattr(base, key))
        merged.update({_major(name): _string_list(v) for name, v in value.items()})
        return merged
    if key == 'patterns':
        merged = dict(base.patterns)
        merged.update({name: compile_pattern(name, str(src)) for name, src in value.items()})
        return merged
    if key == 'contact_points':
        merged = dict(base.contact_points)
        merged.update({name: int(v) for name, v in value.items()})
        return merged
    if key == 'skill_categories':
        merged = dict(base.skill_categories)
        merged.update({str(k): str(v) for k, v in value.items()})
        return merged
    if key in _LIST_SETTINGS:
        return tuple(_string_list(value))
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value}")
    return int(value)


def _section(name: str) -> SectionType:
    try:
        return SectionType(name.strip().lower())
    except ValueError:
        raise ConfigurationError(f"Unknown section name: '{name}'") from None


def _major(name: str) -> Major:
    major = Major.from_display(name)
    if major is None:
        raise ConfigurationError(f"Unknown major: '{name}'")
    return major


def load_rules(config: Optional[ReviewConfig] = None) -> RuleSet:
    """Build and validate the rule set for a process"""
    if config is not None and config.rules_file is not None:
        rules_path = Path(config.rules_file)
        logger.info(f"Loading rule overrides from {rules_path}")
        rules = RuleSet.from_yaml(str(rules_path))
    else:
        rules = RuleSet()
    return rules.validate()
