"""Role keyword lookup backed by built-in tables and optional YAML/JSON files."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

import yaml
from pydantic import ValidationError

from src.scoring.config import ScoringConfig, get_scoring_config
from src.scoring.models import RoleKeywords

logger = logging.getLogger(__name__)

BUILTIN_ROLE_KEYWORDS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "HR": (
            "Recruitment", "Employee Relations", "Onboarding", "HR Policies",
            "Talent Acquisition", "Benefits", "Compliance", "HRIS",
            "Employee Engagement", "Performance Reviews", "HR", "Human Resources",
            "Hiring", "Personnel", "Staffing", "Training", "Compensation",
            "Payroll", "Labor Relations",
        ),
        "UI/UX Designer": (
            "User Research", "Wireframing", "Prototyping", "Figma", "User Testing",
            "Adobe XD", "Design Systems", "Accessibility", "UX Writing",
            "Interaction Design", "UI", "UX", "User Interface", "User Experience",
            "Sketch", "InVision", "Usability", "Information Architecture",
            "Visual Design", "Responsive Design",
        ),
        "Java Developer": (
            "Java", "Spring", "Hibernate", "SQL", "REST API", "Microservices",
            "Docker", "Kubernetes", "JUnit", "Maven", "J2EE", "Spring Boot", "JPA",
            "Servlets", "JSP", "JDBC", "Web Services", "Jenkins", "Git", "Agile",
        ),
        "Python Developer": (
            "Python", "Django", "Flask", "SQL", "API", "Machine Learning", "Docker",
            "AWS", "Data Analysis", "Pandas", "NumPy", "PyTorch", "TensorFlow",
            "Scikit-learn", "REST", "FastAPI", "Pytest", "Git", "Linux", "OOP",
        ),
        "Full Stack Developer": (
            "JavaScript", "React", "Node.js", "CSS", "HTML", "TypeScript", "Redux",
            "GraphQL", "MongoDB", "Express", "Angular", "Vue.js", "REST API",
            "Frontend", "Backend", "Full Stack", "Web Development", "Database",
            "Git", "Agile",
        ),
        "Mechanical Engineering": (
            "CAD", "SolidWorks", "Product Design", "Manufacturing", "CFD",
            "Thermal Analysis", "Six Sigma", "GD&T", "FEA", "Materials Science",
            "AutoCAD", "ANSYS", "Mechanical Design", "3D Modeling", "Prototyping",
            "CNC", "Quality Control", "Project Management", "Engineering",
            "Technical Drawing",
        ),
        "SEO": (
            "Keyword Research", "On-page SEO", "Content Strategy", "Google Analytics",
            "Schema Markup", "Local SEO", "Mobile SEO", "Link Building", "SEO Audits",
            "Search Console", "SEM", "Digital Marketing", "Backlinks", "SERP",
            "Ahrefs", "SEMrush", "Moz", "Technical SEO", "Content Marketing",
            "Conversion Rate Optimization",
        ),
        "Medical": (
            "Patient Care", "Medical Records", "Clinical Procedures", "Healthcare",
            "Electronic Health Records", "Quality Improvement", "Care Coordination",
            "Medical Terminology", "Patient Assessment", "Treatment Planning",
            "Diagnosis", "Medication", "Nursing", "Physician", "Hospital", "Clinic",
            "Therapy", "Health", "Medical", "Patient",
        ),
        "PROMPT Engineering": (
            "Natural Language Processing", "Machine Learning", "AI Models", "GPT",
            "Prompt Design", "Context Engineering", "Fine-tuning", "Data Annotation",
            "Conversational AI", "Semantic Analysis", "NLP", "LLM",
            "Artificial Intelligence", "Neural Networks", "Transformer Models",
            "BERT", "OpenAI", "Prompt Optimization", "AI Ethics", "Language Models",
        ),
    }
)

DEFAULT_KEYWORDS: tuple[str, ...] = (
    "Communication", "Project Management", "Problem Solving", "Team Collaboration",
    "Leadership", "Strategic Planning", "Budget Management", "Time Management",
    "Analytical Skills", "Presentation Skills", "Organization", "Teamwork",
    "Critical Thinking", "Decision Making", "Negotiation", "Interpersonal Skills",
    "Research", "Writing", "Public Speaking", "Customer Service",
)


class KeywordStore:
    """Read-only lookup of keyword sets by role name.

    Unknown roles fall back to a generic professional keyword set; a role
    that is configured with no keywords yields an empty list.
    """

    def __init__(
        self,
        roles: Mapping[str, Iterable[str]] | None = None,
        default_keywords: Iterable[str] = DEFAULT_KEYWORDS,
    ) -> None:
        source = BUILTIN_ROLE_KEYWORDS if roles is None else roles
        self._roles: dict[str, RoleKeywords] = {}
        for role, keywords in source.items():
            entry = RoleKeywords(role=role, keywords=list(keywords))
            self._roles[entry.role] = entry
        self._default = RoleKeywords(role="default", keywords=list(default_keywords))

    @classmethod
    def from_config(cls, config: ScoringConfig | None = None) -> KeywordStore:
        """Build a store from built-ins, overlaid with `keywords_path` if set."""
        config = config or get_scoring_config()
        if config.keywords_path is None:
            return cls()
        return cls.from_file(config.keywords_path)

    @classmethod
    def from_file(cls, path: Path | str, include_builtin: bool = True) -> KeywordStore:
        """Load role keywords from YAML or JSON.

        Accepted shapes: a mapping of role name to keyword list, or
        ``{"roles": [{"role": ..., "keywords": [...]}, ...]}``. File roles
        override built-in roles with the same name.
        """
        keyword_path = Path(path)
        if not keyword_path.exists():
            raise FileNotFoundError(f"Keyword file not found: {keyword_path}")

        if keyword_path.suffix.lower() == ".json":
            data = _load_json(keyword_path)
        else:
            data = _load_yaml(keyword_path)

        entries = _parse_entries(data, keyword_path)
        roles: dict[str, list[str]] = {}
        if include_builtin:
            roles.update({role: list(kw) for role, kw in BUILTIN_ROLE_KEYWORDS.items()})
        for entry in entries:
            roles[entry.role] = entry.keywords

        logger.info("Loaded %d role(s) from %s", len(entries), keyword_path)
        return cls(roles=roles)

    def list_roles(self) -> list[str]:
        return sorted(self._roles)

    def has_role(self, role: str) -> bool:
        return self._lookup(role) is not None

    def get_keywords(self, role: str) -> list[str]:
        """Return the keyword set for a role, or the default set for unknown roles."""
        entry = self._lookup(role)
        if entry is None:
            logger.debug("No keywords configured for role %r; using defaults", role)
            return list(self._default.keywords)
        return list(entry.keywords)

    def _lookup(self, role: str) -> RoleKeywords | None:
        name = role.strip()
        entry = self._roles.get(name)
        if entry is not None:
            return entry
        lowered = name.lower()
        for key, candidate in self._roles.items():
            if key.lower() == lowered:
                return candidate
        return None


def _load_yaml(path: Path) -> object:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML keyword file: {path}") from e


def _load_json(path: Path) -> object:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON keyword file: {path}") from e


def _parse_entries(data: object, path: Path) -> list[RoleKeywords]:
    if data is None:
        return []
    if not isinstance(data, dict):
        raise ValueError(f"Keyword file must be a mapping/dict: {path}")

    try:
        if "roles" in data and isinstance(data["roles"], list):
            return [RoleKeywords.from_dict(item) for item in data["roles"]]
        return [
            RoleKeywords(role=str(role), keywords=keywords or [])
            for role, keywords in data.items()
        ]
    except ValidationError as e:
        raise ValueError(f"Invalid keyword file {path}: {e}") from e
