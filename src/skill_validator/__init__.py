"""Static validator for skill packages (SKILL.md frontmatter, body and references)."""

from skill_validator.engine import RuleEngine
from skill_validator.models import (
    Outcome,
    RunSummary,
    Severity,
    SkillPackage,
    Status,
    ValidationReport,
)
from skill_validator.rules import ValidationRule
from skill_validator.validator import SkillValidator, validate_skill

__version__ = "0.1.0"
__all__ = [
    "Outcome",
    "RuleEngine",
    "RunSummary",
    "Severity",
    "SkillPackage",
    "SkillValidator",
    "Status",
    "ValidationReport",
    "ValidationRule",
    "validate_skill",
]
