"""Data models for skill packages and validation results."""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class Severity(str, Enum):
    """Severity of a validation rule."""

    ERROR = "error"
    WARNING = "warning"


class Status(str, Enum):
    """Overall status of a report or run."""

    PASS = "PASS"
    FAIL = "FAIL"


class SkillFrontmatter(BaseModel):
    """YAML frontmatter of a SKILL.md file.

    Only name and description are enforced here. Optional fields keep whatever
    shape was declared (after light coercion) so that rules can warn about them
    instead of rejecting the skill.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    name: str = Field(..., min_length=1, description="Skill name")
    description: str = Field(..., min_length=1, description="Skill description")
    allowed_tools: Any = Field(
        None, alias="allowed-tools", description="Tools the skill may use"
    )
    category: Any = Field(None, description="Skill category")
    tags: Any = Field(None, description="List of tags")
    version: Any = Field(None, description="Semantic version (MAJOR.MINOR.PATCH)")

    @field_validator("version", mode="before")
    @classmethod
    def _coerce_version(cls, value: Any) -> Any:
        return coerce_version(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> Any:
        return coerce_tags(value)


def coerce_version(value: Any) -> Any:
    """YAML reads `version: 1.0` as a float; keep it as the declared text."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def coerce_tags(value: Any) -> Any:
    """Accept `tags: a, b` as shorthand for a list of tags."""
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    return value


class SkillLocation(BaseModel):
    """A directory discovered by the scanner that holds a skill file."""

    model_config = ConfigDict(frozen=True)

    directory: Path = Field(..., description="Skill directory as discovered")
    skill_file: Path = Field(..., description="Path to the skill's SKILL.md")

    @property
    def name(self) -> str:
        """Directory name, which the frontmatter name must match."""
        return self.directory.name


class SkillPackage(BaseModel):
    """One skill directory loaded from disk.

    Loading never raises: read and parse problems are kept in ``load_error``
    and ``missing_fields`` so that every rule can still report on the package.
    """

    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Skill directory")
    skill_file: Path = Field(..., description="Path to SKILL.md")
    frontmatter: dict[str, Any] = Field(
        default_factory=dict, description="Declared metadata fields"
    )
    body: str = Field(default="", description="Markdown content after frontmatter")
    body_line: int | None = Field(
        default=None, description="1-based line in SKILL.md where the body starts"
    )
    referenced_files: tuple[str, ...] = Field(
        default=(), description="Relative paths referenced from the body"
    )
    unresolved_files: tuple[str, ...] = Field(
        default=(),
        description="Referenced paths with no matching file inside the package",
    )
    missing_fields: tuple[str, ...] = Field(
        default=(), description="Required frontmatter fields absent or empty"
    )
    load_error: str | None = Field(
        default=None, description="Why SKILL.md could not be read or parsed"
    )

    @property
    def directory_name(self) -> str:
        return self.path.name

    @property
    def name(self) -> Any:
        return self.frontmatter.get("name")

    @property
    def description(self) -> Any:
        return self.frontmatter.get("description")


class Outcome(BaseModel):
    """Result of applying one rule to one skill package."""

    model_config = ConfigDict(frozen=True)

    rule_id: str
    severity: Severity
    passed: bool
    message: str
    details: tuple[str, ...] = ()


class ValidationReport(BaseModel):
    """All rule outcomes for one skill package, in rule declaration order."""

    model_config = ConfigDict(frozen=True)

    skill_path: str = Field(..., description="Skill directory (POSIX form)")
    skill_name: str = Field(..., description="Skill directory name")
    outcomes: tuple[Outcome, ...] = ()

    @computed_field
    @property
    def status(self) -> Status:
        """FAIL when any error-severity outcome failed. Warnings never fail."""
        return Status.FAIL if self.errors else Status.PASS

    @property
    def errors(self) -> list[Outcome]:
        return [
            o for o in self.outcomes if not o.passed and o.severity == Severity.ERROR
        ]

    @property
    def warnings(self) -> list[Outcome]:
        return [
            o for o in self.outcomes if not o.passed and o.severity == Severity.WARNING
        ]

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def outcome(self, rule_id: str) -> Outcome | None:
        """Get the outcome recorded for a rule, if that rule ran."""
        for outcome in self.outcomes:
            if outcome.rule_id == rule_id:
                return outcome
        return None


class RunSummary(BaseModel):
    """Aggregate of all reports produced by one validation run."""

    model_config = ConfigDict(frozen=True)

    reports: tuple[ValidationReport, ...] = ()
    scan_errors: tuple[str, ...] = ()

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.reports if r.status == Status.PASS)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.reports if r.status == Status.FAIL)

    @property
    def warned_count(self) -> int:
        return sum(1 for r in self.reports if r.has_warnings)

    @property
    def failing_paths(self) -> list[str]:
        return [r.skill_path for r in self.reports if r.status == Status.FAIL]

    def disposition(self, strict: bool = False) -> Status:
        """Overall run status.

        Args:
            strict: Treat any failed warning-severity outcome as a run failure.

        Returns:
            Status.FAIL if any report failed (or, when strict, warned).
        """
        if self.failed_count:
            return Status.FAIL
        if strict and self.warned_count:
            return Status.FAIL
        return Status.PASS
