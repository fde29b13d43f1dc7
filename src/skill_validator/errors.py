"""Exception hierarchy for skill package validation."""

from pathlib import Path


class SkillValidatorError(Exception):
    """Base class for all validator errors."""


class ScanError(SkillValidatorError):
    """A root or directory could not be scanned."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"{message}: {path}")


class NotFoundError(ScanError):
    """A scan root does not exist."""

    def __init__(self, path: Path):
        super().__init__(path, "Root path not found")


class ScanPermissionError(ScanError):
    """A directory could not be read during the scan."""

    def __init__(self, path: Path):
        super().__init__(path, "Permission denied")


class SkillParseError(SkillValidatorError, ValueError):
    """SKILL.md content could not be turned into frontmatter and body."""


class MalformedFrontmatterError(SkillParseError):
    """The frontmatter block is missing, unterminated, or not a YAML mapping.

    Attributes:
        line: 1-based line number in SKILL.md where the problem was detected.
    """

    def __init__(self, message: str, line: int):
        self.line = line
        super().__init__(f"Malformed frontmatter (line {line}): {message}")


class MissingFieldError(SkillParseError):
    """A required frontmatter field is absent or empty."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required frontmatter field: {field}")


class NoSkillsFoundError(SkillValidatorError):
    """No skill package could be validated in the given roots."""
