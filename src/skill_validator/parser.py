"""SKILL.md frontmatter parsing."""

import logging
from dataclasses import dataclass
from typing import Any

import yaml

from skill_validator.errors import MalformedFrontmatterError, MissingFieldError
from skill_validator.models import SkillFrontmatter, coerce_tags, coerce_version

logger = logging.getLogger(__name__)

DELIMITER = "---"
REQUIRED_FIELDS = ("name", "description")


@dataclass(frozen=True)
class ParsedSkill:
    """Frontmatter and body of a SKILL.md file."""

    frontmatter: SkillFrontmatter
    body: str
    body_line: int  # 1-based line where the body starts


def split_frontmatter(text: str) -> tuple[dict[str, Any], str, int]:
    """Split SKILL.md content into its frontmatter mapping and body.

    Format: a line containing only ``---``, YAML, another ``---`` line, then the
    Markdown body.

    Args:
        text: Raw SKILL.md content.

    Returns:
        Tuple of (frontmatter mapping, body text, 1-based body start line).

    Raises:
        MalformedFrontmatterError: If the block is missing, unterminated, not
            valid YAML, or not a mapping.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != DELIMITER:
        raise MalformedFrontmatterError(
            "expected '---' on the first line to open the frontmatter block", 1
        )

    closing = next(
        (idx for idx in range(1, len(lines)) if lines[idx].rstrip() == DELIMITER),
        None,
    )
    if closing is None:
        raise MalformedFrontmatterError(
            "frontmatter block opened here is never closed with '---'", 1
        )

    yaml_content = "".join(lines[1:closing])
    try:
        data = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        # Mark lines are 0-based within the block, which starts on file line 2
        line = mark.line + 2 if mark is not None else 2
        problem = getattr(e, "problem", None) or str(e)
        raise MalformedFrontmatterError(f"invalid YAML: {problem}", line) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedFrontmatterError(
            f"frontmatter must be a YAML mapping, got {type(data).__name__}", 2
        )

    # YAML allows `1: x`; metadata keys are always compared as text
    data = {str(key): value for key, value in data.items()}

    body = "".join(lines[closing + 1 :])
    return data, body, closing + 2


def missing_required_fields(frontmatter: dict[str, Any]) -> list[str]:
    """List required fields that are absent, not strings, or blank."""
    missing = []
    for field in REQUIRED_FIELDS:
        value = frontmatter.get(field)
        if not isinstance(value, str) or not value.strip():
            missing.append(field)
    return missing


def coerce_frontmatter(frontmatter: dict[str, Any]) -> dict[str, Any]:
    """Apply optional-field coercion without validating the whole mapping."""
    coerced = dict(frontmatter)
    if "version" in coerced:
        coerced["version"] = coerce_version(coerced["version"])
    if "tags" in coerced:
        coerced["tags"] = coerce_tags(coerced["tags"])
    return coerced


def parse_skill_md(text: str) -> ParsedSkill:
    """Parse SKILL.md content into validated frontmatter and body.

    Args:
        text: Raw SKILL.md content.

    Returns:
        ParsedSkill with frontmatter, body, and body start line.

    Raises:
        MalformedFrontmatterError: If the frontmatter block cannot be parsed.
        MissingFieldError: If name or description is absent or empty.
    """
    data, body, body_line = split_frontmatter(text)

    missing = missing_required_fields(data)
    if missing:
        raise MissingFieldError(missing[0])

    frontmatter = SkillFrontmatter.model_validate(data)
    logger.debug(f"Parsed frontmatter for skill '{frontmatter.name}'")
    return ParsedSkill(frontmatter=frontmatter, body=body, body_line=body_line)
