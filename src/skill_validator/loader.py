"""Loading skill packages from disk."""

import logging
from pathlib import Path

from skill_validator.errors import MalformedFrontmatterError, MissingFieldError
from skill_validator.models import SkillLocation, SkillPackage
from skill_validator.parser import (
    coerce_frontmatter,
    missing_required_fields,
    parse_skill_md,
    split_frontmatter,
)
from skill_validator.references import extract_references

logger = logging.getLogger(__name__)


def resolve_reference(directory: Path, reference: str) -> bool:
    """Check that a relative reference points at a file inside the package.

    Args:
        directory: Skill directory.
        reference: Path relative to the skill directory.

    Returns:
        True if the target is an existing file that does not escape the skill
        directory.
    """
    try:
        root = directory.resolve()
        target = (root / reference).resolve()
    except (OSError, RuntimeError, ValueError):
        # Symlink loops, unresolvable paths, embedded NUL bytes
        return False
    if target != root and root not in target.parents:
        return False
    return target.is_file()


def load_skill_package(location: SkillLocation) -> SkillPackage:
    """Read and parse one skill directory.

    Read and parse failures are recorded on the returned package rather than
    raised, so a broken skill still gets a full report.

    Args:
        location: Directory and SKILL.md path found by the scanner.

    Returns:
        Immutable SkillPackage.
    """
    try:
        content = location.skill_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to read {location.skill_file}: {e}")
        return SkillPackage(
            path=location.directory,
            skill_file=location.skill_file,
            load_error=f"Cannot read {location.skill_file.name}: {e}",
        )

    try:
        parsed = parse_skill_md(content)
    except MalformedFrontmatterError as e:
        logger.info(f"Malformed frontmatter in {location.skill_file}: {e}")
        return SkillPackage(
            path=location.directory,
            skill_file=location.skill_file,
            load_error=str(e),
        )
    except MissingFieldError as e:
        logger.info(f"{location.skill_file}: {e}")
        # Keep the raw mapping so the remaining rules still have data to check
        data, body, body_line = split_frontmatter(content)
        frontmatter = coerce_frontmatter(data)
        missing = missing_required_fields(data)
    else:
        frontmatter = parsed.frontmatter.model_dump(by_alias=True, exclude_unset=True)
        body = parsed.body
        body_line = parsed.body_line
        missing = []

    references = extract_references(body)
    unresolved = [
        ref for ref in references if not resolve_reference(location.directory, ref)
    ]

    return SkillPackage(
        path=location.directory,
        skill_file=location.skill_file,
        frontmatter=frontmatter,
        body=body,
        body_line=body_line,
        referenced_files=tuple(references),
        unresolved_files=tuple(unresolved),
        missing_fields=tuple(missing),
    )
