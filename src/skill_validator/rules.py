"""Built-in validation rules.

Each rule is a pure function of a SkillPackage. Rules never raise for missing
or malformed data; they report a failed outcome instead.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import NamedTuple

from skill_validator.config import Config
from skill_validator.markdown import has_heading
from skill_validator.models import Outcome, Severity, SkillPackage
from skill_validator.parser import REQUIRED_FIELDS

SEMVER_PATTERN = re.compile(
    r"(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?"
)
NAME_PATTERN = re.compile(r"[a-z0-9]+(-[a-z0-9]+)*")
MAX_NAME_LENGTH = 64

UNPARSED = "frontmatter could not be parsed"


class RuleResult(NamedTuple):
    """What a rule check returns before it is stamped with id and severity."""

    passed: bool
    message: str
    details: tuple[str, ...] = ()


def ok(message: str) -> RuleResult:
    return RuleResult(True, message)


def fail(message: str, details: tuple[str, ...] | list[str] = ()) -> RuleResult:
    return RuleResult(False, message, tuple(details))


@dataclass(frozen=True)
class ValidationRule:
    """A named, independent check over a skill package."""

    id: str
    severity: Severity
    description: str
    check: Callable[[SkillPackage], RuleResult]

    def evaluate(self, package: SkillPackage) -> Outcome:
        """Run the check and wrap its result in an Outcome."""
        result = self.check(package)
        return Outcome(
            rule_id=self.id,
            severity=self.severity,
            passed=result.passed,
            message=result.message,
            details=result.details,
        )


def check_frontmatter_wellformed(package: SkillPackage) -> RuleResult:
    if package.load_error:
        return fail(package.load_error)
    return ok("Frontmatter parsed")


def check_name_match(package: SkillPackage) -> RuleResult:
    name = package.name
    directory = package.directory_name
    if not isinstance(name, str) or not name.strip():
        return fail(f"Frontmatter declares no name; directory name is '{directory}'")
    if name != directory:
        return fail(
            f"Frontmatter name '{name}' does not match directory name '{directory}'",
            (name, directory),
        )
    return ok(f"Name '{name}' matches directory name")


def check_required_fields(package: SkillPackage) -> RuleResult:
    if package.load_error:
        return fail(f"Required fields unavailable: {UNPARSED}", REQUIRED_FIELDS)
    if package.missing_fields:
        missing = ", ".join(package.missing_fields)
        return fail(
            f"Missing or empty required field(s): {missing}", package.missing_fields
        )
    return ok("Required fields present: " + ", ".join(REQUIRED_FIELDS))


def check_description_nontrivial(package: SkillPackage, min_length: int) -> RuleResult:
    description = package.description
    if not isinstance(description, str):
        return fail("No description to check")
    length = len(description.strip())
    if length < min_length:
        return fail(
            f"Description is {length} characters long; at least {min_length} expected"
        )
    return ok(f"Description is {length} characters long")


def check_referenced_files(package: SkillPackage) -> RuleResult:
    if package.load_error:
        return fail(f"References not checked: {UNPARSED}")
    if package.unresolved_files:
        return fail(
            "Referenced file(s) not found: " + ", ".join(package.unresolved_files),
            package.unresolved_files,
        )
    count = len(package.referenced_files)
    if not count:
        return ok("No file references found")
    return ok(f"All {count} referenced file(s) exist")


def check_version_format(package: SkillPackage) -> RuleResult:
    if package.load_error:
        return fail(f"Version not checked: {UNPARSED}")
    version = package.frontmatter.get("version")
    if version is None:
        return ok("No version declared")
    if not isinstance(version, str) or not SEMVER_PATTERN.fullmatch(version):
        return fail(
            f"Version '{version}' is not a semantic version (MAJOR.MINOR.PATCH)",
            (str(version),),
        )
    return ok(f"Version '{version}' is a semantic version")


def check_body_nonempty(package: SkillPackage) -> RuleResult:
    if package.load_error:
        return fail(f"Body unavailable: {UNPARSED}")
    if not package.body.strip():
        return fail("Body is empty")
    if not has_heading(package.body):
        if package.body_line:
            return fail(
                f"Body starting at line {package.body_line} has no Markdown heading"
            )
        return fail("Body has no Markdown heading")
    return ok("Body has content and at least one heading")


def check_name_format(package: SkillPackage) -> RuleResult:
    name = package.name
    if not isinstance(name, str) or not name:
        return fail("No name to check")
    if len(name) > MAX_NAME_LENGTH:
        return fail(
            f"Name is {len(name)} characters long; at most {MAX_NAME_LENGTH} allowed"
        )
    if not NAME_PATTERN.fullmatch(name):
        return fail(f"Name '{name}' is not kebab-case (lowercase letters, digits, hyphens)")
    return ok(f"Name '{name}' is kebab-case")


def check_tags_format(package: SkillPackage) -> RuleResult:
    if package.load_error:
        return fail(f"Tags not checked: {UNPARSED}")
    tags = package.frontmatter.get("tags")
    if tags is None:
        return ok("No tags declared")
    if not isinstance(tags, list):
        return fail(f"Tags must be a list of strings, got {type(tags).__name__}")
    invalid = [repr(tag) for tag in tags if not isinstance(tag, str) or not tag.strip()]
    if invalid:
        return fail("Tags must be non-empty strings: " + ", ".join(invalid), invalid)
    return ok(f"{len(tags)} tag(s) declared")


def _is_string_list(value: object) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def check_optional_field_types(package: SkillPackage) -> RuleResult:
    if package.load_error:
        return fail(f"Optional fields not checked: {UNPARSED}")
    frontmatter = package.frontmatter
    invalid = []

    category = frontmatter.get("category")
    if category is not None and not isinstance(category, str):
        invalid.append("category")

    allowed_tools = frontmatter.get("allowed-tools")
    if allowed_tools is not None and not (
        isinstance(allowed_tools, str) or _is_string_list(allowed_tools)
    ):
        invalid.append("allowed-tools")

    if invalid:
        return fail(
            "Unexpected type for field(s): "
            + ", ".join(invalid)
            + " (category: string; allowed-tools: string or list of strings)",
            invalid,
        )
    return ok("Optional fields have the expected types")


def check_body_length(package: SkillPackage, max_lines: int) -> RuleResult:
    if package.load_error:
        return fail(f"Body length not checked: {UNPARSED}")
    lines = len(package.body.splitlines())
    if lines > max_lines:
        return fail(
            f"Body is {lines} lines long; keep it under {max_lines} "
            "and move details to referenced files"
        )
    return ok(f"Body is {lines} lines long")


def default_rules(config: Config) -> list[ValidationRule]:
    """Build the built-in rules in report order.

    Args:
        config: Supplies the description and body-length thresholds.

    Returns:
        List of ValidationRule, in the order outcomes are reported.
    """
    return [
        ValidationRule(
            "FRONTMATTER_WELLFORMED",
            Severity.ERROR,
            "SKILL.md is readable and starts with a well-formed YAML frontmatter block",
            check_frontmatter_wellformed,
        ),
        ValidationRule(
            "FRONTMATTER_NAME_MATCH",
            Severity.ERROR,
            "Frontmatter name equals the skill directory name",
            check_name_match,
        ),
        ValidationRule(
            "REQUIRED_FIELDS_PRESENT",
            Severity.ERROR,
            "name and description are present and non-empty",
            check_required_fields,
        ),
        ValidationRule(
            "DESCRIPTION_NONTRIVIAL",
            Severity.WARNING,
            f"description is at least {config.min_description_length} characters long",
            partial(
                check_description_nontrivial, min_length=config.min_description_length
            ),
        ),
        ValidationRule(
            "REFERENCED_FILES_EXIST",
            Severity.ERROR,
            "Every relative file referenced from the body exists in the skill directory",
            check_referenced_files,
        ),
        ValidationRule(
            "VERSION_FORMAT",
            Severity.WARNING,
            "version, if declared, is a semantic version",
            check_version_format,
        ),
        ValidationRule(
            "BODY_NONEMPTY",
            Severity.ERROR,
            "Body has content and at least one Markdown heading",
            check_body_nonempty,
        ),
        ValidationRule(
            "NAME_FORMAT",
            Severity.WARNING,
            f"name is kebab-case and at most {MAX_NAME_LENGTH} characters",
            check_name_format,
        ),
        ValidationRule(
            "TAGS_FORMAT",
            Severity.WARNING,
            "tags, if declared, is a list of non-empty strings",
            check_tags_format,
        ),
        ValidationRule(
            "OPTIONAL_FIELD_TYPES",
            Severity.WARNING,
            "category is a string and allowed-tools a string or list of strings",
            check_optional_field_types,
        ),
        ValidationRule(
            "BODY_LENGTH",
            Severity.WARNING,
            f"Body is at most {config.max_body_lines} lines long",
            partial(check_body_length, max_lines=config.max_body_lines),
        ),
    ]
