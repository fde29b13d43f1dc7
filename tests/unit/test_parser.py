"""Unit tests for SKILL.md frontmatter parsing."""

import pytest

from skill_validator.errors import MalformedFrontmatterError, MissingFieldError
from skill_validator.parser import (
    coerce_frontmatter,
    missing_required_fields,
    parse_skill_md,
    split_frontmatter,
)

VALID = """---
name: demo-skill
description: A short skill for X testing
allowed-tools: Read, Write
tags: [java, spring]
version: 1.2.3
---

# Demo

Body text.
"""


@pytest.mark.unit
class TestSplitFrontmatter:
    """Test splitting SKILL.md into frontmatter and body."""

    def test_valid_content(self):
        """Frontmatter mapping, body and body line are returned."""
        data, body, body_line = split_frontmatter(VALID)
        assert data["name"] == "demo-skill"
        assert data["tags"] == ["java", "spring"]
        assert body.startswith("\n# Demo")
        assert body_line == 8

    def test_missing_opening_delimiter(self):
        """Content without a leading '---' is malformed at line 1."""
        with pytest.raises(MalformedFrontmatterError) as exc_info:
            split_frontmatter("# Just a heading\n")
        assert exc_info.value.line == 1

    def test_unterminated_block(self):
        """An opening delimiter with no closing one is malformed."""
        with pytest.raises(MalformedFrontmatterError, match="never closed"):
            split_frontmatter("---\nname: x\ndescription: y\n")

    def test_empty_content(self):
        """Empty content is malformed."""
        with pytest.raises(MalformedFrontmatterError):
            split_frontmatter("")

    def test_yaml_error_reports_file_line(self):
        """YAML syntax errors carry the line number within SKILL.md."""
        content = "---\nname: demo\ndescription: [unclosed\n---\n# Body\n"
        with pytest.raises(MalformedFrontmatterError) as exc_info:
            split_frontmatter(content)
        assert exc_info.value.line >= 3
        assert "invalid YAML" in str(exc_info.value)

    def test_non_mapping_frontmatter(self):
        """A YAML list instead of a mapping is malformed."""
        with pytest.raises(MalformedFrontmatterError, match="mapping"):
            split_frontmatter("---\n- a\n- b\n---\n# Body\n")

    def test_empty_frontmatter_is_empty_mapping(self):
        """An empty block parses to an empty mapping."""
        data, body, _ = split_frontmatter("---\n---\n# Body\n")
        assert data == {}
        assert body == "# Body\n"

    def test_byte_order_mark_tolerated(self):
        """A leading BOM does not hide the opening delimiter."""
        data, _, _ = split_frontmatter("\ufeff" + VALID)
        assert data["name"] == "demo-skill"

    def test_delimiter_with_trailing_whitespace(self):
        """Delimiter lines may carry trailing whitespace."""
        data, _, _ = split_frontmatter("---  \nname: a\n---\t\nbody\n")
        assert data == {"name": "a"}

    def test_crlf_line_endings(self):
        """Windows line endings are accepted."""
        data, body, _ = split_frontmatter("---\r\nname: a\r\n---\r\n# B\r\n")
        assert data == {"name": "a"}
        assert "# B" in body

    def test_horizontal_rule_in_body_kept(self):
        """Only the first closing delimiter ends the block."""
        _, body, _ = split_frontmatter("---\nname: a\n---\n# B\n---\nmore\n")
        assert "---\nmore" in body


@pytest.mark.unit
class TestParseSkillMd:
    """Test full SKILL.md parsing with required fields."""

    def test_valid_skill(self):
        """Valid content yields a typed frontmatter model."""
        parsed = parse_skill_md(VALID)
        assert parsed.frontmatter.name == "demo-skill"
        assert parsed.frontmatter.allowed_tools == "Read, Write"
        assert parsed.frontmatter.version == "1.2.3"
        assert parsed.body_line == 8

    def test_missing_name(self):
        """A missing name raises MissingFieldError naming the field."""
        with pytest.raises(MissingFieldError) as exc_info:
            parse_skill_md("---\ndescription: Something long enough\n---\n# B\n")
        assert exc_info.value.field == "name"

    def test_empty_description(self):
        """A blank description counts as missing."""
        with pytest.raises(MissingFieldError) as exc_info:
            parse_skill_md("---\nname: a\ndescription: '   '\n---\n# B\n")
        assert exc_info.value.field == "description"

    def test_numeric_version_coerced_to_string(self):
        """YAML floats for version are kept as their text."""
        parsed = parse_skill_md("---\nname: a\ndescription: d\nversion: 1.0\n---\n")
        assert parsed.frontmatter.version == "1.0"

    def test_comma_separated_tags_coerced(self):
        """A tags string becomes a list."""
        parsed = parse_skill_md("---\nname: a\ndescription: d\ntags: a, b\n---\n")
        assert parsed.frontmatter.tags == ["a", "b"]

    def test_invalid_optional_fields_do_not_raise(self):
        """Badly shaped optional fields are kept for rules to warn about."""
        parsed = parse_skill_md(
            "---\nname: a\ndescription: d\ntags: {x: 1}\ncategory: [1]\n---\n"
        )
        assert parsed.frontmatter.tags == {"x": 1}
        assert parsed.frontmatter.category == [1]

    def test_unknown_fields_kept(self):
        """Fields outside the known set are preserved."""
        parsed = parse_skill_md("---\nname: a\ndescription: d\nlicense: MIT\n---\n")
        assert parsed.frontmatter.model_extra == {"license": "MIT"}


@pytest.mark.unit
class TestHelpers:
    """Test required-field detection and coercion helpers."""

    def test_missing_required_fields_lists_all(self):
        """Every missing field is listed, in declaration order."""
        assert missing_required_fields({}) == ["name", "description"]

    def test_non_string_name_is_missing(self):
        """A non-string name does not satisfy the requirement."""
        assert missing_required_fields({"name": 42, "description": "d"}) == ["name"]

    def test_coerce_frontmatter_leaves_input_untouched(self):
        """Coercion returns a new mapping."""
        original = {"version": 2, "tags": "x"}
        coerced = coerce_frontmatter(original)
        assert coerced == {"version": "2", "tags": ["x"]}
        assert original == {"version": 2, "tags": "x"}

    def test_boolean_version_not_coerced(self):
        """Booleans are not treated as numbers."""
        assert coerce_frontmatter({"version": True}) == {"version": True}
