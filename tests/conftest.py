"""Pytest configuration and fixtures for tests."""

import logging
import os
from pathlib import Path

import pytest

DEFAULT_DESCRIPTION = "A short skill for X, used in tests"
DEFAULT_BODY = """
# Demo skill

Follow the steps below.
"""


def write_skill(
    skill_dir: Path,
    name: str | None = None,
    description: str | None = DEFAULT_DESCRIPTION,
    body: str = DEFAULT_BODY,
    extra_frontmatter: str = "",
) -> Path:
    """Create a skill directory with a SKILL.md file.

    Args:
        skill_dir: Directory to create.
        name: Frontmatter name. Defaults to the directory name.
        description: Frontmatter description. None omits the field.
        body: Markdown body written after the frontmatter.
        extra_frontmatter: Additional YAML lines.

    Returns:
        Path to the skill directory.
    """
    skill_dir.mkdir(parents=True, exist_ok=True)
    lines = ["---", f"name: {name if name is not None else skill_dir.name}"]
    if description is not None:
        lines.append(f'description: "{description}"')
    if extra_frontmatter:
        lines.append(extra_frontmatter.rstrip("\n"))
    lines.append("---")
    (skill_dir / "SKILL.md").write_text("\n".join(lines) + "\n" + body, encoding="utf-8")
    return skill_dir


@pytest.fixture
def skills_root(tmp_path):
    """Create an empty skills directory for testing.

    Args:
        tmp_path: Pytest's temporary directory fixture.

    Returns:
        Path to the temporary skills directory.
    """
    root = tmp_path / "skills"
    root.mkdir()
    return root


@pytest.fixture
def demo_skill(skills_root):
    """Create skills/demo/demo-skill with one existing referenced file.

    Args:
        skills_root: Temporary skills directory fixture.

    Returns:
        Path to the demo-skill directory.
    """
    skill_dir = write_skill(
        skills_root / "demo" / "demo-skill",
        body=(
            "\n# Demo skill\n\n"
            "Details live in [the guide](references/guide.md).\n"
        ),
    )
    references = skill_dir / "references"
    references.mkdir()
    (references / "guide.md").write_text("# Guide\n", encoding="utf-8")
    return skill_dir


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Clean environment variables before each test.

    Sets TESTING=true to prevent load_dotenv() from running in config.py,
    removes SKILL_VALIDATOR_* variables and resets the config singleton.
    Tests can set their own environment variables as needed.
    """
    monkeypatch.setenv("TESTING", "true")
    for var in list(os.environ):
        if var.startswith("SKILL_VALIDATOR_"):
            monkeypatch.delenv(var)
    monkeypatch.setattr("skill_validator.config._config", None)
    yield


@pytest.fixture(autouse=True)
def restore_logging():
    """Restore root logger handlers replaced by setup_logging() in CLI tests."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
