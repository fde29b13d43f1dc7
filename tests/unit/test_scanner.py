"""Unit tests for skill directory discovery."""

import os

import pytest
from conftest import write_skill

from skill_validator.errors import NotFoundError, ScanError, ScanPermissionError
from skill_validator.scanner import SkillScanner


@pytest.mark.unit
class TestSkillScanner:
    """Test SkillScanner traversal and error collection."""

    def test_finds_nested_skills_in_sorted_order(self, skills_root):
        """Skill directories at any depth are found in sorted order."""
        write_skill(skills_root / "spring" / "b-skill")
        write_skill(skills_root / "aws" / "z-skill")
        write_skill(skills_root / "aws" / "a-skill")
        (skills_root / "docs").mkdir()

        names = [loc.name for loc in SkillScanner().scan([skills_root])]
        assert names == ["a-skill", "z-skill", "b-skill"]

    def test_location_paths(self, skills_root):
        """Locations carry the directory and its SKILL.md."""
        skill_dir = write_skill(skills_root / "demo-skill")
        (location,) = list(SkillScanner().scan([skills_root]))
        assert location.directory == skill_dir
        assert location.skill_file == skill_dir / "SKILL.md"

    def test_skill_file_name_is_exact(self, skills_root):
        """skill.md in lowercase does not mark a skill."""
        other = skills_root / "lower"
        other.mkdir()
        (other / "skill.md").write_text("---\nname: lower\n---\n")
        assert list(SkillScanner().scan([skills_root])) == []

    def test_root_itself_can_be_a_skill(self, skills_root):
        """A root holding SKILL.md is yielded."""
        skill_dir = write_skill(skills_root / "demo-skill")
        (location,) = list(SkillScanner().scan([skill_dir]))
        assert location.directory == skill_dir

    def test_skill_file_as_root(self, skills_root):
        """A path to SKILL.md yields its parent directory."""
        skill_dir = write_skill(skills_root / "demo-skill")
        (location,) = list(SkillScanner().scan([skill_dir / "SKILL.md"]))
        assert location.directory == skill_dir

    def test_hidden_and_excluded_dirs_skipped(self, skills_root):
        """Hidden and excluded directories are not descended into."""
        write_skill(skills_root / ".git" / "hidden-skill")
        write_skill(skills_root / "node_modules" / "dep-skill")
        write_skill(skills_root / "real-skill")

        scanner = SkillScanner(exclude_dirs={"node_modules"})
        names = [loc.name for loc in scanner.scan([skills_root])]
        assert names == ["real-skill"]

    def test_overlapping_roots_yield_once(self, skills_root):
        """A directory reachable from two roots is reported once."""
        write_skill(skills_root / "demo-skill")
        scanner = SkillScanner()
        locations = list(scanner.scan([skills_root, skills_root / "demo-skill"]))
        assert len(locations) == 1

    def test_missing_root_recorded_and_scan_continues(self, skills_root, tmp_path):
        """A missing root is recorded without stopping other roots."""
        write_skill(skills_root / "demo-skill")
        missing = tmp_path / "nope"

        scanner = SkillScanner()
        locations = list(scanner.scan([missing, skills_root]))

        assert [loc.name for loc in locations] == ["demo-skill"]
        assert len(scanner.errors) == 1
        assert isinstance(scanner.errors[0], NotFoundError)
        assert scanner.failed_roots == [missing]

    def test_plain_file_root_is_an_error(self, tmp_path):
        """A root that is neither a directory nor a skill file fails."""
        stray = tmp_path / "notes.txt"
        stray.write_text("x")
        scanner = SkillScanner()
        assert list(scanner.scan([stray])) == []
        assert isinstance(scanner.errors[0], ScanError)
        assert scanner.failed_roots == [stray]

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permission checks do not apply to root",
    )
    def test_unreadable_directory_recorded(self, skills_root):
        """Unreadable subdirectories are recorded as permission errors."""
        write_skill(skills_root / "ok-skill")
        locked = skills_root / "locked"
        write_skill(locked / "hidden-skill")
        locked.chmod(0)
        try:
            scanner = SkillScanner()
            names = [loc.name for loc in scanner.scan([skills_root])]
        finally:
            locked.chmod(0o755)

        assert names == ["ok-skill"]
        assert any(isinstance(e, ScanPermissionError) for e in scanner.errors)
        assert scanner.failed_roots == []

    def test_rescan_resets_errors(self, tmp_path):
        """Each scan starts with a fresh error list."""
        scanner = SkillScanner()
        list(scanner.scan([tmp_path / "missing"]))
        list(scanner.scan([tmp_path]))
        assert scanner.errors == []

    def test_scan_is_lazy(self, skills_root, tmp_path):
        """Nothing is scanned until the generator is consumed."""
        scanner = SkillScanner()
        generator = scanner.scan([tmp_path / "missing"])
        assert scanner.errors == []
        list(generator)
        assert len(scanner.errors) == 1
