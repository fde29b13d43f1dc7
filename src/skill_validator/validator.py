"""Validation run driver: scan, load, evaluate, aggregate."""

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from skill_validator.config import Config, get_config
from skill_validator.engine import RuleEngine
from skill_validator.errors import NoSkillsFoundError
from skill_validator.loader import load_skill_package
from skill_validator.models import (
    RunSummary,
    SkillLocation,
    SkillPackage,
    ValidationReport,
)
from skill_validator.scanner import SkillScanner

logger = logging.getLogger(__name__)


class SkillValidator:
    """Validates every skill package found under a set of roots."""

    def __init__(
        self,
        config: Config | None = None,
        engine: RuleEngine | None = None,
        jobs: int | None = None,
    ):
        """Initialize the validator.

        Args:
            config: Configuration. If None, uses the global config.
            engine: Rule engine. If None, one with the built-in rules is created.
            jobs: Number of skills validated in parallel. If None, uses config.
        """
        self.config = config or get_config()
        self.engine = engine or RuleEngine(config=self.config)
        self.jobs = jobs or self.config.jobs

    def _new_scanner(self) -> SkillScanner:
        return SkillScanner(
            skill_file_name=self.config.skill_file_name,
            exclude_dirs=self.config.get_exclude_dirs(),
        )

    def validate_location(self, location: SkillLocation) -> ValidationReport:
        """Load and evaluate a single skill location."""
        try:
            package = load_skill_package(location)
        except Exception as e:
            logger.exception(f"Unexpected error loading {location.skill_file}")
            package = SkillPackage(
                path=location.directory,
                skill_file=location.skill_file,
                load_error=f"Cannot load {location.skill_file.name}: {e}",
            )
        report = self.engine.evaluate(package)
        logger.info(f"{report.status.value} {report.skill_path}")
        return report

    def run(
        self, roots: Iterable[Path | str], skill: str | None = None
    ) -> RunSummary:
        """Validate all skills under the given roots.

        Args:
            roots: Root directories to scan.
            skill: Only validate skill directories with exactly this name.

        Returns:
            RunSummary with one report per skill, in discovery order.

        Raises:
            NoSkillsFoundError: If no root could be scanned or no skill matched.
        """
        roots = [Path(root) for root in roots]
        if not roots:
            raise NoSkillsFoundError("No root paths given")

        scanner = self._new_scanner()
        locations = (
            location
            for location in scanner.scan(roots)
            if skill is None or location.name == skill
        )

        if self.jobs > 1:
            # map() keeps submission order, so output stays deterministic
            with ThreadPoolExecutor(max_workers=self.jobs) as executor:
                reports = list(executor.map(self.validate_location, locations))
        else:
            reports = [self.validate_location(location) for location in locations]

        scan_errors = tuple(str(error) for error in scanner.errors)

        if not reports:
            if len(scanner.failed_roots) == len(roots):
                raise NoSkillsFoundError(
                    "No root path could be scanned: " + "; ".join(scan_errors)
                )
            if skill is not None:
                raise NoSkillsFoundError(f"Skill not found: {skill}")
            raise NoSkillsFoundError(
                f"No {self.config.skill_file_name} found under: "
                + ", ".join(str(root) for root in roots)
            )

        summary = RunSummary(reports=tuple(reports), scan_errors=scan_errors)
        logger.info(
            f"Validated {len(reports)} skill(s): "
            f"{summary.passed_count} passed, {summary.failed_count} failed"
        )
        return summary


def validate_skill(path: Path | str, config: Config | None = None) -> ValidationReport:
    """Convenience function to validate one skill directory.

    Args:
        path: Skill directory (or its SKILL.md).
        config: Optional configuration.

    Returns:
        ValidationReport for that skill.

    Raises:
        NoSkillsFoundError: If the path holds no skill file.
    """
    summary = SkillValidator(config=config).run([path])
    return summary.reports[0]
