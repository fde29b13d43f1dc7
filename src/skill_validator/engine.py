"""Rule engine: applies every rule to a skill package."""

import logging
from collections.abc import Iterable

from skill_validator.config import Config, get_config
from skill_validator.models import Outcome, SkillPackage, ValidationReport
from skill_validator.rules import ValidationRule, default_rules

logger = logging.getLogger(__name__)


class RuleEngine:
    """Runs a fixed, ordered set of rules and collects their outcomes.

    Rules never short-circuit each other: a report always carries one outcome
    per rule, in declaration order.
    """

    def __init__(
        self,
        rules: Iterable[ValidationRule] | None = None,
        config: Config | None = None,
    ):
        """Initialize the rule engine.

        Args:
            rules: Rules to apply. If None, uses the built-in rules.
            config: Configuration for the built-in rule thresholds. If None,
                uses the global config.

        Raises:
            ValueError: If two rules share an id.
        """
        if rules is None:
            rules = default_rules(config or get_config())
        self.rules = list(rules)

        seen: set[str] = set()
        for rule in self.rules:
            if rule.id in seen:
                raise ValueError(f"Duplicate rule id: {rule.id}")
            seen.add(rule.id)

    @property
    def rule_ids(self) -> list[str]:
        return [rule.id for rule in self.rules]

    def evaluate(self, package: SkillPackage) -> ValidationReport:
        """Apply every rule to a package.

        Args:
            package: Loaded skill package.

        Returns:
            ValidationReport with one outcome per rule.
        """
        outcomes = [self._apply(rule, package) for rule in self.rules]
        return ValidationReport(
            skill_path=package.path.as_posix(),
            skill_name=package.directory_name,
            outcomes=tuple(outcomes),
        )

    def _apply(self, rule: ValidationRule, package: SkillPackage) -> Outcome:
        try:
            return rule.evaluate(package)
        except Exception as e:
            logger.exception(f"Rule {rule.id} crashed on {package.path}")
            return Outcome(
                rule_id=rule.id,
                severity=rule.severity,
                passed=False,
                message=f"Rule raised {type(e).__name__}: {e}",
            )
