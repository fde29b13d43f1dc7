"""Command line interface: validate-skills."""

import logging
import sys
from enum import Enum
from pathlib import Path

import typer
from pydantic import ValidationError

from skill_validator.config import get_config
from skill_validator.engine import RuleEngine
from skill_validator.errors import NoSkillsFoundError
from skill_validator.models import Status
from skill_validator.report import render_json, render_text
from skill_validator.validator import SkillValidator

# Logging
logger = logging.getLogger(__name__)

# Typer app
app = typer.Typer(add_completion=False)

EXIT_PASS = 0
EXIT_FAIL = 1
EXIT_USAGE = 2


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


def setup_logging(verbose: bool = False):
    """
    Configure logging to output to stderr.
    This keeps stdout reserved for the report.
    Log level can be controlled via SKILL_VALIDATOR_LOG_LEVEL, or raised to
    INFO with --verbose.
    """
    config = get_config()
    log_level = getattr(logging, config.log_level.upper(), logging.WARNING)
    if verbose:
        log_level = min(log_level, logging.INFO)

    log_formatter = logging.Formatter("%(asctime)s [%(levelname)s] - %(message)s")
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    root_logger.handlers.clear()

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(log_formatter)
    root_logger.addHandler(stream_handler)


def print_rules(engine: RuleEngine) -> None:
    """Print the rule catalogue, one rule per line."""
    width = max(len(rule_id) for rule_id in engine.rule_ids)
    for rule in engine.rules:
        typer.echo(f"{rule.id:<{width}}  {rule.severity.value:<7}  {rule.description}")


@app.command()
def main(
    roots: list[Path] | None = typer.Argument(
        default=None,
        help="Directories to scan for skill packages (directories holding SKILL.md)",
        show_default=False,
    ),
    skill: str | None = typer.Option(
        None,
        "--skill",
        help="Only validate the skill whose directory name equals NAME",
        metavar="NAME",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        help="Report format",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Fail the run when any warning-severity rule fails",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report to FILE instead of standard output",
        metavar="FILE",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show passed rules and INFO logs",
    ),
    jobs: int | None = typer.Option(
        None,
        "--jobs",
        "-j",
        min=1,
        help="Number of skills validated in parallel (default from config)",
    ),
    list_rules: bool = typer.Option(
        False,
        "--list-rules",
        help="List the validation rules and exit",
    ),
):
    """
    Validate skill packages and report per-skill PASS/FAIL.

    Exit codes: 0 all skills pass, 1 at least one fails (or warns, with
    --strict), 2 usage or environment error.
    """
    try:
        config = get_config()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        typer.echo(f"Error: invalid configuration: {e}", err=True)
        raise typer.Exit(code=EXIT_USAGE)

    setup_logging(verbose)
    engine = RuleEngine(config=config)

    if list_rules:
        print_rules(engine)
        raise typer.Exit(code=EXIT_PASS)

    if not roots:
        typer.echo("Error: at least one ROOT path is required.", err=True)
        raise typer.Exit(code=EXIT_USAGE)

    validator = SkillValidator(config=config, engine=engine, jobs=jobs)
    try:
        summary = validator.run(roots, skill=skill)
    except NoSkillsFoundError as e:
        logger.error(str(e))
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=EXIT_USAGE)

    if output_format == OutputFormat.JSON:
        rendered = render_json(summary)
    else:
        rendered = render_text(summary, strict=strict, verbose=verbose)

    if output is not None:
        try:
            output.write_text(rendered, encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write report to {output}: {e}")
            typer.echo(f"Error: cannot write {output}: {e}", err=True)
            raise typer.Exit(code=EXIT_USAGE)
        logger.info(f"Report written to {output}")
    else:
        typer.echo(rendered, nl=False)

    if summary.disposition(strict) == Status.FAIL:
        raise typer.Exit(code=EXIT_FAIL)
    raise typer.Exit(code=EXIT_PASS)


if __name__ == "__main__":
    app()
