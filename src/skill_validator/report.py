"""Rendering of run summaries as text or JSON.

Rendered reports carry no timestamps, so validating an unchanged tree twice
produces identical output.
"""

import json

from skill_validator.models import Outcome, RunSummary, Severity, ValidationReport

MARKERS = {
    (False, Severity.ERROR): "[ERROR]",
    (False, Severity.WARNING): "[WARN] ",
    (True, Severity.ERROR): "[ok]   ",
    (True, Severity.WARNING): "[ok]   ",
}


def _format_outcome(outcome: Outcome) -> str:
    marker = MARKERS[(outcome.passed, outcome.severity)]
    return f"  {marker} {outcome.rule_id}: {outcome.message}"


def render_report(report: ValidationReport, verbose: bool = False) -> list[str]:
    """Render one skill's section.

    Args:
        report: Report to render.
        verbose: Include passed outcomes as well as failures and warnings.

    Returns:
        Lines of the section, status line first.
    """
    lines = [f"{report.status.value}  {report.skill_path}"]
    for outcome in report.outcomes:
        if verbose or not outcome.passed:
            lines.append(_format_outcome(outcome))
    return lines


def render_text(summary: RunSummary, strict: bool = False, verbose: bool = False) -> str:
    """Render a human-readable report for a whole run."""
    lines: list[str] = []
    for report in summary.reports:
        lines.extend(render_report(report, verbose=verbose))

    if summary.scan_errors:
        lines.append("")
        lines.append("Scan errors:")
        lines.extend(f"  {error}" for error in summary.scan_errors)

    lines.append("")
    lines.append(
        f"{len(summary.reports)} skill(s) validated: "
        f"{summary.passed_count} passed, {summary.failed_count} failed, "
        f"{summary.warned_count} with warnings"
    )
    result = f"Result: {summary.disposition(strict).value}"
    if strict:
        result += " (strict)"
    lines.append(result)
    return "\n".join(lines) + "\n"


def render_json(summary: RunSummary) -> str:
    """Render a JSON array with one record per skill."""
    records = [report.model_dump(mode="json") for report in summary.reports]
    return json.dumps(records, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
