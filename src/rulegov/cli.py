"""CLI interface for rulegov using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from rulegov import __description__, __version__
from rulegov.config import LogLevel, OutputFormat, RulegovConfig, load_config
from rulegov.engine import create_engine
from rulegov.errors import GovernanceError
from rulegov.models.ruleset import RuleSeverity, Ruleset, RulesetContent

app = typer.Typer(
    name="rulegov",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

EXIT_VIOLATIONS = 1
EXIT_GOVERNANCE_ERROR = 2

LOG_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}

SEVERITY_COLORS = {
    RuleSeverity.ERROR: "red",
    RuleSeverity.WARN: "yellow",
    RuleSeverity.INFO: "blue",
}

# Set by the --log-level global option, overrides the configured level
_log_level_override: str | None = None


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"rulegov version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Log level: error, warn, info, debug (default: from config)")
    ] = None,
) -> None:
    """rulegov - governance ruleset validation."""
    global _log_level_override
    if log_level is not None and log_level not in LOG_LEVELS:
        console.print(f"[red]Error:[/red] Invalid log level '{log_level}'. Must be one of: {', '.join(LOG_LEVELS)}")
        raise typer.Exit(1)
    _log_level_override = log_level


def _setup_logging(level: str) -> None:
    """Route rulegov log records to stderr through rich."""
    logger = logging.getLogger("rulegov")
    logger.setLevel(LOG_LEVELS.get(level, logging.WARNING))
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.propagate = False


def _load(config_path: Path | None) -> RulegovConfig:
    try:
        rulegov_config = load_config(config_path)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    _setup_logging(_log_level_override or rulegov_config.logging.level)
    return rulegov_config


def _resolve_format(format: str | None, rulegov_config: RulegovConfig, allowed: list[str]) -> str:
    selected = format or rulegov_config.output.format
    if selected not in allowed:
        console.print(f"[red]Error:[/red] Invalid format '{selected}'. Must be one of: {', '.join(allowed)}")
        raise typer.Exit(1)
    return selected


def _read_ruleset(path: Path, name: str | None = None, ruleset_id: str | None = None) -> Ruleset:
    return Ruleset(
        id=ruleset_id or path.stem,
        name=name or path.stem,
        content=RulesetContent(content=path.read_bytes()),
    )


@app.command()
def check(
    ruleset_file: Annotated[
        Path,
        typer.Argument(help="Path to YAML ruleset file", exists=True, dir_okay=False)
    ],
    name: Annotated[
        Optional[str],
        typer.Option("--name", "-n", help="Ruleset name used in messages (default: file stem)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .rulegov.json)")
    ] = None,
) -> None:
    """Check that a ruleset is well-formed."""
    rulegov_config = _load(config)
    ruleset = _read_ruleset(ruleset_file, name=name)

    try:
        create_engine(rulegov_config).validate_ruleset_content(ruleset)
    except GovernanceError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_GOVERNANCE_ERROR)
    except Exception as e:
        console.print(f"[red]Error:[/red] Rule evaluator failed: {escape(str(e))}")
        raise typer.Exit(1)

    console.print(f"[green]OK[/green] Ruleset '{escape(ruleset.name)}' is valid")


@app.command()
def rules(
    ruleset_file: Annotated[
        Path,
        typer.Argument(help="Path to YAML ruleset file", exists=True, dir_okay=False)
    ],
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format: table, json (default: from config)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .rulegov.json)")
    ] = None,
) -> None:
    """List the rules declared in a ruleset."""
    rulegov_config = _load(config)
    output_format = _resolve_format(format, rulegov_config, [OutputFormat.TABLE.value, OutputFormat.JSON.value])
    ruleset = _read_ruleset(ruleset_file)

    try:
        extracted = create_engine(rulegov_config).extract_rules_from_ruleset(ruleset)
    except GovernanceError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_GOVERNANCE_ERROR)

    if output_format == OutputFormat.JSON.value:
        typer.echo(jsonlib.dumps([rule.model_dump(mode="json") for rule in extracted], indent=2))
        return

    if not extracted:
        console.print("[dim]No rules found[/dim]")
        return

    table = Table(title=f"Rules in {escape(ruleset.name)}")
    table.add_column("Name", style="cyan")
    table.add_column("Severity", style="white")
    table.add_column("Description", style="dim")

    for rule in extracted:
        color = SEVERITY_COLORS[rule.severity]
        table.add_row(escape(rule.name), f"[{color}]{rule.severity.value.upper()}[/{color}]", escape(rule.description or ""))

    console.print(table)
    console.print(f"\n[dim]Total: {len(extracted)} rules[/dim]")


@app.command()
def validate(
    target_file: Annotated[
        Path,
        typer.Argument(help="Path to target document (YAML or JSON)", exists=True, dir_okay=False)
    ],
    ruleset_file: Annotated[
        Path,
        typer.Argument(help="Path to YAML ruleset file", exists=True, dir_okay=False)
    ],
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format: table, json, markdown (default: from config)")
    ] = None,
    ruleset_id: Annotated[
        Optional[str],
        typer.Option("--id", help="Ruleset identifier attached to violations (default: file stem)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .rulegov.json)")
    ] = None,
) -> None:
    """Validate a target document against a ruleset."""
    rulegov_config = _load(config)
    output_format = _resolve_format(format, rulegov_config, [f.value for f in OutputFormat])
    ruleset = _read_ruleset(ruleset_file, ruleset_id=ruleset_id)

    try:
        violations = create_engine(rulegov_config).validate(target_file.read_bytes(), ruleset)
    except GovernanceError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_GOVERNANCE_ERROR)

    has_errors = any(v.severity == RuleSeverity.ERROR for v in violations)

    if output_format == OutputFormat.JSON.value:
        typer.echo(jsonlib.dumps([v.model_dump(mode="json", by_alias=True) for v in violations], indent=2))
    elif output_format == OutputFormat.MARKDOWN.value:
        console.print("# Validation Report")
        console.print(f"**Target:** {escape(target_file.name)}")
        console.print(f"**Ruleset:** {escape(ruleset.name)}")
        console.print(f"**Violations:** {len(violations)}")
        console.print()
        for violation in violations:
            console.print(
                f"- **{violation.severity.value.upper()}** {violation.rule_name}: "
                f"{violation.rule_message} (`{violation.violated_path}`)",
                markup=False,
            )
    else:  # table format
        if not violations:
            console.print(f"[green]OK[/green] No violations of ruleset '{escape(ruleset.name)}'")
        else:
            table = Table(title=f"Violations of {escape(ruleset.name)}")
            table.add_column("Rule", style="cyan")
            table.add_column("Severity", style="white")
            table.add_column("Message", style="white")
            table.add_column("Path", style="dim")

            for violation in violations:
                color = SEVERITY_COLORS[violation.severity]
                table.add_row(
                    escape(violation.rule_name),
                    f"[{color}]{violation.severity.value.upper()}[/{color}]",
                    escape(violation.rule_message),
                    escape(violation.violated_path),
                )

            console.print(table)
            console.print(f"\n[dim]Total: {len(violations)} violations[/dim]")

    if has_errors:
        raise typer.Exit(EXIT_VIOLATIONS)


if __name__ == "__main__":
    app()
