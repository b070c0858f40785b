"""PostGuard CLI — moderate posts and manage moderation rules from the terminal."""

import json
import logging
import os
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from postguard import __version__
from postguard.config import LOG_LEVEL_ENV_VAR

console = Console()

_SEVERITY_STYLE = {
    "low": "green",
    "medium": "yellow",
    "high": "red",
    "critical": "bold red",
}

_config_option = click.option(
    "--config", "-c", "config_file", default=None, help="Configuration file (default: $POSTGUARD_CONFIG or ~/.postguard/config.yaml)"
)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """PostGuard — content moderation for social media posts.

    Checks text for profanity, negative sentiment, toxicity, spam and personal
    information, applies custom rules and platform limits, and reports whether
    the post is safe to publish.
    """
    level = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


# ── Moderate ─────────────────────────────────────────────────────────


@main.command()
@click.argument("text")
@click.option("--platform", "-p", default="twitter", help="Target platform")
@click.option("--content-type", "-t", default="text", help="Content type")
@_config_option
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON response")
def moderate(text: str, platform: str, content_type: str, config_file: str | None, as_json: bool):
    """Moderate TEXT as a post for the given platform.

    Use '-' as TEXT to read the post from stdin.
    """
    from postguard.config import load_config
    from postguard.moderation import ModerationCoordinator, ModerationError, ModerationRequest

    if text == "-":
        text = sys.stdin.read()

    try:
        config = load_config(config_file)
        with ModerationCoordinator(config, parallel=False) as coordinator:
            result = coordinator.moderate(
                ModerationRequest(content=text, content_type=content_type, platform=platform)
            )
    except ModerationError as e:
        console.print(f"[red]{e.code}:[/] {e.message}")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.flags:
        table = Table(title=f"Flags ({len(result.flags)})")
        table.add_column("Type", style="cyan")
        table.add_column("Severity")
        table.add_column("Confidence", justify="right")
        table.add_column("Description")
        table.add_column("Flagged text", style="dim")
        for flag in result.flags:
            style = _SEVERITY_STYLE[flag.severity.value]
            table.add_row(
                flag.type,
                f"[{style}]{flag.severity.value}[/]",
                f"{flag.confidence:.2f}",
                flag.description,
                (flag.flagged_text or "")[:40],
            )
        console.print(table)

    verdict = "[green]SAFE TO POST[/]" if result.safe_to_post else "[red]DO NOT POST[/]"
    style = _SEVERITY_STYLE[result.overall_severity.value]
    summary = (
        f"{verdict}\n"
        f"Severity: [{style}]{result.overall_severity.value}[/]  "
        f"Confidence: {result.confidence_score:.2f}  "
        f"Time: {result.processing_time_ms}ms\n\n"
        + "\n".join(f"- {r}" for r in result.recommendations)
    )
    console.print(Panel(summary, title="Moderation Result"))


# ── Config ───────────────────────────────────────────────────────────


@main.group()
def config():
    """Inspect and create configuration files."""


@config.command(name="show")
@_config_option
def show_config(config_file: str | None):
    """Print the configuration that would be used."""
    import yaml

    from postguard.config import config_path, config_to_dict, load_config
    from postguard.moderation import ConfigError

    try:
        cfg = load_config(config_file)
    except ConfigError as e:
        console.print(f"[red]{e.message}[/]")
        sys.exit(1)

    console.print(f"[dim]# {config_path(config_file)}[/]")
    console.print(yaml.safe_dump(config_to_dict(cfg), sort_keys=False))


@config.command(name="init")
@_config_option
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init_config(config_file: str | None, force: bool):
    """Write a default configuration file."""
    from postguard.config import config_path, default_config, save_config

    path = config_path(config_file)
    if path.exists() and not force:
        console.print(f"[yellow]{path} already exists (use --force to overwrite).[/]")
        sys.exit(1)
    save_config(default_config(), path)
    console.print(f"[green]Configuration written to:[/] {path}")


# ── Rules ────────────────────────────────────────────────────────────


@main.group()
def rules():
    """Manage custom moderation rules stored in the configuration file."""


def _load_coordinator(config_file: str | None):
    from postguard.config import load_config
    from postguard.moderation import ConfigError, ModerationCoordinator

    try:
        return ModerationCoordinator(load_config(config_file), parallel=False)
    except ConfigError as e:
        console.print(f"[red]{e.message}[/]")
        sys.exit(1)


def _save(coordinator, config_file: str | None) -> None:
    from postguard.config import save_config

    save_config(coordinator.get_config(), config_file)


@rules.command(name="list")
@_config_option
@click.option("--platform", "-p", default=None, help="Only rules scoped to this platform")
@click.option("--enabled-only", is_flag=True, help="Only enabled rules")
def list_rules(config_file: str | None, platform: str | None, enabled_only: bool):
    """List custom rules."""
    from postguard.moderation import Platform

    coordinator = _load_coordinator(config_file)
    try:
        scope = Platform(platform) if platform else None
    except ValueError:
        console.print(f"[red]Unknown platform:[/] {platform}")
        sys.exit(1)

    found = coordinator.list_rules(platform=scope, enabled_only=enabled_only)
    if not found:
        console.print("[yellow]No rules configured.[/]")
        return

    table = Table(title=f"Rules ({len(found)})")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Severity")
    table.add_column("Enabled", justify="center")
    table.add_column("Platforms")
    table.add_column("Patterns", style="dim")
    for rule in found:
        enabled = "[green]Y[/]" if rule.enabled else "[red]N[/]"
        table.add_row(
            rule.id,
            rule.name,
            rule.severity.value,
            enabled,
            ", ".join(sorted(p.value for p in rule.platforms)),
            ", ".join(rule.patterns)[:50],
        )
    console.print(table)


@rules.command(name="add")
@click.argument("rule_id")
@click.option("--name", "-n", default=None, help="Human-readable rule name")
@click.option("--description", "-d", default="", help="Shown as the flag description")
@click.option("--pattern", "patterns", multiple=True, required=True, help="Literal text or /regex/ (repeatable)")
@click.option("--severity", "-s", default="medium", type=click.Choice(["low", "medium", "high", "critical"]))
@click.option("--platform", "platforms", multiple=True, required=True, help="Platform the rule applies to (repeatable)")
@click.option("--disabled", is_flag=True, help="Add the rule switched off")
@_config_option
def add_rule(
    rule_id: str,
    name: str | None,
    description: str,
    patterns: tuple,
    severity: str,
    platforms: tuple,
    disabled: bool,
    config_file: str | None,
):
    """Add a rule with id RULE_ID."""
    from postguard.config import rule_from_dict
    from postguard.moderation import ConfigError

    coordinator = _load_coordinator(config_file)
    try:
        rule = rule_from_dict({
            "id": rule_id,
            "name": name or rule_id,
            "description": description,
            "patterns": list(patterns),
            "severity": severity,
            "enabled": not disabled,
            "platforms": list(platforms),
        })
        errors = coordinator.add_rule(rule)
    except ConfigError as e:
        console.print(f"[red]{e.message}[/]")
        sys.exit(1)

    for error in errors:
        console.print(f"  [yellow]![/] {error}")
    _save(coordinator, config_file)
    console.print(f"[green]Rule added:[/] {rule_id}")


def _toggle(rule_id: str, config_file: str | None, action: str) -> None:
    coordinator = _load_coordinator(config_file)
    ok = getattr(coordinator, f"{action}_rule")(rule_id)
    if not ok:
        console.print(f"[red]Rule not found:[/] {rule_id}")
        sys.exit(1)
    _save(coordinator, config_file)
    console.print(f"[green]Rule {action}d:[/] {rule_id}")


@rules.command(name="remove")
@click.argument("rule_id")
@_config_option
def remove_rule(rule_id: str, config_file: str | None):
    """Remove the rule RULE_ID."""
    _toggle(rule_id, config_file, "remove")


@rules.command(name="enable")
@click.argument("rule_id")
@_config_option
def enable_rule(rule_id: str, config_file: str | None):
    """Enable the rule RULE_ID."""
    _toggle(rule_id, config_file, "enable")


@rules.command(name="disable")
@click.argument("rule_id")
@_config_option
def disable_rule(rule_id: str, config_file: str | None):
    """Disable the rule RULE_ID."""
    _toggle(rule_id, config_file, "disable")


# ── Serve ────────────────────────────────────────────────────────────


@main.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8005, type=int, help="Bind port")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str, port: int, reload: bool):
    """Run the moderation REST API."""
    import uvicorn

    console.print(f"\n[bold blue]PostGuard[/] — API on http://{host}:{port} (docs at /docs)\n")
    uvicorn.run("web.backend.app.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    main()
