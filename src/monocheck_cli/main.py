import logging
from pathlib import Path
from typing import Optional

import typer
from monocheck_linter.aliases import normalize_prefix
from monocheck_linter.confirm import AlwaysAccept
from monocheck_linter.engine import LinterEngine
from monocheck_linter.models import RuleAction
from monocheck_linter.reporter import Reporter

from .community import REQUEST_TIMEOUT, fetch_community_rules
from .config import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    MonocheckConfig,
    OverrideRuleConfig,
    load_config,
    save_config,
)
from .converters import build_scan_context, directory_report_to_model
from .models import DirectoryReportModel
from .prompts import ConsolePrompt
from .workspace import extract_aliases, scan_workspace

app = typer.Typer(help="monocheck - Check and fix TypeScript import paths across a monorepo")

logger = logging.getLogger(__name__)

CONFIG_ERROR_EXIT_CODE = 2


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(config_file: Path) -> MonocheckConfig:
    try:
        return load_config(config_file)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE)


def write_report(report: DirectoryReportModel, report_path: Path) -> None:
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(report.model_dump_json(by_alias=True, indent=2) + "\n", encoding="utf-8")


@app.command()
def check(
    config_file: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Path to config file"),
    fix: bool = typer.Option(False, help="Automatically fix issues"),
    interactive: bool = typer.Option(False, help="Confirm each fix before it is applied"),
    dry_run: bool = typer.Option(False, help="Report fixes without writing files"),
    community: bool = typer.Option(True, help="Use community rules"),
    community_url: Optional[str] = typer.Option(None, help="Override the community rules URL"),
    timeout: float = typer.Option(REQUEST_TIMEOUT, help="Community rules fetch timeout in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """Check import paths in every configured directory"""
    _configure_logging(verbose)
    config = _load(config_file)

    if not config.directories:
        typer.echo("Error: No directories configured. Run `monocheck init` first.")
        raise typer.Exit(code=1)

    community_rules = []
    if community:
        community_rules = fetch_community_rules(community_url or config.community_url, timeout=timeout)
        if not community_rules:
            typer.echo("Warning: No community rules available, using override rules only")

    if interactive and not fix:
        typer.echo("Warning: --interactive has no effect without --fix")

    confirm = ConsolePrompt() if interactive else AlwaysAccept()
    engine = LinterEngine(fix=fix, dry_run=dry_run, confirm=confirm)
    cwd = Path.cwd()
    remaining = 0

    for directory in config.directories:
        typer.echo(f"\nChecking {directory.label}...")
        context = build_scan_context(directory, config, community_rules, project_root=cwd)
        report = engine.scan_directory(directory.scan_root(), context)
        model = directory_report_to_model(report, cwd)

        for issue in model.issues:
            status = " (fixed)" if issue.fixed else ""
            typer.echo(f"{issue.category.value}: {issue.file}:{issue.line} [{issue.import_path}] - {issue.issue}{status}")
            if issue.suggestion and not issue.fixed:
                typer.echo(f"  → {issue.suggestion}")

        for failed in report.failed_files:
            typer.echo(f"Error: could not process {failed}")

        report_path = directory.resolved_report_path()
        if dry_run:
            typer.echo(f"[dry run] report not written to {report_path}")
        else:
            try:
                write_report(model, report_path)
            except OSError as e:
                typer.echo(f"Error: could not write report {report_path}: {e}")

        typer.echo(
            f"Files: {report.total_files}, issues: {report.total_issues} "
            f"({report.standard_issues} standard, {report.commented_issues} commented), "
            f"fixed: {report.fixed_issues}, skipped: {report.skipped_issues}"
        )
        for category, count in Reporter.counts_by_category(report.issues).items():
            typer.echo(f"  {category.value}: {count}")
        remaining += len(Reporter.actionable(report.issues))

    typer.echo(f"\nTotal unresolved issues: {remaining}")
    if remaining > 0:
        raise typer.Exit(code=1)


@app.command()
def init(
    root: Path = typer.Option(Path("."), help="Workspace root to scan"),
    config_file: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Path to config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """Discover projects and their tsconfig aliases, and record them in the config"""
    _configure_logging(verbose)
    config = _load(config_file)

    found = scan_workspace(root)
    if not found:
        typer.echo(f"No tsconfig.json found under {root}")
        raise typer.Exit(code=1)

    known = {d.path for d in config.directories}
    known_prefixes = {normalize_prefix(p) for p in config.aliases}
    added_dirs = 0
    added_aliases = 0
    for directory in found:
        if directory.path not in known:
            config.directories.append(directory)
            known.add(directory.path)
            added_dirs += 1
        if directory.manifest_ref:
            for prefix, alias in extract_aliases(Path(directory.manifest_ref)).items():
                if prefix not in known_prefixes:
                    config.aliases[prefix] = alias
                    known_prefixes.add(prefix)
                    added_aliases += 1

    save_config(config, config_file)
    typer.echo(f"✓ {added_dirs} directories, {added_aliases} aliases added to {config_file}")


@app.command("add-rule")
def add_rule(
    match_key: str = typer.Argument(..., help="Module specifier the rule matches"),
    action: RuleAction = typer.Option(..., help="What to do with a matching import"),
    replacement: Optional[str] = typer.Option(None, help="Replacement specifier"),
    prefix_only: bool = typer.Option(False, help="Match any specifier starting with the key"),
    config_file: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Path to config file"),
):
    """Add or replace an override rule"""
    if action != RuleAction.EXCLUDE and not replacement:
        typer.echo(f"Error: --replacement is required for action '{action.value}'")
        raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE)

    config = _load(config_file)
    config.override_rules[match_key] = OverrideRuleConfig(
        action=action, replacement=replacement, prefix_only=prefix_only
    )
    save_config(config, config_file)
    typer.echo(f"✓ Rule for '{match_key}' saved to {config_file}")


@app.command()
def rules(
    community_url: Optional[str] = typer.Option(None, help="Override the community rules URL"),
    config_file: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Path to config file"),
):
    """List override rules and community rules"""
    config = _load(config_file)

    typer.echo("Override rules:")
    if not config.override_rules:
        typer.echo("  (none)")
    for key, rule in config.override_rules.items():
        target = f" → {rule.replacement}" if rule.replacement else ""
        prefix = " (prefix)" if rule.prefix_only else ""
        typer.echo(f"  {key}{prefix}: {rule.action.value}{target}")

    community_rules = fetch_community_rules(community_url or config.community_url)
    typer.echo(f"\nCommunity rules ({len(community_rules)}):")
    for rule in community_rules:
        target = f" → {rule.to}" if rule.to else ""
        typer.echo(f"  {rule.from_}: {rule.action.value}{target} {rule.description}".rstrip())


if __name__ == "__main__":
    app()
