"""ctxforge CLI entry point."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click

from ctxforge import __version__

_project_option = click.option(
    "--project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root (default: current directory).",
)

_GUIDED_NOTICE = "Guided mode not yet available. Using standard init...\n"


@click.group()
@click.version_option(version=__version__, prog_name="ctxforge")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (errors only).")
@click.pass_context
def main(ctx: click.Context, *, verbose: bool, quiet: bool) -> None:
    """ctxforge - Context Engineering Framework for LLM-Assisted Development."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------


def _run_init(project_root: Path) -> None:
    from ctxforge.onboarding import init_project

    click.echo("Initializing ctxforge framework v2.0...\n")
    result = init_project(project_root)

    for directory in result.created_dirs:
        click.echo(f"Created {directory}")
    for name in result.installed:
        click.echo(f"Installed {name}")
    for name in result.missing:
        click.echo(f"Warning: {name} not found in framework", err=True)
    if result.project_md_created:
        click.echo("Created project.md (ready for LLM initialization)")
    if result.context_created:
        click.echo("Created CONTEXT.md")
    for name in result.integrated:
        click.echo(f"Integrated {name}")

    cls = result.classification
    click.echo("")
    click.echo(f"Project: {result.project_name}")
    click.echo(f"Detected: {cls.type.value} - {cls.framework} ({cls.language})")
    click.echo("")
    click.echo("Framework installed. Next steps:")
    click.echo("  1. Start your LLM and load docs/context/FRAMEWORK.md")
    click.echo("  2. Answer its 3 questions (name and vision, tech stack, first feature)")
    click.echo("  3. It writes docs/context/project.md and you are ready to develop")


@main.command()
@click.option("--guided", is_flag=True, help="Interactive guided setup (not yet available).")
@_project_option
def init(*, guided: bool, project: Path | None) -> None:
    """Initialize the framework in a project."""
    if guided:
        click.echo(_GUIDED_NOTICE)
    _run_init(project or Path.cwd())


@main.command(name="guided")
@_project_option
def guided_cmd(*, project: Path | None) -> None:
    """Interactive guided setup (falls back to standard init)."""
    click.echo(_GUIDED_NOTICE)
    _run_init(project or Path.cwd())


main.add_command(guided_cmd, name="init-guided")


# ---------------------------------------------------------------------------
# validate / status
# ---------------------------------------------------------------------------


@main.command()
@_project_option
def validate(*, project: Path | None) -> None:
    """Check framework compliance."""
    from ctxforge.infrastructure.doctor import run_checks

    project_root = project or Path.cwd()
    checks = run_checks(project_root)

    for check in checks:
        icon = "[ok]" if check.passed else "[FAIL]"
        suffix = f" - {check.description}" if check.description else ""
        click.echo(f"  {icon} {check.name}{suffix}")

    passed = sum(1 for c in checks if c.passed)
    click.echo(f"\nFramework compliance: {passed}/{len(checks)} checks passed")
    if passed == len(checks):
        click.echo("Framework is properly configured!")
    else:
        click.echo('Some issues found. Run "ctxforge init" to fix structure.')


@main.command()
@_project_option
def status(*, project: Path | None) -> None:
    """Show current context state."""
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table

    from ctxforge.infrastructure import (
        calculate_context_health,
        calculate_health_score,
        health_label,
        load_config,
    )
    from ctxforge.infrastructure.status import CORE_FILES, collect_status

    project_root = project or Path.cwd()
    info = collect_status(project_root)

    if not info.project_md_found:
        click.echo("Error: docs/context/project.md not found. Run `ctxforge init`.", err=True)
        sys.exit(1)

    console = Console()
    table = Table(title="Context Status", show_header=False, box=None, padding=(0, 1))
    table.add_column("item", style="cyan")
    table.add_column("value")

    table.add_row("project.md", f"{info.size_kb}KB")
    if info.project_name:
        table.add_row("Project", escape(info.project_name))
    if info.snapshot_sections:
        table.add_row("State snapshots", f"{info.snapshot_sections} in project.md")
    if info.learning_sections:
        table.add_row("Project learnings", f"{info.learning_sections} documented")

    if info.missing_core:
        table.add_row("Core files", f"[yellow]missing {len(info.missing_core)}[/]")
    else:
        table.add_row("Core files", f"[green]{len(CORE_FILES)} present[/]")

    if info.protocols is None:
        table.add_row("Protocols", "[yellow]directory not found[/]")
    else:
        table.add_row("Protocols", str(info.protocols))

    thresholds = load_config(project_root).health
    score = calculate_health_score(calculate_context_health(project_root), thresholds)
    table.add_row("Health", f"{score}/100 ({health_label(score, thresholds)})")

    console.print(table)
    console.print()
    console.print("Quick start: read docs/context/FRAMEWORK.md and ask what to work on.")


# ---------------------------------------------------------------------------
# health / metrics / optimize
# ---------------------------------------------------------------------------

_LABEL_STYLES = {"good": "green", "warning": "yellow", "critical": "red"}


def _health_report(project_root: Path) -> dict[str, Any]:
    from ctxforge.infrastructure import (
        calculate_context_health,
        calculate_health_score,
        health_label,
        health_recommendations,
        load_config,
    )

    thresholds = load_config(project_root).health
    metrics = calculate_context_health(project_root)
    score = calculate_health_score(metrics, thresholds)
    return {
        "metrics": metrics.to_dict(),
        "score": score,
        "label": health_label(score, thresholds),
        "recommendations": health_recommendations(metrics, score, thresholds),
        "size_target_kb": thresholds.size_target_kb,
    }


def _print_health(report: dict[str, Any]) -> None:
    from rich.console import Console
    from rich.panel import Panel
    from rich.table import Table

    metrics = report["metrics"]
    target = report["size_target_kb"]
    style = _LABEL_STYLES[report["label"]]

    console = Console()
    table = Table(title="Health Metrics", show_header=False, box=None, padding=(0, 1))
    table.add_column("metric", style="cyan")
    table.add_column("value", justify="right")
    size_note = "ok" if metrics["size_kb"] < target else "over target"
    table.add_row("Size", f"{metrics['size_kb']}KB ({size_note}, target <{target}KB)")
    table.add_row("Active features", str(metrics["active_features"]))
    table.add_row("Completed features", str(metrics["completed_features"]))
    table.add_row("Project learnings", str(metrics["project_learnings"]))
    table.add_row("State snapshots", str(metrics["state_snapshots"]))
    console.print(table)
    console.print()
    console.print(Panel(
        f"[bold]{report['score']}/100[/] [{style}]{report['label']}[/]",
        title="Health Score",
        border_style=style,
    ))

    if report["recommendations"]:
        console.print("Recommendations:")
        for rec in report["recommendations"]:
            console.print(f"  - {rec}")


@main.command()
@_project_option
@click.option("--json", "output_json", is_flag=True, help="Output as JSON.")
@click.option(
    "--fail-under",
    type=click.IntRange(0, 100),
    default=None,
    help="Exit with status 1 when the score is below this value.",
)
def health(*, project: Path | None, output_json: bool, fail_under: int | None) -> None:
    """Context health report."""
    report = _health_report(project or Path.cwd())

    if output_json:
        click.echo(json.dumps(report, ensure_ascii=False, indent=2))
    else:
        _print_health(report)

    if fail_under is not None and report["score"] < fail_under:
        sys.exit(1)


@main.command()
@_project_option
def metrics(*, project: Path | None) -> None:
    """Print context metrics and score as JSON."""
    report = _health_report(project or Path.cwd())
    click.echo(json.dumps(report, ensure_ascii=False, indent=2))


@main.command()
@_project_option
@click.option(
    "--max-age-days",
    type=click.IntRange(min=0),
    default=None,
    help="Archive snapshots older than this (default: from config.yml or 30).",
)
def optimize(*, project: Path | None, max_age_days: int | None) -> None:
    """Archive old snapshots and check context size."""
    from ctxforge.infrastructure import load_config
    from ctxforge.infrastructure.optimize import optimize_context

    project_root = project or Path.cwd()
    config = load_config(project_root)
    result = optimize_context(
        project_root,
        max_age_days=config.optimize.max_age_days if max_age_days is None else max_age_days,
        thresholds=config.health,
    )

    for name in result.archived:
        click.echo(f"Archived old snapshot: {name}")

    if result.context_size_kb is not None:
        if result.oversized:
            click.echo(
                f"CONTEXT.md is {result.context_size_kb}KB "
                f"(target: <{result.size_target_kb}KB)"
            )
            click.echo("Consider archiving completed features or consolidating learnings")
        else:
            click.echo(f"CONTEXT.md size: {result.context_size_kb}KB (within target)")

    click.echo(f"\nOptimization complete! {len(result.archived)} files processed.")


# ---------------------------------------------------------------------------
# spec / context guides
# ---------------------------------------------------------------------------


@main.command()
@click.argument("description", nargs=-1)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the specification to a file instead of stdout.",
)
def spec(*, description: tuple[str, ...], output: Path | None) -> None:
    """Generate a behavioural specification from a description."""
    from ctxforge.onboarding import generate_basic_spec

    text = " ".join(description).strip()
    if not text:
        click.echo("Error: please describe what you want to build.", err=True)
        click.echo(
            'Example: ctxforge spec "Users need to search products on the products page"',
            err=True,
        )
        sys.exit(1)

    document = generate_basic_spec(text)
    if output is None:
        click.echo(document)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(document, encoding="utf-8")
    click.echo(f"Specification written to {output}")


@main.command("context-help")
def context_help_cmd() -> None:
    """Learn how to provide better context."""
    from ctxforge.onboarding.guides import context_help

    click.echo(context_help())


@main.command("context-examples")
def context_examples_cmd() -> None:
    """See examples of good vs poor context."""
    from ctxforge.onboarding.guides import context_examples

    click.echo(context_examples())


# ---------------------------------------------------------------------------
# integrations
# ---------------------------------------------------------------------------


@main.command("install-hooks")
@click.option(
    "--mode",
    type=click.Choice(["warn", "block"]),
    default="warn",
    help="Hook mode: warn (default) or block commits on low health.",
)
@click.option(
    "--min-score",
    type=click.IntRange(0, 100),
    default=None,
    help="Minimum health score (default: warning threshold from config.yml).",
)
@click.option("--remove", is_flag=True, help="Remove the pre-commit hook.")
@_project_option
def install_hooks(
    *,
    mode: str,
    min_score: int | None,
    remove: bool,
    project: Path | None,
) -> None:
    """Install or remove the ctxforge pre-commit hook."""
    from ctxforge.infrastructure import load_config
    from ctxforge.infrastructure.hooks import HooksError, install_hook, remove_hook

    project_root = project or Path.cwd()

    try:
        if remove:
            if remove_hook(project_root):
                click.echo("Removed pre-commit hook.")
            else:
                click.echo("No pre-commit hook to remove.")
            return

        if min_score is None:
            min_score = load_config(project_root).health.warning_score
        install_hook(project_root, mode=mode, min_score=min_score)
    except HooksError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    click.echo(f"Installed pre-commit hook (mode: {mode}, min score: {min_score}).")


@main.command("ide-setup")
@click.option("--all", "force", is_flag=True, help="Write adapters for every supported IDE.")
@_project_option
def ide_setup(*, force: bool, project: Path | None) -> None:
    """Create IDE rules files that point at the framework."""
    from ctxforge.onboarding import setup_ide_rules

    written = setup_ide_rules(project or Path.cwd(), force=force)
    if not written:
        click.echo("No IDE detected (use --all to write every adapter).")
        return
    for name in written:
        click.echo(f"Wrote {name}")
