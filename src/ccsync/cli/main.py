"""
ccsync CLI Main Entry Point.

Command-line interface for syncing agent, skill and command
configuration between the global tree and a project tree.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ccsync import __version__
from ccsync.cli.interactive import InteractivePrompter
from ccsync.comparison import DiffGenerator
from ccsync.core.config import SyncConfig, discover_config_files, load_config
from ccsync.core.errors import CcsyncError, SyncAbortedException, SyncFailedError
from ccsync.core.logging import get_logger, setup_logging
from ccsync.core.models import ConfigType, ConflictStrategy, SyncDirection
from ccsync.scanner import FileFilter
from ccsync.sync.actions import (
    ConflictAction,
    CreateAction,
    CreateDirectoryAction,
    DirectoryConflictAction,
    SkipAction,
    SyncAction,
)
from ccsync.sync.approval import AlwaysApprove, Approver
from ccsync.sync.engine import SyncEngine, SyncPlan
from ccsync.sync.reporting import SyncReporter
from ccsync.sync.result import SyncResult

console = Console()
logger = get_logger(__name__)

TYPE_CHOICES = [t.value for t in ConfigType]
CONFLICT_CHOICES = [s.value for s in ConflictStrategy]


def type_option(func: Any) -> Any:
    return click.option(
        "--type",
        "-t",
        "types",
        multiple=True,
        type=click.Choice(TYPE_CHOICES),
        help="Configuration types to include (repeatable, default: all)",
    )(func)


def conflict_option(func: Any) -> Any:
    return click.option(
        "--conflict",
        "-c",
        type=click.Choice(CONFLICT_CHOICES),
        default=None,
        help="Conflict resolution strategy (default: from config, else fail)",
    )(func)


def build_filter(types: tuple[str, ...]) -> FileFilter:
    return FileFilter(ConfigType(t) for t in types)


def roots(ctx: click.Context, direction: SyncDirection) -> tuple[Path, Path]:
    """Return (source, destination) roots for a direction."""
    global_path: Path = ctx.obj["global_path"]
    local_path: Path = ctx.obj["local_path"]
    if direction == SyncDirection.TO_LOCAL:
        return global_path, local_path
    return local_path, global_path


def effective_config(ctx: click.Context, conflict: str | None = None) -> SyncConfig:
    """Merged configuration with command-line overrides applied."""
    config: SyncConfig = ctx.obj["config"]
    updates: dict[str, Any] = {}
    if ctx.obj["dry_run"]:
        updates["dry_run"] = True
    if ctx.obj["preserve_symlinks"]:
        updates["preserve_symlinks"] = True
    if conflict:
        updates["conflict_strategy"] = ConflictStrategy.from_string(conflict)
    return config.model_copy(update=updates) if updates else config


def select_approver(ctx: click.Context, config: SyncConfig) -> Approver | None:
    if config.dry_run or config.non_interactive:
        return None
    if ctx.obj["yes_all"]:
        return AlwaysApprove()
    return InteractivePrompter(console, follow_symlinks=not config.preserve_symlinks)


def describe(action: SyncAction | None) -> str:
    """Short label for a planned action."""
    if action is None:
        return "error"
    if isinstance(action, CreateAction):
        return "create"
    if isinstance(action, CreateDirectoryAction):
        return "create directory"
    if isinstance(action, SkipAction):
        return f"skip ({action.reason})"
    newer = "source newer" if action.source_newer else "dest newer"
    kind = "directory conflict" if isinstance(action, DirectoryConflictAction) else "conflict"
    return f"{kind} ({action.strategy.value}, {newer})"


def print_warnings(warnings: list[str]) -> None:
    for warning in warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")


def print_result(ctx: click.Context, result: SyncResult, title: str) -> None:
    if ctx.obj["json_output"]:
        click.echo(json.dumps(result.to_dict(), indent=2, default=str))
        return
    print_warnings(result.warnings)
    console.print(SyncReporter.build_table(result, title=title))
    if result.errors:
        console.print(f"\n[red]Errors ({len(result.errors)}):[/red]")
        for error in result.errors:
            console.print(f"  - {error}")
    if result.is_success:
        console.print("[green]Status: ✓ Success[/green]")
    else:
        console.print("[red]Status: ✗ Completed with errors[/red]")


@click.group()
@click.version_option(version=__version__, prog_name="ccsync")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--yes-all", is_flag=True, help="Approve all actions without prompting")
@click.option("--dry-run", is_flag=True, help="Show what would happen without changing files")
@click.option(
    "--global-path",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Global configuration tree (default: ~/.claude)",
)
@click.option(
    "--local-path",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project configuration tree (default: ./.claude)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Additional configuration file with highest precedence",
)
@click.option("--no-config", is_flag=True, help="Ignore all configuration files")
@click.option("--preserve-symlinks", is_flag=True, help="Copy symlinks as links")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    yes_all: bool,
    dry_run: bool,
    global_path: Path | None,
    local_path: Path | None,
    config_path: Path | None,
    no_config: bool,
    preserve_symlinks: bool,
    json_output: bool,
) -> None:
    """
    ccsync - Sync agents, skills and commands between ~/.claude and a project.

    Files are compared by content hash. Conflicts are resolved by the
    configured strategy or interactively.
    """
    ctx.ensure_object(dict)

    if config_path is not None and no_config:
        raise click.UsageError("--config and --no-config cannot be used together")

    try:
        config = load_config(cli_path=config_path, no_config=no_config)
    except CcsyncError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)

    if verbose:
        config.logging.level = "DEBUG"
    elif (dry_run or config.dry_run) and config.logging.level == "WARNING":
        config.logging.level = "INFO"
    setup_logging(config.logging)

    ctx.obj["config"] = config
    ctx.obj["config_path"] = config_path
    ctx.obj["no_config"] = no_config
    ctx.obj["verbose"] = verbose
    ctx.obj["yes_all"] = yes_all
    ctx.obj["dry_run"] = dry_run
    ctx.obj["preserve_symlinks"] = preserve_symlinks
    ctx.obj["json_output"] = json_output
    ctx.obj["global_path"] = global_path or Path.home() / ".claude"
    ctx.obj["local_path"] = local_path or Path(".claude")


def run_sync(
    ctx: click.Context,
    direction: SyncDirection,
    types: tuple[str, ...],
    conflict: str | None,
) -> None:
    config = effective_config(ctx, conflict)
    source, dest = roots(ctx, direction)
    engine = SyncEngine(config, direction, build_filter(types))
    title = f"Sync Summary ({direction.value})"

    if config.dry_run and not ctx.obj["json_output"]:
        console.print("[yellow]Dry run: no files will be changed[/yellow]")

    try:
        result = engine.sync(source, dest, select_approver(ctx, config))
    except SyncAbortedException:
        console.print("[yellow]Sync cancelled by user.[/yellow]")
        return
    except SyncFailedError as e:
        print_result(ctx, e.result, title)
        sys.exit(1)

    print_result(ctx, result, title)


@cli.command("to-local")
@type_option
@conflict_option
@click.pass_context
def to_local(ctx: click.Context, types: tuple[str, ...], conflict: str | None) -> None:
    """Sync from the global tree into the project tree."""
    run_sync(ctx, SyncDirection.TO_LOCAL, types, conflict)


@cli.command("to-global")
@type_option
@conflict_option
@click.pass_context
def to_global(ctx: click.Context, types: tuple[str, ...], conflict: str | None) -> None:
    """Sync from the project tree into the global tree."""
    run_sync(ctx, SyncDirection.TO_GLOBAL, types, conflict)


def plan_to_dict(plan: SyncPlan) -> list[dict[str, Any]]:
    return [
        {
            "path": planned.relative_path.as_posix(),
            "action": describe(planned.action),
            "error": planned.error,
        }
        for planned in plan.actions
    ]


@cli.command()
@type_option
@click.pass_context
def status(ctx: click.Context, types: tuple[str, ...]) -> None:
    """Show what a sync would do in each direction."""
    config = effective_config(ctx)
    file_filter = build_filter(types)

    plans: dict[SyncDirection, SyncPlan] = {}
    for direction in SyncDirection:
        source, dest = roots(ctx, direction)
        plans[direction] = SyncEngine(config, direction, file_filter).plan(source, dest)

    if ctx.obj["json_output"]:
        data = {direction.value: plan_to_dict(plan) for direction, plan in plans.items()}
        click.echo(json.dumps(data, indent=2))
        return

    for direction, plan in plans.items():
        print_warnings(plan.warnings)
        table = Table(title=f"Status ({direction.value})")
        table.add_column("Path", style="cyan")
        table.add_column("Action")

        for planned in plan.actions:
            label = describe(planned.action)
            if planned.error:
                label = f"[red]error: {planned.error}[/red]"
            elif "conflict" in label:
                label = f"[yellow]{label}[/yellow]"
            elif label.startswith("create"):
                label = f"[green]{label}[/green]"
            table.add_row(planned.relative_path.as_posix(), label)

        if plan.actions:
            console.print(table)
        else:
            console.print(f"[dim]No items found for {direction.value}[/dim]")


@cli.command()
@type_option
@click.pass_context
def diff(ctx: click.Context, types: tuple[str, ...]) -> None:
    """Show differences for conflicting items (global -> local)."""
    config = effective_config(ctx)
    source, dest = roots(ctx, SyncDirection.TO_LOCAL)
    engine = SyncEngine(config, SyncDirection.TO_LOCAL, build_filter(types))
    plan = engine.plan(source, dest)
    generator = DiffGenerator()

    shown = 0
    for planned in plan.actions:
        action = planned.action
        name = planned.relative_path.as_posix()
        try:
            if isinstance(action, ConflictAction):
                text = generator.generate(action.source, action.dest)
                console.print(Panel(Syntax(text, "diff"), title=name))
            elif isinstance(action, DirectoryConflictAction):
                comparison = engine.directory_comparator.compare(action.source, action.dest)
                summary = generator.generate_directory_summary(
                    comparison, action.source, action.dest, name
                )
                console.print(Panel(summary.rstrip("\n"), title=name))
            else:
                continue
        except CcsyncError as e:
            console.print(f"[yellow]Warning: Failed to generate diff for {name}: {e}[/yellow]")
        shown += 1

    if shown == 0:
        console.print("[green]No differences found[/green]")


@cli.command("config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show the active merged configuration."""
    config: SyncConfig = ctx.obj["config"]

    if ctx.obj["no_config"]:
        files: list[Path] = []
    else:
        files = discover_config_files(ctx.obj["config_path"]).in_merge_order()

    if ctx.obj["json_output"]:
        data = {
            "files": [str(p) for p in reversed(files)],
            "config": config.model_dump(mode="json"),
        }
        click.echo(json.dumps(data, indent=2))
        return

    if files:
        console.print("[bold]Configuration files (highest precedence first):[/bold]")
        for path in reversed(files):
            console.print(f"  {path}")
    else:
        console.print("[dim]No configuration files in use; showing defaults[/dim]")

    table = Table(title="Active Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("conflict_strategy", config.effective_strategy.value)
    table.add_row("dry_run", str(config.dry_run))
    table.add_row("non_interactive", str(config.non_interactive))
    table.add_row("preserve_symlinks", str(config.preserve_symlinks))
    table.add_row("ignore", ", ".join(config.ignore) or "-")
    table.add_row("include", ", ".join(config.include) or "-")
    table.add_row("rules", str(len(config.rules)))
    table.add_row("log level", config.logging.level)
    console.print(table)


def main() -> None:
    """Main entry point."""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled[/yellow]")
        sys.exit(130)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
