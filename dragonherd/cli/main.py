"""CLI commands for DragonHerd."""

import asyncio
import json
from typing import Optional

import click

from ..config.logging import configure_logging
from ..container import get_container, setup_container
from ..services.sync_service import SUMMARY_UNAVAILABLE


def run_async(coro):
    """Run async coroutine in sync context."""
    return asyncio.run(coro)


@click.group()
@click.version_option(version="1.0.0")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(debug: bool):
    """Summarize BugHerd tasks with an LLM."""
    container = setup_container()
    configure_logging(
        debug or container.settings.debug or container.dragonherd_settings.is_debug_mode()
    )
    container.sync_scheduler.init(container.trigger_scheduler.hooks)


@cli.command("summarize")
@click.option("--project", "-p", "project_id", help="Project ID (defaults to the default project)")
@click.option("--status", "-s", default="", help="Only tasks with this status (e.g. todo, in_progress, done)")
@click.option("--user", "-u", "user_id", default=0, type=int, help="Only tasks assigned to this user ID")
@click.option("--keyword", "-k", default="", help="Only tasks whose description contains this text")
@click.option("--show-prompt", is_flag=True, help="Print the prompt instead of summarizing")
def summarize(
    project_id: Optional[str],
    status: str,
    user_id: int,
    keyword: str,
    show_prompt: bool,
):
    """Summarize a project's tasks, optionally filtered."""
    container = get_container()
    orchestrator = container.on_demand_orchestrator()
    project_id = project_id or orchestrator.default_project_id

    if not project_id:
        click.echo("No project given and no default project configured.", err=True)
        raise SystemExit(1)

    if show_prompt:
        prompt = run_async(
            orchestrator.compose_filtered(project_id, status=status, user_id=user_id, keyword=keyword)
        )
        click.echo(prompt)
        return

    summary = run_async(
        orchestrator.run_filtered(project_id, status=status, user_id=user_id, keyword=keyword)
    )
    click.echo(summary)


@cli.command("run")
def run_default():
    """Summarize the default project without filters."""
    orchestrator = get_container().on_demand_orchestrator()
    summary = run_async(orchestrator.run(persist=lambda s: None))
    click.echo(summary or SUMMARY_UNAVAILABLE)


@cli.command("sync")
def sync_now():
    """Run the scheduled sync of all projects now."""
    container = get_container()
    if not container.dragonherd_settings.get_bugherd_api_key():
        click.echo("BugHerd API key not configured.", err=True)
        raise SystemExit(1)

    scheduler = container.sync_scheduler
    run_async(scheduler.run_sync())
    click.echo(f"✅ Sync finished, last successful sync: {scheduler.get_last_sync_time() or 'never'}")


@cli.command("status")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def status(output_json: bool):
    """Show schedule and stored sync results."""
    sync_status = get_container().sync_scheduler.get_sync_status()

    if output_json:
        click.echo(json.dumps(sync_status, indent=2, ensure_ascii=False))
        return

    click.echo(f"Schedule: {sync_status['schedule_display']} ({sync_status['schedule']})")
    click.echo(f"Last sync: {sync_status['last_sync'] or 'Never'}")
    click.echo(f"Next sync: {sync_status['next_sync'] or 'Not scheduled'}")

    results = sync_status["sync_results"]
    if not results:
        click.echo("\nNo sync results yet.")
        return

    for project_id, history in results.items():
        latest = history[-1]
        click.echo(f"\n📁 {project_id} ({len(history)} result(s))")
        click.echo(f"   {latest['timestamp']}: {latest['summary']}")


@cli.command("clear")
@click.confirmation_option(prompt="Remove the sync schedule and all stored results?")
def clear():
    """Clear the sync schedule and stored results."""
    get_container().sync_scheduler.clear_all_schedules()
    click.echo("All schedules and sync results cleared.")


@cli.group("projects")
def projects():
    """Manage projects synced on schedule."""


@projects.command("list")
def list_projects():
    """List configured projects."""
    configured = get_container().dragonherd_settings.get_projects()

    if not configured:
        click.echo("No projects configured.")
        return

    for project in configured.values():
        icon = "✅" if project.active else "⏸️"
        click.echo(f"{icon} [{project.id}] {project.name}")
        if project.description:
            click.echo(f"   {project.description}")


@projects.command("add")
@click.argument("project_id")
@click.argument("name")
@click.option("--description", "-d", default="", help="Project description")
@click.option("--inactive", is_flag=True, help="Exclude from scheduled syncs")
def add_project(project_id: str, name: str, description: str, inactive: bool):
    """Add or update a project."""
    saved = get_container().dragonherd_settings.add_project(
        {"id": project_id, "name": name, "description": description, "active": not inactive}
    )
    if not saved:
        click.echo("Failed to save project.", err=True)
        raise SystemExit(1)
    click.echo(f"✅ Saved project {project_id}")


@projects.command("remove")
@click.argument("project_id")
def remove_project(project_id: str):
    """Remove a project."""
    if not get_container().dragonherd_settings.remove_project(project_id):
        click.echo(f"Project not found: {project_id}", err=True)
        raise SystemExit(1)
    click.echo(f"🗑️ Removed project {project_id}")


@cli.group("config")
def config():
    """Read and change settings."""


@config.command("get")
@click.argument("key", required=False)
def config_get(key: Optional[str]):
    """Show one setting, or all settings with API keys masked."""
    settings = get_container().dragonherd_settings

    if key:
        click.echo(json.dumps(settings.get(key), ensure_ascii=False))
        return

    values = settings.get_settings()
    for secret in ("bugherd_api_key", "openai_api_key"):
        if values.get(secret):
            values[secret] = "********"
    click.echo(json.dumps(values, indent=2, ensure_ascii=False))


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str):
    """Change a setting. VALUE is parsed as JSON when possible."""
    container = get_container()
    settings = container.dragonherd_settings

    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value

    validated = settings.validate(
        {key: parsed}, extra_schedules=container.trigger_scheduler.list_intervals()
    )
    if key not in validated:
        click.echo(f"Invalid value for {key}: {value}", err=True)
        raise SystemExit(1)

    settings.update(validated)
    click.echo(f"✅ {key} updated")


@config.command("export")
def config_export():
    """Print settings as JSON, without API keys."""
    click.echo(get_container().dragonherd_settings.export())


@config.command("import")
@click.argument("source", type=click.File("r"))
def config_import(source):
    """Import settings from an export file (API keys are never imported)."""
    if not get_container().dragonherd_settings.import_settings(source.read()):
        click.echo("Invalid settings file.", err=True)
        raise SystemExit(1)
    click.echo("✅ Settings imported")


@cli.command("serve")
@click.option("--host", "-h", default=None, help="Host to bind to")
@click.option("--port", "-p", default=None, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Start the API server and the sync scheduler."""
    import uvicorn

    settings = get_container().settings
    host = host or settings.host
    port = port or settings.port

    click.echo(f"Starting server at http://{host}:{port}")
    click.echo("Press Ctrl+C to stop")

    uvicorn.run(
        "dragonherd.api.app:app",
        host=host,
        port=port,
        reload=reload,
    )


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
