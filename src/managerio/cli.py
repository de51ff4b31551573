"""
Command Line Interface for Managerio.
"""

import click
from datetime import date, datetime
from pathlib import Path
from pydantic import ValidationError
from .version import VERSION, APP_SCHEMA_VERSION
from .data import ProjectStore, LoadStatus
from .data.io import atomic_write, DATA_JSON, DATA_YAML
from .models import ProjectForm
from .views import format_money, format_date_range, format_day, format_timestamp, status_label, render_month
from .logs import get_logger
from .recovery import ManagerioError

log = get_logger("cli")


def _store(ctx) -> ProjectStore:
    return ctx.obj["store"]


def _persist(store: ProjectStore):
    """Save explicitly and stop with a non-zero exit when the write fails."""
    result = store.save()
    if not result.ok:
        click.echo(f"❌ Could not save projects: {result.error}", err=True)
        raise click.exceptions.Exit(1)


def _project_row(project) -> str:
    return f"{project.title}  {format_money(project.budget)}  {format_date_range(project.start_date, project.end_date)}"


@click.group()
@click.version_option(version=VERSION, prog_name="managerio")
@click.option('--data-dir', type=click.Path(file_okay=False, path_type=Path), envvar='MANAGERIO_DATA_DIR',
              default=None, help='Directory holding the project store')
@click.pass_context
def main(ctx, data_dir):
    """
    Managerio - Project Management System.

    Track projects with dates, location and budget.
    """
    store, result = ProjectStore.open(data_dir, autosave=False)
    if result.status == LoadStatus.FAILED:
        click.echo(f"⚠️  Warning: could not load projects, starting empty: {result.error}", err=True)
        click.echo(f"💡 The unreadable data is kept under '{store.corrupt_key}' when projects are next saved", err=True)
    log.debug(f"Opened store in {store.storage.directory}: {result.status.value}")
    ctx.obj = {"store": store, "load": result}


@main.command()
def home():
    """Show information about the app."""
    click.echo("Managerio")
    click.echo("Project Management System")
    click.echo(f"📦 Version: {VERSION}")


@main.command()
@click.option('--date', 'selected', type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help='Day to show projects for (default: today)')
@click.pass_context
def dashboard(ctx, selected):
    """Show totals, the month calendar and the projects on a day."""
    store = _store(ctx)
    day = selected.date() if selected else date.today()

    click.echo(f"📁 Total Projects: {store.count}")
    click.echo(f"✅ Completed: {store.completed_count}")
    click.echo(f"🕒 In Progress: {store.in_progress_count}")
    click.echo(f"💲 Total Budget: {format_money(store.total_budget)}")
    click.echo("")
    click.echo(render_month(day.year, day.month, day))
    click.echo("")
    click.echo(f"Projects on {format_day(day)}")

    projects = store.projects_on(day)
    if not projects:
        click.echo("No projects scheduled for this date")
        return
    for project in projects:
        click.echo(f"  {project.title} - {project.location}  {format_money(project.budget)}")


@main.command()
@click.option('--title', required=True, help='Project title')
@click.option('--description', required=True, help='Project description')
@click.option('--location', required=True, help='Project location')
@click.option('--budget', required=True, help='Budget in dollars')
@click.option('--start', type=click.DateTime(), default=None, help='Start date (default: now)')
@click.option('--end', type=click.DateTime(), default=None, help='End date (default: a week after start)')
@click.pass_context
def create(ctx, title, description, location, budget, start, end):
    """Create a new project."""
    fields = dict(title=title, description=description, location=location, budget=budget, end_date=end)
    if start is not None:
        fields["start_date"] = start
    try:
        form = ProjectForm(**fields)
    except ValidationError as e:
        for error in e.errors():
            click.echo(f"❌ {error['msg']}", err=True)
        raise click.exceptions.Exit(1)

    store = _store(ctx)
    project = form.to_project()
    store.add(project)
    _persist(store)
    click.echo(f"✅ Project Created: {project.title} ({project.id})")


@main.command(name="list")
@click.option('--search', default="", help='Only projects whose title or description contains this text')
@click.pass_context
def list_projects(ctx, search):
    """List projects."""
    projects = _store(ctx).search(search)
    if not projects:
        click.echo("📭 No projects found")
        return
    for project in projects:
        click.echo(f"{project.id}  {_project_row(project)}")


@main.command()
@click.argument('project_id')
@click.pass_context
def show(ctx, project_id):
    """Show the details of a project."""
    project = _store(ctx).get(project_id)
    if project is None:
        click.echo(f"❌ No project {project_id}", err=True)
        raise click.exceptions.Exit(1)

    click.echo(project.title)
    click.echo(f"📄 Description: {project.description}")
    click.echo(f"📅 Start Date: {format_timestamp(project.start_date)}")
    click.echo(f"📅 End Date: {format_timestamp(project.end_date)}")
    click.echo(f"📍 Location: {project.location}")
    click.echo(f"💲 Budget: {format_money(project.budget)}")
    click.echo(f"✅ Status: {status_label(project)}")


@main.command()
@click.argument('project_ids', nargs=-1, required=True)
@click.pass_context
def delete(ctx, project_ids):
    """Delete one or more projects."""
    store = _store(ctx)
    removed = store.remove_many(project_ids)
    if removed:
        _persist(store)
    click.echo(f"🗑️  Deleted {removed} project(s)")


@main.command()
@click.argument('project_id')
@click.option('--undo', is_flag=True, help='Mark the project as in progress again')
@click.pass_context
def complete(ctx, project_id, undo):
    """Mark a project as completed."""
    store = _store(ctx)
    if not store.set_completed(project_id, not undo):
        click.echo(f"❌ No project {project_id}", err=True)
        raise click.exceptions.Exit(1)
    _persist(store)
    click.echo(f"✅ {status_label(store.get(project_id))}")


@main.command()
@click.pass_context
def seed(ctx):
    """Add the demo projects to an empty store."""
    store = _store(ctx)
    if not store.seed_demo():
        click.echo("📦 Store already has projects, nothing seeded")
        return
    _persist(store)
    click.echo(f"🌱 Seeded {store.count} demo projects")


@main.command()
@click.argument('path', type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def export(ctx, path):
    """Export all projects to YAML (.yml/.yaml) or JSON."""
    store = _store(ctx)
    data_type = DATA_YAML if path.suffix.lower() in ('.yml', '.yaml') else DATA_JSON
    document = {
        "schema_version": APP_SCHEMA_VERSION,
        "exported_at": datetime.now().isoformat(),
        "projects": [p.to_wire() for p in store.projects],
    }
    try:
        atomic_write(data_type, path, document, create_dirs=True)
    except ManagerioError as e:
        click.echo(f"❌ Error exporting projects: {e}", err=True)
        raise click.exceptions.Exit(1)
    click.echo(f"✅ Exported {store.count} project(s) to {path}")


if __name__ == "__main__":
    main()
