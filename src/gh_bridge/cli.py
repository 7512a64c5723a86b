"""
Command-line interface for gh-bridge.
"""
import functools
import sys
from pathlib import Path

import click
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from gh_bridge import __version__
from gh_bridge.adapters import new, new_without_project
from gh_bridge.config import get_settings
from gh_bridge.core import GhBridgeError, Project, current_config, current_project
from gh_bridge.utils import GitRepository, LoggerSetup, get_logger

console = Console()
logger = get_logger(__name__)

# hub-compatible exit codes for ci-status
CI_EXIT_CODES = {
    "success": 0,
    "failure": 1,
    "error": 1,
    "pending": 2,
}
CI_NO_STATUS_EXIT_CODE = 3


def handle_errors(func):
    """Print adapter errors in red and exit with status 1."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except GhBridgeError as e:
            rprint(f"[red]Error: {e}[/red]")
            sys.exit(1)
    return wrapper


@click.group()
@click.version_option(version=__version__)
@click.option('--debug', is_flag=True, help='Enable debug mode')
def main(debug):
    """GitHub bridge: work with the GitHub project of the current repository."""
    if debug:
        settings = get_settings()
        settings.app.debug = True
        settings.app.log_level = "DEBUG"
        LoggerSetup.reconfigure()


@main.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    help="Path to configuration file",
    type=click.Path(exists=True)
)
@click.option("--validate", "-v", is_flag=True, help="Validate configuration")
def config(config_path, validate):
    """Show and validate configuration."""
    settings = get_settings(config_path, reload=config_path is not None)

    if validate:
        errors = settings.validate()
        if errors:
            rprint("[red]Configuration validation failed:[/red]")
            for error in errors:
                rprint(f"  - {error}")
            sys.exit(1)
        rprint("[green]Configuration is valid![/green]")
        return

    rprint(Panel.fit("[bold blue]gh-bridge configuration[/bold blue]", border_style="blue"))

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan", width=32)
    table.add_column("Value", style="green")

    for section_name, section_data in settings.to_dict().items():
        for key, value in section_data.items():
            if isinstance(value, list):
                value = ", ".join(str(v) for v in value)
            table.add_row(f"{section_name}.{key}", str(value))

    console.print(table)


@main.command()
@handle_errors
def login():
    """Obtain and store an access token."""
    credentials = current_config().fetch_credentials()
    rprint(f"[green]Logged in as {credentials.user}[/green]")


@main.command()
@click.argument('pr_id', type=int)
@handle_errors
def pr(pr_id):
    """Show a pull request of the current project."""
    pull = new().pull_request(pr_id)

    rprint(f"[bold]#{pull.number} {pull.title}[/bold] ({pull.state})")
    rprint(f"  {pull.head.ref} -> {pull.base.ref}")
    rprint(f"  {pull.html_url}")


@main.command("pull-request")
@click.option('--base', '-b', default='master', show_default=True, help='Base branch')
@click.option('--head', '-h', 'head', default=None, help='Head branch (defaults to the current branch)')
@click.option('--message', '-m', default=None, help='Pull request title')
@click.option('--body', default='', help='Pull request description')
@click.option('--issue', '-i', default=None, type=int, help='Issue to convert into a pull request')
@handle_errors
def pull_request(base, head, message, body, issue):
    """Open a pull request on the current project."""
    if issue is None and not message:
        rprint("[yellow]A title is required: use --message, or --issue to convert an issue[/yellow]")
        sys.exit(1)

    adapter = new()
    if head is None:
        head = GitRepository().current_branch()

    if issue is not None:
        url = adapter.create_pull_request_for_issue(base, head, issue)
    else:
        url = adapter.create_pull_request(base, head, message, body)

    click.echo(url)


@main.command()
@click.argument('name', required=False)
@click.option('--description', '-d', default='', help='Repository description')
@click.option('--homepage', '-H', default='', help='Repository homepage')
@click.option('--private', '-p', 'is_private', is_flag=True, help='Create a private repository')
@handle_errors
def create(name, description, homepage, is_private):
    """Create a repository (NAME or ORG/NAME, default: current directory)."""
    adapter = new_without_project()
    host = get_settings().github.host

    if name and "/" in name:
        owner, _, repo_name = name.partition("/")
    else:
        owner, repo_name = adapter.config.fetch_user(), name or Path.cwd().name
    project = Project(owner=owner, name=repo_name, host=host)

    if adapter.is_repository_exist(project):
        rprint(f"[yellow]{project.full_name} already exists on {host}[/yellow]")
    else:
        repo = adapter.create_repository(project, description, homepage, is_private)
        rprint(f"[green]Created {repo.full_name}[/green]")

    click.echo(project.web_url)


@main.command()
@click.option('--no-remote', is_flag=True, help='Do not add a git remote for the fork')
@handle_errors
def fork(no_remote):
    """Fork the current project into your account."""
    project = current_project()
    adapter = new()

    repo = adapter.fork_repository(project.name, project.owner, no_remote)
    rprint(f"[green]Forked {project.full_name} to {repo.full_name}[/green]")

    if not no_remote:
        is_ssh = get_settings().github.protocol == "ssh"
        url = adapter.expand_remote_url("origin", project.name, is_ssh)
        click.echo(f"git remote add {adapter.config.user} {url}")


@main.command()
@handle_errors
def releases():
    """List releases of the current project."""
    items = new().releases()
    if not items:
        rprint("[yellow]No releases[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Tag", style="cyan")
    table.add_column("Name")
    table.add_column("URL", style="green")
    for release in items:
        table.add_row(release.tag_name, release.title or "", release.html_url)
    console.print(table)


@main.command("ci-status")
@click.argument('sha', required=False)
@handle_errors
def ci_status(sha):
    """Show the CI status of a commit (default: HEAD)."""
    adapter = new()
    if sha is None:
        sha = GitRepository().head_sha()

    status = adapter.ci_status(sha)
    if status is None:
        click.echo("no status")
        sys.exit(CI_NO_STATUS_EXIT_CODE)

    click.echo(status.state)
    if status.target_url:
        click.echo(status.target_url)
    sys.exit(CI_EXIT_CODES.get(status.state, 1))


@main.command()
@handle_errors
def issues():
    """List open issues of the current project."""
    items = new().issues()
    if not items:
        rprint("[yellow]No open issues[/yellow]")
        return

    for issue in items:
        rprint(f"[cyan]#{issue.number:>5}[/cyan] {issue.title}  [dim]{issue.html_url}[/dim]")


@main.command("remote-url")
@click.argument('owner')
@click.argument('name', required=False)
@click.option('--ssh/--https', 'is_ssh', default=None, help='URL form (default from settings)')
@handle_errors
def remote_url(owner, name, is_ssh):
    """Print the clone URL for OWNER's copy of a repository ("origin" means you)."""
    if is_ssh is None:
        is_ssh = get_settings().github.protocol == "ssh"

    if name is None:
        adapter = new()
        name = adapter.project.name
    else:
        adapter = new_without_project()

    click.echo(adapter.expand_remote_url(owner, name, is_ssh))


if __name__ == "__main__":
    main()
