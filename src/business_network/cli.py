# ABOUTME: Command line interface for the business network using Typer.
# ABOUTME: Provides registration, sign-in, directory, connection and status commands.

from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from business_network.auth import SessionManager
from business_network.config import Settings, get_settings
from business_network.database import DatabaseService
from business_network.database.stats import get_network_stats
from business_network.display import (
    ConnectionTable,
    DirectoryTable,
    display_error,
    display_login_help,
    display_store_unavailable,
)
from business_network.errors import (
    BusinessNetworkError,
    StoreUnavailableError,
    UnauthenticatedError,
)
from business_network.identity import (
    LocalIdentityProvider,
    ProfileService,
    register_user,
)
from business_network.models import ConnectionStatus, ProfileKind
from business_network.network import (
    ConnectionWorkflow,
    DirectoryFilter,
    DirectoryService,
    filter_directory,
)
from business_network.observability import configure_logging

app = typer.Typer(
    name="business-network",
    help="Member directory and connection requests for a business network.",
    add_completion=False,
)

console = Console()


class KindFilter(str, Enum):
    """Member kinds accepted by the directory --kind option."""

    ALL = "all"
    COMPANY = "company"
    FREELANCER = "freelancer"


class StatusFilter(str, Enum):
    """Statuses accepted by the connections --status option."""

    PENDING = "pending"
    CONNECTED = "connected"


@dataclass
class Services:
    """Services wired to one database for the duration of a command."""

    settings: Settings
    store: DatabaseService
    provider: LocalIdentityProvider
    profiles: ProfileService
    workflow: ConnectionWorkflow
    directory: DirectoryService
    sessions: SessionManager


def build_services() -> Services:
    """Create the services for a command from the current settings."""
    settings = get_settings()
    configure_logging(settings)

    store = DatabaseService(db_path=settings.db_path)
    store.init_db()
    profiles = ProfileService(store)
    workflow = ConnectionWorkflow(store)
    return Services(
        settings=settings,
        store=store,
        provider=LocalIdentityProvider(
            store,
            min_password_length=settings.min_password_length,
            hash_iterations=settings.password_hash_iterations,
        ),
        profiles=profiles,
        workflow=workflow,
        directory=DirectoryService(
            profiles, workflow, max_workers=settings.directory_lookup_workers
        ),
        sessions=SessionManager(accounts_file=settings.accounts_file),
    )


def _resolve_caller(services: Services, account: str) -> str:
    """Return the signed-in member id for a local account.

    Raises:
        UnauthenticatedError: If no valid session is stored for the account.
    """
    token = services.sessions.get_token(account)
    return services.provider.verify_session(token)


@contextmanager
def _handle_errors() -> Generator[None, None, None]:
    """Map domain errors to error panels and exit code 1."""
    try:
        yield
    except UnauthenticatedError as e:
        console.print(display_error(e))
        console.print(display_login_help())
        raise typer.Exit(code=1) from None
    except StoreUnavailableError as e:
        console.print(display_store_unavailable(e))
        raise typer.Exit(code=1) from None
    except BusinessNetworkError as e:
        console.print(display_error(e))
        raise typer.Exit(code=1) from None


AccountOption = Annotated[
    str,
    typer.Option(
        "--account",
        "-a",
        help="Local account name the session is stored under.",
    ),
]


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Business network CLI.

    Register as a company or freelancer, browse the member directory and
    manage connection requests.
    """
    if ctx.invoked_subcommand is None:
        console.print("[dim]Use --help to see available commands.[/dim]")


@app.command()
def register(
    email: Annotated[str, typer.Option("--email", "-e", help="E-mail address.")],
    kind: Annotated[
        ProfileKind, typer.Option("--kind", "-k", help="Account type: company or freelancer.")
    ],
    password: Annotated[
        str,
        typer.Option(
            "--password",
            prompt=True,
            hide_input=True,
            confirmation_prompt=True,
            help="Password (prompted when omitted).",
        ),
    ],
    account: AccountOption = "default",
) -> None:
    """Create an account with a blank profile and sign in."""
    services = build_services()
    with _handle_errors():
        profile, session = register_user(
            services.provider, services.profiles, email, password, kind
        )
    services.sessions.store_session(session.token, profile.id, account)
    console.print(
        f"[green]Welcome! Registered {profile.profile_kind} account "
        f"'[bold]{profile.email}[/bold]'.[/green]"
    )
    console.print(f"[dim]Member id: {profile.id}[/dim]")


@app.command()
def login(
    email: Annotated[str, typer.Option("--email", "-e", help="E-mail address.")],
    password: Annotated[
        str,
        typer.Option("--password", prompt=True, hide_input=True, help="Password."),
    ],
    account: AccountOption = "default",
) -> None:
    """Sign in and store the session in the OS keyring."""
    services = build_services()
    with _handle_errors():
        session = services.provider.sign_in(email, password)
    services.sessions.store_session(session.token, session.user_id, account)
    console.print(f"[green]Signed in as '[bold]{email}[/bold]'.[/green]")


@app.command()
def logout(account: AccountOption = "default") -> None:
    """Sign out and forget the stored session."""
    services = build_services()
    token = services.sessions.get_token(account)
    if token is None:
        console.print(f"[yellow]Account '{account}' is not signed in.[/yellow]")
        return
    with _handle_errors():
        services.provider.sign_out(token)
    services.sessions.delete_session(account)
    console.print(f"[green]Signed out of account '{account}'.[/green]")


@app.command()
def whoami(account: AccountOption = "default") -> None:
    """Show the profile of the signed-in member."""
    services = build_services()
    with _handle_errors():
        user_id = _resolve_caller(services, account)
        profile = services.profiles.get_profile(user_id)

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Field", style="dim")
    table.add_column("Value")
    for field, value in profile.model_dump(exclude={"created_at", "updated_at"}).items():
        if isinstance(value, list):
            value = ", ".join(value)
        elif isinstance(value, Enum):
            value = value.value
        table.add_row(f"{field}:", "" if value is None else str(value))
    console.print(Panel(table, title="Profile", border_style="cyan", padding=(1, 2)))


@app.command("update-profile")
def update_profile(
    location: Annotated[str | None, typer.Option(help="Location.")] = None,
    display_name: Annotated[str | None, typer.Option(help="Freelancer: display name.")] = None,
    title: Annotated[str | None, typer.Option(help="Freelancer: job title.")] = None,
    skill: Annotated[
        list[str] | None, typer.Option("--skill", help="Freelancer: skill (repeatable).")
    ] = None,
    experience_years: Annotated[
        int | None, typer.Option(help="Freelancer: years of experience.")
    ] = None,
    portfolio_url: Annotated[str | None, typer.Option(help="Freelancer: portfolio URL.")] = None,
    education: Annotated[str | None, typer.Option(help="Freelancer: education.")] = None,
    company_name: Annotated[str | None, typer.Option(help="Company: company name.")] = None,
    industry: Annotated[str | None, typer.Option(help="Company: industry.")] = None,
    employee_count: Annotated[int | None, typer.Option(help="Company: employee count.")] = None,
    year_founded: Annotated[int | None, typer.Option(help="Company: founding year.")] = None,
    website: Annotated[str | None, typer.Option(help="Company: website.")] = None,
    services_offered: Annotated[
        str | None, typer.Option("--services", help="Company: services offered.")
    ] = None,
    account: AccountOption = "default",
) -> None:
    """Edit fields of your own profile."""
    options: dict[str, Any] = {
        "location": location,
        "display_name": display_name,
        "title": title,
        "skills": skill,
        "experience_years": experience_years,
        "portfolio_url": portfolio_url,
        "education": education,
        "company_name": company_name,
        "industry": industry,
        "employee_count": employee_count,
        "year_founded": year_founded,
        "website": website,
        "services": services_offered,
    }
    changes = {name: value for name, value in options.items() if value is not None}
    if not changes:
        console.print("[yellow]Nothing to update.[/yellow]")
        return

    services = build_services()
    with _handle_errors():
        user_id = _resolve_caller(services, account)
        services.profiles.update_profile(user_id, changes)
    console.print(f"[green]Updated {', '.join(sorted(changes))}.[/green]")


@app.command()
def directory(
    search: Annotated[
        str,
        typer.Option("--search", "-s", help="Match e-mail, name, industry or skills."),
    ] = "",
    kind: Annotated[
        KindFilter, typer.Option("--kind", "-k", help="Only show this member kind.")
    ] = KindFilter.ALL,
    location: Annotated[
        str, typer.Option("--location", "-l", help="Match part of the location.")
    ] = "",
    account: AccountOption = "default",
) -> None:
    """List members with your connection status, optionally filtered."""
    services = build_services()
    criteria = DirectoryFilter(search=search, profile_kind=kind.value, location=location)
    with _handle_errors():
        user_id = _resolve_caller(services, account)
        entries = services.directory.list_directory(user_id)

    matching = filter_directory(entries, criteria)
    if not matching:
        console.print("[yellow]No members match your filters.[/yellow]")
        console.print("[dim]Try less restrictive filters.[/dim]")
        return

    console.print(DirectoryTable().render(matching, title="Members"))
    console.print(f"[green]{len(matching)} of {len(entries)} member(s) shown.[/green]")
    if any(entry.lookup_failed for entry in matching):
        console.print("[yellow]Some connection statuses could not be loaded.[/yellow]")


@app.command()
def connect(
    user_id: Annotated[str, typer.Argument(help="Member id to send a request to.")],
    account: AccountOption = "default",
) -> None:
    """Send a connection request."""
    services = build_services()
    with _handle_errors():
        caller_id = _resolve_caller(services, account)
        services.profiles.get_profile(user_id)
        services.workflow.request(caller_id, user_id)
    console.print("[green]Connection request sent.[/green]")


@app.command()
def accept(
    user_id: Annotated[str, typer.Argument(help="Member id whose request you accept.")],
    account: AccountOption = "default",
) -> None:
    """Accept a connection request you received."""
    services = build_services()
    with _handle_errors():
        caller_id = _resolve_caller(services, account)
        services.workflow.accept(user_id, caller_id)
    console.print("[green]Connection accepted.[/green]")


@app.command()
def remove(
    user_id: Annotated[str, typer.Argument(help="Member id to disconnect from.")],
    account: AccountOption = "default",
) -> None:
    """Withdraw a request, decline one, or remove a connection."""
    services = build_services()
    with _handle_errors():
        caller_id = _resolve_caller(services, account)
        removed = services.workflow.remove(caller_id, user_id)
    if removed:
        console.print("[green]Connection removed.[/green]")
    else:
        console.print("[dim]There was no connection to remove.[/dim]")


@app.command()
def connections(
    status: Annotated[
        StatusFilter | None,
        typer.Option("--status", help="Only show pending or connected."),
    ] = None,
    account: AccountOption = "default",
) -> None:
    """List your connections and open requests."""
    services = build_services()
    with _handle_errors():
        caller_id = _resolve_caller(services, account)
        found = services.workflow.list_connections(
            caller_id, status=ConnectionStatus(status.value) if status else None
        )
        names = {
            profile.id: profile.name or profile.email
            for profile in services.profiles.list_profiles(exclude_user_id=caller_id)
        }

    if not found:
        console.print("[yellow]No connections yet.[/yellow]")
        return
    console.print(ConnectionTable().render(found, caller_id, names))


def _render_network_stats_panel(stats: dict[str, object]) -> Panel:
    """Render network statistics as a Rich Panel.

    Args:
        stats: Dictionary of statistics from get_network_stats.

    Returns:
        Rich Panel containing formatted statistics.
    """
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Label", style="dim")
    table.add_column("Value")

    table.add_row("Members:", f"[cyan]{stats.get('total_members', 0)}[/cyan]")

    kinds = stats.get("kind_distribution", {})
    if kinds and isinstance(kinds, dict):
        table.add_row(
            "By Kind:", ", ".join(f"{kind}: {count}" for kind, count in sorted(kinds.items()))
        )

    table.add_row("Unique Locations:", f"[cyan]{stats.get('unique_locations', 0)}[/cyan]")
    table.add_row("Connections:", f"[cyan]{stats.get('total_connections', 0)}[/cyan]")

    statuses = stats.get("status_distribution", {})
    if statuses and isinstance(statuses, dict):
        table.add_row(
            "By Status:",
            ", ".join(f"{status}: {count}" for status, count in sorted(statuses.items())),
        )

    return Panel(
        table,
        title="Network Statistics",
        border_style="blue",
        padding=(1, 2),
    )


def _render_accounts_panel(accounts: list[str], services: Services) -> Panel:
    """Render stored local accounts with their session state."""
    content: str | Table
    if not accounts:
        content = "[dim]No accounts stored. Run 'business-network login' to add one.[/dim]"
    else:
        table = Table(show_header=True, box=None, padding=(0, 1))
        table.add_column("Account", style="cyan")
        table.add_column("Status", style="dim")

        for name in accounts:
            token = services.sessions.get_token(name)
            if token is not None and services.provider.is_session_valid(token):
                status_text = "[green]Signed in[/green]"
            else:
                status_text = "[red]Expired/Invalid[/red]"
            table.add_row(name, status_text)
        content = table

    return Panel(
        content,
        title="Stored Accounts",
        border_style="magenta",
        padding=(1, 2),
    )


@app.command()
def status() -> None:
    """Show network statistics and stored accounts."""
    services = build_services()
    with _handle_errors():
        stats = get_network_stats(services.store)
        console.print(_render_network_stats_panel(stats))
        console.print()
        console.print(_render_accounts_panel(services.sessions.list_accounts(), services))


if __name__ == "__main__":
    app()
