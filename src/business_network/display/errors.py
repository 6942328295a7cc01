# ABOUTME: Error display helpers for formatting error messages with Rich.
# ABOUTME: Provides error panels for domain errors, sign-in help and store outages.

import traceback

from rich.panel import Panel
from rich.text import Text

from business_network.errors import (
    AlreadyExistsError,
    NotFoundError,
    StoreUnavailableError,
    UnauthenticatedError,
)

_ERROR_TITLES: list[tuple[type[Exception], str]] = [
    (UnauthenticatedError, "Not Signed In"),
    (NotFoundError, "Not Found"),
    (AlreadyExistsError, "Already Exists"),
    (StoreUnavailableError, "Storage Unavailable"),
]


def display_error(error: Exception, verbose: bool = False) -> Panel:
    """Format an error as a Rich Panel.

    Args:
        error: The exception to display.
        verbose: If True, include full traceback information.

    Returns:
        A Rich Panel containing formatted error information.
    """
    error_type = type(error).__name__
    title = next((t for cls, t in _ERROR_TITLES if isinstance(error, cls)), "Error")

    content = Text()
    content.append(f"{error_type}: ", style="bold red")
    content.append(str(error), style="red")

    if verbose:
        content.append("\n\n")
        content.append("Traceback:", style="dim")
        content.append("\n")
        tb_text = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        content.append(tb_text, style="dim")

    return Panel(
        content,
        title=title,
        border_style="red",
        padding=(1, 2),
    )


def display_login_help() -> Panel:
    """Display help for signing in or creating an account.

    Returns:
        A Rich Panel with the commands to register or sign in.
    """
    help_text = """[bold cyan]You need to be signed in for this command.[/bold cyan]

Create an account:
  business-network register --email you@example.com --kind freelancer

Or sign in to an existing one:
  business-network login --email you@example.com

[dim]Use --account to keep several local sign-ins side by side.[/dim]"""

    return Panel(
        Text.from_markup(help_text),
        title="Sign In",
        border_style="cyan",
        padding=(1, 2),
    )


def display_store_unavailable(error: Exception) -> Panel:
    """Display a user-friendly message for storage failures.

    Args:
        error: The storage exception.

    Returns:
        A Rich Panel with retry suggestions.
    """
    message = Text()
    message.append("Storage Error\n\n", style="bold red")
    message.append(f"{error}\n\n", style="red")
    message.append("Suggestions:\n", style="bold")
    message.append("• Check that the database path is writable\n", style="dim")
    message.append("• Make sure no other process holds a lock on it\n", style="dim")
    message.append("• Try again in a few moments", style="dim")

    return Panel(
        message,
        title="Storage Unavailable",
        border_style="red",
        padding=(1, 2),
    )
