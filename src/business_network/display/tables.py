# ABOUTME: Rich table rendering for directory entries and connection lists.
# ABOUTME: Provides DirectoryTable and ConnectionTable with color-coded status.

from rich.table import Table

from business_network.models import Connection, ConnectionStatus
from business_network.network.directory import DirectoryEntry

STATUS_COLORS: dict[ConnectionStatus, str] = {
    ConnectionStatus.CONNECTED: "green",
    ConnectionStatus.PENDING: "yellow",
    ConnectionStatus.NONE: "dim",
}


def _truncate(text: str | None, max_length: int) -> str:
    """Truncate text to max length with ellipsis.

    Returns:
        Truncated text with ellipsis, or empty string if None.
    """
    if text is None:
        return ""
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def _status_styled(status: ConnectionStatus) -> str:
    color = STATUS_COLORS.get(status, "white")
    return f"[{color}]{status.value}[/{color}]"


class DirectoryTable:
    """Renders directory entries as a Rich table."""

    MAX_NAME_LENGTH = 30
    MAX_DETAIL_LENGTH = 40
    MAX_LOCATION_LENGTH = 20

    def _detail(self, entry: DirectoryEntry) -> str:
        profile = entry.profile
        if profile.profile_kind == "company":
            parts = [profile.profile_kind, profile.industry]
        else:
            parts = [profile.profile_kind, profile.title, ", ".join(profile.skills)]
        return " · ".join(part for part in parts if part)

    def render(self, entries: list[DirectoryEntry], title: str | None = None) -> Table:
        """Render directory entries as a Rich Table.

        Args:
            entries: Directory entries to display.
            title: Optional title for the table.

        Returns:
            Rich Table with one row per member.
        """
        table = Table(title=title, show_lines=False)

        # Id and Status never shrink; the text columns wrap to fit narrow terminals
        table.add_column("Name", style="cyan", overflow="fold")
        table.add_column(
            "Details", style="white", overflow="fold", max_width=self.MAX_DETAIL_LENGTH
        )
        table.add_column(
            "Location", style="green", overflow="fold", max_width=self.MAX_LOCATION_LENGTH
        )
        table.add_column("Status", no_wrap=True, min_width=9)
        table.add_column("Id", style="dim", no_wrap=True, min_width=32)

        for entry in entries:
            profile = entry.profile
            name = profile.name or profile.email
            status = "[red]unknown[/red]" if entry.lookup_failed else _status_styled(entry.status)
            table.add_row(
                _truncate(name, self.MAX_NAME_LENGTH),
                _truncate(self._detail(entry), self.MAX_DETAIL_LENGTH),
                _truncate(profile.location, self.MAX_LOCATION_LENGTH),
                status,
                profile.id,
            )

        return table


class ConnectionTable:
    """Renders a member's connections as a Rich table."""

    def render(
        self,
        connections: list[Connection],
        user_id: str,
        names: dict[str, str] | None = None,
    ) -> Table:
        """Render connections from the point of view of one member.

        Args:
            connections: Connections of the member.
            user_id: The member viewing the list.
            names: Optional mapping of member id to display name.

        Returns:
            Rich Table with counterpart, direction, status and last update.
        """
        names = names or {}
        table = Table(title="Connections", show_lines=False)
        table.add_column("Member", style="cyan", overflow="fold")
        table.add_column("Direction", style="white", no_wrap=True)
        table.add_column("Status", no_wrap=True, min_width=9)
        table.add_column("Updated", style="dim")
        table.add_column("Id", style="dim", no_wrap=True, min_width=32)

        for connection in connections:
            other = connection.counterpart_of(user_id)
            direction = "sent" if connection.from_user_id == user_id else "received"
            table.add_row(
                names.get(other) or other,
                direction,
                _status_styled(connection.status),
                connection.updated_at.strftime("%Y-%m-%d %H:%M"),
                other,
            )

        return table
