"""Command history with cursor navigation."""

from typing import Literal

Direction = Literal["up", "down"]


class CommandHistory:
    """Append-only list of executed command lines plus a navigation cursor.

    The cursor ranges over [0, len(entries)]; the position len(entries)
    means "past the newest entry" and recalls an empty string. Entries are
    never pruned.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    def append(self, line: str) -> None:
        """Record a line and move the cursor past the end."""
        self._entries.append(line)
        self._cursor = len(self._entries)

    def navigate(self, direction: Direction) -> str:
        """Move the cursor one step and return the entry it lands on.

        Args:
            direction: "up" for older entries, "down" for newer ones.

        Returns:
            The entry at the new cursor position, or "" past the newest entry
            or when the history is empty.

        Raises:
            ValueError: If direction is not "up" or "down".
        """
        if direction not in ("up", "down"):
            raise ValueError(f"Unknown history direction: {direction!r}")
        if not self._entries:
            return ""

        if direction == "up":
            self._cursor = max(0, self._cursor - 1)
        else:
            self._cursor = min(len(self._entries), self._cursor + 1)

        if self._cursor < len(self._entries):
            return self._entries[self._cursor]
        return ""
